import click


@click.group()
def main() -> None:
    """wsmanager - keeps HPC workspaces from expiring."""


@main.command()
@click.option("--force", is_flag=True, default=False, help="Run even if a check already ran today.")
def run(force: bool) -> None:
    """Run the daily workspace check (extend, warn, prepare restores)."""
    from datetime import date

    from loguru import logger

    from wsmanager.gate import LastRunMarker
    from wsmanager.log import setup_logging
    from wsmanager.runner import run_maintenance
    from wsmanager.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    today = date.today()  # noqa: DTZ011
    gate = LastRunMarker(settings.last_run_file)
    if not force and not gate.should_run(today):
        logger.info("Already run today")
        return

    run_maintenance(settings, _shell_tools(settings))
    # Partial failures are only reported in the log; the run still counts.
    gate.mark(today)


@main.command()
def inventory() -> None:
    """Show the active workspaces and what the renewal policy would do."""
    from wsmanager.log import setup_logging
    from wsmanager.managers.inventory import parse_inventory
    from wsmanager.managers.renewal import decide
    from wsmanager.settings import get_settings
    from wsmanager.tools.base import WorkspaceToolError

    settings = get_settings()
    setup_logging(settings.log_level, None)

    try:
        text = _shell_tools(settings).list_workspaces()
    except WorkspaceToolError as exc:
        raise click.ClickException(str(exc)) from None

    for status in parse_inventory(text):
        action = decide(status, settings.warning_days)
        click.echo(
            f"{status.id}\t{status.remaining_days} days\t{status.available_extensions} extensions\t{action}"
        )


@main.command()
@click.argument("workspace")
@click.argument("full_id")
def merge(workspace: str, full_id: str) -> None:
    """Move a restored FULL_ID tree up into WORKSPACE after a manual restore."""
    from wsmanager.log import setup_logging
    from wsmanager.managers.merge import merge_restored
    from wsmanager.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    if not merge_restored(settings.workspace_path(workspace), full_id):
        raise SystemExit(1)


def _shell_tools(settings):
    from wsmanager.tools.shell import ShellWorkspaceTools

    return ShellWorkspaceTools(
        list_program=settings.list_program,
        extend_program=settings.extend_program,
        allocate_program=settings.allocate_program,
        restore_program=settings.restore_program,
    )


if __name__ == "__main__":
    main()
