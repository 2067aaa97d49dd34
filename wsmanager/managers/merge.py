"""Post-restore merge.

``ws_restore`` puts the restored tree one level down, at
``<destination>/<full_id>``.  The merge moves everything (dotfiles included)
up into ``<destination>`` and removes the emptied directory.

The restored tree is first renamed to a fresh staging directory inside
``<destination>``, so an entry of the tree that is itself named ``full_id``
can be moved up like any other.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from loguru import logger


def _is_plain_name(name: str) -> bool:
    return name not in {"", ".", ".."} and Path(name).name == name


def merge_restored(destination: Path, full_id: str) -> bool:
    """Move the restored tree of *full_id* up into *destination*.

    Existing directories in *destination* are merged, existing files are
    replaced.  Returns ``False`` without touching anything when *full_id* is
    not a plain directory name or there is no restored tree to merge.
    """
    if not _is_plain_name(full_id):
        logger.error("Refusing to merge {!r}: not a restored workspace directory name", full_id)
        return False

    restored = destination / full_id
    if restored.is_symlink() or not restored.is_dir():
        logger.error("Restored path {} not found, nothing to merge", restored)
        return False
    if restored.resolve() == destination.resolve():
        logger.error("Refusing to merge {} into itself", restored)
        return False

    logger.info("Moving contents from {} to {}", restored, destination)
    staging = Path(tempfile.mkdtemp(prefix=".wsmanager-merge-", dir=destination))
    # Renaming onto an empty directory replaces it.
    restored.rename(staging)
    for entry in sorted(staging.iterdir()):
        _move_into(entry, destination / entry.name)
    staging.rmdir()
    logger.success("Cleanup of restored workspace structure in {} complete", destination)
    return True


def _move_into(source: Path, target: Path) -> None:
    if source == target:
        msg = f"Cannot move {source} onto itself"
        raise ValueError(msg)
    if source.is_dir() and not source.is_symlink() and target.is_dir() and not target.is_symlink():
        for child in sorted(source.iterdir()):
            _move_into(child, target / child.name)
        source.rmdir()
        return
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)
    shutil.move(str(source), str(target))
