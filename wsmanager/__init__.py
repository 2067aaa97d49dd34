"""wsmanager - keeps HPC workspaces alive and prepares restores of expired ones."""

__version__ = "0.1.0"
