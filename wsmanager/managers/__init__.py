"""Workspace maintenance logic.

Each module holds one step of the daily maintenance run.  Managers receive
their collaborators (workspace tools, paths, thresholds) explicitly and
report outcomes through the log; recoverable failures never raise.
"""
