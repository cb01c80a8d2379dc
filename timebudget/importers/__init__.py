"""
Import pipeline: sessions, review and sequential commit.
"""

from .import_orchestrator import EntryCreator, ImportOrchestrator
from .import_session import (
    ImportSession,
    ImportSessionError,
    ImportSummary,
    UnknownRowError,
    apply_edit,
    importable_rows,
    visible_rows,
    with_filter,
)

__all__ = [
    "EntryCreator",
    "ImportOrchestrator",
    "ImportSession",
    "ImportSessionError",
    "ImportSummary",
    "UnknownRowError",
    "apply_edit",
    "importable_rows",
    "visible_rows",
    "with_filter",
]
