"""Data models for timebudget.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Project: Project with billing configuration
- Phase / PhaseCatalog: Project phases and the ordered catalog
- TimeEntry / NewTimeEntry: Stored entries and the creation payload
- ImportRow: Transient row of an import session
"""

from timebudget.models.base import BaseDataModel
from timebudget.models.import_row import RAW_FIELDS, ImportRow
from timebudget.models.phase import FALLBACK_PHASES, Phase, PhaseCatalog
from timebudget.models.project import BillingType, Project
from timebudget.models.time_entry import NewTimeEntry, TimeEntry

__all__ = [
    "BaseDataModel",
    "BillingType",
    "FALLBACK_PHASES",
    "ImportRow",
    "NewTimeEntry",
    "Phase",
    "PhaseCatalog",
    "Project",
    "RAW_FIELDS",
    "TimeEntry",
]
