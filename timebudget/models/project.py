"""Project data model.

A project carries its billing configuration: either an hourly rate without
a ceiling, or a fixed budget per phase that accrued spend is compared to.
"""
import datetime as dt
from typing import Dict, Literal, Optional

from pydantic import Field, field_validator

from timebudget.models.base import BaseDataModel

BillingType = Literal["hourly", "fixed"]


class Project(BaseDataModel):
    """Represents a billable project.

    Attributes:
        id: Backend identifier
        name: Display name, also used to match imported rows
        city: Optional city
        client_name: Optional client (opdrachtgever)
        billing_type: 'hourly' (spend only) or 'fixed' (per-phase budgets)
        default_rate_cents: Hourly rate in cents
        phase_budgets: Fixed budget per phase code, in cents
        archived: Whether the project is archived
        archived_at: When the project was archived

    Example:
        >>> project = Project(
        ...     id="p-1",
        ...     name="Villa Amsterdam",
        ...     billing_type="fixed",
        ...     default_rate_cents=7500,
        ...     phase_budgets={"schetsontwerp": 150000, "uitvoering": 300000},
        ... )
        >>> project.total_budget_cents
        450000
    """

    id: str = Field(..., min_length=1, description="Project identifier")
    name: str = Field(..., min_length=1, description="Project name")
    city: Optional[str] = Field(None, description="City")
    client_name: Optional[str] = Field(None, description="Client name")
    billing_type: BillingType = Field("hourly", description="Billing mode")
    default_rate_cents: int = Field(0, ge=0, description="Hourly rate in cents")
    phase_budgets: Dict[str, int] = Field(
        default_factory=dict, description="Budget per phase code in cents"
    )
    archived: bool = Field(False, description="Archived flag")
    archived_at: Optional[dt.datetime] = Field(None, description="Archive timestamp")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the name and reject whitespace-only names."""
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()

    @field_validator("phase_budgets")
    @classmethod
    def validate_phase_budgets(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Reject negative phase budgets.

        Raises:
            ValueError: If any budget is below zero
        """
        for code, cents in v.items():
            if cents < 0:
                raise ValueError(f"budget for phase '{code}' cannot be negative")
        return v

    @property
    def is_hourly(self) -> bool:
        return self.billing_type == "hourly"

    @property
    def total_budget_cents(self) -> int:
        """Budget ceiling: sum of phase budgets for fixed projects, else 0."""
        if self.is_hourly:
            return 0
        return sum(self.phase_budgets.values())

    def phase_budget_cents(self, phase_code: str) -> int:
        if self.is_hourly:
            return 0
        return self.phase_budgets.get(phase_code, 0)
