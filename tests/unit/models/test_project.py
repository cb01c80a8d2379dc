"""Tests for the Project model."""

import datetime as dt

import pytest
from pydantic import ValidationError

from timebudget.models.project import Project


class TestProjectCreation:
    """Test creating projects."""

    def test_minimal_project_defaults_to_hourly(self):
        """Test that a project without billing config is hourly with no budget."""
        project = Project(id="p-1", name="Villa Amsterdam")

        assert project.billing_type == "hourly"
        assert project.is_hourly
        assert project.default_rate_cents == 0
        assert project.phase_budgets == {}
        assert project.archived is False
        assert project.archived_at is None

    def test_name_is_stripped(self):
        """Test that surrounding whitespace is removed from the name."""
        project = Project(id="p-1", name="  Villa Amsterdam ")
        assert project.name == "Villa Amsterdam"

    def test_whitespace_name_rejected(self):
        """Test that a whitespace-only name is invalid."""
        with pytest.raises(ValidationError, match="name cannot be empty"):
            Project(id="p-1", name="   ")

    def test_negative_rate_rejected(self):
        """Test that the hourly rate cannot be negative."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="Villa", default_rate_cents=-1)

    def test_negative_phase_budget_rejected(self):
        """Test that a negative phase budget is invalid."""
        with pytest.raises(ValidationError, match="schetsontwerp"):
            Project(
                id="p-1",
                name="Villa",
                billing_type="fixed",
                phase_budgets={"schetsontwerp": -100},
            )

    def test_unknown_billing_type_rejected(self):
        """Test that only hourly and fixed billing are accepted."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="Villa", billing_type="retainer")

    def test_unknown_field_rejected(self):
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="Villa", colour="red")

    def test_assignment_is_validated(self):
        """Test that assigning an invalid value raises."""
        project = Project(id="p-1", name="Villa")
        with pytest.raises(ValidationError):
            project.default_rate_cents = -5

    def test_archived_project(self):
        """Test archived projects keep their archive timestamp."""
        archived_at = dt.datetime(2024, 6, 1, 12, 0)
        project = Project(id="p-1", name="Villa", archived=True, archived_at=archived_at)

        assert project.archived
        assert project.archived_at == archived_at


class TestProjectBudgets:
    """Test budget helpers on projects."""

    def test_fixed_project_total_budget(self):
        """Test that the total budget is the sum of phase budgets."""
        project = Project(
            id="p-1",
            name="Kantoor",
            billing_type="fixed",
            phase_budgets={"schetsontwerp": 150000, "uitvoering": 300000},
        )

        assert project.total_budget_cents == 450000
        assert project.phase_budget_cents("uitvoering") == 300000
        assert project.phase_budget_cents("oplevering-nazorg") == 0

    def test_hourly_project_ignores_phase_budgets(self):
        """Test that hourly projects have no budget ceiling."""
        project = Project(
            id="p-1",
            name="Villa",
            billing_type="hourly",
            phase_budgets={"schetsontwerp": 150000},
        )

        assert project.total_budget_cents == 0
        assert project.phase_budget_cents("schetsontwerp") == 0
