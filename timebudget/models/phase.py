"""Project phase model and the phase catalog.

Phases bucket time entries and budgets. The catalog is ordered by
``sort_order``; that order drives both display and the per-phase budget
breakdown.
"""
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import Field

from timebudget.models.base import BaseDataModel


class Phase(BaseDataModel):
    """A single catalog entry.

    Attributes:
        code: Canonical phase code (e.g. "definitief-ontwerp")
        name: Display name (e.g. "Definitief ontwerp")
        sort_order: Position in the catalog
    """

    code: str = Field(..., min_length=1, description="Canonical phase code")
    name: str = Field(..., min_length=1, description="Display name")
    sort_order: int = Field(..., description="Position in the catalog")


FALLBACK_PHASES: List[Phase] = [
    Phase(code="schetsontwerp", name="Schetsontwerp", sort_order=1),
    Phase(code="voorlopig-ontwerp", name="Voorlopig ontwerp", sort_order=2),
    Phase(code="vo-tekeningen", name="VO tekeningen", sort_order=3),
    Phase(code="definitief-ontwerp", name="Definitief ontwerp", sort_order=4),
    Phase(code="do-tekeningen", name="DO tekeningen", sort_order=5),
    Phase(code="bouwvoorbereiding", name="Bouwvoorbereiding", sort_order=6),
    Phase(code="bv-tekeningen", name="BV tekeningen", sort_order=7),
    Phase(code="uitvoering", name="Uitvoering", sort_order=8),
    Phase(code="uitvoering-tekeningen", name="Uitvoering tekeningen", sort_order=9),
    Phase(code="oplevering-nazorg", name="Oplevering/nazorg", sort_order=10),
]


class PhaseCatalog:
    """Ordered, read-only collection of phases with lookup by code.

    Example:
        >>> catalog = PhaseCatalog.fallback()
        >>> catalog.get("uitvoering").name
        'Uitvoering'
        >>> catalog.name_for("agenda")
        'agenda'
    """

    def __init__(self, phases: Iterable[Phase]):
        self._phases: List[Phase] = sorted(phases, key=lambda p: p.sort_order)
        self._by_code: Dict[str, Phase] = {p.code: p for p in self._phases}

    @classmethod
    def fallback(cls) -> "PhaseCatalog":
        """Catalog built from the hardcoded ten-phase list."""
        return cls(FALLBACK_PHASES)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "PhaseCatalog":
        """Build a catalog from ``{code, name, sort_order}`` records.

        Other keys (ids, timestamps) are ignored.
        """
        fields = Phase.model_fields
        return cls(
            Phase.model_validate({k: v for k, v in record.items() if k in fields})
            for record in records
        )

    def __iter__(self) -> Iterator[Phase]:
        return iter(self._phases)

    def __len__(self) -> int:
        return len(self._phases)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    @property
    def codes(self) -> List[str]:
        return [p.code for p in self._phases]

    def get(self, code: str) -> Optional[Phase]:
        return self._by_code.get(code)

    def name_for(self, code: str) -> str:
        """Display name for a code, falling back to the code itself."""
        phase = self._by_code.get(code)
        return phase.name if phase else code
