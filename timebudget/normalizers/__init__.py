"""Normalization of raw import cells into canonical values."""

from timebudget.normalizers.row_normalizer import (
    PHASE_LABEL_MAP,
    normalize_date,
    normalize_hours,
    normalize_phase_label,
    normalize_row,
)

__all__ = [
    "PHASE_LABEL_MAP",
    "normalize_date",
    "normalize_hours",
    "normalize_phase_label",
    "normalize_row",
]
