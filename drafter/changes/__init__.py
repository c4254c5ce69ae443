"""Change records and their classification."""

from .classifier import classify, classify_all
from .model import ChangeRecord, ClassifiedChange
from .records import ChangesError, load_changes, parse_changes

__all__ = [
    "ChangeRecord",
    "ChangesError",
    "ClassifiedChange",
    "classify",
    "classify_all",
    "load_changes",
    "parse_changes",
]
