"""Shared recurrence definitions and validation"""
from enum import Enum
from typing import Dict, Optional, Set, Annotated

from pydantic import BeforeValidator


class Recurrence(str, Enum):
    """Valid recurrence types for recurring tasks"""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


RECURRENCE_LABELS: Dict[Recurrence, str] = {
    Recurrence.NONE: "No repeat",
    Recurrence.DAILY: "Every day",
    Recurrence.WEEKLY: "Every week",
    Recurrence.MONTHLY: "Every month",
}

# Set of valid recurrence strings for quick lookups
VALID_RECURRENCES: Set[str] = {r.value for r in Recurrence}


def normalize_recurrence(value: Optional[str]) -> str:
    """
    Normalize a stored recurrence value.

    Legacy records without a recurrence (None / missing) are treated as
    "none". Any other unknown value is rejected.

    Raises:
        ValueError: If the value is not a known recurrence
    """
    if value is None or value == "":
        return Recurrence.NONE.value

    if isinstance(value, Recurrence):
        return value.value

    normalized = str(value).strip().lower()
    if normalized not in VALID_RECURRENCES:
        raise ValueError(
            f"Invalid recurrence: '{value}'. "
            f"Valid values are: {', '.join(sorted(VALID_RECURRENCES))}"
        )
    return normalized


# Pydantic annotated type for use in models
RecurrenceField = Annotated[Recurrence, BeforeValidator(normalize_recurrence)]
