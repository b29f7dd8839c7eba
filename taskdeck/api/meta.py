"""Reference data for presentation collaborators"""

from typing import Dict, List

from fastapi import APIRouter

from taskdeck.models.base import CamelModel
from taskdeck.models.project import PROJECT_COLORS, PROJECT_ICONS
from taskdeck.models.recurrence import RECURRENCE_LABELS
from taskdeck.models.task import PRIORITY_LABELS, STATUS_LABELS

router = APIRouter(prefix="/api/meta", tags=["meta"])


class LabelsResponse(CamelModel):
    priorities: Dict[str, str]
    statuses: Dict[str, str]
    recurrences: Dict[str, str]
    project_colors: List[str]
    project_icons: List[str]


@router.get("/labels", response_model=LabelsResponse)
async def get_labels():
    """Display labels for enum values plus the project palette and glyph set"""
    return LabelsResponse(
        priorities={p.value: label for p, label in PRIORITY_LABELS.items()},
        statuses={s.value: label for s, label in STATUS_LABELS.items()},
        recurrences={r.value: label for r, label in RECURRENCE_LABELS.items()},
        project_colors=PROJECT_COLORS,
        project_icons=PROJECT_ICONS,
    )
