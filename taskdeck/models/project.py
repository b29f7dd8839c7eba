"""Project domain model"""
from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from taskdeck.models.base import CamelModel


PROJECT_COLORS: List[str] = [
    "#6366f1", "#8b5cf6", "#ec4899", "#ef4444", "#f59e0b",
    "#22c55e", "#06b6d4", "#3b82f6", "#f97316", "#14b8a6",
]

PROJECT_ICONS: List[str] = [
    "◆", "●", "■", "▲", "★", "◎", "◈", "◉", "▣", "⬡",
]


def validate_color(value: str) -> str:
    if value.lower() not in PROJECT_COLORS:
        raise ValueError(
            f"Invalid color: '{value}'. Valid colors are: {', '.join(PROJECT_COLORS)}"
        )
    return value.lower()


def validate_icon(value: str) -> str:
    if value not in PROJECT_ICONS:
        raise ValueError(
            f"Invalid icon: '{value}'. Valid icons are: {' '.join(PROJECT_ICONS)}"
        )
    return value


class ProjectBase(CamelModel):
    """Base project fields"""
    name: str
    color: str = PROJECT_COLORS[0]
    icon: str = PROJECT_ICONS[0]

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name is required")
        return value

    @field_validator("color")
    @classmethod
    def color_from_palette(cls, value: str) -> str:
        return validate_color(value)

    @field_validator("icon")
    @classmethod
    def icon_from_glyph_set(cls, value: str) -> str:
        return validate_icon(value)


class ProjectCreate(ProjectBase):
    """Project creation model"""
    id: Optional[str] = None


class Project(ProjectBase):
    """Complete project record as persisted"""
    id: str
    created_at: datetime
