"""Project, Sprite and Source build units."""

from spritely.core.project.models import Project, Source, Sprite

__all__ = [
    "Project",
    "Sprite",
    "Source",
]
