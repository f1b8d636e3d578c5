"""Service layer exports."""

from .outline import OutlineService

__all__ = ["OutlineService"]
