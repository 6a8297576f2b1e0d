"""Data models for rigcheck."""

from rigcheck.models.part import Part, PartCategory, SelectedParts

__all__ = ["Part", "PartCategory", "SelectedParts"]
