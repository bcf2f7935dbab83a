# -*- coding: utf-8 -*-
"""
Development Wizard Data Models
"""

from .media import MediaItem, MediaCollection
from .development import (
    DevelopmentDraft,
    Identity,
    Location,
    Classification,
    Overview,
    UnitType,
    Finalisation,
)

__all__ = [
    "MediaItem",
    "MediaCollection",
    "DevelopmentDraft",
    "Identity",
    "Location",
    "Classification",
    "Overview",
    "UnitType",
    "Finalisation",
]
