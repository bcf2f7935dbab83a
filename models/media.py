# -*- coding: utf-8 -*-
"""
Media models for development drafts.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
import uuid


def generate_media_id() -> str:
    """Generate a client-side media id, unique within a draft."""
    return f"media-{uuid.uuid4().hex[:12]}"


@dataclass
class MediaItem:
    """
    A photo or video attached to a development draft.

    `local_path` is the picked file on disk and is only meaningful for the
    current session; it is never persisted. `url` is either a local preview
    URL or the remote URL returned by the upload service.
    """

    id: str = ""
    url: str = ""
    type: str = "image"  # image, video
    category: str = "general"  # featured, general, amenities, outdoors, videos, render
    is_primary: bool = False
    display_order: int = 0
    local_path: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return self.type == "image"

    @property
    def is_video(self) -> bool:
        return self.type == "video"

    @property
    def is_featured(self) -> bool:
        """Whether the uploader asked for this item to become the hero image."""
        return self.is_primary or self.category == "featured"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (without the local file)."""
        return {
            "id": self.id,
            "url": self.url,
            "type": self.type,
            "category": self.category,
            "is_primary": self.is_primary,
            "display_order": self.display_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaItem":
        """Create from dictionary."""
        return cls(
            id=data.get("id", ""),
            url=data.get("url", ""),
            type=data.get("type", "image"),
            category=data.get("category", "general"),
            is_primary=bool(data.get("is_primary", False)),
            display_order=int(data.get("display_order", 0) or 0),
        )


@dataclass
class MediaCollection:
    """Hero image plus ordered photo and video lists."""

    hero_image: Optional[MediaItem] = None
    photos: List[MediaItem] = field(default_factory=list)
    videos: List[MediaItem] = field(default_factory=list)

    def all_items(self) -> List[MediaItem]:
        """Hero first, then photos, then videos."""
        items = []
        if self.hero_image:
            items.append(self.hero_image)
        items.extend(self.photos)
        items.extend(self.videos)
        return items

    def find(self, media_id: str) -> Optional[MediaItem]:
        for item in self.all_items():
            if item.id == media_id:
                return item
        return None

    def primary_items(self) -> List[MediaItem]:
        return [item for item in self.all_items() if item.is_primary]

    def image_count(self) -> int:
        return (1 if self.hero_image else 0) + len(self.photos)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hero_image": self.hero_image.to_dict() if self.hero_image else None,
            "photos": [p.to_dict() for p in self.photos],
            "videos": [v.to_dict() for v in self.videos],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MediaCollection":
        data = data or {}
        hero = data.get("hero_image")
        return cls(
            hero_image=MediaItem.from_dict(hero) if hero else None,
            photos=[MediaItem.from_dict(p) for p in data.get("photos", [])],
            videos=[MediaItem.from_dict(v) for v in data.get("videos", [])],
        )
