# -*- coding: utf-8 -*-
"""
Development draft models.

A DevelopmentDraft is the aggregate built through the development wizard:
identity (with location and media), classification, overview, unit types
and finalisation. Every record serializes with snake_case keys.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Any

from models.media import MediaCollection


def _known_fields(record_cls) -> set:
    return {f.name for f in fields(record_cls)}


def _pick(record_cls, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only keys that belong to `record_cls`."""
    names = _known_fields(record_cls)
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass
class Location:
    """Street address and map pin of a development."""

    address: str = ""
    city: str = ""
    province: str = ""
    suburb: str = ""
    postal_code: str = ""
    # Kept as captured from the form / map picker
    latitude: str = ""
    longitude: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "city": self.city,
            "province": self.province,
            "suburb": self.suburb,
            "postal_code": self.postal_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Location":
        return cls(**_pick(cls, data))


@dataclass
class Identity:
    """Phase 1: name, nature, location and media."""

    name: str = ""
    description: str = ""
    nature: str = "new"  # new, phase, extension
    parent_development_id: Optional[str] = None
    location: Location = field(default_factory=Location)
    media: MediaCollection = field(default_factory=MediaCollection)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "nature": self.nature,
            "parent_development_id": self.parent_development_id,
            "location": self.location.to_dict(),
            "media": self.media.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Identity":
        data = data or {}
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            nature=data.get("nature", "new"),
            parent_development_id=data.get("parent_development_id"),
            location=Location.from_dict(data.get("location")),
            media=MediaCollection.from_dict(data.get("media")),
        )


@dataclass
class Classification:
    """Phase 2: development type drives which later phases apply."""

    type: str = "residential"  # residential, commercial, mixed, land
    sub_type: str = ""
    ownership: str = ""  # "", full-title, sectional-title, leasehold

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "sub_type": self.sub_type, "ownership": self.ownership}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Classification":
        return cls(**_pick(cls, data))


@dataclass
class Overview:
    """Phase 3: status, highlights and shared amenities."""

    status: str = "planning"  # planning, construction, near-completion, completed
    highlights: List[str] = field(default_factory=list)
    description: str = ""
    amenities: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "highlights": list(self.highlights),
            "description": self.description,
            "amenities": list(self.amenities),
            "features": list(self.features),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Overview":
        picked = _pick(cls, data)
        for key in ("highlights", "amenities", "features"):
            if key in picked:
                picked[key] = list(picked[key] or [])
        return cls(**picked)


@dataclass
class UnitType:
    """Phase 4: a unit template such as "2 Bedroom Apartment"."""

    id: str = ""
    name: str = ""
    usage_type: str = "residential"  # residential, commercial (mixed-use only)
    bedrooms: int = 0
    bathrooms: float = 0
    parking: str = "none"  # none, 1, 2, carport, garage
    unit_size: Optional[float] = None  # m²
    yard_size: Optional[float] = None  # m²
    base_price_from: float = 0
    base_price_to: Optional[float] = None
    amenities: List[str] = field(default_factory=list)
    display_order: int = 0
    is_active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "usage_type": self.usage_type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "parking": self.parking,
            "unit_size": self.unit_size,
            "yard_size": self.yard_size,
            "base_price_from": self.base_price_from,
            "base_price_to": self.base_price_to,
            "amenities": list(self.amenities),
            "display_order": self.display_order,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UnitType":
        picked = _pick(cls, data)
        if "amenities" in picked:
            picked["amenities"] = list(picked["amenities"] or [])
        return cls(**picked)


@dataclass
class Finalisation:
    """Phase 5: sales team and publication flag."""

    sales_team_ids: List[str] = field(default_factory=list)
    marketing_company: Optional[str] = None
    is_published: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sales_team_ids": list(self.sales_team_ids),
            "marketing_company": self.marketing_company,
            "is_published": self.is_published,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Finalisation":
        picked = _pick(cls, data)
        if "sales_team_ids" in picked:
            picked["sales_team_ids"] = list(picked["sales_team_ids"] or [])
        return cls(**picked)


@dataclass
class DevelopmentDraft:
    """The in-progress, not-yet-published development."""

    identity: Identity = field(default_factory=Identity)
    classification: Classification = field(default_factory=Classification)
    overview: Overview = field(default_factory=Overview)
    unit_types: List[UnitType] = field(default_factory=list)
    finalisation: Finalisation = field(default_factory=Finalisation)

    @property
    def is_published(self) -> bool:
        return self.finalisation.is_published

    @property
    def is_land(self) -> bool:
        return self.classification.type == "land"

    def find_unit_type(self, unit_type_id: str) -> Optional[UnitType]:
        for unit_type in self.unit_types:
            if unit_type.id == unit_type_id:
                return unit_type
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "identity": self.identity.to_dict(),
            "classification": self.classification.to_dict(),
            "overview": self.overview.to_dict(),
            "unit_types": [u.to_dict() for u in self.unit_types],
            "finalisation": self.finalisation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DevelopmentDraft":
        """Create from dictionary; missing sections fall back to defaults."""
        data = data or {}
        return cls(
            identity=Identity.from_dict(data.get("identity")),
            classification=Classification.from_dict(data.get("classification")),
            overview=Overview.from_dict(data.get("overview")),
            unit_types=[UnitType.from_dict(u) for u in data.get("unit_types", []) or []],
            finalisation=Finalisation.from_dict(data.get("finalisation")),
        )
