# -*- coding: utf-8 -*-
"""
Wizard State Store - single source of truth for the development draft.

Holds the in-progress DevelopmentDraft and the current phase pointer, and
exposes pure mutators. The store never talks to the network: every effective
mutation emits `draft_changed` with a serializable snapshot, and the wizard
window decides what to do with it (normally: feed the auto-save controller).

Each wizard session constructs and owns its own store.
"""

import copy
import uuid
from dataclasses import fields
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Union

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Phases, Vocabularies
from models.development import DevelopmentDraft, Location, UnitType
from models.media import MediaItem, generate_media_id
from services.exceptions import ValidationException
from services.wizard.phase_validator import PhaseValidator, PhaseValidationResult
from utils.logger import get_logger

logger = get_logger(__name__)


def editable(default: Any = None):
    """
    Decorator for store mutators: published drafts are read-only.

    The wrapped method is skipped (returning `default`) once the draft has
    been published; only reset() and hydrate() may replace it.
    """
    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(self, *args, **kwargs):
            if self._draft.is_published:
                logger.warning(f"Ignoring {method.__name__}(): draft is published")
                return default
            return method(self, *args, **kwargs)
        return wrapper
    return decorator


class WizardStateStore(QObject):
    """
    In-memory state of one development wizard session.

    Signals:
        draft_changed(dict): emitted after every effective mutation, with snapshot()
        phase_changed(int, int): old phase, new phase
        store_reset(): draft cleared back to defaults
        draft_loaded(): state replaced from a persisted snapshot
        published(): draft marked as published
    """

    draft_changed = pyqtSignal(dict)
    phase_changed = pyqtSignal(int, int)
    store_reset = pyqtSignal()
    draft_loaded = pyqtSignal()
    published = pyqtSignal()

    # Choice fields checked on assignment ("" is allowed where the phase
    # validator reports the missing value itself)
    _CHOICES = {
        ("identity", "nature"): Vocabularies.codes(Vocabularies.NATURES),
        ("classification", "type"): [""] + Vocabularies.codes(Vocabularies.DEVELOPMENT_TYPES),
        ("classification", "ownership"): Vocabularies.codes(Vocabularies.OWNERSHIP_TYPES),
        ("overview", "status"): Vocabularies.codes(Vocabularies.DEVELOPMENT_STATUSES),
        ("unit_type", "parking"): Vocabularies.codes(Vocabularies.PARKING_OPTIONS),
    }

    def __init__(self, validator: Optional[PhaseValidator] = None, parent: Optional[QObject] = None):
        """
        Initialize an empty draft at phase 1.

        Args:
            validator: Phase validator (default: PhaseValidator)
            parent: Parent QObject
        """
        super().__init__(parent)
        self._validator = validator or PhaseValidator()
        self.session_id: str = str(uuid.uuid4())
        self._draft = DevelopmentDraft()
        self._current_phase = Phases.IDENTITY
        self.updated_at: datetime = datetime.now()

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def draft(self) -> DevelopmentDraft:
        """Copy of the current draft."""
        return copy.deepcopy(self._draft)

    @property
    def current_phase(self) -> int:
        return self._current_phase

    @property
    def is_published(self) -> bool:
        return self._draft.is_published

    def all_media(self) -> List[MediaItem]:
        """Hero image, photos and videos as one list (copies)."""
        return [copy.copy(item) for item in self._draft.identity.media.all_items()]

    def get_media(self, media_id: str) -> Optional[MediaItem]:
        item = self._draft.identity.media.find(media_id)
        return copy.copy(item) if item else None

    def snapshot(self) -> Dict[str, Any]:
        """Serializable copy of the draft and phase pointer, without local files."""
        data = self._draft.to_dict()
        data["current_phase"] = self._current_phase
        return data

    # =========================================================================
    # Section setters (shallow merge)
    # =========================================================================

    @editable()
    def set_identity(self, **changes):
        """
        Merge fields into identity.

        `location` may be a dict (merged into the current location) or a
        Location. Media is managed with add_media/remove_media.
        """
        if "media" in changes:
            raise ValidationException(
                "Media cannot be set directly; use add_media/remove_media",
                field="media"
            )
        location = changes.pop("location", None)
        identity = self._draft.identity

        # Check both sections before touching either
        self._check(identity, changes, "identity")
        if location and not isinstance(location, Location):
            self._check(identity.location, location, "location")

        self._assign(identity, changes)
        if isinstance(location, Location):
            identity.location = copy.copy(location)
        elif location:
            self._assign(identity.location, location)

        self._changed()

    @editable()
    def set_location(self, **changes):
        """Merge fields into identity.location."""
        self._merge(self._draft.identity.location, changes, "location")
        self._changed()

    @editable()
    def set_classification(self, **changes):
        """
        Merge fields into classification.

        Changing the type clears the sub-type; switching to land also drops
        all unit types, since land developments have none.
        """
        classification = self._draft.classification
        previous_type = classification.type
        self._merge(classification, changes, "classification")

        if "type" in changes and changes["type"] != previous_type:
            classification.sub_type = ""
            if classification.type == "land" and self._draft.unit_types:
                logger.info(f"Switched to land: dropping {len(self._draft.unit_types)} unit type(s)")
                self._draft.unit_types = []

        self._changed()

    @editable()
    def set_overview(self, **changes):
        """Merge fields into overview."""
        self._merge(self._draft.overview, changes, "overview")
        self._changed()

    @editable()
    def set_finalisation(self, **changes):
        """Merge fields into finalisation (publication is done via mark_published)."""
        if "is_published" in changes:
            raise ValidationException(
                "Use mark_published() to publish the draft",
                field="is_published"
            )
        self._merge(self._draft.finalisation, changes, "finalisation")
        self._changed()

    # =========================================================================
    # Media
    # =========================================================================

    @editable()
    def add_media(self, item: Union[MediaItem, Dict[str, Any]]) -> str:
        """
        Add a photo or video and return its new id.

        The first image becomes the hero (primary) image, as does any image
        flagged primary/featured; a displaced hero moves to the front of the
        photos. Other images are appended to photos, videos to videos.
        """
        new_item = MediaItem.from_dict(item) if isinstance(item, dict) else copy.copy(item)
        if isinstance(item, dict):
            new_item.local_path = item.get("local_path")

        if new_item.type not in Vocabularies.MEDIA_TYPES:
            raise ValidationException(f"Unsupported media type: {new_item.type}", field="type")

        new_item.id = generate_media_id()
        media = self._draft.identity.media

        if new_item.is_video:
            new_item.is_primary = False
            if new_item.category in ("general", "featured"):
                new_item.category = "videos"
            new_item.display_order = len(media.videos)
            media.videos.append(new_item)
        elif media.hero_image is None or new_item.is_featured:
            if media.hero_image is not None:
                media.photos.insert(0, self._demoted(media.hero_image))
            new_item.is_primary = True
            new_item.category = "featured"
            media.hero_image = new_item
        else:
            new_item.is_primary = False
            new_item.display_order = len(media.photos)
            media.photos.append(new_item)

        logger.debug(f"Added {new_item.type} {new_item.id} (hero={new_item.is_primary})")
        self._changed()
        return new_item.id

    @editable(default=False)
    def remove_media(self, media_id: str) -> bool:
        """
        Remove a media item from whichever collection holds it.

        Removing the hero image leaves the draft without one; no other image
        is promoted.
        """
        media = self._draft.identity.media
        removed = False

        if media.hero_image is not None and media.hero_image.id == media_id:
            media.hero_image = None
            removed = True

        photos = [p for p in media.photos if p.id != media_id]
        videos = [v for v in media.videos if v.id != media_id]
        removed = removed or len(photos) != len(media.photos) or len(videos) != len(media.videos)

        if not removed:
            logger.debug(f"remove_media: unknown id {media_id}")
            return False

        media.photos = photos
        media.videos = videos
        self._changed()
        return True

    @editable(default=False)
    def set_primary_image(self, media_id: str) -> bool:
        """
        Make a photo the hero image; the previous hero goes back to photos.

        Unknown ids (and videos) are ignored.
        """
        media = self._draft.identity.media

        if media.hero_image is not None and media.hero_image.id == media_id:
            return True

        index = next((i for i, p in enumerate(media.photos) if p.id == media_id), None)
        if index is None:
            logger.debug(f"set_primary_image: {media_id} is not a photo")
            return False

        new_hero = media.photos.pop(index)
        new_hero.is_primary = True
        new_hero.category = "featured"

        if media.hero_image is not None:
            media.photos.insert(0, self._demoted(media.hero_image))

        media.hero_image = new_hero
        self._changed()
        return True

    @editable()
    def reorder_media(self, ordered_ids: List[str]):
        """Apply the display order given by `ordered_ids` to photos and videos."""
        position = {media_id: index for index, media_id in enumerate(ordered_ids)}
        media = self._draft.identity.media

        for collection in (media.photos, media.videos):
            for item in collection:
                if item.id in position:
                    item.display_order = position[item.id]
            collection.sort(key=lambda m: m.display_order)

        self._changed()

    @staticmethod
    def _demoted(item: MediaItem) -> MediaItem:
        item.is_primary = False
        item.category = "general"
        return item

    # =========================================================================
    # Unit types
    # =========================================================================

    @editable()
    def add_unit_type(self, **values) -> str:
        """Add a unit type and return its id."""
        values.pop("id", None)
        unit_type = UnitType(id=f"unit-{uuid.uuid4().hex[:8]}")
        self._merge(unit_type, values, "unit_type")
        unit_type.display_order = len(self._draft.unit_types)
        self._draft.unit_types.append(unit_type)
        self._changed()
        return unit_type.id

    @editable(default=False)
    def update_unit_type(self, unit_type_id: str, **changes) -> bool:
        unit_type = self._draft.find_unit_type(unit_type_id)
        if unit_type is None:
            return False
        if "id" in changes:
            raise ValidationException("Unit type id cannot be changed", field="id")
        self._merge(unit_type, changes, "unit_type")
        self._changed()
        return True

    @editable(default=False)
    def remove_unit_type(self, unit_type_id: str) -> bool:
        remaining = [u for u in self._draft.unit_types if u.id != unit_type_id]
        if len(remaining) == len(self._draft.unit_types):
            return False
        for index, unit_type in enumerate(remaining):
            unit_type.display_order = index
        self._draft.unit_types = remaining
        self._changed()
        return True

    # =========================================================================
    # Phases and validation
    # =========================================================================

    @editable(default=False)
    def set_phase(self, phase: int) -> bool:
        """
        Move the phase pointer without validation (back button, tab jumps).

        Returns:
            False if `phase` is not a wizard phase
        """
        if not self._validator.is_known_phase(phase):
            logger.warning(f"set_phase: invalid phase {phase}")
            return False
        if phase == self._current_phase:
            return True

        old_phase = self._current_phase
        self._current_phase = phase
        logger.debug(f"Phase {old_phase} -> {phase}")
        self.phase_changed.emit(old_phase, phase)
        self._changed()
        return True

    def validate_phase(self, phase: Optional[int] = None) -> PhaseValidationResult:
        """Validate a phase (default: the current one) against the current draft."""
        if phase is None:
            phase = self._current_phase
        return self._validator.validate_phase(phase, self._draft)

    def validate_for_publish(self) -> PhaseValidationResult:
        return self._validator.validate_for_publish(self._draft)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @editable(default=False)
    def mark_published(self) -> bool:
        """Set the terminal published flag; the draft becomes read-only."""
        self._draft.finalisation.is_published = True
        self.updated_at = datetime.now()
        logger.info(f"Draft '{self._draft.identity.name}' marked as published")
        self.published.emit()
        return True

    def reset(self):
        """Clear the draft back to defaults and return to phase 1."""
        old_phase = self._current_phase
        self._draft = DevelopmentDraft()
        self._current_phase = Phases.IDENTITY
        self.updated_at = datetime.now()
        logger.info("Wizard store reset")
        if old_phase != self._current_phase:
            self.phase_changed.emit(old_phase, self._current_phase)
        self.store_reset.emit()

    def hydrate(self, data: Dict[str, Any]):
        """Replace the state with a persisted snapshot (see snapshot())."""
        old_phase = self._current_phase
        self._draft = DevelopmentDraft.from_dict(data)

        phase = data.get("current_phase", Phases.IDENTITY)
        self._current_phase = phase if self._validator.is_known_phase(phase) else Phases.IDENTITY
        self.updated_at = datetime.now()

        logger.info(f"Draft hydrated at phase {self._current_phase}")
        if old_phase != self._current_phase:
            self.phase_changed.emit(old_phase, self._current_phase)
        self.draft_loaded.emit()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _merge(self, record, changes: Dict[str, Any], section: str):
        """Assign known fields of `record`; unknown names are a programming error."""
        self._check(record, changes, section)
        self._assign(record, changes)

    def _check(self, record, changes: Dict[str, Any], section: str):
        """Raise ValidationException for unknown fields or values outside a vocabulary."""
        names = {f.name for f in fields(record)}
        for key, value in changes.items():
            if key not in names:
                raise ValidationException(f"Unknown {section} field: {key}", field=key)
            choices = self._CHOICES.get((section, key))
            if choices is not None and value not in choices:
                raise ValidationException(f"Invalid {section}.{key}: {value!r}", field=key)

    @staticmethod
    def _assign(record, changes: Dict[str, Any]):
        for key, value in changes.items():
            if isinstance(value, list):
                value = list(value)
            setattr(record, key, value)

    def _changed(self):
        self.updated_at = datetime.now()
        self.draft_changed.emit(self.snapshot())
