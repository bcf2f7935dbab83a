# -*- coding: utf-8 -*-
"""
Phase validation service for the Development Wizard.

Validates draft data for each phase without UI coupling.
"""

from dataclasses import dataclass, field
from typing import List

from app.config import Phases
from models.development import DevelopmentDraft


MIN_HIGHLIGHTS = 3
MIN_DESCRIPTION_LENGTH = 50


@dataclass
class PhaseValidationResult:
    """Result of phase validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def _is_blank(value) -> bool:
    return not value or not str(value).strip()


class PhaseValidator:
    """Validates development draft data phase by phase."""

    PHASE_NAMES = {
        Phases.IDENTITY: "Identity",
        Phases.CLASSIFICATION: "Classification",
        Phases.OVERVIEW: "Overview",
        Phases.UNIT_TYPES: "Unit Types",
        Phases.FINALISATION: "Finalisation",
    }

    @staticmethod
    def validate_phase(phase: int, draft: DevelopmentDraft) -> PhaseValidationResult:
        """
        Validate one phase of the draft.

        Every failing rule contributes one error; rules are not
        short-circuited. Unknown phases produce an error instead of raising.

        Args:
            phase: 1-based phase number
            draft: Draft to check (never modified)

        Returns:
            PhaseValidationResult
        """
        result = PhaseValidationResult()

        if not PhaseValidator.is_known_phase(phase):
            result.add_error(f"Invalid phase: {phase}")
            return result

        if phase == Phases.IDENTITY:
            PhaseValidator._check_identity(draft, result)
        elif phase == Phases.CLASSIFICATION:
            PhaseValidator._check_classification(draft, result)
        elif phase == Phases.OVERVIEW:
            PhaseValidator._check_overview(draft, result)
        elif phase == Phases.UNIT_TYPES:
            PhaseValidator._check_unit_types(draft, result)
        # Finalisation has no phase-specific rules

        return result

    @staticmethod
    def validate_for_publish(draft: DevelopmentDraft) -> PhaseValidationResult:
        """Validate the whole draft before it can be published."""
        result = PhaseValidationResult()

        if _is_blank(draft.identity.name):
            result.add_error("Development Name is required")
        if _is_blank(draft.identity.location.address):
            result.add_error("Location Address is required")
        if draft.identity.media.image_count() == 0:
            result.add_error("At least 1 image is required")

        if _is_blank(draft.classification.type):
            result.add_error("Classification Type is required")
        PhaseValidator._check_overview(draft, result)

        if not draft.is_land:
            if not draft.unit_types:
                result.add_error("Add at least one unit type")
            elif not all((u.base_price_from or 0) > 0 for u in draft.unit_types):
                result.add_error("All unit types must have a base price")

        return result

    @staticmethod
    def is_known_phase(phase) -> bool:
        """Whether `phase` is an integer phase number the wizard declares."""
        if isinstance(phase, bool) or not isinstance(phase, int):
            return False
        return 1 <= phase <= Phases.COUNT

    @staticmethod
    def get_phase_name(phase: int) -> str:
        """Get display name for phase."""
        return PhaseValidator.PHASE_NAMES.get(phase, "")

    # =========================================================================
    # Rules
    # =========================================================================

    @staticmethod
    def _check_identity(draft: DevelopmentDraft, result: PhaseValidationResult):
        if _is_blank(draft.identity.name):
            result.add_error("Name is required")
        if _is_blank(draft.identity.location.address):
            result.add_error("Location is required")

    @staticmethod
    def _check_classification(draft: DevelopmentDraft, result: PhaseValidationResult):
        if _is_blank(draft.classification.type):
            result.add_error("Type is required")

    @staticmethod
    def _check_overview(draft: DevelopmentDraft, result: PhaseValidationResult):
        if len(draft.overview.highlights or []) < MIN_HIGHLIGHTS:
            result.add_error(f"Add at least {MIN_HIGHLIGHTS} highlights")
        if len(draft.overview.description or "") < MIN_DESCRIPTION_LENGTH:
            result.add_error(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")

    @staticmethod
    def _check_unit_types(draft: DevelopmentDraft, result: PhaseValidationResult):
        if not draft.is_land and not draft.unit_types:
            result.add_error("Add at least one unit type")


def validate(phase: int, draft: DevelopmentDraft) -> PhaseValidationResult:
    """Module-level shortcut for PhaseValidator.validate_phase."""
    return PhaseValidator.validate_phase(phase, draft)
