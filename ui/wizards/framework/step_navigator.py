# -*- coding: utf-8 -*-
"""
Phase Navigator - Manages navigation between wizard phases.

Handles:
- Validated forward transitions (next)
- Unvalidated back navigation and tab jumps
- Skipping the Unit Types phase for land developments
- Publish-readiness check
"""

from typing import Callable, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Phases
from services.wizard.phase_validator import PhaseValidationResult
from services.wizard.wizard_store import WizardStateStore
from utils.logger import get_logger

logger = get_logger(__name__)


class PhaseNavigator(QObject):
    """
    Moves the store's phase pointer.

    Forward moves go through the phase validator first; backward moves and
    direct jumps do not.
    """

    # Signals
    validation_failed = pyqtSignal(object)  # PhaseValidationResult
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)

    def __init__(self, store: WizardStateStore, phase_count: int = Phases.COUNT):
        """
        Initialize the navigator.

        Args:
            store: Wizard store owning the phase pointer
            phase_count: Number of phases
        """
        super().__init__()
        self.store = store
        self.phase_count = phase_count

        self.store.phase_changed.connect(self._on_phase_changed)

    @property
    def current_phase(self) -> int:
        return self.store.current_phase

    def is_phase_skipped(self, phase: int) -> bool:
        """Land developments have no unit types."""
        return phase == Phases.UNIT_TYPES and self.store.draft.is_land

    def can_go_next(self) -> bool:
        return self.current_phase < self.phase_count

    def can_go_previous(self) -> bool:
        return self.current_phase > 1

    def is_last_phase(self) -> bool:
        return self.current_phase == self.phase_count

    def next_phase(self) -> bool:
        """
        Validate the current phase and move forward.

        Returns:
            True if navigation was successful
        """
        if not self.can_go_next():
            logger.debug(f"Cannot go next: already at last phase ({self.current_phase})")
            return False

        result = self.store.validate_phase(self.current_phase)
        if not result.is_valid:
            logger.warning(f"Phase {self.current_phase} validation failed: {result.errors}")
            self.validation_failed.emit(result)
            return False

        target = self.current_phase + 1
        if self.is_phase_skipped(target):
            logger.debug(f"Skipping phase {target}")
            target += 1

        logger.info(f"Navigating: Phase {self.current_phase} → {target}")
        return self.store.set_phase(min(target, self.phase_count))

    def previous_phase(self) -> bool:
        """Move back without validation."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous: already at first phase ({self.current_phase})")
            return False

        target = self.current_phase - 1
        if self.is_phase_skipped(target):
            target -= 1

        logger.info(f"Navigating back: Phase {self.current_phase} → {target}")
        return self.store.set_phase(max(target, 1))

    def goto_phase(self, phase: int) -> bool:
        """Jump to a phase (tab click) without validation."""
        if phase < 1 or phase > self.phase_count:
            logger.error(f"Invalid phase: {phase} (valid range: 1-{self.phase_count})")
            return False
        return self.store.set_phase(phase)

    def publish(self, submit: Optional[Callable[[], bool]] = None) -> PhaseValidationResult:
        """
        Validate the whole draft and mark it published when it passes.

        Args:
            submit: Called after validation; returning False aborts publishing

        Returns:
            The publish validation result
        """
        result = self.store.validate_for_publish()
        if result.is_valid and submit is not None and not submit():
            result.add_error("Publishing failed, please try again")

        if not result.is_valid:
            logger.warning(f"Publish failed: {result.errors}")
            self.validation_failed.emit(result)
            return result

        self.store.mark_published()
        return result

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if self.phase_count <= 1:
            return 100.0
        return ((self.current_phase - 1) / (self.phase_count - 1)) * 100.0

    # =========================================================================
    # Signal Handlers
    # =========================================================================

    def _on_phase_changed(self, old_phase: int, new_phase: int):
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())
