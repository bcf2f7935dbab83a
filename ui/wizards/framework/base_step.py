# -*- coding: utf-8 -*-
"""
Phase Step - Abstract base class for wizard phase pages.

All phase steps should inherit from this class and implement:
- setup_ui(): Create the step's widgets
- populate_data(): Fill widgets from the store's draft
- apply_changes(): Push widget values into the store
"""

from abc import ABCMeta, abstractmethod
from typing import List, Optional

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel, QComboBox
from PyQt5.QtGui import QFont

from services.wizard.phase_validator import PhaseValidationResult, PhaseValidator
from services.wizard.wizard_store import WizardStateStore


# Combine PyQt5 metaclass with ABC metaclass
class ABCQWidgetMeta(type(QWidget), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class PhaseStep(QWidget, metaclass=ABCQWidgetMeta):
    """
    Abstract base class for wizard phases.

    Widgets write into the store as the user types; the store emits
    draft_changed, which drives auto-save. While populate_data() runs the
    step ignores its own widget signals so reloading never looks like an edit.
    """

    phase_number: int = 0

    def __init__(self, store: WizardStateStore, parent: Optional[QWidget] = None):
        """
        Initialize the step.

        Args:
            store: The wizard store shared by all steps
            parent: Parent widget
        """
        super().__init__(parent)
        self.store = store
        self._is_initialized = False
        self._populating = False

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(20, 20, 20, 20)
        self.main_layout.setSpacing(16)

    def initialize(self):
        """Build the UI once."""
        if not self._is_initialized:
            self._add_title()
            self.setup_ui()
            self.main_layout.addStretch()
            self._is_initialized = True

    def on_show(self):
        """Called when the step becomes the visible phase."""
        if not self._is_initialized:
            self.initialize()
        self._populating = True
        try:
            self.populate_data()
        finally:
            self._populating = False

    def on_hide(self):
        """Called when the wizard moves to another phase."""
        pass

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def setup_ui(self):
        """Create all widgets and layouts here."""
        pass

    @abstractmethod
    def populate_data(self):
        """Fill the widgets from self.store.draft."""
        pass

    @abstractmethod
    def apply_changes(self):
        """Write the widget values into the store."""
        pass

    # =========================================================================
    # Optional Methods
    # =========================================================================

    def validate(self) -> PhaseValidationResult:
        """Validate this phase against the store's draft."""
        return self.store.validate_phase(self.phase_number)

    def get_step_title(self) -> str:
        return PhaseValidator.get_phase_name(self.phase_number) or self.__class__.__name__

    def get_step_description(self) -> str:
        return ""

    # =========================================================================
    # Helpers
    # =========================================================================

    def _on_widget_edited(self, *args):
        """Connect widget change signals here."""
        if self._populating or self.store.is_published:
            return
        self.apply_changes()

    @staticmethod
    def fill_combo(combo: QComboBox, vocabulary: list):
        """Fill a combo with (code, label) pairs; the code is the item data."""
        combo.clear()
        for code, label in vocabulary:
            combo.addItem(label, code)

    @staticmethod
    def select_code(combo: QComboBox, code):
        index = combo.findData(code)
        combo.setCurrentIndex(max(index, 0))

    @staticmethod
    def split_list(text: str, separator: str = ",") -> List[str]:
        return [part.strip() for part in text.split(separator) if part.strip()]

    def _add_title(self):
        title = QLabel(self.get_step_title())
        font = QFont()
        font.setPointSize(13)
        font.setBold(True)
        title.setFont(font)
        self.main_layout.addWidget(title)

        description = self.get_step_description()
        if description:
            hint = QLabel(description)
            hint.setWordWrap(True)
            hint.setStyleSheet("color: #6c757d;")
            self.main_layout.addWidget(hint)
