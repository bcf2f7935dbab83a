# -*- coding: utf-8 -*-
"""
Base Wizard - Abstract base class for phase wizards.

Composition root of the wizard core:
- Header with title, progress and save-status indicator
- Phase container
- Navigation buttons (Cancel, Save Draft, Previous, Next/Publish)
- Store → auto-save wiring and teardown
"""

from typing import List, Optional
from abc import ABCMeta, abstractmethod

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QFrame, QStackedWidget, QProgressBar, QMessageBox
)
from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QFont

from services.wizard.auto_save import AutoSaveController, PersistFunction
from services.wizard.phase_validator import PhaseValidationResult
from services.wizard.wizard_store import WizardStateStore
from ui.components.save_status_indicator import SaveStatusIndicator
from utils.logger import get_logger

from .base_step import PhaseStep
from .step_navigator import PhaseNavigator

logger = get_logger(__name__)


# Combine PyQt5 metaclass with ABC metaclass
class ABCQWidgetMeta(type(QWidget), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class BaseWizard(QWidget, metaclass=ABCQWidgetMeta):
    """
    Abstract base class for wizards.

    Subclasses must implement:
    - create_steps(): Create and return the phase steps, in phase order
    - on_publish(): Hand the validated draft to the server
    """

    # Signals
    wizard_published = pyqtSignal(dict)  # snapshot of the published draft
    wizard_cancelled = pyqtSignal()

    def __init__(
        self,
        persist: PersistFunction,
        store: Optional[WizardStateStore] = None,
        auto_save: Optional[AutoSaveController] = None,
        parent: Optional[QWidget] = None
    ):
        """
        Initialize the wizard.

        Args:
            persist: Draft persistence function used by auto-save
            store: Caller-owned store (default: a new empty store)
            auto_save: Pre-built controller (default: one wrapping `persist`)
            parent: Parent widget
        """
        super().__init__(parent)

        self.store = store or WizardStateStore(parent=self)
        self.auto_save = auto_save or AutoSaveController(persist, parent=self)
        self.navigator = PhaseNavigator(self.store)
        self.steps: List[PhaseStep] = self.create_steps()

        # Store → auto-save
        self.store.draft_changed.connect(self.auto_save.schedule)
        self.store.store_reset.connect(self.auto_save.invalidate)

        self.store.phase_changed.connect(self._on_phase_changed)
        self.store.store_reset.connect(self._on_store_replaced)
        self.store.draft_loaded.connect(self._on_store_replaced)
        self.navigator.validation_failed.connect(self._on_validation_failed)

        self._setup_ui()

        self.auto_save.status_changed.connect(self.status_indicator.set_status)
        self.auto_save.saved.connect(self.status_indicator.set_last_saved)
        self.store.store_reset.connect(self.status_indicator.clear)

        self._show_phase(self.store.current_phase)

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def create_steps(self) -> List[PhaseStep]:
        """Create and return the phase steps (index 0 = phase 1)."""
        pass

    @abstractmethod
    def on_publish(self) -> bool:
        """
        Send the validated, published draft to the server.

        Returns:
            True if the server accepted it
        """
        pass

    # =========================================================================
    # Optional Methods
    # =========================================================================

    def get_wizard_title(self) -> str:
        return "Wizard"

    def get_submit_button_text(self) -> str:
        return "Publish"

    def on_cancel(self) -> bool:
        """Return False to keep the wizard open."""
        return True

    # =========================================================================
    # UI Setup
    # =========================================================================

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self._create_header())

        separator = QFrame()
        separator.setFrameShape(QFrame.HLine)
        separator.setStyleSheet("background-color: #ddd;")
        separator.setFixedHeight(1)
        main_layout.addWidget(separator)

        self.step_container = QStackedWidget()
        for step in self.steps:
            self.step_container.addWidget(step)
        main_layout.addWidget(self.step_container, 1)

        main_layout.addWidget(self._create_footer())

    def _create_header(self) -> QWidget:
        header = QWidget()
        header.setStyleSheet("QWidget { background-color: #f8f9fa; }")

        layout = QVBoxLayout(header)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        title_row = QHBoxLayout()
        self.title_label = QLabel(self.get_wizard_title())
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        self.title_label.setFont(title_font)
        title_row.addWidget(self.title_label)
        title_row.addStretch()

        self.status_indicator = SaveStatusIndicator()
        title_row.addWidget(self.status_indicator)
        layout.addLayout(title_row)

        progress_layout = QHBoxLayout()
        progress_layout.setSpacing(8)

        self.progress_label = QLabel()
        progress_layout.addWidget(self.progress_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setMaximum(100)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(6)
        progress_layout.addWidget(self.progress_bar, 1)

        layout.addLayout(progress_layout)
        return header

    def _create_footer(self) -> QWidget:
        footer = QWidget()
        footer.setStyleSheet("QWidget { background-color: #f8f9fa; }")

        layout = QHBoxLayout(footer)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self._handle_cancel)
        layout.addWidget(self.btn_cancel)

        self.btn_save_draft = QPushButton("Save Draft")
        self.btn_save_draft.clicked.connect(self._handle_save_draft)
        layout.addWidget(self.btn_save_draft)

        layout.addStretch()

        self.btn_previous = QPushButton("Previous")
        self.btn_previous.clicked.connect(self._handle_previous)
        layout.addWidget(self.btn_previous)

        self.btn_next = QPushButton("Next")
        self.btn_next.setDefault(True)
        self.btn_next.clicked.connect(self._handle_next)
        layout.addWidget(self.btn_next)

        return footer

    # =========================================================================
    # Navigation Handlers
    # =========================================================================

    def _handle_previous(self):
        self.navigator.previous_phase()

    def _handle_next(self):
        if self.navigator.is_last_phase():
            self._handle_publish()
        else:
            self.navigator.next_phase()

    def _handle_cancel(self):
        if self.on_cancel():
            self.wizard_cancelled.emit()
            self.close()

    def _handle_save_draft(self):
        """Manual save; also the retry path after a failed auto-save."""
        self.auto_save.save_now(self.store.snapshot())

    def _handle_publish(self):
        result = self.navigator.publish(submit=self.on_publish)
        if not result.is_valid:
            return

        snapshot = self.store.snapshot()
        self.wizard_published.emit(snapshot)
        # Published drafts are cleared; reset also drops any pending auto-save
        self.store.reset()
        self.close()

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _show_phase(self, phase: int):
        index = phase - 1
        if not 0 <= index < len(self.steps):
            return
        current = self.step_container.currentWidget()
        if isinstance(current, PhaseStep) and current is not self.steps[index]:
            current.on_hide()
        self.step_container.setCurrentIndex(index)
        self.steps[index].on_show()
        self._update_progress()
        self._update_navigation_buttons()

    def _on_phase_changed(self, old_phase: int, new_phase: int):
        self._show_phase(new_phase)

    def _on_store_replaced(self):
        self._show_phase(self.store.current_phase)

    def _update_progress(self):
        current = self.store.current_phase
        self.progress_label.setText(f"Phase {current} of {len(self.steps)}")
        self.progress_bar.setValue(int(self.navigator.get_progress_percentage()))

    def _update_navigation_buttons(self):
        self.btn_previous.setEnabled(self.navigator.can_go_previous())
        if self.navigator.is_last_phase():
            self.btn_next.setText(self.get_submit_button_text())
        else:
            self.btn_next.setText("Next")

    def _on_validation_failed(self, result: PhaseValidationResult):
        message = "\n".join(f"• {error}" for error in result.errors + result.warnings)
        QMessageBox.warning(self, "Check the data", message or "Please check the entered data")

    def closeEvent(self, event):
        # No save may fire after the wizard is gone
        self.auto_save.dispose()
        super().closeEvent(event)
