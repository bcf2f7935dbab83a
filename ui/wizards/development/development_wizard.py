# -*- coding: utf-8 -*-
"""
Development Wizard.

Multi-phase wizard for listing a property development.

Phases:
1. Identity - Name, location and media
2. Classification - Type, sub-type and ownership
3. Overview - Status, highlights and description
4. Unit Types - Unit templates and prices (not for land)
5. Finalisation - Sales team and publish
"""

from typing import Any, List, Optional

from PyQt5.QtWidgets import QWidget, QMessageBox

from app.config import Config
from services.draft_api_service import DraftApiService
from services.exceptions import ApiException, NetworkException
from services.wizard.auto_save import AutoSaveController
from services.wizard.wizard_store import WizardStateStore
from ui.wizards.framework import BaseWizard, PhaseStep
from ui.wizards.development.steps import (
    IdentityStep,
    ClassificationStep,
    OverviewStep,
    UnitTypesStep,
    FinalisationStep
)
from utils.logger import get_logger

logger = get_logger(__name__)


class DevelopmentWizard(BaseWizard):
    """
    Development listing wizard.

    Drafts are auto-saved to the drafts API while the developer types;
    publishing hands the whole draft to the developments API.
    """

    def __init__(
        self,
        api: DraftApiService,
        store: Optional[WizardStateStore] = None,
        auto_save: Optional[AutoSaveController] = None,
        parent: Optional[QWidget] = None
    ):
        """
        Initialize the wizard.

        Args:
            api: Drafts API client; its save_draft is the auto-save target
            store: Caller-owned store (default: a new empty store)
            auto_save: Pre-built controller (default: one wrapping api.save_draft)
            parent: Parent widget
        """
        self.api = api
        super().__init__(api.save_draft, store=store, auto_save=auto_save, parent=parent)
        self.setWindowTitle(f"{Config.APP_NAME} {Config.VERSION}")
        self.setMinimumSize(Config.WINDOW_MIN_WIDTH, Config.WINDOW_MIN_HEIGHT)

    def create_steps(self) -> List[PhaseStep]:
        """Create and return the phase steps."""
        return [
            IdentityStep(self.store, self),
            ClassificationStep(self.store, self),
            OverviewStep(self.store, self),
            UnitTypesStep(self.store, self),
            FinalisationStep(self.store, self)
        ]

    def get_wizard_title(self) -> str:
        return "New Development"

    def get_submit_button_text(self) -> str:
        return "Publish Development"

    def on_publish(self) -> bool:
        """
        Send the draft to the developments API.

        POST /v1/developer/developments/publish

        Returns:
            True if the server accepted the development
        """
        try:
            development = self.api.publish(self.store.snapshot())
        except (ApiException, NetworkException) as e:
            logger.error(f"Failed to publish development: {e}")
            QMessageBox.critical(self, "Publish failed", f"The development could not be published.\n{e}")
            return False

        logger.info(f"Development published: {development.get('id')}")
        return True

    def on_cancel(self) -> bool:
        """Confirm before closing while some edit has not been saved."""
        if not self.auto_save.has_unsaved_changes():
            return True

        answer = QMessageBox.question(
            self,
            "Discard changes?",
            "Some changes have not been saved yet. Close the wizard anyway?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        return answer == QMessageBox.Yes

    def load_draft(self, draft_id: Any) -> bool:
        """
        Resume a persisted draft.

        Returns:
            False if the draft could not be loaded
        """
        try:
            data = self.api.get_draft(draft_id)
        except (ApiException, NetworkException) as e:
            logger.error(f"Error loading draft {draft_id}: {e}")
            QMessageBox.critical(self, "Draft unavailable", f"The draft could not be loaded.\n{e}")
            return False

        self.auto_save.invalidate()
        self.store.hydrate(data)
        logger.info(f"Draft loaded: {draft_id}")
        return True
