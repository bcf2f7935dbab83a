# -*- coding: utf-8 -*-
"""
Tests for the Development Wizard window.

Tests cover:
- Wizard initialization
- Edits flowing from the phase pages to auto-save
- Phase navigation
- Publishing
- Resuming a saved draft
"""

from unittest.mock import MagicMock

import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QMessageBox

from services.draft_api_service import DraftApiService
from services.exceptions import DraftNotFoundException, NetworkException
from services.wizard.auto_save import AutoSaveController
from ui.wizards.development import DevelopmentWizard
from ui.wizards.development.steps import IdentityStep, FinalisationStep


@pytest.fixture
def dialogs(monkeypatch):
    """Replace modal message boxes with mocks."""
    mocks = {
        "warning": MagicMock(return_value=QMessageBox.Ok),
        "critical": MagicMock(return_value=QMessageBox.Ok),
        "question": MagicMock(return_value=QMessageBox.Yes),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(QMessageBox, name, mock)
    return mocks


@pytest.fixture
def api():
    api = MagicMock(spec=DraftApiService)
    api.publish.return_value = {"id": 1001}
    return api


@pytest.fixture
def wizard(qtbot, api, dialogs):
    auto_save = AutoSaveController(api.save_draft, debounce_ms=50, threaded=False, enabled=True)
    wizard = DevelopmentWizard(api, auto_save=auto_save)
    qtbot.addWidget(wizard)
    wizard.show()
    yield wizard
    wizard.auto_save.dispose()


def current_step(wizard):
    return wizard.step_container.currentWidget()


class TestWizardInitialization:

    def test_has_five_phases(self, wizard):
        assert len(wizard.steps) == 5
        assert [step.phase_number for step in wizard.steps] == [1, 2, 3, 4, 5]

    def test_starts_on_identity(self, wizard):
        assert isinstance(current_step(wizard), IdentityStep)
        assert wizard.progress_label.text() == "Phase 1 of 5"
        assert not wizard.btn_previous.isEnabled()

    def test_indicator_empty_for_fresh_draft(self, wizard):
        assert wizard.status_indicator.text() == ""


class TestAutoSaveWiring:
    """Typing in a phase page ends in one debounced save."""

    def test_typing_saves_latest_value(self, qtbot, wizard, api):
        step = current_step(wizard)
        qtbot.keyClicks(step.name_input, "Sunrise")

        assert wizard.store.draft.identity.name == "Sunrise"
        qtbot.waitUntil(
            lambda: api.save_draft.called
            and api.save_draft.call_args[0][0]["identity"]["name"] == "Sunrise",
            timeout=2000
        )
        assert wizard.status_indicator.text().startswith("Saved at")

    def test_failed_save_shows_error(self, qtbot, wizard, api):
        api.save_draft.side_effect = NetworkException("offline")
        qtbot.keyClicks(current_step(wizard).name_input, "A")

        qtbot.waitUntil(lambda: wizard.status_indicator.text() == "Save failed", timeout=2000)

    def test_save_draft_button(self, qtbot, wizard, api):
        qtbot.mouseClick(wizard.btn_save_draft, Qt.LeftButton)
        api.save_draft.assert_called_once()
        assert api.save_draft.call_args[0][0]["current_phase"] == 1


class TestNavigation:

    def test_next_blocked_by_validation(self, qtbot, wizard, dialogs):
        qtbot.mouseClick(wizard.btn_next, Qt.LeftButton)

        assert wizard.store.current_phase == 1
        dialogs["warning"].assert_called_once()
        assert "Name is required" in dialogs["warning"].call_args[0][2]

    def test_next_after_filling_identity(self, qtbot, wizard):
        step = current_step(wizard)
        qtbot.keyClicks(step.name_input, "Waterfall Heights")
        qtbot.keyClicks(step.location_inputs["address"], "12 Ridge Road")

        qtbot.mouseClick(wizard.btn_next, Qt.LeftButton)

        assert wizard.store.current_phase == 2
        assert wizard.step_container.currentIndex() == 1
        assert wizard.btn_previous.isEnabled()

    def test_last_phase_shows_publish(self, wizard):
        wizard.store.set_phase(5)
        assert isinstance(current_step(wizard), FinalisationStep)
        assert wizard.btn_next.text() == "Publish Development"


class TestPublishing:

    def test_publish_resets_and_emits(self, qtbot, wizard, api, valid_draft_data):
        wizard.store.hydrate(valid_draft_data)
        wizard.store.set_phase(5)

        with qtbot.waitSignal(wizard.wizard_published, timeout=1000) as blocker:
            qtbot.mouseClick(wizard.btn_next, Qt.LeftButton)

        api.publish.assert_called_once()
        assert blocker.args[0]["identity"]["name"] == "Waterfall Heights"
        assert blocker.args[0]["finalisation"]["is_published"] is True
        assert wizard.store.current_phase == 1
        assert wizard.store.draft.identity.name == ""

    def test_server_rejection_keeps_draft(self, qtbot, wizard, api, dialogs, valid_draft_data):
        api.publish.side_effect = NetworkException("offline")
        wizard.store.hydrate(valid_draft_data)
        wizard.store.set_phase(5)

        qtbot.mouseClick(wizard.btn_next, Qt.LeftButton)

        dialogs["critical"].assert_called_once()
        assert not wizard.store.is_published
        assert wizard.store.current_phase == 5

    def test_incomplete_draft_not_sent(self, qtbot, wizard, api, dialogs):
        wizard.store.set_phase(5)
        qtbot.mouseClick(wizard.btn_next, Qt.LeftButton)

        api.publish.assert_not_called()
        dialogs["warning"].assert_called_once()


class TestResumeDraft:

    def test_load_draft_restores_phase(self, wizard, api, valid_draft_data):
        valid_draft_data["current_phase"] = 3
        api.get_draft.return_value = valid_draft_data

        assert wizard.load_draft(42) is True
        assert wizard.store.current_phase == 3
        assert wizard.step_container.currentIndex() == 2
        assert wizard.store.draft.identity.name == "Waterfall Heights"
        api.save_draft.assert_not_called()

    def test_missing_draft(self, wizard, api, dialogs):
        api.get_draft.side_effect = DraftNotFoundException(42)

        assert wizard.load_draft(42) is False
        dialogs["critical"].assert_called_once()
        assert wizard.store.current_phase == 1


class TestCancel:

    def test_cancel_without_pending_changes(self, qtbot, wizard, dialogs):
        with qtbot.waitSignal(wizard.wizard_cancelled, timeout=1000):
            qtbot.mouseClick(wizard.btn_cancel, Qt.LeftButton)
        dialogs["question"].assert_not_called()

    def test_cancel_with_pending_changes_asks(self, qtbot, wizard, dialogs):
        wizard.store.set_identity(name="Unsaved")
        dialogs["question"].return_value = QMessageBox.No

        qtbot.mouseClick(wizard.btn_cancel, Qt.LeftButton)

        dialogs["question"].assert_called_once()
        assert wizard.store.draft.identity.name == "Unsaved"

    def test_cancel_after_failed_save_asks(self, qtbot, wizard, api, dialogs):
        api.save_draft.side_effect = NetworkException("offline")
        wizard.store.set_identity(name="Lost")
        qtbot.waitUntil(lambda: wizard.auto_save.status == "error", timeout=2000)
        dialogs["question"].return_value = QMessageBox.No

        qtbot.mouseClick(wizard.btn_cancel, Qt.LeftButton)

        dialogs["question"].assert_called_once()

    def test_cancel_with_auto_save_disabled_asks(self, qtbot, wizard, dialogs):
        wizard.auto_save.set_enabled(False)
        wizard.store.set_identity(name="Held back")
        assert not wizard.auto_save.is_pending()
        dialogs["question"].return_value = QMessageBox.No

        qtbot.mouseClick(wizard.btn_cancel, Qt.LeftButton)

        dialogs["question"].assert_called_once()
