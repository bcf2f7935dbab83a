# -*- coding: utf-8 -*-
"""
Smoke tests to ensure application doesn't break after changes.
These tests verify basic functionality works.
"""
import sys
import pytest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def test_imports():
    """Test that all main modules can be imported."""
    try:
        from app.config import Config, Phases, Vocabularies
        from models.development import DevelopmentDraft
        from services.draft_api_service import DraftApiService
        from services.wizard import AutoSaveController, PhaseValidator, WizardStateStore
        assert True
    except ImportError as e:
        pytest.fail(f"Import failed: {e}")


def test_config_defaults():
    """Test configuration values used by the wizard."""
    from app.config import Config, Phases

    assert Config.AUTO_SAVE_DEBOUNCE_MS > 0
    assert Config.LOG_PATH.name == Config.LOG_FILE
    assert Phases.COUNT == 5


def test_models_instantiation():
    """Test that models can be instantiated."""
    from models.development import DevelopmentDraft

    draft = DevelopmentDraft()
    assert draft.to_dict()["identity"]["name"] == ""


def test_lazy_service_exports():
    """Test the service package resolves its lazy exports."""
    import services
    from services.draft_api_service import DraftApiService

    assert services.DraftApiService is DraftApiService
    with pytest.raises(AttributeError):
        services.DoesNotExist


def test_logger_is_namespaced():
    """Test module loggers are children of the application logger."""
    from utils.logger import LOGGER_NAME, get_logger

    assert get_logger("tests.smoke").name == f"{LOGGER_NAME}.tests.smoke"


def test_log_levels_are_parsed():
    """Test LOG_LEVELS entries map modules to levels."""
    import logging
    from utils.logger import parse_log_levels

    levels = parse_log_levels("services.wizard.auto_save=debug, services.draft_api_service=WARNING,bad,x=LOUD")
    assert levels == {
        "services.wizard.auto_save": logging.DEBUG,
        "services.draft_api_service": logging.WARNING,
    }


def test_module_level_override():
    """Test a per-module level quietens only that module."""
    import logging
    from utils.logger import get_logger, setup_logger

    setup_logger(module_levels={"services.draft_api_service": logging.WARNING})
    try:
        assert not get_logger("services.draft_api_service").isEnabledFor(logging.INFO)
        assert get_logger("services.wizard.auto_save").isEnabledFor(logging.DEBUG)
    finally:
        get_logger("services.draft_api_service").setLevel(logging.NOTSET)


def test_ui_import():
    """Test that the wizard window can be imported."""
    try:
        from ui.wizards.development import DevelopmentWizard
        from ui.components.save_status_indicator import SaveStatusIndicator
        assert True
    except ImportError as e:
        pytest.fail(f"UI import failed: {e}")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
