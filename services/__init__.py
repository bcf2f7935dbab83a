# -*- coding: utf-8 -*-
"""
Development Wizard Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "DraftApiService",
    "WizardStateStore",
    "AutoSaveController",
    "PhaseValidator",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "DraftApiService":
        from .draft_api_service import DraftApiService
        return DraftApiService
    elif name == "WizardStateStore":
        from .wizard.wizard_store import WizardStateStore
        return WizardStateStore
    elif name == "AutoSaveController":
        from .wizard.auto_save import AutoSaveController
        return AutoSaveController
    elif name == "PhaseValidator":
        from .wizard.phase_validator import PhaseValidator
        return PhaseValidator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
