# -*- coding: utf-8 -*-
"""
Development wizard core: phase validation, draft store and auto-save.
"""

from .phase_validator import PhaseValidator, PhaseValidationResult, validate
from .wizard_store import WizardStateStore
from .auto_save import AutoSaveController, AutoSaveState, AutoSaveStatus

__all__ = [
    'PhaseValidator',
    'PhaseValidationResult',
    'validate',
    'WizardStateStore',
    'AutoSaveController',
    'AutoSaveState',
    'AutoSaveStatus',
]
