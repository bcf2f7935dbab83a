# -*- coding: utf-8 -*-
"""
Wizard Framework - phase wizard building blocks.

Provides base classes for multi-phase wizards backed by a
WizardStateStore, with validated navigation and draft auto-save.
"""

from .base_wizard import BaseWizard
from .base_step import PhaseStep
from .step_navigator import PhaseNavigator

__all__ = [
    'BaseWizard',
    'PhaseStep',
    'PhaseNavigator'
]
