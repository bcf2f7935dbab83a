# -*- coding: utf-8 -*-
"""
Development Wizard Steps Package.

Contains one page per wizard phase:
- Phase 1: Identity (name, location, media)
- Phase 2: Classification
- Phase 3: Overview
- Phase 4: Unit Types (skipped for land)
- Phase 5: Finalisation
"""

from .identity_step import IdentityStep
from .classification_step import ClassificationStep
from .overview_step import OverviewStep
from .unit_types_step import UnitTypesStep
from .finalisation_step import FinalisationStep

__all__ = [
    'IdentityStep',
    'ClassificationStep',
    'OverviewStep',
    'UnitTypesStep',
    'FinalisationStep'
]
