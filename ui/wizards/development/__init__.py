# -*- coding: utf-8 -*-
"""
Development Wizard Package.

This package contains:
- DevelopmentWizard: Main wizard class
- Steps: One page per wizard phase
"""

from .development_wizard import DevelopmentWizard

__all__ = [
    'DevelopmentWizard'
]
