# -*- coding: utf-8 -*-
"""
Development Wizard Application Core Module
"""

from .config import Config, Phases, Vocabularies

__all__ = ["Config", "Phases", "Vocabularies"]
