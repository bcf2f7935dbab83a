# -*- coding: utf-8 -*-
"""
Shared pytest configuration.

Qt runs offscreen and logs go to a temporary directory; both must be set
before app.config is imported.
"""

import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="devwizard-logs-"))

import pytest


@pytest.fixture
def valid_draft_data():
    """Snapshot of a draft that passes every phase and the publish check."""
    return {
        "identity": {
            "name": "Waterfall Heights",
            "description": "Hillside apartments",
            "nature": "new",
            "location": {"address": "12 Ridge Road", "city": "Midrand"},
            "media": {
                "hero_image": {
                    "id": "media-hero",
                    "url": "https://cdn.example.com/hero.jpg",
                    "type": "image",
                    "category": "featured",
                    "is_primary": True,
                },
                "photos": [],
                "videos": [],
            },
        },
        "classification": {"type": "residential", "sub_type": "Apartment Block"},
        "overview": {
            "status": "construction",
            "highlights": ["Pool", "Gym", "24h security"],
            "description": "Modern apartments with views over the valley and quick highway access.",
        },
        "unit_types": [
            {"id": "unit-1", "name": "2 Bedroom", "bedrooms": 2, "base_price_from": 1250000},
        ],
        "finalisation": {"sales_team_ids": ["agent-1"]},
        "current_phase": 1,
    }
