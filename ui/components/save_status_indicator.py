# -*- coding: utf-8 -*-
"""
Save Status Indicator - shows the draft auto-save state in the wizard header.
"""

from datetime import datetime
from typing import Optional

from PyQt5.QtWidgets import QLabel, QWidget
from PyQt5.QtCore import Qt


class SaveStatusIndicator(QLabel):
    """
    Small label reflecting AutoSaveController.status_changed.

    Usage:
        indicator = SaveStatusIndicator()
        auto_save.status_changed.connect(indicator.set_status)
        auto_save.saved.connect(indicator.set_last_saved)
    """

    STYLES = {
        "unsaved": ("Unsaved changes", "#6c757d"),
        "saving": ("Saving…", "#0d6efd"),
        "saved": ("Saved", "#198754"),
        "error": ("Save failed", "#dc3545"),
    }

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.status = "unsaved"
        self.last_saved_at: Optional[datetime] = None
        self.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self.clear()

    def set_status(self, status: str):
        if status not in self.STYLES:
            return
        self.status = status
        if status == "unsaved" and self.last_saved_at is None:
            # Fresh draft: nothing to report yet
            self.setText("")
            return
        self._refresh()

    def set_last_saved(self, saved_at: datetime):
        self.last_saved_at = saved_at
        self._refresh()

    def clear(self):
        self.status = "unsaved"
        self.last_saved_at = None
        self.setText("")

    def _refresh(self):
        text, color = self.STYLES[self.status]
        if self.status == "saved" and self.last_saved_at is not None:
            text = f"Saved at {self.last_saved_at:%H:%M}"
        self.setText(text)
        self.setStyleSheet(f"color: {color}; font-weight: 600;")
