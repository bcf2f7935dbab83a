# -*- coding: utf-8 -*-
"""
Identity Step - Phase 1 of the Development Wizard.

Name, nature, location and media (hero image, photos, videos).
"""

from pathlib import Path

from PyQt5.QtWidgets import (
    QFormLayout, QGroupBox, QLineEdit, QComboBox, QTextEdit, QListWidget,
    QListWidgetItem, QHBoxLayout, QPushButton, QFileDialog
)
from PyQt5.QtCore import Qt

from app.config import Phases, Vocabularies
from models.media import MediaItem
from ui.wizards.framework import PhaseStep
from utils.logger import get_logger

logger = get_logger(__name__)

VIDEO_SUFFIXES = {".mp4", ".mov", ".avi", ".mkv", ".webm"}


class IdentityStep(PhaseStep):
    """Phase 1: Development identity."""

    phase_number = Phases.IDENTITY

    LOCATION_FIELDS = [
        ("address", "Street Address *"),
        ("suburb", "Suburb"),
        ("city", "City"),
        ("province", "Province"),
        ("postal_code", "Postal Code"),
        ("latitude", "Latitude"),
        ("longitude", "Longitude"),
    ]

    def get_step_description(self) -> str:
        return "Name the development and tell buyers where it is."

    def setup_ui(self):
        form = QFormLayout()

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("e.g. Waterfall Heights")
        self.name_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Development Name *", self.name_input)

        self.nature_combo = QComboBox()
        self.fill_combo(self.nature_combo, Vocabularies.NATURES)
        self.nature_combo.activated.connect(self._on_widget_edited)
        form.addRow("Nature", self.nature_combo)

        self.description_input = QTextEdit()
        self.description_input.setFixedHeight(80)
        self.description_input.textChanged.connect(self._on_widget_edited)
        form.addRow("Description", self.description_input)

        self.main_layout.addLayout(form)

        location_box = QGroupBox("Location")
        location_form = QFormLayout(location_box)
        self.location_inputs = {}
        for key, label in self.LOCATION_FIELDS:
            line = QLineEdit()
            line.textEdited.connect(self._on_widget_edited)
            location_form.addRow(label, line)
            self.location_inputs[key] = line
        self.main_layout.addWidget(location_box)

        media_box = QGroupBox("Media")
        media_layout = QHBoxLayout(media_box)
        self.media_list = QListWidget()
        media_layout.addWidget(self.media_list, 1)

        buttons = QHBoxLayout()
        self.btn_add_media = QPushButton("Add Files…")
        self.btn_add_media.clicked.connect(self._pick_media_files)
        self.btn_set_hero = QPushButton("Set as Hero")
        self.btn_set_hero.clicked.connect(self._set_selected_as_hero)
        self.btn_remove_media = QPushButton("Remove")
        self.btn_remove_media.clicked.connect(self._remove_selected_media)
        for button in (self.btn_add_media, self.btn_set_hero, self.btn_remove_media):
            buttons.addWidget(button)
        media_layout.addLayout(buttons)
        self.main_layout.addWidget(media_box)

    def populate_data(self):
        identity = self.store.draft.identity
        self.name_input.setText(identity.name)
        self.select_code(self.nature_combo, identity.nature)
        self.description_input.setPlainText(identity.description)
        for key, line in self.location_inputs.items():
            line.setText(getattr(identity.location, key))
        self._refresh_media_list()

    def apply_changes(self):
        self.store.set_identity(
            name=self.name_input.text(),
            nature=self.nature_combo.currentData(),
            description=self.description_input.toPlainText(),
            location={key: line.text().strip() for key, line in self.location_inputs.items()},
        )

    # =========================================================================
    # Media
    # =========================================================================

    def add_files(self, paths):
        """Add local files as media; videos are detected by extension."""
        for path in paths:
            file_path = Path(path)
            media_type = "video" if file_path.suffix.lower() in VIDEO_SUFFIXES else "image"
            self.store.add_media(MediaItem(
                url=file_path.as_uri() if file_path.is_absolute() else str(file_path),
                type=media_type,
                local_path=str(file_path),
            ))
        self._refresh_media_list()

    def _pick_media_files(self):
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Add media", "",
            "Media (*.jpg *.jpeg *.png *.webp *.mp4 *.mov *.avi *.mkv *.webm)"
        )
        if paths:
            self.add_files(paths)

    def _selected_media_id(self):
        item = self.media_list.currentItem()
        return item.data(Qt.UserRole) if item else None

    def _set_selected_as_hero(self):
        media_id = self._selected_media_id()
        if media_id and self.store.set_primary_image(media_id):
            self._refresh_media_list()

    def _remove_selected_media(self):
        media_id = self._selected_media_id()
        if media_id and self.store.remove_media(media_id):
            self._refresh_media_list()

    def _refresh_media_list(self):
        self.media_list.clear()
        for media in self.store.all_media():
            name = Path(media.local_path).name if media.local_path else media.url
            prefix = "★ " if media.is_primary else ""
            item = QListWidgetItem(f"{prefix}{name} ({media.type})")
            item.setData(Qt.UserRole, media.id)
            self.media_list.addItem(item)
