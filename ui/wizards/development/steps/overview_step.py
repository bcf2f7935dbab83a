# -*- coding: utf-8 -*-
"""
Overview Step - Phase 3 of the Development Wizard.
"""

from PyQt5.QtWidgets import QFormLayout, QComboBox, QTextEdit, QPlainTextEdit, QLineEdit, QLabel

from app.config import Phases, Vocabularies
from services.wizard.phase_validator import MIN_DESCRIPTION_LENGTH, MIN_HIGHLIGHTS
from ui.wizards.framework import PhaseStep


class OverviewStep(PhaseStep):
    """Phase 3: Status, highlights, description and shared amenities."""

    phase_number = Phases.OVERVIEW

    def get_step_description(self) -> str:
        return (
            f"Add at least {MIN_HIGHLIGHTS} highlights (one per line) and a description "
            f"of {MIN_DESCRIPTION_LENGTH}+ characters."
        )

    def setup_ui(self):
        form = QFormLayout()

        self.status_combo = QComboBox()
        self.fill_combo(self.status_combo, Vocabularies.DEVELOPMENT_STATUSES)
        self.status_combo.activated.connect(self._on_widget_edited)
        form.addRow("Status", self.status_combo)

        self.highlights_input = QPlainTextEdit()
        self.highlights_input.setFixedHeight(90)
        self.highlights_input.textChanged.connect(self._on_widget_edited)
        form.addRow("Highlights *", self.highlights_input)

        self.description_input = QTextEdit()
        self.description_input.setFixedHeight(110)
        self.description_input.textChanged.connect(self._on_widget_edited)
        form.addRow("Description *", self.description_input)

        self.description_counter = QLabel()
        form.addRow("", self.description_counter)

        self.amenities_input = QLineEdit()
        self.amenities_input.setPlaceholderText("Comma separated, e.g. Pool, Clubhouse")
        self.amenities_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Amenities", self.amenities_input)

        self.features_input = QLineEdit()
        self.features_input.setPlaceholderText("Comma separated")
        self.features_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Features", self.features_input)

        self.main_layout.addLayout(form)

    def populate_data(self):
        overview = self.store.draft.overview
        self.select_code(self.status_combo, overview.status)
        self.highlights_input.setPlainText("\n".join(overview.highlights))
        self.description_input.setPlainText(overview.description)
        self.amenities_input.setText(", ".join(overview.amenities))
        self.features_input.setText(", ".join(overview.features))
        self._update_counter()

    def apply_changes(self):
        self.store.set_overview(
            status=self.status_combo.currentData(),
            highlights=self.split_list(self.highlights_input.toPlainText(), "\n"),
            description=self.description_input.toPlainText(),
            amenities=self.split_list(self.amenities_input.text()),
            features=self.split_list(self.features_input.text()),
        )
        self._update_counter()

    def _update_counter(self):
        length = len(self.description_input.toPlainText())
        self.description_counter.setText(f"{length}/{MIN_DESCRIPTION_LENGTH} characters")
