# -*- coding: utf-8 -*-
"""
Classification Step - Phase 2 of the Development Wizard.
"""

from PyQt5.QtWidgets import QFormLayout, QComboBox, QLineEdit, QLabel

from app.config import Phases, Vocabularies
from ui.wizards.framework import PhaseStep


class ClassificationStep(PhaseStep):
    """Phase 2: Development type, sub-type and ownership."""

    phase_number = Phases.CLASSIFICATION

    def get_step_description(self) -> str:
        return "The development type decides which of the next phases apply."

    def setup_ui(self):
        form = QFormLayout()

        self.type_combo = QComboBox()
        self.fill_combo(self.type_combo, Vocabularies.DEVELOPMENT_TYPES)
        self.type_combo.activated.connect(self._on_widget_edited)
        form.addRow("Development Type *", self.type_combo)

        self.sub_type_input = QLineEdit()
        self.sub_type_input.setPlaceholderText("e.g. Security Estate, Apartment Block")
        self.sub_type_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Sub-type", self.sub_type_input)

        self.ownership_combo = QComboBox()
        self.fill_combo(self.ownership_combo, Vocabularies.OWNERSHIP_TYPES)
        self.ownership_combo.activated.connect(self._on_widget_edited)
        form.addRow("Ownership", self.ownership_combo)

        self.main_layout.addLayout(form)

        self.land_note = QLabel("Land developments skip the Unit Types phase.")
        self.land_note.setStyleSheet("color: #6c757d;")
        self.main_layout.addWidget(self.land_note)

    def populate_data(self):
        classification = self.store.draft.classification
        self.select_code(self.type_combo, classification.type)
        self.sub_type_input.setText(classification.sub_type)
        self.select_code(self.ownership_combo, classification.ownership)
        self.land_note.setVisible(classification.type == "land")

    def apply_changes(self):
        previous_type = self.store.draft.classification.type
        self.store.set_classification(
            type=self.type_combo.currentData(),
            sub_type=self.sub_type_input.text().strip(),
            ownership=self.ownership_combo.currentData(),
        )
        if self.type_combo.currentData() != previous_type:
            # The store cleared the sub-type
            self.on_show()
