# -*- coding: utf-8 -*-
"""
Finalisation Step - Phase 5 of the Development Wizard.

Sales team, marketing company and a publish-readiness checklist.
"""

from PyQt5.QtWidgets import QFormLayout, QLineEdit, QLabel, QGroupBox, QVBoxLayout

from app.config import Phases
from ui.wizards.framework import PhaseStep


class FinalisationStep(PhaseStep):
    """Phase 5: Sales and publish review."""

    phase_number = Phases.FINALISATION

    def get_step_description(self) -> str:
        return "Assign the sales team and review what is still missing before publishing."

    def setup_ui(self):
        form = QFormLayout()

        self.sales_team_input = QLineEdit()
        self.sales_team_input.setPlaceholderText("Agent ids, comma separated")
        self.sales_team_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Sales Team", self.sales_team_input)

        self.marketing_input = QLineEdit()
        self.marketing_input.textEdited.connect(self._on_widget_edited)
        form.addRow("Marketing Company", self.marketing_input)

        self.main_layout.addLayout(form)

        review_box = QGroupBox("Publish Checklist")
        review_layout = QVBoxLayout(review_box)
        self.readiness_label = QLabel()
        self.readiness_label.setWordWrap(True)
        review_layout.addWidget(self.readiness_label)
        self.main_layout.addWidget(review_box)

    def populate_data(self):
        finalisation = self.store.draft.finalisation
        self.sales_team_input.setText(", ".join(finalisation.sales_team_ids))
        self.marketing_input.setText(finalisation.marketing_company or "")
        self._refresh_readiness()

    def apply_changes(self):
        self.store.set_finalisation(
            sales_team_ids=self.split_list(self.sales_team_input.text()),
            marketing_company=self.marketing_input.text().strip() or None,
        )

    def _refresh_readiness(self):
        result = self.store.validate_for_publish()
        if result.is_valid:
            self.readiness_label.setText("Ready to publish.")
            self.readiness_label.setStyleSheet("color: #198754;")
        else:
            self.readiness_label.setText("\n".join(f"• {error}" for error in result.errors))
            self.readiness_label.setStyleSheet("color: #dc3545;")
