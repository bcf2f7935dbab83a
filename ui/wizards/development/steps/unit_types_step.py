# -*- coding: utf-8 -*-
"""
Unit Types Step - Phase 4 of the Development Wizard.

Skipped by the navigator for land developments.
"""

from PyQt5.QtWidgets import (
    QGroupBox, QFormLayout, QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox,
    QPushButton, QHBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QAbstractItemView
)
from PyQt5.QtCore import Qt

from app.config import Phases, Vocabularies
from ui.wizards.framework import PhaseStep
from utils.logger import get_logger

logger = get_logger(__name__)


class UnitTypesStep(PhaseStep):
    """Phase 4: Unit templates with base prices."""

    phase_number = Phases.UNIT_TYPES

    COLUMNS = ["Name", "Bedrooms", "Bathrooms", "Parking", "Price From"]

    def get_step_description(self) -> str:
        return "Define each unit type buyers can choose from."

    def setup_ui(self):
        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels(self.COLUMNS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.main_layout.addWidget(self.table, 1)

        add_box = QGroupBox("New Unit Type")
        form = QFormLayout(add_box)

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("e.g. 2 Bedroom Apartment")
        form.addRow("Name *", self.name_input)

        self.bedrooms_input = QSpinBox()
        self.bedrooms_input.setRange(0, 20)
        form.addRow("Bedrooms", self.bedrooms_input)

        self.bathrooms_input = QDoubleSpinBox()
        self.bathrooms_input.setRange(0, 20)
        self.bathrooms_input.setSingleStep(0.5)
        form.addRow("Bathrooms", self.bathrooms_input)

        self.parking_combo = QComboBox()
        self.fill_combo(self.parking_combo, Vocabularies.PARKING_OPTIONS)
        form.addRow("Parking", self.parking_combo)

        self.price_input = QDoubleSpinBox()
        self.price_input.setRange(0, 1_000_000_000)
        self.price_input.setDecimals(0)
        self.price_input.setSingleStep(10000)
        form.addRow("Base Price From *", self.price_input)

        buttons = QHBoxLayout()
        self.btn_add = QPushButton("Add Unit Type")
        self.btn_add.clicked.connect(self.add_unit_type_from_form)
        self.btn_remove = QPushButton("Remove Selected")
        self.btn_remove.clicked.connect(self.remove_selected_unit_type)
        buttons.addWidget(self.btn_add)
        buttons.addWidget(self.btn_remove)
        buttons.addStretch()
        form.addRow(buttons)

        self.main_layout.addWidget(add_box)

    def populate_data(self):
        unit_types = self.store.draft.unit_types
        self.table.setRowCount(len(unit_types))
        for row, unit_type in enumerate(unit_types):
            values = [
                unit_type.name,
                str(unit_type.bedrooms),
                f"{unit_type.bathrooms:g}",
                Vocabularies.label(Vocabularies.PARKING_OPTIONS, unit_type.parking),
                f"{unit_type.base_price_from:,.0f}",
            ]
            for column, value in enumerate(values):
                cell = QTableWidgetItem(value)
                cell.setData(Qt.UserRole, unit_type.id)
                self.table.setItem(row, column, cell)

    def apply_changes(self):
        # Unit types are added and removed through explicit actions
        pass

    def add_unit_type_from_form(self):
        name = self.name_input.text().strip()
        if not name:
            self.name_input.setFocus()
            return
        if self.store.is_published:
            return

        self.store.add_unit_type(
            name=name,
            bedrooms=self.bedrooms_input.value(),
            bathrooms=self.bathrooms_input.value(),
            parking=self.parking_combo.currentData(),
            base_price_from=self.price_input.value(),
        )
        self.name_input.clear()
        self.on_show()

    def remove_selected_unit_type(self):
        row = self.table.currentRow()
        if row < 0:
            return
        unit_type_id = self.table.item(row, 0).data(Qt.UserRole)
        if self.store.remove_unit_type(unit_type_id):
            self.on_show()
