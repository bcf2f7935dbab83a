# -*- coding: utf-8 -*-
"""
Tests for the individual phase pages.
"""

from datetime import datetime

import pytest

from services.wizard.wizard_store import WizardStateStore
from ui.components.save_status_indicator import SaveStatusIndicator
from ui.wizards.development.steps import (
    IdentityStep,
    ClassificationStep,
    OverviewStep,
    UnitTypesStep,
    FinalisationStep
)


@pytest.fixture
def store(qapp):
    return WizardStateStore()


def shown(qtbot, step):
    qtbot.addWidget(step)
    step.on_show()
    return step


class TestIdentityStep:

    def test_populate_does_not_count_as_edit(self, qtbot, store, valid_draft_data):
        store.hydrate(valid_draft_data)
        changes = []
        store.draft_changed.connect(changes.append)

        step = shown(qtbot, IdentityStep(store))

        assert step.name_input.text() == "Waterfall Heights"
        assert step.location_inputs["address"].text() == "12 Ridge Road"
        assert changes == []

    def test_add_files_sorts_images_and_videos(self, qtbot, store):
        step = shown(qtbot, IdentityStep(store))
        step.add_files(["/tmp/front.jpg", "/tmp/tour.mp4", "/tmp/pool.png"])

        media = store.draft.identity.media
        assert media.hero_image.local_path == "/tmp/front.jpg"
        assert [p.local_path for p in media.photos] == ["/tmp/pool.png"]
        assert [v.local_path for v in media.videos] == ["/tmp/tour.mp4"]
        assert step.media_list.count() == 3
        assert step.media_list.item(0).text().startswith("★ front.jpg")

    def test_set_selected_as_hero(self, qtbot, store):
        step = shown(qtbot, IdentityStep(store))
        step.add_files(["/tmp/front.jpg", "/tmp/pool.png"])

        step.media_list.setCurrentRow(1)
        step._set_selected_as_hero()

        assert store.draft.identity.media.hero_image.local_path == "/tmp/pool.png"


class TestClassificationStep:

    def test_type_change_clears_sub_type_field(self, qtbot, store):
        store.set_classification(sub_type="Security Estate")
        step = shown(qtbot, ClassificationStep(store))
        assert step.sub_type_input.text() == "Security Estate"

        step.type_combo.setCurrentIndex(step.type_combo.findData("commercial"))
        step.apply_changes()

        assert store.draft.classification.type == "commercial"
        assert store.draft.classification.sub_type == ""
        assert step.sub_type_input.text() == ""


class TestOverviewStep:

    def test_lists_are_split(self, qtbot, store):
        step = shown(qtbot, OverviewStep(store))
        step.highlights_input.setPlainText("Pool\n\nGym\n Clubhouse ")
        step.amenities_input.setText("Pool, Gym,")
        step.apply_changes()

        overview = store.draft.overview
        assert overview.highlights == ["Pool", "Gym", "Clubhouse"]
        assert overview.amenities == ["Pool", "Gym"]


class TestUnitTypesStep:

    def test_add_and_remove_from_form(self, qtbot, store):
        step = shown(qtbot, UnitTypesStep(store))
        step.name_input.setText("Studio")
        step.price_input.setValue(650000)

        step.add_unit_type_from_form()

        assert [u.name for u in store.draft.unit_types] == ["Studio"]
        assert store.draft.unit_types[0].base_price_from == 650000
        assert step.table.rowCount() == 1
        assert step.name_input.text() == ""

        step.table.setCurrentCell(0, 0)
        step.remove_selected_unit_type()
        assert store.draft.unit_types == []
        assert step.table.rowCount() == 0

    def test_name_required(self, qtbot, store):
        step = shown(qtbot, UnitTypesStep(store))
        step.add_unit_type_from_form()
        assert store.draft.unit_types == []


class TestFinalisationStep:

    def test_readiness_lists_missing_items(self, qtbot, store):
        step = shown(qtbot, FinalisationStep(store))
        assert "Development Name is required" in step.readiness_label.text()

    def test_ready_to_publish(self, qtbot, store, valid_draft_data):
        store.hydrate(valid_draft_data)
        step = shown(qtbot, FinalisationStep(store))
        assert step.readiness_label.text() == "Ready to publish."


class TestSaveStatusIndicator:

    def test_status_texts(self, qtbot):
        indicator = SaveStatusIndicator()
        qtbot.addWidget(indicator)

        indicator.set_status("unsaved")
        assert indicator.text() == ""

        indicator.set_status("saving")
        assert indicator.text() == "Saving…"

        indicator.set_status("saved")
        indicator.set_last_saved(datetime(2026, 1, 5, 14, 30))
        assert indicator.text() == "Saved at 14:30"

        indicator.set_status("unsaved")
        assert indicator.text() == "Unsaved changes"

        indicator.set_status("bogus")
        assert indicator.status == "unsaved"

    def test_clear(self, qtbot):
        indicator = SaveStatusIndicator()
        qtbot.addWidget(indicator)
        indicator.set_last_saved(datetime.now())
        indicator.clear()
        assert indicator.text() == ""
        assert indicator.last_saved_at is None
