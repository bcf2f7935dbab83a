# -*- coding: utf-8 -*-
"""
Tests for the debounced draft auto-save controller.

Most tests run the persist function inline (threaded=False) so that the
only asynchrony is the debounce timer.
"""

import threading
from datetime import datetime

import pytest

from app.config import Config
from services.wizard import auto_save
from services.wizard.auto_save import AutoSaveController, AutoSaveStatus, wait_for_detached_saves

DEBOUNCE_MS = 200


class Recorder:
    """Persist function double that records snapshots and can fail."""

    def __init__(self, fail_times=0):
        self.calls = []
        self.fail_times = fail_times

    def __call__(self, snapshot):
        self.calls.append(snapshot)
        if self.fail_times > 0:
            self.fail_times -= 1
            raise RuntimeError("server unavailable")


@pytest.fixture
def persist():
    return Recorder()


@pytest.fixture
def controller(qtbot, persist):
    ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=False, enabled=True)
    yield ctrl
    ctrl.dispose()


def collect_statuses(ctrl):
    statuses = []
    ctrl.status_changed.connect(statuses.append)
    return statuses


class TestDebounce:
    """Quiet period and last-write-wins."""

    def test_rapid_changes_coalesce_into_one_save(self, qtbot, controller, persist):
        controller.schedule({"v": 1})
        qtbot.wait(20)
        controller.schedule({"v": 2})
        qtbot.wait(20)
        controller.schedule({"v": 3})

        qtbot.waitUntil(lambda: len(persist.calls) == 1, timeout=2000)
        qtbot.wait(DEBOUNCE_MS + 100)

        assert persist.calls == [{"v": 3}]
        assert controller.status == AutoSaveStatus.SAVED

    def test_nothing_saved_before_quiet_period(self, qtbot, controller, persist):
        controller.schedule({"v": 1})
        assert controller.is_pending()
        assert persist.calls == []

    def test_snapshot_is_copied_on_schedule(self, qtbot, controller, persist):
        snapshot = {"identity": {"name": "A"}}
        controller.schedule(snapshot)
        snapshot["identity"]["name"] = "changed later"

        qtbot.waitUntil(lambda: len(persist.calls) == 1, timeout=2000)
        assert persist.calls[0] == {"identity": {"name": "A"}}

    def test_separate_bursts_save_separately(self, qtbot, controller, persist):
        controller.schedule({"v": 1})
        qtbot.waitUntil(lambda: len(persist.calls) == 1, timeout=2000)
        controller.schedule({"v": 2})
        qtbot.waitUntil(lambda: len(persist.calls) == 2, timeout=2000)
        assert persist.calls == [{"v": 1}, {"v": 2}]


class TestStatus:
    """unsaved -> saving -> saved | error."""

    def test_initial_state(self, controller):
        assert controller.status == AutoSaveStatus.UNSAVED
        assert controller.last_saved_at is None

    def test_successful_save_transitions(self, qtbot, controller):
        statuses = collect_statuses(controller)
        with qtbot.waitSignal(controller.saved, timeout=2000) as blocker:
            controller.schedule({"v": 1})

        assert statuses == ["saving", "saved"]
        assert isinstance(blocker.args[0], datetime)
        assert controller.last_saved_at == blocker.args[0]

    def test_change_after_save_is_unsaved(self, qtbot, controller):
        with qtbot.waitSignal(controller.saved, timeout=2000):
            controller.schedule({"v": 1})
        saved_at = controller.last_saved_at

        controller.schedule({"v": 2})
        assert controller.status == AutoSaveStatus.UNSAVED
        assert controller.last_saved_at == saved_at

    def test_failure_sets_error_without_retry(self, qtbot):
        persist = Recorder(fail_times=5)
        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=False, enabled=True)

        with qtbot.waitSignal(ctrl.save_failed, timeout=2000) as blocker:
            ctrl.schedule({"v": 1})

        assert blocker.args == ["server unavailable"]
        assert ctrl.status == AutoSaveStatus.ERROR
        assert ctrl.last_saved_at is None

        qtbot.wait(DEBOUNCE_MS * 2)
        assert len(persist.calls) == 1
        assert ctrl.get_stats()["failures"] == 1
        ctrl.dispose()

    def test_error_stays_until_next_save(self, qtbot):
        persist = Recorder(fail_times=1)
        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=False, enabled=True)
        with qtbot.waitSignal(ctrl.save_failed, timeout=2000):
            ctrl.schedule({"v": 1})

        ctrl.schedule({"v": 2})
        assert ctrl.status == AutoSaveStatus.ERROR

        with qtbot.waitSignal(ctrl.saved, timeout=2000):
            pass
        assert ctrl.status == AutoSaveStatus.SAVED
        assert persist.calls == [{"v": 1}, {"v": 2}]
        ctrl.dispose()


class TestManualSave:

    def test_save_now_skips_quiet_period(self, controller, persist):
        controller.schedule({"v": 1})
        assert controller.save_now() is True
        assert persist.calls == [{"v": 1}]
        assert not controller.is_pending()

    def test_save_now_with_nothing_to_save(self, controller, persist):
        assert controller.save_now() is False
        assert persist.calls == []

    def test_save_now_retries_failed_snapshot(self, qtbot):
        persist = Recorder(fail_times=1)
        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=False, enabled=True)
        with qtbot.waitSignal(ctrl.save_failed, timeout=2000):
            ctrl.schedule({"v": 1})

        assert ctrl.save_now() is True
        assert persist.calls == [{"v": 1}, {"v": 1}]
        assert ctrl.status == AutoSaveStatus.SAVED
        ctrl.dispose()

    def test_disabled_controller_only_saves_on_demand(self, qtbot, persist):
        ctrl = AutoSaveController(persist, debounce_ms=50, threaded=False, enabled=False)
        ctrl.schedule({"v": 1})
        qtbot.wait(150)
        assert persist.calls == []
        assert ctrl.has_unsaved_changes()

        ctrl.save_now()
        assert persist.calls == [{"v": 1}]
        assert not ctrl.has_unsaved_changes()
        ctrl.dispose()


class TestCancellation:
    """Reset and teardown."""

    def test_dispose_during_quiet_period(self, qtbot, controller, persist):
        controller.schedule({"v": 1})
        controller.dispose()
        qtbot.wait(DEBOUNCE_MS * 2)

        assert persist.calls == []
        assert controller.is_disposed

    def test_schedule_after_dispose_is_ignored(self, qtbot, controller, persist):
        controller.dispose()
        controller.schedule({"v": 1})
        assert not controller.is_pending()
        assert controller.save_now() is False

    def test_invalidate_drops_pending_change(self, qtbot, controller, persist):
        controller.schedule({"v": 1})
        controller.invalidate()
        qtbot.wait(DEBOUNCE_MS * 2)
        assert persist.calls == []
        assert controller.status == AutoSaveStatus.UNSAVED

    def test_invalidate_during_save_discards_result(self, qtbot):
        holder = {}

        def persist(snapshot):
            # Draft reset while the request is on the wire
            holder["ctrl"].invalidate()

        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=False, enabled=True)
        holder["ctrl"] = ctrl
        saved = []
        ctrl.saved.connect(saved.append)

        ctrl.save_now({"v": 1})

        assert saved == []
        assert ctrl.status == AutoSaveStatus.UNSAVED
        assert ctrl.last_saved_at is None
        assert ctrl.get_stats()["discarded"] == 1
        ctrl.dispose()


class TestThreadedSave:
    """Persist on a QThread worker."""

    def test_worker_reports_success(self, qtbot, persist):
        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=True, enabled=True)
        with qtbot.waitSignal(ctrl.saved, timeout=3000):
            ctrl.schedule({"v": 1})

        assert persist.calls == [{"v": 1}]
        assert ctrl.status == AutoSaveStatus.SAVED
        ctrl.dispose()

    def test_one_save_in_flight_and_latest_queued(self, qtbot):
        release = threading.Event()
        calls = []

        def persist(snapshot):
            calls.append(snapshot)
            release.wait(2)

        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=True, enabled=True)
        ctrl.save_now({"v": 1})
        ctrl.save_now({"v": 2})
        ctrl.save_now({"v": 3})
        assert ctrl.is_saving()

        release.set()
        qtbot.waitUntil(lambda: len(calls) == 2 and not ctrl.is_saving(), timeout=3000)

        assert calls == [{"v": 1}, {"v": 3}]
        assert ctrl.status == AutoSaveStatus.SAVED
        ctrl.dispose()

    def test_reset_while_worker_running(self, qtbot):
        release = threading.Event()

        def persist(snapshot):
            release.wait(2)

        ctrl = AutoSaveController(persist, debounce_ms=DEBOUNCE_MS, threaded=True, enabled=True)
        saved = []
        ctrl.saved.connect(saved.append)

        ctrl.save_now({"v": 1})
        ctrl.invalidate()
        release.set()
        qtbot.waitUntil(lambda: ctrl.get_stats()["discarded"] == 1, timeout=3000)

        assert saved == []
        assert ctrl.status == AutoSaveStatus.UNSAVED
        ctrl.dispose()


class TestShutdown:
    """dispose() while a slow save is still running."""

    def test_default_wait_covers_http_timeout(self, qtbot, persist):
        ctrl = AutoSaveController(persist, threaded=True)
        assert ctrl.shutdown_wait_ms > Config.API_TIMEOUT * 1000
        ctrl.dispose()

    def test_save_outliving_the_wait_is_kept_alive(self, qtbot):
        release = threading.Event()
        started = threading.Event()

        def persist(snapshot):
            started.set()
            release.wait(5)

        ctrl = AutoSaveController(
            persist, debounce_ms=DEBOUNCE_MS, threaded=True, enabled=True, shutdown_wait_ms=50
        )
        ctrl.save_now({"v": 1})
        assert started.wait(2)

        ctrl.dispose()

        detached = list(auto_save._detached_workers)
        assert len(detached) == 1
        assert detached[0].isRunning()

        release.set()
        assert wait_for_detached_saves(3000)
        assert auto_save._detached_workers == set()
