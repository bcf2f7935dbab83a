# -*- coding: utf-8 -*-
"""
Draft Auto-Save - debounced persistence of the wizard draft.

Turns a rapid stream of draft snapshots into a bounded rate of save calls:
- Every change restarts a single-shot QTimer (quiet period)
- Only the latest snapshot is sent when the timer fires
- The save runs on a QThread worker; results come back as signals
- Failures become an "error" status, never an exception in the UI

Status flow:
    unsaved -> saving -> saved | error
    saved   -> unsaved  (next change)
    error   -> saving   (next timer firing)

Usage:
    auto_save = AutoSaveController(api.save_draft, debounce_ms=3000)
    store.draft_changed.connect(auto_save.schedule)
    auto_save.status_changed.connect(indicator.set_status)
"""

import copy
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

from PyQt5.QtCore import QObject, QThread, QTimer, pyqtSignal, pyqtSlot

from app.config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

PersistFunction = Callable[[Dict[str, Any]], None]

# Margin on top of the HTTP timeout when waiting for a save at shutdown
SHUTDOWN_MARGIN_MS = 2000

# Workers that outlived dispose(); a QThread must not be destroyed while running
_detached_workers: Set["SaveWorker"] = set()


def wait_for_detached_saves(timeout_ms: Optional[int] = None) -> bool:
    """
    Block until saves left running by disposed controllers have finished.

    Called once the event loop has exited, before the interpreter tears down.

    Returns:
        True if no detached save is still running
    """
    for worker in list(_detached_workers):
        finished = worker.wait() if timeout_ms is None else worker.wait(timeout_ms)
        if finished:
            _detached_workers.discard(worker)
    if _detached_workers:
        logger.error(f"{len(_detached_workers)} draft save(s) still running at exit")
    return not _detached_workers


class AutoSaveStatus(str, Enum):
    UNSAVED = "unsaved"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


@dataclass
class AutoSaveState:
    """Save status shown by the wizard header."""
    status: AutoSaveStatus = AutoSaveStatus.UNSAVED
    last_saved_at: Optional[datetime] = None


class SaveWorker(QThread):
    """Background worker that runs one persistence call."""

    succeeded = pyqtSignal(int)  # generation
    failed = pyqtSignal(int, str)  # generation, error message

    def __init__(self, persist: PersistFunction, snapshot: Dict[str, Any], generation: int):
        super().__init__()
        self.persist = persist
        self.snapshot = snapshot
        self.generation = generation

    def run(self):
        """Run the save in background."""
        try:
            self.persist(self.snapshot)
        except Exception as e:
            logger.warning(f"Draft save failed: {e}", exc_info=True)
            self.failed.emit(self.generation, str(e) or type(e).__name__)
            return
        self.succeeded.emit(self.generation)


class AutoSaveController(QObject):
    """
    Debounces draft changes and calls the injected persist function.

    Signals:
        status_changed(str): one of unsaved / saving / saved / error
        saved(object): datetime of the successful save
        save_failed(str): error message of the failed save
    """

    status_changed = pyqtSignal(str)
    saved = pyqtSignal(object)
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        persist: PersistFunction,
        debounce_ms: Optional[int] = None,
        threaded: bool = True,
        enabled: Optional[bool] = None,
        shutdown_wait_ms: Optional[int] = None,
        parent: Optional[QObject] = None
    ):
        """
        Initialize the controller.

        Args:
            persist: Callable receiving the snapshot; raises on any failure
            debounce_ms: Quiet period (default: Config.AUTO_SAVE_DEBOUNCE_MS)
            threaded: Run persist on a worker thread (False = inline on the event loop)
            enabled: Debounced saving on/off (default: Config.AUTO_SAVE_ENABLED)
            shutdown_wait_ms: How long dispose() waits for a running save
                (default: Config.API_TIMEOUT plus a margin)
            parent: Parent QObject
        """
        super().__init__(parent)

        self._persist = persist
        self.debounce_ms = Config.AUTO_SAVE_DEBOUNCE_MS if debounce_ms is None else debounce_ms
        self.threaded = threaded
        self._enabled = Config.AUTO_SAVE_ENABLED if enabled is None else enabled
        if shutdown_wait_ms is None:
            shutdown_wait_ms = Config.API_TIMEOUT * 1000 + SHUTDOWN_MARGIN_MS
        self.shutdown_wait_ms = shutdown_wait_ms

        self._state = AutoSaveState()
        self._pending_snapshot: Optional[Dict[str, Any]] = None
        self._queued_snapshot: Optional[Dict[str, Any]] = None
        self._failed_snapshot: Optional[Dict[str, Any]] = None
        self._in_flight_snapshot: Optional[Dict[str, Any]] = None
        self._in_flight = False
        # Workers stay referenced until their thread has fully finished
        self._workers: Set[SaveWorker] = set()
        self._generation = 0
        self._disposed = False

        self._stats = {
            'changes': 0,     # snapshots received
            'saves': 0,       # persist calls started
            'failures': 0,    # persist calls that raised
            'discarded': 0,   # results dropped after reset/dispose
        }

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.timeout.connect(self._on_debounce_timeout)

        logger.debug(f"AutoSaveController initialized (debounce={self.debounce_ms}ms, threaded={threaded})")

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> AutoSaveState:
        return AutoSaveState(self._state.status, self._state.last_saved_at)

    @property
    def status(self) -> AutoSaveStatus:
        return self._state.status

    @property
    def last_saved_at(self) -> Optional[datetime]:
        return self._state.last_saved_at

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def is_pending(self) -> bool:
        """Whether a debounced save is waiting for the quiet period to end."""
        return self._debounce_timer.isActive()

    def is_saving(self) -> bool:
        return self._in_flight

    def has_unsaved_changes(self) -> bool:
        """Whether an edit has not reached the server yet, including a failed save."""
        return (
            self._in_flight
            or self._pending_snapshot is not None
            or self._queued_snapshot is not None
            or self._failed_snapshot is not None
        )

    def get_stats(self) -> Dict[str, int]:
        return dict(self._stats)

    # =========================================================================
    # Scheduling
    # =========================================================================

    @pyqtSlot(dict)
    def schedule(self, snapshot: Dict[str, Any]):
        """
        Record a new draft snapshot and restart the quiet period.

        Earlier snapshots that have not been sent yet are replaced, so only
        the latest one is ever persisted.
        """
        if self._disposed:
            logger.debug("Ignoring draft change: auto-save disposed")
            return

        self._stats['changes'] += 1
        self._pending_snapshot = copy.deepcopy(snapshot)

        if self._state.status == AutoSaveStatus.SAVED:
            self._set_status(AutoSaveStatus.UNSAVED)

        if not self._enabled:
            return

        self._debounce_timer.stop()
        self._debounce_timer.start(self.debounce_ms)

    def save_now(self, snapshot: Optional[Dict[str, Any]] = None) -> bool:
        """
        Persist immediately, skipping the quiet period.

        Sends `snapshot` if given, otherwise the pending snapshot, otherwise
        the last snapshot that failed to save (manual retry).

        Returns:
            True if a save was started or queued
        """
        if self._disposed:
            return False

        self._debounce_timer.stop()

        if snapshot is not None:
            target = copy.deepcopy(snapshot)
        elif self._pending_snapshot is not None:
            target = self._pending_snapshot
        elif self._failed_snapshot is not None:
            target = self._failed_snapshot
        else:
            logger.debug("save_now: nothing to save")
            return False

        self._pending_snapshot = None
        self._start_save(target)
        return True

    def set_enabled(self, enabled: bool):
        """Turn debounced saving on or off; pending changes are kept."""
        self._enabled = enabled
        if not enabled:
            self._debounce_timer.stop()
        elif self._pending_snapshot is not None and not self._disposed:
            self._debounce_timer.start(self.debounce_ms)

    # =========================================================================
    # Cancellation
    # =========================================================================

    def cancel(self):
        """Drop the pending timer and snapshot."""
        if self._debounce_timer.isActive():
            logger.debug("Cancelling pending auto-save")
        self._debounce_timer.stop()
        self._pending_snapshot = None

    def invalidate(self):
        """
        Forget everything tied to the current draft (used on reset).

        A save already running is allowed to finish, but its result is not
        applied.
        """
        self.cancel()
        self._generation += 1
        self._queued_snapshot = None
        self._failed_snapshot = None
        self._state = AutoSaveState()
        self.status_changed.emit(self._state.status.value)

    def dispose(self):
        """Stop for good: no timer, no further saves, late results ignored."""
        if self._disposed:
            return
        self.cancel()
        self._generation += 1
        self._queued_snapshot = None
        self._disposed = True

        for worker in list(self._workers):
            if not worker.isRunning():
                continue
            logger.info("Waiting for running draft save to finish")
            if not worker.wait(self.shutdown_wait_ms):
                logger.warning(f"Draft save still running after {self.shutdown_wait_ms}ms, detaching it")
                self._workers.discard(worker)
                _detached_workers.add(worker)
        logger.debug(f"AutoSaveController disposed (stats={self._stats})")

    # =========================================================================
    # Saving
    # =========================================================================

    def _on_debounce_timeout(self):
        """Quiet period elapsed: send the latest snapshot."""
        snapshot = self._pending_snapshot
        self._pending_snapshot = None
        if snapshot is None or self._disposed:
            return
        self._start_save(snapshot)

    def _start_save(self, snapshot: Dict[str, Any]):
        # One save at a time; the newest snapshot waits for the running one
        if self._in_flight:
            self._queued_snapshot = snapshot
            logger.debug("Save in progress, queued latest snapshot")
            return

        self._in_flight = True
        self._in_flight_snapshot = snapshot
        self._stats['saves'] += 1
        self._set_status(AutoSaveStatus.SAVING)
        generation = self._generation

        if self.threaded:
            worker = SaveWorker(self._persist, snapshot, generation)
            worker.succeeded.connect(self._on_worker_succeeded)
            worker.failed.connect(self._on_worker_failed)
            worker.finished.connect(self._on_worker_finished)
            self._workers.add(worker)
            worker.start()
            return

        try:
            self._persist(snapshot)
        except Exception as e:
            logger.warning(f"Draft save failed: {e}", exc_info=True)
            self._finish_save(generation, str(e) or type(e).__name__)
            return
        self._finish_save(generation, None)

    @pyqtSlot(int)
    def _on_worker_succeeded(self, generation: int):
        self._finish_save(generation, None)

    @pyqtSlot(int, str)
    def _on_worker_failed(self, generation: int, message: str):
        self._finish_save(generation, message)

    @pyqtSlot()
    def _on_worker_finished(self):
        worker = self.sender()
        if worker in self._workers:
            self._workers.discard(worker)
            worker.deleteLater()

    def _finish_save(self, generation: int, error: Optional[str]):
        snapshot = self._in_flight_snapshot
        self._in_flight = False
        self._in_flight_snapshot = None

        if generation != self._generation:
            self._stats['discarded'] += 1
            logger.debug(f"Discarding save result from stale generation {generation}")
        elif error is None:
            self._failed_snapshot = None
            self._state.last_saved_at = datetime.now()
            self._set_status(AutoSaveStatus.SAVED)
            self.saved.emit(self._state.last_saved_at)
            logger.info(f"Draft saved at {self._state.last_saved_at:%H:%M:%S}")
            # Edits arrived while saving
            if self._pending_snapshot is not None or self._queued_snapshot is not None:
                self._set_status(AutoSaveStatus.UNSAVED)
        else:
            self._stats['failures'] += 1
            self._failed_snapshot = snapshot
            self._set_status(AutoSaveStatus.ERROR)
            self.save_failed.emit(error)

        if self._queued_snapshot is not None and not self._disposed:
            queued = self._queued_snapshot
            self._queued_snapshot = None
            self._start_save(queued)

    def _set_status(self, status: AutoSaveStatus):
        if self._state.status == status:
            return
        logger.debug(f"Auto-save status: {self._state.status.value} -> {status.value}")
        self._state.status = status
        self.status_changed.emit(status.value)
