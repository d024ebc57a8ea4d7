"""
StateStore: the single owner of everything the front-end can observe.

Worker threads never share mutable fields with the UI. They call the
mutators below, which apply the change under one lock, freeze a new
snapshot and hand it to every subscriber. Subscribers are invoked outside
the lock, on the worker's thread; a Tk front-end re-posts to its main loop
with ``after(0, ...)``.

Log lines are appended whole under the lock, so the repair pipeline and
the sandbox flow can write concurrently without interleaving partial lines.
"""
import threading
from dataclasses import replace
from typing import Callable, List, Optional, Tuple
from zoomfixer.schemas.run import RunState, SandboxState, StatusKind, StepOutcome
from zoomfixer.utils.logger import log

Subscriber = Callable[[RunState, SandboxState], None]


class StateStore:

    def __init__(self):
        self._lock = threading.Lock()
        self._publish_lock = threading.RLock()
        self._run = RunState()
        self._sandbox = SandboxState()
        self._subscribers: List[Subscriber] = []

    # ── Reading ──────────────────────────────────────────────

    def snapshot(self) -> Tuple[RunState, SandboxState]:
        with self._lock:
            return self._run, self._sandbox

    @property
    def run(self) -> RunState:
        with self._lock:
            return self._run

    @property
    def sandbox(self) -> SandboxState:
        with self._lock:
            return self._sandbox

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # ── Repair run ───────────────────────────────────────────

    def begin_run(self) -> bool:
        """
        Reset the run and mark it active. Returns False, changing nothing,
        when a run is already in progress.
        """
        with self._lock:
            if self._run.is_running:
                return False
            self._run = RunState(
                is_running=True,
                status_message="Starting...",
                status_kind=StatusKind.RUNNING,
                progress_label="Starting",
            )
        self._publish()
        return True

    def update_run(self, **changes):
        with self._lock:
            self._run = replace(self._run, **changes)
        self._publish()

    def append_log(self, line: str):
        with self._lock:
            self._run = replace(self._run, logs=self._run.logs + (line,))
        self._publish()

    def record_outcome(self, outcome: StepOutcome):
        with self._lock:
            self._run = replace(
                self._run,
                step_outcomes=self._run.step_outcomes + (outcome,),
                had_errors=self._run.had_errors or not outcome.ok,
            )
        self._publish()

    # ── Sandbox session ──────────────────────────────────────

    def claim_sandbox(self, message: str, installing: bool = False, auto: bool = False) -> bool:
        """
        Atomically mark a sandbox flow as in flight. Returns False, changing
        nothing, while another sandbox flow is busy.
        """
        with self._lock:
            if self._sandbox.busy:
                return False
            self._sandbox = SandboxState(
                status=message,
                is_launching=True,
                is_installing=installing,
                is_auto_flow=auto,
            )
        self._publish()
        return True

    def set_sandbox(
        self,
        message: str,
        running: bool,
        installing: Optional[bool] = None,
        auto: Optional[bool] = None
    ):
        with self._lock:
            changes = {"status": message, "is_launching": running}
            if installing is not None:
                changes["is_installing"] = installing
            if auto is not None:
                changes["is_auto_flow"] = auto
            self._sandbox = replace(self._sandbox, **changes)
        self._publish()

    # ── Internals ────────────────────────────────────────────

    def _publish(self):
        # Held while notifying so subscribers never see an older snapshot
        # after a newer one
        with self._publish_lock:
            with self._lock:
                run, sandbox = self._run, self._sandbox
                subscribers = list(self._subscribers)

            for callback in subscribers:
                try:
                    callback(run, sandbox)
                except Exception:
                    log.exception("State subscriber failed")
