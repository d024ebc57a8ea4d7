from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

class StatusKind(str, Enum):
    """Lifecycle of a repair run as shown by the status indicator."""
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    WARNING = "warning"
    FAILED = "failed"

@dataclass(frozen=True)
class Step:
    """One named, independently failable unit of the repair sequence."""

    title: str
    action: Callable[[], None]      # Raises on failure

@dataclass(frozen=True)
class StepOutcome:
    """Result of one executed step"""

    title: str
    ok: bool
    error_kind: Optional[str] = None    # e.g. "VerificationFailed"
    message: str = ""

@dataclass(frozen=True)
class RunState:
    """Snapshot of the repair run published to the front-end."""

    is_running: bool = False
    status_message: str = "Idle"
    status_kind: StatusKind = StatusKind.IDLE
    logs: Tuple[str, ...] = ()
    progress: Optional[float] = None    # None = indeterminate
    progress_label: str = "Ready"
    had_errors: bool = False
    step_outcomes: Tuple[StepOutcome, ...] = field(default_factory=tuple)

@dataclass(frozen=True)
class SandboxState:
    """Snapshot of the Docker sandbox session."""

    status: str = "Docker sandbox not running"
    is_launching: bool = False
    is_installing: bool = False
    is_auto_flow: bool = False

    @property
    def busy(self) -> bool:
        return self.is_launching or self.is_installing
