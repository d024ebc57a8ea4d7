"""
Pure view logic: turns state snapshots into what the widgets show.
Kept free of tkinter so it can be tested headless.
"""
from dataclasses import dataclass
from typing import Optional
from zoomfixer.schemas.run import RunState, SandboxState, StatusKind

STATUS_COLORS = {
    StatusKind.IDLE: "gray",
    StatusKind.RUNNING: "#1f6aa5",
    StatusKind.SUCCESS: "green",
    StatusKind.WARNING: "orange",
    StatusKind.FAILED: "red",
}

@dataclass(frozen=True)
class ControlsView:
    """Labels and enabled flags for every button"""

    fix_label: str
    fix_enabled: bool
    auto_label: str
    auto_enabled: bool
    launch_label: str
    launch_enabled: bool
    sandbox_tools_enabled: bool      # Re-check, Homebrew install, download page
    show_spinner: bool
    show_progress: bool
    progress: Optional[float]       # None = indeterminate bar
    progress_label: str

def status_color(kind: StatusKind) -> str:
    return STATUS_COLORS.get(kind, "gray")

def present(run: RunState, sandbox: SandboxState) -> ControlsView:
    busy = sandbox.busy
    return ControlsView(
        fix_label="Working..." if run.is_running else "Fix Zoom 1132",
        fix_enabled=not run.is_running,
        auto_label="Preparing..." if busy else "One-click Sandbox",
        auto_enabled=not (busy or run.is_running),
        launch_label="Starting..." if sandbox.is_launching else "Launch Docker Sandbox",
        launch_enabled=not (busy or run.is_running),
        sandbox_tools_enabled=not busy,
        show_spinner=busy,
        show_progress=run.is_running,
        progress=run.progress,
        progress_label=run.progress_label,
    )
