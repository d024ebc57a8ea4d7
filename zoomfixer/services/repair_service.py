"""
Repair pipeline for a broken Zoom installation.

Runs a fixed sequence of steps on a worker thread. A failing step is
logged and remembered but never stops the sequence; the final status
reports whether anything went wrong.
"""

import os
import shlex
import threading
from typing import Callable, List, Optional
from zoomfixer.config import constants
from zoomfixer.schemas.run import Step, StepOutcome, StatusKind
from zoomfixer.services.discovery_service import DiscoveryService
from zoomfixer.services.download_service import DownloadService
from zoomfixer.services.errors import MissingInstaller, VerificationFailed, describe_error
from zoomfixer.services.shell_service import ShellExecutor
from zoomfixer.services.state_store import StateStore
from zoomfixer.services.system_service import SystemService
from zoomfixer.utils.logger import log

class RepairService:
    """
    Orchestrates the full repair run.
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        shell: Optional[ShellExecutor] = None,
        download: Optional[Callable[..., str]] = None,
        search_roots: Optional[List[str]] = None,
        default_paths: Optional[List[str]] = None,
        bundle_paths: Optional[List[str]] = None,
        admin_root: str = constants.SYSTEM_APPLICATIONS
    ):
        self.store = store or StateStore()
        self.shell = shell or ShellExecutor()
        self.download = download or DownloadService.download_installer
        self.search_roots = search_roots
        self.default_paths = default_paths
        self.bundle_paths = bundle_paths or constants.INSTALLED_BUNDLE_PATHS
        self.admin_root = admin_root

        # Run-scoped, reset by prepare_for_run()
        self.discovered_installations: List[str] = []
        self.admin_installation_paths: List[str] = []
        self.installer_path: Optional[str] = None

    def start_fix(self) -> Optional[threading.Thread]:
        """
        Start a repair run in the background.
        Returns None when a run is already in progress.
        """
        if not self.prepare_for_run():
            log.info("Repair already running; ignoring start request")
            return None

        worker = threading.Thread(target=self._run_sequence, name="zoomfixer-repair", daemon=True)
        worker.start()
        return worker

    def prepare_for_run(self) -> bool:
        if not self.store.begin_run():
            return False
        self.discovered_installations = []
        self.admin_installation_paths = []
        self.installer_path = None
        return True

    def build_steps(self) -> List[Step]:
        return [
            Step("Kill Zoom processes", self.kill_zoom_processes),
            Step("Clear Zoom cache", self.clear_zoom_cache),
            Step("Clear Zoom preferences", self.clear_preferences),
            Step("Remove Zoom logs", self.remove_logs),
            Step("Find duplicate installations", self.find_duplicates),
            Step("Remove all Zoom installations", self.remove_installations),
            Step("Download latest Zoom", self.download_latest),
            Step("Install & repair with admin tasks", self.perform_privileged_install),
            Step("Verify installation", self.verify_installation),
        ]

    def _run_sequence(self):
        try:
            self.execute_steps(self.build_steps())
        finally:
            self.finish()

    def execute_steps(self, steps: List[Step]) -> List[StepOutcome]:
        """Run every step in order; failures are recorded, never raised."""
        outcomes = []
        for step in steps:
            self.store.update_run(status_message=step.title, status_kind=StatusKind.RUNNING)
            self._log(f"== {step.title} ==")

            try:
                step.action()
                outcome = StepOutcome(step.title, ok=True)
                self._log(f"[ok] {step.title}")
            except Exception as e:
                outcome = StepOutcome(step.title, ok=False, error_kind=type(e).__name__, message=str(e))
                self.store.append_log(f"[error] {step.title}: {describe_error(e)}")
                log.error(f"Step '{step.title}' failed: {describe_error(e)}")

            self.store.record_outcome(outcome)
            outcomes.append(outcome)
        return outcomes

    def finish(self):
        had_errors = self.store.run.had_errors
        self.store.update_run(
            status_kind=StatusKind.WARNING if had_errors else StatusKind.SUCCESS,
            status_message="Finished with warnings" if had_errors else "Zoom repaired",
            progress=None,
            progress_label="Done",
            is_running=False,
        )
        self._discard_installer()

    # ── Steps ───────────────────────────────────────────────

    def kill_zoom_processes(self):
        # Command-line matching stays in-process; `pkill -f` under bash matches its own shell
        killed = SystemService.kill_processes(constants.ZOOM_PROCESS_NAME)
        if killed:
            self._log(f"Stopped {killed} Zoom process(es)")
        self.shell.run(f"pkill -9 -x {shlex.quote(constants.ZOOM_PROCESS_NAME)} || true")

    def clear_zoom_cache(self):
        self.shell.run('rm -rf "$HOME/Library/Application Support/zoom.us"')

    def clear_preferences(self):
        # Glob stays outside the quotes so the shell expands it
        self.shell.run('rm -f "$HOME/Library/Preferences/"us.zoom.*')

    def remove_logs(self):
        self.shell.run('rm -rf "$HOME/Library/Logs/zoom.us"')

    def find_duplicates(self):
        self.discovered_installations = DiscoveryService.find_installations(self.search_roots)

        if not self.discovered_installations:
            self._log("No existing installations detected.")
            return

        self._log("Found installations:")
        for path in self.discovered_installations:
            self._log(f" - {path}")

    def remove_installations(self):
        if not self.discovered_installations:
            self.discovered_installations = DiscoveryService.existing_defaults(self.default_paths)

        self.admin_installation_paths, user_installations = DiscoveryService.partition(
            self.discovered_installations, self.admin_root
        )

        if user_installations:
            joined = " ".join(shlex.quote(p) for p in user_installations)
            self.shell.run(f"rm -rf {joined}", allow_failure=True)
            for path in user_installations:
                self._log(f"Removed {os.path.basename(path)}")

        if not self.admin_installation_paths:
            self._log("No admin-level installations to remove.")
            return

        self._log("Admin-level installations will be removed during privileged step:")
        for path in self.admin_installation_paths:
            self._log(f" - {path}")

    def download_latest(self):
        label = "Downloading Zoom"
        self.store.update_run(progress=None, progress_label=label)

        self.installer_path = self.download(
            progress_callback=lambda value: self.store.update_run(progress=value, progress_label=label),
            log_callback=self._log,
        )

    def build_privileged_script(self, installer_path: str, admin_paths: List[str]) -> str:
        """
        One shell line bundling every task that needs root, in fixed order:
        remove admin installs, flush DNS, restart mDNSResponder, install the
        package, reset bundle ownership and permissions.
        """
        commands = []
        if admin_paths:
            commands.append("rm -rf " + " ".join(shlex.quote(p) for p in admin_paths))

        commands.append("dscacheutil -flushcache || true")
        commands.append("killall -HUP mDNSResponder || true")
        commands.append(f"installer -pkg {shlex.quote(installer_path)} -target /")

        bundles = " ".join(shlex.quote(p) for p in self.bundle_paths)
        commands.append(
            f'for app in {bundles}; do '
            f'if [ -d "$app" ]; then chown -R root:wheel "$app" && chmod -R 755 "$app"; fi; '
            f'done'
        )

        script = "set -e; " + " && ".join(commands)
        return "bash -lc " + shlex.quote(script)

    def perform_privileged_install(self):
        if not self.installer_path:
            raise MissingInstaller()

        self.store.update_run(progress=None, progress_label="Applying admin tasks")

        script = self.build_privileged_script(self.installer_path, self.admin_installation_paths)
        self.shell.run(script, require_admin=True)
        self._log("Admin tasks completed (remove/install/permissions/DNS flush)")

    def verify_installation(self):
        for app in self.bundle_paths:
            if os.path.exists(app):
                self._log(f"Verified install at {app}")
                self.store.update_run(status_message="Completed", status_kind=StatusKind.SUCCESS)
                return

        raise VerificationFailed()

    # ── Helpers ─────────────────────────────────────────────

    def _log(self, message: str):
        self.store.append_log(message)
        log.info(message)

    def _discard_installer(self):
        if not self.installer_path:
            return
        try:
            os.remove(self.installer_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning(f"Could not remove installer {self.installer_path}: {e}")
