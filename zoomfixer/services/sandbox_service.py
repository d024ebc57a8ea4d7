"""
Docker sandbox for running Zoom in an isolated Linux desktop.

Brings up a container with Xvfb, x11vnc and noVNC so the app can be used
from a browser. Each entry point runs on its own worker thread; a failure
ends only that flow and is shown as the sandbox status, never touching the
repair run.
"""

import shlex
import tempfile
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from zoomfixer.config import constants
from zoomfixer.config.manager import config_manager
from zoomfixer.services import sandbox_assets
from zoomfixer.services.errors import (
    BrewMissing, DaemonDidNotStart, DaemonUnavailable, EngineNotFound,
)
from zoomfixer.services.shell_service import ShellExecutor
from zoomfixer.services.state_store import StateStore
from zoomfixer.services.system_service import SystemService
from zoomfixer.utils.logger import log

DOCKER_INFO = "docker info --format '{{.ServerVersion}}'"

RUNNING_MESSAGE = (
    f"Sandbox running. Open {constants.SANDBOX_VIEWER_URL} (noVNC) "
    f"or VNC to localhost:{constants.VNC_PORT}."
)


class SandboxService:

    def __init__(
        self,
        store: Optional[StateStore] = None,
        shell: Optional[ShellExecutor] = None,
        sleep: Callable[[float], None] = time.sleep,
        open_url: Callable[[str], bool] = SystemService.open_url,
        poll_attempts: Optional[int] = None,
        poll_interval: Optional[float] = None
    ):
        self.store = store or StateStore()
        self.shell = shell or ShellExecutor()
        self.sleep = sleep
        self.open_url = open_url
        self.poll_attempts = poll_attempts or config_manager.get("daemon_poll_attempts")
        self.poll_interval = config_manager.get("daemon_poll_interval") if poll_interval is None else poll_interval

    # ── Entry points ────────────────────────────────────────

    def auto_prepare_and_launch(self) -> Optional[threading.Thread]:
        """One click: install Docker if missing, start the daemon, launch, open the viewer."""
        def flow():
            if not self.docker_cli_present():
                self._log("[docker] Docker not found, attempting Homebrew install...")
                self.install_docker_with_brew()
            self.start_docker_daemon_if_needed()
            self.launch_sandbox_flow()
            self.open_sandbox_url()

        return self._spawn(
            flow,
            start_message="Preparing Docker automatically...",
            success_message=RUNNING_MESSAGE,
            failure_prefix="Auto-setup failed",
            installing=True,
            auto=True,
        )

    def launch_docker_sandbox(self) -> Optional[threading.Thread]:
        def flow():
            self.launch_sandbox_flow()
            self.open_sandbox_url()

        return self._spawn(
            flow,
            start_message="Preparing Docker sandbox...",
            success_message=RUNNING_MESSAGE,
            failure_prefix="Docker sandbox failed",
        )

    def check_docker_availability(self) -> Optional[threading.Thread]:
        return self._spawn(
            self.ensure_docker_available,
            start_message="Checking Docker...",
            success_message="Docker is available. You can launch the sandbox.",
            failure_prefix="Docker check failed",
        )

    def install_docker_via_homebrew(self) -> Optional[threading.Thread]:
        return self._spawn(
            self.install_docker_with_brew,
            start_message="Installing Docker Desktop via Homebrew...",
            success_message="Docker Desktop installed. Launch it, wait for daemon to start, then re-check.",
            failure_prefix="Docker install via Homebrew failed",
            log_prefix="[docker-install]",
            installing=True,
        )

    def open_docker_download_page(self):
        self.open_url(constants.DOCKER_DOWNLOAD_URL)
        self.store.set_sandbox("Opening Docker Desktop download page...", running=self.store.sandbox.is_launching)

    # ── Sub-steps ───────────────────────────────────────────

    def launch_sandbox_flow(self):
        self.ensure_docker_available()
        with self.sandbox_context() as context:
            self.build_docker_image(context)
        self.run_docker_container()

    def docker_cli_present(self) -> bool:
        return self.shell.run("command -v docker", allow_failure=True).exit_code == 0

    def brew_present(self) -> bool:
        return self.shell.run("command -v brew", allow_failure=True).exit_code == 0

    def daemon_responsive(self) -> bool:
        return self.shell.run(DOCKER_INFO, allow_failure=True).exit_code == 0

    def ensure_docker_available(self):
        if not self.docker_cli_present():
            raise EngineNotFound()

        info = self.shell.run(DOCKER_INFO, allow_failure=True)
        if info.exit_code != 0:
            detail = info.output.strip()
            raise DaemonUnavailable(detail or "docker info failed")

        self._log("[docker] Docker daemon is running")

    def install_docker_with_brew(self):
        if not self.brew_present():
            raise BrewMissing()

        self.shell.run("brew install --cask docker", on_line=lambda line: self._log(f"[docker-install] {line}"))
        self._log("[docker-install] Docker Desktop installed via Homebrew")

    def start_docker_daemon_if_needed(self):
        """
        Start Docker Desktop and poll until its daemon answers.

        Raises:
            DaemonDidNotStart: no answer after ``poll_attempts`` checks
        """
        if self.daemon_responsive():
            self._log("[docker] Docker daemon already running")
            return

        self._log("[docker] Starting Docker Desktop...")
        self.shell.run("open -ga Docker", allow_failure=True)

        for attempt in range(1, self.poll_attempts + 1):
            if self.daemon_responsive():
                self._log("[docker] Docker daemon is now running")
                return
            self._log(f"[docker] Waiting for Docker daemon ({attempt}/{self.poll_attempts})...")
            if attempt < self.poll_attempts:
                self.sleep(self.poll_interval)

        raise DaemonDidNotStart(self.poll_attempts)

    @contextmanager
    def sandbox_context(self) -> Iterator[str]:
        """Temporary build context, removed on exit whatever happens."""
        with tempfile.TemporaryDirectory(prefix=constants.SANDBOX_CONTEXT_PREFIX) as directory:
            sandbox_assets.write_build_context(directory)
            yield directory

    def build_docker_image(self, context: str):
        command = f"docker build -t {constants.SANDBOX_IMAGE} {shlex.quote(context)}"
        self.shell.run(command, on_line=lambda line: self._log(f"[docker] {line}"))
        self._log(f"[docker] Image ready: {constants.SANDBOX_IMAGE}")

    def run_docker_container(self):
        name = constants.SANDBOX_CONTAINER
        existing = self.shell.run(
            f"docker ps -a --filter name=^{name}$ --format '{{{{.Names}}}}'", allow_failure=True
        )
        if name in existing.output.split():
            self._log(f"[docker] Removing previous container {name}")
            self.shell.run(f"docker rm -f {name}")

        command = (
            f"docker run -d --rm --name {name} "
            f"-p {constants.VNC_PORT}:{constants.VNC_PORT} "
            f"-p {constants.NOVNC_PORT}:{constants.NOVNC_PORT} "
            f"-v {constants.SANDBOX_VOLUME}:{constants.SANDBOX_USER_HOME} "
            f"{constants.SANDBOX_IMAGE}"
        )
        result = self.shell.run(command, on_line=lambda line: self._log(f"[docker] {line}"))

        lines = result.output.strip().splitlines()
        if lines:
            self._log(f"[docker] Container id: {lines[-1].strip()}")

    def open_sandbox_url(self):
        self.open_url(constants.SANDBOX_VIEWER_URL)

    # ── Helpers ─────────────────────────────────────────────

    def _spawn(
        self,
        flow: Callable[[], None],
        start_message: str,
        success_message: str,
        failure_prefix: str,
        log_prefix: str = "[docker]",
        installing: bool = False,
        auto: bool = False
    ) -> Optional[threading.Thread]:
        if not self.store.claim_sandbox(start_message, installing=installing, auto=auto):
            log.info(f"Sandbox busy; ignoring '{start_message}'")
            return None

        def work():
            try:
                flow()
            except Exception as e:
                self._log(f"{log_prefix} {e}")
                self.store.set_sandbox(f"{failure_prefix}: {e}", running=False, installing=False, auto=False)
            else:
                self.store.set_sandbox(success_message, running=False, installing=False, auto=False)

        worker = threading.Thread(target=work, name="zoomfixer-sandbox", daemon=True)
        worker.start()
        return worker

    def _log(self, message: str):
        self.store.append_log(message)
        log.info(message)
