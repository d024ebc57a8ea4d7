import subprocess
from typing import Callable, List, Optional
from zoomfixer.config import constants
from zoomfixer.schemas.shell import ShellResult
from zoomfixer.services.errors import CommandFailed
from zoomfixer.services.privilege_service import unwrap_elevated, wrap_for_elevation
from zoomfixer.utils.logger import log

class ShellExecutor:
    """
    Runs shell command lines, optionally behind the administrator prompt.

    stdout and stderr are merged into one stream which is forwarded line by
    line while the process runs. Calls block, so callers run on worker
    threads.
    """

    def run(
        self,
        command: str,
        require_admin: bool = False,
        allow_failure: bool = False,
        on_line: Optional[Callable[[str], None]] = None
    ) -> ShellResult:
        """
        Execute a command.

        Args:
            command: Shell command line, may chain sub-commands
            require_admin: Run through the AppleScript privilege prompt
            allow_failure: Return non-zero results instead of raising
            on_line: Called with every non-empty output line as it arrives

        Returns:
            ShellResult with the rendered command, merged output and exit code

        Raises:
            CommandFailed: exit code != 0 and allow_failure is False
        """
        args = self.build_args(command, require_admin)
        if require_admin:
            log.info(f"Requesting administrator privileges for: {unwrap_elevated(args[-1])}")
        result = self._run_process(args, on_line)

        if result.exit_code != 0:
            log.warning(f"Command exited with {result.exit_code}: {command}")
            if not allow_failure:
                raise CommandFailed(command, result.exit_code, result.output)

        return result

    @staticmethod
    def build_args(command: str, require_admin: bool = False) -> List[str]:
        if require_admin:
            return [constants.OSASCRIPT_EXECUTABLE, "-e", wrap_for_elevation(command)]
        return [constants.SHELL_EXECUTABLE, "-lc", command]

    def _run_process(self, args: List[str], on_line: Optional[Callable[[str], None]]) -> ShellResult:
        rendered = " ".join(args)
        log.debug(f"Running: {rendered}")

        try:
            process = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            raise CommandFailed(rendered, 127, str(e)) from e

        collected = []
        drained = False
        try:
            with process.stdout:
                for raw in iter(process.stdout.readline, b""):
                    text = raw.decode("utf-8", errors="replace")
                    collected.append(text)

                    line = text.rstrip("\r\n")
                    if line and on_line:
                        on_line(line)
            drained = True
        finally:
            if not drained:
                # Interrupted mid-stream: don't leave the child running or unreaped
                process.kill()
                process.wait()

        exit_code = process.wait()
        return ShellResult(command=rendered, output="".join(collected), exit_code=exit_code)
