"""Error kinds raised by the repair pipeline and the Docker sandbox flow."""


class ZoomFixerError(Exception):
    """Base class for all ZoomFixer errors."""

    pass


class CommandFailed(ZoomFixerError):
    """Raised when a required shell command exits non-zero."""

    def __init__(self, command: str, exit_code: int, output: str):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"{command} failed with code {exit_code}: {output.strip()}")


class DownloadFailed(ZoomFixerError):
    """Raised when the installer download answers with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Download failed with status {status_code}")


class MissingInstaller(ZoomFixerError):
    """Raised when the privileged install runs without a downloaded package."""

    def __init__(self):
        super().__init__("Installer not available.")


class VerificationFailed(ZoomFixerError):
    """Raised when no known Zoom bundle exists after the install."""

    def __init__(self):
        super().__init__("Zoom not found after install.")


class DockerAvailabilityError(ZoomFixerError):
    """Base class for Docker sandbox failures."""

    pass


class EngineNotFound(DockerAvailabilityError):
    def __init__(self):
        super().__init__(
            "Docker CLI not found. Install Docker Desktop and ensure `docker` is on your PATH."
        )


class DaemonUnavailable(DockerAvailabilityError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(
            f"Docker daemon unavailable. Start Docker Desktop and retry. Details: {detail}"
        )


class DaemonDidNotStart(DockerAvailabilityError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Docker daemon did not start after {attempts} checks. "
            "Please open Docker Desktop and retry."
        )


class BrewMissing(DockerAvailabilityError):
    def __init__(self):
        super().__init__(
            "Homebrew not installed. Install Homebrew or use the Docker Desktop download."
        )


def describe_error(error: Exception) -> str:
    """Render an error as ``<Kind>: <message>`` for the activity log."""
    return f"{type(error).__name__}: {error}"
