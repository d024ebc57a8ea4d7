"""
Centralized constants for ZoomFixer.
Fixed repair policy: target paths, download source and sandbox wiring.
"""
import os

HOME = os.path.expanduser("~")

# --- Target application ---
ZOOM_PROCESS_NAME = "zoom.us"
ZOOM_INSTALLER_URL = "https://zoom.us/client/latest/Zoom.pkg"
INSTALLER_PREFIX = "ZoomInstaller-"
INSTALLER_SUFFIX = ".pkg"

SYSTEM_APPLICATIONS = "/Applications"
USER_APPLICATIONS = os.path.join(HOME, "Applications")
USER_SUPPORT = os.path.join(HOME, "Library", "Application Support")

DISCOVERY_ROOTS = [SYSTEM_APPLICATIONS, USER_APPLICATIONS, USER_SUPPORT]
DISCOVERY_MAX_DEPTH = 4
DISCOVERY_PATTERNS = ["zoom*.app"]

# Known bundle locations, used as a fallback when discovery finds nothing
DEFAULT_INSTALL_PATHS = [
    "/Applications/zoom.us.app",
    "/Applications/Zoom.app",
    os.path.join(USER_APPLICATIONS, "zoom.us.app"),
    os.path.join(USER_APPLICATIONS, "Zoom.app"),
]

# Where a fresh install may land; permissions are reset on these and
# verification looks for them
INSTALLED_BUNDLE_PATHS = [
    "/Applications/zoom.us.app",
    "/Applications/Zoom.app",
    "/Applications/Zoom Workplace.app",
]

# --- Shell ---
SHELL_EXECUTABLE = "/bin/bash"
OSASCRIPT_EXECUTABLE = "/usr/bin/osascript"

# --- Download ---
DOWNLOAD_CHUNK_SIZE = 64 * 1024
DOWNLOAD_TIMEOUT = 30  # seconds

# --- Docker sandbox ---
SANDBOX_IMAGE = "zoomfixer-sandbox"
SANDBOX_CONTAINER = "zoomfixer-sandbox"
SANDBOX_VOLUME = "zoomfixer_home"
SANDBOX_USER_HOME = "/home/zoomuser"
SANDBOX_CONTEXT_PREFIX = "zoomfixer-docker-"
VNC_PORT = 5901
NOVNC_PORT = 6080
SANDBOX_VIEWER_URL = f"http://localhost:{NOVNC_PORT}/vnc.html"
DOCKER_DOWNLOAD_URL = "https://www.docker.com/products/docker-desktop/"

DAEMON_POLL_ATTEMPTS = 12
DAEMON_POLL_INTERVAL = 5  # seconds
