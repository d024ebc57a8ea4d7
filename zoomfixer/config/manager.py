import os
from zoomfixer.config import constants
from zoomfixer.utils.logger import log

class ConfigManager:
    """
    Runtime settings for a single process.

    Nothing is read from or written to disk: every run starts from
    DEFAULT_CONFIG, optionally overridden through ZOOMFIXER_<KEY>
    environment variables.
    """
    APP_NAME = "ZoomFixer"
    ENV_PREFIX = "ZOOMFIXER_"

    DEFAULT_CONFIG = {
        "theme": "System",
        "installer_url": constants.ZOOM_INSTALLER_URL,
        "download_timeout": constants.DOWNLOAD_TIMEOUT,
        "download_chunk_size": constants.DOWNLOAD_CHUNK_SIZE,
        "daemon_poll_attempts": constants.DAEMON_POLL_ATTEMPTS,
        "daemon_poll_interval": constants.DAEMON_POLL_INTERVAL,
    }

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ
        self.config = self.load_config()

    def load_config(self):
        config = self.DEFAULT_CONFIG.copy()
        for key, default_val in self.DEFAULT_CONFIG.items():
            raw = self.environ.get(self.ENV_PREFIX + key.upper())
            if raw is None:
                continue
            try:
                config[key] = type(default_val)(raw)
            except ValueError:
                log.error(f"Ignoring invalid {self.ENV_PREFIX + key.upper()}={raw!r}")
        return config

    def get(self, key, default=None):
        return self.config.get(key, default)

    def set(self, key, value):
        self.config[key] = value

    def validate_config(self):
        """Ensure config structure is valid."""
        changes = False

        for key, default_val in self.DEFAULT_CONFIG.items():
            if key not in self.config or not isinstance(self.config[key], type(default_val)):
                self.config[key] = default_val
                changes = True

        # Counts and durations must be positive
        for key in ("download_timeout", "download_chunk_size", "daemon_poll_attempts"):
            if self.config[key] <= 0:
                self.config[key] = self.DEFAULT_CONFIG[key]
                changes = True

        if self.config["daemon_poll_interval"] < 0:
            self.config["daemon_poll_interval"] = self.DEFAULT_CONFIG["daemon_poll_interval"]
            changes = True

        if changes:
            log.info("Config repaired with default values.")

config_manager = ConfigManager()
config_manager.validate_config()
