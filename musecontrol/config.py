# musecontrol/config.py

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from dotenv import find_dotenv, load_dotenv

from .control.settle import DEFAULT_CONFIRM_TIMEOUT, DEFAULT_SETTLE_DELAY
from .control.vox_helper import BUNDLE_IDENTIFIER as VOX_BUNDLE_IDENTIFIER

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL
}


def setup_logging(level='info'):
    numeric_level = LOG_LEVELS.get(level.lower(), logging.INFO)  # Default to INFO if level is not recognized
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def _positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'.") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


@dataclass(frozen=True)
class Settings:
    log_level: str = "info"
    player: str = VOX_BUNDLE_IDENTIFIER
    poll_interval: float = 1.0  # seconds
    settle_delay: float = DEFAULT_SETTLE_DELAY  # seconds
    confirm_timeout: float = DEFAULT_CONFIRM_TIMEOUT  # seconds

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, dotenv: bool = True) -> "Settings":
        """Builds settings from MUSE_* variables, loading a .env file first."""
        if dotenv:
            _ = load_dotenv(find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ
        settings = cls()
        return settings.with_options({
            "--log-level": env.get("MUSE_LOG_LEVEL"),
            "--player": env.get("MUSE_PLAYER"),
            "--poll-interval": env.get("MUSE_POLL_INTERVAL"),
            "--settle-ms": env.get("MUSE_SETTLE_MS"),
            "--confirm-timeout-ms": env.get("MUSE_CONFIRM_TIMEOUT_MS"),
        })

    def with_options(self, options: Mapping[str, str | None]) -> "Settings":
        """Returns a copy overridden by command line style options. None values are ignored."""
        changes = {}
        if options.get("--log-level"):
            changes["log_level"] = options["--log-level"].lower()
        if options.get("--player"):
            changes["player"] = options["--player"]
        if options.get("--poll-interval"):
            changes["poll_interval"] = _positive_float("poll interval", options["--poll-interval"])
        if options.get("--settle-ms"):
            changes["settle_delay"] = _positive_float("settle delay", options["--settle-ms"]) / 1000.0
        if options.get("--confirm-timeout-ms"):
            changes["confirm_timeout"] = _positive_float("confirm timeout", options["--confirm-timeout-ms"]) / 1000.0
        return replace(self, **changes)
