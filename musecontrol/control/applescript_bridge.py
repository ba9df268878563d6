# musecontrol/control/applescript_bridge.py

import logging
import re
import shutil
import subprocess
from typing import override

import psutil  # For is_process_running

from .base import BridgeUnavailableError, ScriptingBridge

OSASCRIPT = "osascript"
ERROR_PREFIX = "Error:"
MISSING_VALUE = "missing value"  # how osascript prints an absent property

# AppleScript prints raw data as «data XXXX0123ABCD...», XXXX being a four char type code
_DATA_LITERAL = re.compile(r"«data (?P<type>.{4})(?P<hex>[0-9A-Fa-f]*)»")


# Module-level helper functions for AppleScript execution
def _run_applescript_capture_output(script: str, app_name_for_log: str) -> tuple[str | None, str | None]:
    """Runs an AppleScript and captures its output. Returns (stdout, stderr)."""
    try:
        result = subprocess.run([OSASCRIPT, "-e", script], capture_output=True, text=True, check=False)
        stdout = result.stdout.strip() if result.stdout else None
        stderr = result.stderr.strip() if result.stderr else None
        if result.returncode != 0:
            logging.warning(f"AppleScript for {app_name_for_log} exited with code {result.returncode}. Stderr: {stderr}")
            return None, stderr
        return stdout, stderr
    except FileNotFoundError:
        logging.error("osascript command not found. AppleScript execution is not possible.")
        return None, "osascript not found"
    except OSError as e:
        logging.error(f"Unexpected error running AppleScript for {app_name_for_log}: {e}")
        return None, str(e)


def _run_applescript_discard_output(script: str, app_name_for_log: str) -> bool:
    """Runs an AppleScript, discarding its output. Returns True on success (exit code 0)."""
    try:
        result = subprocess.run([OSASCRIPT, "-e", script], capture_output=True, text=True, check=False)
        if result.returncode != 0:
            logging.warning(f"AppleScript for {app_name_for_log} exited with code {result.returncode}.")
            return False
        return True
    except FileNotFoundError:
        logging.error("osascript command not found. AppleScript execution is not possible.")
        return False
    except OSError as e:
        logging.error(f"Unexpected error running AppleScript for {app_name_for_log}: {e}")
        return False


def is_process_running(app_name: str) -> bool:
    """Check if there is a running process named exactly app_name (case-insensitive)."""
    try:
        for process in psutil.process_iter(['name']):
            name = process.info.get('name') or ""
            if name.lower() == app_name.lower():
                return True
    except psutil.Error as e:
        logging.debug(f"Error accessing process list for '{app_name}': {e}")
    return False


def parse_float(value: str | None) -> float | None:
    """Parses a number printed by osascript. Tolerates a locale decimal comma."""
    if value is None:
        return None
    try:
        return float(value.strip().replace(",", "."))
    except ValueError:
        logging.debug(f"AppleScript: Could not parse number from output: '{value}'")
        return None


def parse_int(value: str | None) -> int | None:
    number = parse_float(value)
    return None if number is None else int(number)


def decode_data_literal(output: str | None) -> bytes | None:
    """Decodes AppleScript's «data XXXX<hex>» literal into raw bytes."""
    if not output:
        return None
    match = _DATA_LITERAL.search(output)
    if not match or not match.group("hex"):
        return None
    try:
        return bytes.fromhex(match.group("hex"))
    except ValueError:
        logging.debug("AppleScript: Malformed data literal.")
        return None


class AppleScriptBridge(ScriptingBridge):
    """Talks to one scriptable application, addressed by its bundle identifier."""

    def __init__(self, bundle_identifier: str, process_name: str):
        if shutil.which(OSASCRIPT) is None:
            raise BridgeUnavailableError(f"Cannot bind to {bundle_identifier}: '{OSASCRIPT}' is not available.")
        self.bundle_identifier = bundle_identifier
        self.process_name = process_name

    def _guarded(self, body: str) -> str:
        # Checking "is running" first keeps property reads from launching the player
        return f"""
        if application id "{self.bundle_identifier}" is running then
            tell application id "{self.bundle_identifier}"
                try
                    {body}
                on error errMsg number errNum
                    return "{ERROR_PREFIX} " & errMsg & " (" & errNum & ")"
                end try
            end tell
        else
            return "{ERROR_PREFIX} App not running"
        end if
        """

    def _read(self, expression: str) -> str | None:
        stdout, _ = _run_applescript_capture_output(self._guarded(f"return {expression}"), self.process_name)
        if not stdout or stdout == MISSING_VALUE:
            return None
        if stdout.startswith(ERROR_PREFIX):
            logging.debug(f"AppleScript: Could not read '{expression}' from {self.process_name}: {stdout}")
            return None
        return stdout

    @override
    def is_running(self) -> bool:
        return is_process_running(self.process_name)

    @override
    def get(self, prop: str) -> str | None:
        return self._read(f"({prop}) as string")

    @override
    def get_data(self, prop: str) -> bytes | None:
        return decode_data_literal(self._read(prop))

    @override
    def set(self, prop: str, value: str) -> bool:
        success = _run_applescript_discard_output(self._guarded(f"set {prop} to {value}"), self.process_name)
        if success:
            logging.debug(f"AppleScript: Set '{prop}' of {self.process_name} to {value} attempt sent.")
        return success  # the script ran; the player may still have ignored it

    @override
    def call(self, command: str) -> bool:
        success = _run_applescript_discard_output(self._guarded(command), self.process_name)
        if success:
            logging.debug(f"AppleScript: '{command}' command sent to {self.process_name}.")
        return success
