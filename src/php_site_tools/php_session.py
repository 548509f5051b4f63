"""PHP session timeout auditing and configuration."""

import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from . import config
from . import console
from .errors import InvalidHoursError
from .shell import run_command


HOURS_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?$")

# Matches the directive whether or not it is commented out with ";"
DIRECTIVE_PATTERN = re.compile(
    r"^;?[ \t]*" + re.escape(config.SESSION_DIRECTIVE) + r"[ \t]*=.*$",
    re.MULTILINE,
)


@dataclass
class PhpRuntimeInfo:
    """Values reported by the PHP CLI interpreter."""
    version: str  # e.g., "8.3.6"
    major_minor: str  # e.g., "8.3"
    loaded_ini: Optional[str]
    scanned_dir: Optional[str]
    gc_maxlifetime: str  # raw ini_get() result, may be empty

    @property
    def lifetime_seconds(self) -> Optional[int]:
        if self.gc_maxlifetime.isdigit():
            return int(self.gc_maxlifetime)
        return None


def php_available() -> bool:
    return shutil.which("php") is not None


def _php_eval(code: str) -> str:
    success, output = run_command(["php", "-r", code])
    if not success:
        logger.warning(f"php -r failed: {output.strip()}")
        return ""
    return output.strip()


def read_runtime_info() -> PhpRuntimeInfo:
    """Query the PHP interpreter for its version, ini paths and session lifetime."""
    loaded_ini = _php_eval('echo php_ini_loaded_file() ?: "None";')
    scanned_dir = _php_eval('echo php_ini_scanned_dir() ?: "None";')
    return PhpRuntimeInfo(
        version=_php_eval("echo PHP_VERSION;"),
        major_minor=_php_eval('echo PHP_MAJOR_VERSION.".".PHP_MINOR_VERSION;'),
        loaded_ini=loaded_ini if loaded_ini not in ("", "None") else None,
        scanned_dir=scanned_dir if scanned_dir not in ("", "None") else None,
        gc_maxlifetime=_php_eval(f'echo ini_get("{config.SESSION_DIRECTIVE}");'),
    )


def parse_hours(text: str) -> int:
    """Convert an hours string ("1", "0.5") to whole seconds."""
    text = text.strip()
    if not HOURS_PATTERN.match(text):
        raise InvalidHoursError(
            f"Invalid time format: {text} (Expected hours, e.g., 1 or 0.5)"
        )
    return int(float(text) * 3600)


def rewrite_gc_maxlifetime(content: str, seconds: int) -> str:
    """Set every session.gc_maxlifetime line, uncommenting it if needed."""
    return DIRECTIVE_PATTERN.sub(f"{config.SESSION_DIRECTIVE} = {seconds}", content)


def backup_path_for(ini_path: Path) -> Path:
    return ini_path.with_name(ini_path.name + config.BACKUP_SUFFIX)


def update_session_timeout(ini_path: Path, seconds: int) -> Path:
    """Back up ini_path and rewrite its session lifetime. Returns the backup path."""
    backup = backup_path_for(ini_path)
    shutil.copy2(ini_path, backup)
    # Non-UTF-8 bytes (e.g. Latin-1 comments) round-trip unchanged
    content = ini_path.read_text(encoding="utf-8", errors="surrogateescape")
    ini_path.write_text(rewrite_gc_maxlifetime(content, seconds), encoding="utf-8", errors="surrogateescape")
    return backup


def _apply_update(hours: str, loaded_ini: Optional[str]) -> tuple[bool, Optional[int]]:
    """Run the CONFIGURATION UPDATE section. Returns (ok, target seconds)."""
    console.section("CONFIGURATION UPDATE")
    try:
        seconds = parse_hours(hours)
    except InvalidHoursError as e:
        console.status("ERROR", str(e))
        return False, None

    if loaded_ini is None:
        console.status("ERROR", "Cannot modify config: No loaded php.ini found")
        return False, None

    ini_path = Path(loaded_ini)
    if not os.access(ini_path, os.W_OK):
        console.status("ERROR", f"Permission denied: Cannot write to {ini_path}")
        console.status("INFO", "Try running with sudo")
        return False, None

    console.kv("INPUT_HOURS", hours)
    console.kv("TARGET_SECONDS", str(seconds))
    console.kv("TARGET_FILE", str(ini_path))

    try:
        backup = update_session_timeout(ini_path, seconds)
    except (OSError, UnicodeError) as e:
        console.status("ERROR", f"Failed to update configuration: {e}")
        return False, None
    console.status("SUCCESS", f"Backup created: {backup}")
    console.status("SUCCESS", "Configuration updated successfully")
    return True, seconds


def run_audit(hours: Optional[str] = None) -> bool:
    """Optionally apply a new session timeout, then report the live settings.

    Returns False if any step reported an error.
    """
    if not php_available():
        console.section("SYSTEM CHECK")
        console.status("ERROR", "PHP binary not found in $PATH")
        console.banner(False)
        return False

    healthy = True
    target_seconds = None

    if hours:
        loaded_ini = read_runtime_info().loaded_ini
        updated, target_seconds = _apply_update(hours, loaded_ini)
        healthy = healthy and updated
        console.blank()

    # Re-read so the report reflects the file on disk
    info = read_runtime_info()

    console.section("PHP SESSION AUDIT")
    console.kv("OS_DISTRO", "Debian (Detected)")
    console.kv("PHP_VERSION", info.version)
    console.kv("PHP_MAJOR_MINOR", info.major_minor)
    console.kv("CONFIG_TYPE", "CLI / SSH Session")

    console.blank()
    console.section("CONFIGURATION PATHS")
    if info.loaded_ini is None:
        console.status("ERROR", "No php.ini file is loaded")
        healthy = False
    else:
        console.kv("LOADED_INI_PATH", info.loaded_ini)
        if info.scanned_dir:
            console.kv("SCANNED_INI_DIR", info.scanned_dir)
        if hours and healthy:
            console.status("SUCCESS", "Verified: Configuration loaded")
        else:
            console.status("SUCCESS", "Configuration file located")

    console.blank()
    console.section("SESSION PARAMETERS")
    lifetime = info.lifetime_seconds
    if lifetime is not None:
        console.kv("GC_MAXLIFETIME", f"{lifetime}s")
        console.kv("READABLE_TIME", f"{lifetime // 60}m / {lifetime / 3600:.2f}h")
        if hours and lifetime == target_seconds:
            console.status("SUCCESS", "Value matches requested update")
        else:
            console.status("SUCCESS", "Session timeout value extracted")
    else:
        console.kv("GC_MAXLIFETIME", "Unknown/Empty")
        console.status("ERROR", "Failed to retrieve session value")
        healthy = False

    console.summary_table(info.major_minor, "php.ini (CLI)", info.gc_maxlifetime)
    console.banner(healthy)
    return healthy
