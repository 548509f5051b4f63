"""PHP-FPM version and socket detection."""

import shutil
from pathlib import Path
from typing import Optional

from loguru import logger

from . import config
from .errors import DetectionError
from .shell import run_command


def get_cli_php_version() -> Optional[str]:
    """Return the CLI interpreter's "major.minor" version, if php is installed."""
    if shutil.which("php") is None:
        return None
    success, output = run_command(
        ["php", "-r", 'echo PHP_MAJOR_VERSION.".".PHP_MINOR_VERSION;']
    )
    version = output.strip()
    if not success or not version:
        return None
    return version


def socket_path_for(php_fpm_id: str) -> Path:
    """Socket path for an identifier such as "php8.3"."""
    return config.PHP_FPM_SOCKET_DIR / f"{php_fpm_id}-fpm.sock"


def parse_fpm_identifier(filename: str) -> str:
    """Turn a socket filename into an identifier: php8.3-fpm.sock -> php8.3."""
    name = Path(filename).name
    if name.endswith(".sock"):
        name = name[:-len(".sock")]
    if name.endswith("-fpm"):
        name = name[:-len("-fpm")]
    return name


def _find_socket_candidates() -> list[Path]:
    if not config.PHP_FPM_SOCKET_DIR.is_dir():
        return []
    return sorted(config.PHP_FPM_SOCKET_DIR.glob("php*-fpm.sock"))


def detect_php_fpm() -> str:
    """Detect the PHP-FPM identifier to use for fastcgi_pass.

    The CLI version wins when its socket is live; otherwise the first
    existing php*-fpm.sock is used.
    """
    version = get_cli_php_version()
    if version:
        socket = socket_path_for(f"php{version}")
        if socket.is_socket():
            logger.debug(f"Using CLI version {version} with socket {socket}")
            return f"php{version}"
        logger.debug(f"No socket at {socket} for CLI version {version}")

    candidates = _find_socket_candidates()
    if candidates:
        php_fpm_id = parse_fpm_identifier(candidates[0].name)
        logger.debug(f"Inferred {php_fpm_id} from {candidates[0]}")
        return php_fpm_id

    raise DetectionError(
        "Unable to detect PHP-FPM. Make sure PHP-FPM is installed and running."
    )
