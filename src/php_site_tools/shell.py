"""Subprocess helper shared by the system-facing modules."""

import subprocess

from loguru import logger


def run_command(cmd: list[str], timeout: int = 30) -> tuple[bool, str]:
    """Run a command and return (success, combined output).

    Timeouts and missing executables are reported as a failed result.
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {cmd[0]}")
        return False, "Command timed out"
    except OSError as e:
        logger.error(f"Failed to run {cmd[0]}: {e}")
        return False, str(e)

    logger.debug(f"{cmd[0]} exited with {result.returncode}")
    return result.returncode == 0, result.stdout + result.stderr
