"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
from unittest.mock import patch
import tempfile
import shutil

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from php_site_tools import config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmp = tempfile.mkdtemp()
    yield Path(tmp)
    shutil.rmtree(tmp)


@pytest.fixture
def debian_layout(temp_dir):
    """Point every filesystem location in config at a temporary tree."""
    layout = {
        "available": temp_dir / "sites-available",
        "enabled": temp_dir / "sites-enabled",
        "www": temp_dir / "www",
        "sockets": temp_dir / "php",
        "live": temp_dir / "letsencrypt" / "live",
        "logs": temp_dir / "log",
    }
    layout["available"].mkdir()
    layout["enabled"].mkdir()
    layout["sockets"].mkdir()

    with patch.object(config, "NGINX_SITES_AVAILABLE", layout["available"]), \
            patch.object(config, "NGINX_SITES_ENABLED", layout["enabled"]), \
            patch.object(config, "WEB_ROOT_BASE", layout["www"]), \
            patch.object(config, "PHP_FPM_SOCKET_DIR", layout["sockets"]), \
            patch.object(config, "LETSENCRYPT_LIVE_DIR", layout["live"]), \
            patch.object(config, "NGINX_LOG_DIR", layout["logs"]):
        yield layout


@pytest.fixture
def sample_php_ini():
    """Excerpt of a Debian php.ini with the session lifetime commented out."""
    return """[Session]
session.save_handler = files
session.gc_probability = 0
session.gc_divisor = 1000
;session.gc_maxlifetime = 1440
session.use_strict_mode = 0
"""
