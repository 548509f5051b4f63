"""Tests for provision.py module."""

import pytest
from unittest.mock import patch, MagicMock

from php_site_tools import provision
from php_site_tools.errors import CertificateError, DetectionError, PermissionDeniedError


@pytest.fixture
def systemd():
    client = MagicMock()
    client.reload_service.return_value = (True, "")
    return client


@pytest.fixture
def externals():
    """Stub out detection, certbot, curl and the settle delay."""
    with patch.object(provision, "detect_php_fpm", return_value="php8.3") as detect, \
            patch.object(provision, "request_certificate", return_value="Certificate saved") as certbot, \
            patch.object(provision, "run_command", return_value=(True, "HTTP/2 200")) as curl, \
            patch.object(provision.time, "sleep") as sleep:
        yield {"detect": detect, "certbot": certbot, "curl": curl, "sleep": sleep}


class TestRequireRoot:
    """Tests for require_root function."""

    def test_non_root(self):
        with patch.object(provision.os, "geteuid", return_value=1000):
            with pytest.raises(PermissionDeniedError):
                provision.require_root()

    def test_root(self):
        with patch.object(provision.os, "geteuid", return_value=0):
            provision.require_root()


class TestProvisionSite:
    """Tests for provision_site function."""

    def test_installs_https_config(self, debian_layout, externals, systemd):
        result = provision.provision_site("example.com", email="a@example.com", systemd=systemd)

        conf = debian_layout["available"] / "example.com"
        content = conf.read_text()
        assert result is True
        assert "listen 443 ssl;" in content
        assert "php8.3-fpm.sock" in content
        assert (debian_layout["enabled"] / "example.com").is_symlink()
        assert (debian_layout["www"] / "example.com").is_dir()

    def test_reloads_twice_and_waits(self, debian_layout, externals, systemd):
        provision.provision_site("example.com", settle_seconds=5, systemd=systemd)

        assert systemd.reload_service.call_count == 2
        systemd.reload_service.assert_called_with("nginx")
        externals["sleep"].assert_called_once_with(5)
        externals["curl"].assert_called_once_with(["curl", "--head", "https://example.com"])

    def test_certbot_sees_challenge_config(self, debian_layout, externals, systemd):
        """Test that the HTTP-only config is in place while certbot runs."""
        seen = {}

        def fake_certbot(site, email):
            seen["content"] = site.config_path.read_text()
            seen["email"] = email
            return ""

        externals["certbot"].side_effect = fake_certbot
        provision.provision_site("example.com", email="ops@example.com", systemd=systemd)

        assert "=404" in seen["content"]
        assert "listen 443" not in seen["content"]
        assert seen["email"] == "ops@example.com"

    def test_rerun_overwrites(self, debian_layout, externals, systemd):
        """Test that provisioning an already configured domain succeeds."""
        provision.provision_site("example.com", systemd=systemd)
        first = (debian_layout["available"] / "example.com").read_text()

        provision.provision_site("example.com", systemd=systemd)
        second = (debian_layout["available"] / "example.com").read_text()

        assert first == second
        assert (debian_layout["enabled"] / "example.com").is_symlink()

    def test_certificate_failure_aborts(self, debian_layout, externals, systemd):
        externals["certbot"].side_effect = CertificateError("rate limited")

        with pytest.raises(CertificateError):
            provision.provision_site("example.com", systemd=systemd)

        content = (debian_layout["available"] / "example.com").read_text()
        assert "listen 443" not in content
        assert systemd.reload_service.call_count == 1
        externals["curl"].assert_not_called()

    def test_detection_failure_aborts(self, debian_layout, externals, systemd):
        externals["detect"].side_effect = DetectionError("no php-fpm")

        with pytest.raises(DetectionError):
            provision.provision_site("example.com", systemd=systemd)

        assert not (debian_layout["available"] / "example.com").exists()
        systemd.reload_service.assert_not_called()

    def test_unreachable_site_reported(self, debian_layout, externals, systemd):
        externals["curl"].return_value = (False, "curl: (7) Failed to connect")

        assert provision.provision_site("example.com", systemd=systemd) is False
