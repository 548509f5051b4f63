"""Systemd service control through systemctl."""

from .shell import run_command


class SystemdClient:
    """Client for managing systemd services via systemctl.

    The tools are expected to run as root, so no privilege escalation
    wrapper is applied.
    """

    def _run_systemctl(self, *args: str) -> tuple[bool, str]:
        return run_command(["systemctl", *args])

    def reload_service(self, service_name: str) -> tuple[bool, str]:
        """Reload a service's configuration without restarting it."""
        return self._run_systemctl("reload", f"{service_name}.service")
