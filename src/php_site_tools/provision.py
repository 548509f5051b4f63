"""Let's Encrypt certificate provisioning for a PHP site behind Nginx.

The workflow is strictly sequential: a temporary HTTP-only site answers the
ACME challenge, then the final HTTPS config replaces it. Re-running it for a
configured domain rewrites the same files.
"""

import os
import time
from typing import Optional

from . import config
from . import console
from . import vhosts
from .certbot import request_certificate
from .errors import PermissionDeniedError
from .php_fpm import detect_php_fpm
from .shell import run_command
from .systemd_client import SystemdClient


def require_root() -> None:
    if os.geteuid() != 0:
        raise PermissionDeniedError("Please run this script as root.")


def _reload_nginx(systemd: SystemdClient) -> None:
    success, output = systemd.reload_service("nginx")
    if success:
        console.ok("Nginx reloaded.")
    else:
        # Not fatal: certbot or the HTTPS probe reports the consequence
        console.fail(f"Nginx reload failed: {output.strip()}")


def verify_https(domain: str) -> bool:
    """Probe the site with a HEAD request and echo the response headers."""
    success, output = run_command(["curl", "--head", f"https://{domain}"])
    if output:
        console.raw(output)
    return success


def provision_site(
    domain: str,
    email: str = config.DEFAULT_CERTBOT_EMAIL,
    settle_seconds: float = config.HTTPS_SETTLE_SECONDS,
    systemd: Optional[SystemdClient] = None,
) -> bool:
    """Issue a certificate for domain and install its HTTPS Nginx config.

    Raises DetectionError or CertificateError on the fatal steps. Returns
    whether the final HTTPS probe succeeded.
    """
    systemd = systemd or SystemdClient()
    site = vhosts.SiteRecord.for_domain(domain)

    console.rule(f"Requesting SSL certificate for: {domain}")

    console.info("Detecting PHP-FPM version...")
    php_fpm_id = detect_php_fpm()
    console.ok(f"Detected PHP-FPM identifier: {php_fpm_id}")

    console.step(f"Creating web root: {site.web_root}...")
    vhosts.ensure_web_root(site)
    console.ok("Web root ready (reused if it already existed).")

    console.step("Creating temporary Nginx config for the HTTP challenge...")
    vhosts.write_vhost(site, vhosts.render_challenge_config(site))
    console.ok(f"Temporary Nginx config written to {site.config_path}.")

    console.step("Enabling Nginx site...")
    if vhosts.enable_vhost(site):
        console.ok("Site enabled.")
    else:
        console.info("Site symlink already exists, skipping.")

    console.step("Reloading Nginx to apply the temporary config...")
    _reload_nginx(systemd)

    console.step("Requesting Let's Encrypt certificate with certbot...")
    output = request_certificate(site, email)
    if output:
        console.raw(output)
    console.ok("Certbot finished.")

    console.step("Removing temporary Nginx config...")
    if vhosts.remove_vhost(site):
        console.ok("Temporary config removed.")
    else:
        console.info("No temporary config found, skipping.")

    console.step("Creating final HTTPS Nginx config...")
    vhosts.write_vhost(site, vhosts.render_https_config(site, php_fpm_id))
    console.ok("Final Nginx config created.")

    console.step("Reloading Nginx to apply the HTTPS config...")
    _reload_nginx(systemd)

    console.step(f"Waiting {settle_seconds:g} seconds before verifying HTTPS...")
    time.sleep(settle_seconds)
    console.step(f"Verifying HTTPS connection: https://{domain} ...")
    reachable = verify_https(domain)

    console.blank()
    console.rule("Done. Please review the output above.")
    return reachable
