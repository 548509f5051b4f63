"""Let's Encrypt certificate requests through certbot's webroot plugin."""

from .errors import CertificateError
from .shell import run_command
from .vhosts import SiteRecord

# Issuance waits on the ACME server, allow well beyond the usual command timeout
CERTBOT_TIMEOUT = 300


def build_certbot_command(site: SiteRecord, email: str) -> list[str]:
    return [
        "certbot", "certonly",
        "--webroot", "-w", str(site.web_root),
        "-d", site.domain,
        "--agree-tos",
        "--email", email,
        "--non-interactive",
    ]


def request_certificate(site: SiteRecord, email: str) -> str:
    """Request a certificate for the site and return certbot's output.

    Raises CertificateError on any non-zero exit.
    """
    success, output = run_command(build_certbot_command(site, email), timeout=CERTBOT_TIMEOUT)
    if not success:
        raise CertificateError(output.strip() or "certbot failed")
    return output
