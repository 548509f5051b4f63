"""Command line entry points for php-ssl-provision and php-session-check."""

from typing import Optional

import typer

from . import config
from . import console
from .errors import SiteToolsError
from .logger import init_logger
from .php_session import run_audit
from .provision import provision_site, require_root

VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log every external command to stderr.",
)

provision_app = typer.Typer(
    add_completion=False,
    help="Issue a Let's Encrypt certificate and install an HTTPS Nginx site for a PHP domain.",
)
session_app = typer.Typer(
    add_completion=False,
    help="Audit PHP's session.gc_maxlifetime, optionally setting it to HOURS first.",
)


@provision_app.command()
def provision(
    domain: Optional[str] = typer.Argument(None, help="Domain to issue a certificate for."),
    email: str = typer.Option(
        config.DEFAULT_CERTBOT_EMAIL,
        "--email",
        envvar=config.CERTBOT_EMAIL_ENVVAR,
        help="Contact address registered with Let's Encrypt.",
    ),
    settle: float = typer.Option(
        config.HTTPS_SETTLE_SECONDS,
        "--settle",
        min=0,
        help="Seconds to wait after the final reload before probing HTTPS.",
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    init_logger(verbose)
    try:
        require_root()
    except SiteToolsError as e:
        console.fail(str(e))
        raise typer.Exit(code=1)

    if not domain:
        console.info("Usage: php-ssl-provision your_domain")
        raise typer.Exit(code=1)

    try:
        provision_site(domain, email=email, settle_seconds=settle)
    except SiteToolsError as e:
        console.fail(str(e))
        raise typer.Exit(code=1)


# Hours such as "-1" must reach the validator instead of being parsed as options
@session_app.command(context_settings={"ignore_unknown_options": True})
def session(
    hours: Optional[str] = typer.Argument(
        None, help="New session timeout in hours, e.g. 1 or 0.5."
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    init_logger(verbose)
    if not run_audit(hours):
        raise typer.Exit(code=1)


def provision_main() -> None:
    provision_app()


def session_main() -> None:
    session_app()
