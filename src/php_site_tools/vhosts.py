"""Nginx virtual host configuration for certificate-backed PHP sites."""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from . import config
from .php_fpm import socket_path_for


@dataclass
class SiteRecord:
    """Paths belonging to a single domain."""
    domain: str
    web_root: Path
    config_path: Path  # sites-available/<domain>
    enabled_path: Path  # sites-enabled/<domain>

    @classmethod
    def for_domain(cls, domain: str) -> "SiteRecord":
        return cls(
            domain=domain,
            web_root=config.WEB_ROOT_BASE / domain,
            config_path=config.NGINX_SITES_AVAILABLE / domain,
            enabled_path=config.NGINX_SITES_ENABLED / domain,
        )


# Served while certbot answers the HTTP-01 challenge from the web root
CHALLENGE_TEMPLATE = """server {{
    listen 80;
    server_name {domain};
    root {web_root};

    location / {{
        try_files $uri $uri/ =404;
    }}
}}
"""

HTTPS_TEMPLATE = """server {{
    listen 80;
    server_name {domain};
    return 301 https://$host$request_uri;
}}

server {{
    listen 443 ssl;
    server_name {domain};
    root {web_root};
    client_max_body_size 8000M;
    index index.php index.html;

    ssl_certificate {cert_dir}/fullchain.pem;
    ssl_certificate_key {cert_dir}/privkey.pem;

    access_log {log_dir}/{domain}-access.log;
    error_log {log_dir}/{domain}-error.log;

    add_header Strict-Transport-Security "max-age=31536000; includeSubDomains" always;

    location / {{
        try_files $uri $uri/ /index.php$request_uri;
    }}

    location ~ \\.php(?:$|/) {{
        fastcgi_split_path_info ^(.+\\.php)(/.+)$;
        include snippets/fastcgi-php.conf;
        fastcgi_param SCRIPT_FILENAME $document_root$fastcgi_script_name;
        fastcgi_param PATH_INFO $fastcgi_path_info;
        fastcgi_param HTTPS on;
        fastcgi_pass unix:{php_fpm_socket};
    }}
}}
"""


def render_challenge_config(site: SiteRecord) -> str:
    """HTTP-only server block for the ACME challenge."""
    return CHALLENGE_TEMPLATE.format(domain=site.domain, web_root=site.web_root)


def render_https_config(site: SiteRecord, php_fpm_id: str) -> str:
    """Final server blocks: HTTP redirect plus the TLS site passing PHP to FPM."""
    return HTTPS_TEMPLATE.format(
        domain=site.domain,
        web_root=site.web_root,
        cert_dir=config.LETSENCRYPT_LIVE_DIR / site.domain,
        log_dir=config.NGINX_LOG_DIR,
        php_fpm_socket=socket_path_for(php_fpm_id),
    )


def ensure_web_root(site: SiteRecord) -> None:
    site.web_root.mkdir(parents=True, exist_ok=True)


def write_vhost(site: SiteRecord, content: str) -> Path:
    """Write (or overwrite) the site's config file."""
    site.config_path.parent.mkdir(parents=True, exist_ok=True)
    site.config_path.write_text(content)
    logger.debug(f"Wrote {len(content)} bytes to {site.config_path}")
    return site.config_path


def enable_vhost(site: SiteRecord) -> bool:
    """Link the config into sites-enabled.

    Returns False when the link was already there.
    """
    if site.enabled_path.is_symlink():
        return False
    site.enabled_path.parent.mkdir(parents=True, exist_ok=True)
    site.enabled_path.symlink_to(site.config_path)
    return True


def remove_vhost(site: SiteRecord) -> bool:
    """Delete the site's config file. Returns False if it was already gone."""
    if not site.config_path.is_file():
        return False
    site.config_path.unlink()
    return True
