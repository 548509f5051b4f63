"""Filesystem locations and defaults for the provisioning and audit tools."""

from pathlib import Path


# Nginx paths (Debian layout)
NGINX_SITES_AVAILABLE = Path("/etc/nginx/sites-available")
NGINX_SITES_ENABLED = Path("/etc/nginx/sites-enabled")
NGINX_LOG_DIR = Path("/var/log/nginx")

# Site content
WEB_ROOT_BASE = Path("/var/www")

# PHP-FPM sockets, e.g. /var/run/php/php8.3-fpm.sock
PHP_FPM_SOCKET_DIR = Path("/var/run/php")

# Let's Encrypt
LETSENCRYPT_LIVE_DIR = Path("/etc/letsencrypt/live")
DEFAULT_CERTBOT_EMAIL = "root@omnios.world"
CERTBOT_EMAIL_ENVVAR = "PHP_SITE_TOOLS_EMAIL"

# Seconds to wait after the final reload before probing HTTPS
HTTPS_SETTLE_SECONDS = 5

# PHP ini
SESSION_DIRECTIVE = "session.gc_maxlifetime"
BACKUP_SUFFIX = ".bak"
