"""Exceptions raised by the provisioning and audit workflows."""


class SiteToolsError(Exception):
    """Base class for all php-site-tools failures."""


class DetectionError(SiteToolsError):
    """No PHP-FPM installation could be detected."""


class CertificateError(SiteToolsError):
    """certbot exited with a non-zero status."""


class InvalidHoursError(SiteToolsError, ValueError):
    """A session timeout was not given as a non-negative number of hours."""


class PermissionDeniedError(SiteToolsError):
    """The current user lacks the privileges an operation needs."""
