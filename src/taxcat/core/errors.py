"""Exception types raised by taxcat."""

from __future__ import annotations

from typing import Optional, Sequence


class TaxcatError(Exception):
    """Base class for all taxcat failures."""


class ConfigurationError(TaxcatError, ValueError):
    """A required setting is missing or the config file is unusable."""


class HostPlatformError(TaxcatError):
    """A command against the host platform (WP-CLI) failed.

    Args:
        message: Human readable description
        command: argv of the failed command, if any
        stderr: Captured standard error of the failed command, if any
    """

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message)
        self.command = list(command) if command else []
        self.stderr = stderr or ""


class PartialTaxonomyWriteError(HostPlatformError):
    """Existing terms were removed but the replacement terms were not all added.

    The post is left with an empty or partial term set for ``taxonomy`` until
    the command is run again.
    """

    def __init__(self, message: str, *, taxonomy: str, post_id: int, **kwargs):
        super().__init__(message, **kwargs)
        self.taxonomy = taxonomy
        self.post_id = post_id


class MalformedResponseError(TaxcatError):
    """A remote service returned a body that does not match its schema."""

    def __init__(self, service: str, detail: str):
        super().__init__(f"Malformed response from {service}: {detail}")
        self.service = service
        self.detail = detail


__all__ = [
    "TaxcatError",
    "ConfigurationError",
    "HostPlatformError",
    "PartialTaxonomyWriteError",
    "MalformedResponseError",
]
