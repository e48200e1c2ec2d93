"""Consistency checks run after each configuration layer is applied."""

from __future__ import annotations

import logging

from .binder import parse_int
from .errors import MissingHostError
from .settings import ServerConfigBuilder

logger = logging.getLogger(__name__)


def validate_consistency(config: ServerConfigBuilder) -> None:
    """Check required fields and reconcile the textual and numeric port.

    A non-blank port string that parses as an integer replaces the numeric
    port. One that doesn't parse is left as is; it may be a placeholder
    resolved outside this process.

    Raises:
        MissingHostError: host is unset
    """
    if config.host is None:
        raise MissingHostError("Must specify 'host'")

    port_string = config.port_string
    if port_string is not None and port_string.strip():
        try:
            config.port = parse_int(port_string)
        except ValueError:
            logger.debug(f"Keeping non-numeric port {port_string!r} as text")
