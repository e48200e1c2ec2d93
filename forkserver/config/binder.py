"""Bind config file keys to typed builder fields.

Each key in the server section of a config file maps to exactly one field and
one coercion. The table is built once at import time.

Contract:
- Inputs: ServerConfigBuilder, config key, raw element text
- Outputs: None
- Side Effects: Assigns one field on the builder
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .errors import BindInvocationError
from .errors import NoSuchSetterError
from .settings import ServerConfigBuilder

logger = logging.getLogger(__name__)


_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_bool(text: str) -> bool:
    """Parse a boolean flag; anything other than "true" (any case) is False."""
    return text.strip().lower() == "true"


def parse_int(text: str) -> int:
    """Parse a decimal integer made of ASCII digits with an optional sign.

    Stricter than int(): underscores, surrounding whitespace and non-ASCII
    digits are rejected.

    Raises:
        ValueError: text is not a plain decimal integer
    """
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


@dataclass(frozen=True)
class Binding:
    """One config key bound to a builder field."""

    field: str
    coerce: Callable[[str], Any]


BINDINGS: dict[str, Binding] = {
    "host": Binding("host", str),
    "taskTimeoutMillis": Binding("task_timeout_millis", parse_int),
    "taskPulseMillis": Binding("task_pulse_millis", parse_int),
    "pingTimeoutMillis": Binding("ping_timeout_millis", parse_int),
    "pingPulseMillis": Binding("ping_pulse_millis", parse_int),
    "maxForkedStartupMillis": Binding("max_forked_startup_millis", parse_int),
    "maxRestarts": Binding("max_restarts", parse_int),
    "maxFiles": Binding("max_files", parse_int),
    "enableUnsecureFeatures": Binding("enable_unsecure_features", parse_bool),
    "returnStackTrace": Binding("return_stack_trace", parse_bool),
    "noFork": Binding("no_fork", parse_bool),
    "tmpFilePrefix": Binding("temp_file_prefix", str),
    "digest": Binding("digest", str),
    "digestMarkLimit": Binding("digest_mark_limit", parse_int),
    "cors": Binding("cors", str),
    "logLevel": Binding("log_level", str),
}


def setter_name(property_name: str) -> str:
    """Name of the setter a key maps to, e.g. 'maxFiles' -> 'setMaxFiles'."""
    return "set" + property_name[:1].upper() + property_name[1:]


def bind(target: ServerConfigBuilder, property_name: str, raw_text: str) -> None:
    """Coerce raw_text and assign it to the field bound to property_name.

    Args:
        target: Builder being assembled
        property_name: Element name from the config file (e.g. "maxFiles")
        raw_text: Element text content

    Raises:
        NoSuchSetterError: No field is bound to property_name
        BindInvocationError: The text doesn't parse or the field rejects the value

    Example:
        >>> builder = ServerConfigBuilder()
        >>> bind(builder, "maxFiles", "500")
        >>> builder.max_files
        500
    """
    setter = setter_name(property_name)
    binding = BINDINGS.get(property_name)
    if binding is None:
        raise NoSuchSetterError(f"Couldn't find setter: {setter}", property_name)

    try:
        value = binding.coerce(raw_text)
        setattr(target, binding.field, value)
    except (ValueError, ValidationError) as e:
        raise BindInvocationError(f"bad parameter {setter}: {e}", property_name) from e

    logger.debug(f"Bound {property_name} -> {binding.field} = {value!r}")
