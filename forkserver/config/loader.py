"""Configuration loading from XML config files.

Expected document shape:

    <properties>
      <server>
        <host>localhost</host>
        <port>9998</port>
        <taskTimeoutMillis>120000</taskTimeoutMillis>
        <endpoints>
          <endpoint>tika</endpoint>
        </endpoints>
        <forkedJVMArgs>
          <arg>-Xmx1g</arg>
        </forkedJVMArgs>
      </server>
    </properties>

Contract:
- Inputs: Config file paths, binary streams or parsed root elements
- Outputs: Validated ServerConfigBuilder objects
- Side Effects: Reads the config file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from .binder import bind
from .errors import ConfigLoadError
from .errors import UnexpectedRootError
from .settings import ServerConfigBuilder
from .validation import validate_consistency

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "properties"
SERVER_ELEMENT = "server"


def make_xml_parser() -> etree.XMLParser:
    """Create a parser that never touches the network or expands entities."""
    return etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local_name(node: etree._Element) -> str | None:
    # Comments, PIs and entities have non-string tags
    if not isinstance(node.tag, str):
        return None
    return etree.QName(node).localname


def _text_content(node: etree._Element) -> str:
    return "".join(node.itertext()).strip()


def _load_string_list(item_name: str, parent: etree._Element) -> list[str]:
    return [_text_content(child) for child in parent if _local_name(child) == item_name]


def _load_server_section(server: etree._Element, config: ServerConfigBuilder) -> None:
    for param in server:
        name = _local_name(param)
        if name is None:
            continue

        if name == "endpoints":
            config.endpoints.extend(_load_string_list("endpoint", param))
        elif name == "forkedJVMArgs":
            config.forked_jvm_args.extend(_load_string_list("arg", param))
        elif name == "port":
            # Kept as text; validation decides whether it becomes the numeric port
            config.port_string = _text_content(param)
        else:
            text = _text_content(param)
            if text:
                bind(config, name, text)


def load_document(root: etree._Element) -> ServerConfigBuilder:
    """Build configuration from a parsed config document.

    Args:
        root: Root element of the document

    Returns:
        Validated builder with the file's settings applied over the defaults

    Raises:
        UnexpectedRootError: Root element is not <properties>
        BindError: A server setting has no matching field or a bad value
        MissingHostError: host ended up unset
    """
    if _local_name(root) != ROOT_ELEMENT:
        raise UnexpectedRootError(f"expect settings as root node, got <{_local_name(root)}>")

    config = ServerConfigBuilder()
    for child in root:
        if _local_name(child) == SERVER_ELEMENT:
            _load_server_section(child, config)

    validate_consistency(config)
    return config


def load_stream(stream: BinaryIO) -> ServerConfigBuilder:
    """Parse a config document from a binary stream.

    Raises:
        ConfigLoadError: The stream isn't well-formed XML
    """
    try:
        tree = etree.parse(stream, make_xml_parser())
    except etree.XMLSyntaxError as e:
        raise ConfigLoadError(f"Invalid XML in configuration file: {e}") from e
    return load_document(tree.getroot())


def load_path(path: Path) -> ServerConfigBuilder:
    """Load configuration from a config file.

    Args:
        path: Path to the XML config file

    Returns:
        Validated builder

    Raises:
        ConfigLoadError: File can't be opened or parsed
    """
    logger.info(f"Loading server configuration from {path}")
    try:
        with path.open("rb") as f:
            return load_stream(f)
    except OSError as e:
        raise ConfigLoadError(f"Failed to read configuration file {path}: {e}") from e
