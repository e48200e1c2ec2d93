"""Configuration module for forkserver.

Assembles the server configuration from defaults, an XML config file and
command-line overrides.

Public Interface:
    - ServerConfig: Frozen configuration model
    - ServerConfigBuilder: Mutable model used during assembly
    - assemble: Assemble configuration from parsed command-line options
    - load_path: Load configuration from an XML config file
    - bind: Apply one config key/value to a builder
    - validate_consistency: Post-merge consistency checks
"""

from .assembler import apply_overrides
from .assembler import assemble
from .binder import bind
from .errors import BindError
from .errors import BindInvocationError
from .errors import ConfigLoadError
from .errors import InvalidConfigError
from .errors import MissingHostError
from .errors import NoSuchSetterError
from .errors import ServerConfigError
from .errors import UnexpectedRootError
from .loader import load_path
from .settings import ServerConfig
from .settings import ServerConfigBuilder
from .validation import validate_consistency

__all__ = [
    "ServerConfig",
    "ServerConfigBuilder",
    "assemble",
    "apply_overrides",
    "load_path",
    "bind",
    "validate_consistency",
    "ServerConfigError",
    "ConfigLoadError",
    "UnexpectedRootError",
    "BindError",
    "NoSuchSetterError",
    "BindInvocationError",
    "InvalidConfigError",
    "MissingHostError",
]
