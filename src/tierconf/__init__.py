"""
tierconf - hierarchical configuration from layered sources.

Configuration is read from sources (environment variables, YAML/JSON/TOML
files, in-memory dicts) stacked in priority order, addressed with tiered
keys such as ``db.hosts[0].port``, and converted to the types the
application asks for with range checking.

Example:
    >>> import tierconf
    >>> import tierconf.sources as sources
    >>> cfg = tierconf.Config(sources.DictSource({"db": {"port": "5432"}}))
    >>> cfg.get("db.port").as_int()
    5432
"""

from tierconf.config import Config
from tierconf.errors import (
    ConfigError,
    ConfigFileError,
    ConversionError,
    ConversionOverflowError,
    ConversionParseError,
    ConversionTypeError,
    DecodeError,
    InvalidArgumentError,
    InvalidStructError,
    NotFoundError,
    UnmarshalError,
    UnsupportedFormatError,
    UnsupportedTargetError,
)
from tierconf.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Kind,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from tierconf.settings import Settings
from tierconf.value import ErrorHandler, Value

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConfigError",
    "ConfigFileError",
    "ConversionError",
    "ConversionOverflowError",
    "ConversionParseError",
    "ConversionTypeError",
    "DecodeError",
    "ErrorHandler",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidArgumentError",
    "InvalidStructError",
    "Kind",
    "NotFoundError",
    "Settings",
    "UnmarshalError",
    "UnsupportedFormatError",
    "UnsupportedTargetError",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Value",
    "__version__",
]
