"""
Configuration sources.

Each source exposes the Getter protocol, ``get(key) -> (value, found)``,
over a tree it builds once (or on reload). Sources delegate key
resolution to tierconf.tree and never convert types.
"""

from tierconf.sources._base import Getter, GetterFunc, Reloadable, reload_getter
from tierconf.sources.blob import (
    BlobSource,
    BytesLoader,
    FileLoader,
    JsonDecoder,
    TomlDecoder,
    YamlDecoder,
    decoder_for_path,
)
from tierconf.sources.compose import (
    Alias,
    Aliased,
    Mapped,
    Overlay,
    Prefixed,
    RegexAlias,
    Stack,
)
from tierconf.sources.env import EnvSource, split_list
from tierconf.sources.memory import DictSource

__all__ = [
    "Alias",
    "Aliased",
    "BlobSource",
    "BytesLoader",
    "DictSource",
    "EnvSource",
    "FileLoader",
    "Getter",
    "GetterFunc",
    "JsonDecoder",
    "Mapped",
    "Overlay",
    "Prefixed",
    "RegexAlias",
    "Reloadable",
    "Stack",
    "TomlDecoder",
    "YamlDecoder",
    "decoder_for_path",
    "reload_getter",
    "split_list",
]
