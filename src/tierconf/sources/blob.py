"""
File-backed configuration sources.

A BlobSource pairs a loader, which produces raw bytes, with a decoder,
which turns the bytes into a tree:

    source = BlobSource.from_file("config.yaml")
    source.get("db.hosts[0]")

The decoded tree is normalized (string keys only) and held as an
immutable snapshot. reload() re-reads the blob and swaps the snapshot in
a single assignment, so a concurrent get() sees either the old or the new
tree, never a mix.
"""

from __future__ import annotations

import collections.abc as _abc
import json as _json
import logging as _logging
import pathlib as _pathlib
import threading as _threading
import typing as _typing

import toml as _toml
import yaml as _yaml

import tierconf.errors as errors
import tierconf.settings as settings_mod
import tierconf.tree as tree

_logger = _logging.getLogger(__name__)


# =============================================================================
# Loaders
# =============================================================================


class Loader(_typing.Protocol):
    """Produces the raw bytes of a config blob."""

    name: str

    def load(self) -> bytes: ...


class FileLoader:
    """Loads a blob from a file on each call."""

    def __init__(self, path: _pathlib.Path | str) -> None:
        self.path = _pathlib.Path(path)
        self.name = str(self.path)

    def load(self) -> bytes:
        """
        Read the file.

        Raises:
            ConfigFileError: If the file cannot be read.
        """
        try:
            return self.path.read_bytes()
        except FileNotFoundError as e:
            raise errors.ConfigFileError(self.path, "file not found") from e
        except PermissionError as e:
            raise errors.ConfigFileError(self.path, f"permission denied: {e}") from e
        except OSError as e:
            raise errors.ConfigFileError(self.path, f"cannot read file: {e}") from e


class BytesLoader:
    """Loads a blob held in memory."""

    def __init__(self, data: bytes | str, name: str = "<bytes>") -> None:
        self.data = data.encode("utf-8") if isinstance(data, str) else data
        self.name = name

    def load(self) -> bytes:
        return self.data


# =============================================================================
# Decoders
# =============================================================================


class Decoder(_typing.Protocol):
    """Decodes raw bytes into a tree."""

    def decode(self, data: bytes) -> _typing.Any: ...


class JsonDecoder:
    def decode(self, data: bytes) -> _typing.Any:
        try:
            return _json.loads(data)
        except ValueError as e:
            raise errors.DecodeError("JSON", str(e)) from e


class YamlDecoder:
    def decode(self, data: bytes) -> _typing.Any:
        try:
            return _yaml.safe_load(data)
        except _yaml.YAMLError as e:
            raise errors.DecodeError("YAML", str(e)) from e


class TomlDecoder:
    def decode(self, data: bytes) -> _typing.Any:
        try:
            return _toml.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, _toml.TomlDecodeError) as e:
            raise errors.DecodeError("TOML", str(e)) from e


_DECODERS_BY_SUFFIX: dict[str, type[Decoder]] = {
    ".json": JsonDecoder,
    ".yaml": YamlDecoder,
    ".yml": YamlDecoder,
    ".toml": TomlDecoder,
}


def decoder_for_path(path: _pathlib.Path | str) -> Decoder:
    """
    Pick a decoder from a file's suffix.

    Raises:
        UnsupportedFormatError: If no decoder handles the suffix.
    """
    path = _pathlib.Path(path)
    decoder_cls = _DECODERS_BY_SUFFIX.get(path.suffix.lower())
    if decoder_cls is None:
        raise errors.UnsupportedFormatError(path, f"unsupported format {path.suffix!r}")
    return decoder_cls()


# =============================================================================
# Source
# =============================================================================


class BlobSource:
    """Getter over a decoded config blob."""

    def __init__(
        self,
        loader: Loader,
        decoder: Decoder,
        *,
        separator: str | None = None,
        settings: settings_mod.Settings | None = None,
    ) -> None:
        """
        Initialize the source and perform the initial load.

        Args:
            loader: Produces the raw bytes.
            decoder: Decodes the bytes into a tree.
            separator: Tier separator. Defaults to ``settings.separator``.
            settings: Library settings providing defaults.

        Raises:
            ConfigFileError: If the blob cannot be loaded or decoded, or its
                root is not a mapping.
        """
        settings = settings or settings_mod.Settings()
        self._loader = loader
        self._decoder = decoder
        self._separator = settings.separator if separator is None else separator
        self._lock = _threading.Lock()
        self._tree = self._load()

    @classmethod
    def from_file(cls, path: _pathlib.Path | str, **kwargs: _typing.Any) -> BlobSource:
        """Create a source for a file, choosing the decoder from its suffix."""
        return cls(FileLoader(path), decoder_for_path(path), **kwargs)

    @property
    def name(self) -> str:
        """Name of the underlying blob, for diagnostics."""
        return self._loader.name

    @property
    def tree(self) -> _abc.Mapping[str, _typing.Any]:
        """The current snapshot."""
        return self._tree

    def _load(self) -> dict[str, _typing.Any]:
        data = self._loader.load()
        try:
            decoded = self._decoder.decode(data)
        except errors.DecodeError as e:
            raise errors.ConfigFileError(self._loader.name, str(e)) from e

        if decoded is None:
            decoded = {}
        if not isinstance(decoded, _abc.Mapping):
            raise errors.ConfigFileError(
                self._loader.name,
                f"config must be a mapping, got {type(decoded).__name__}",
            )
        _logger.debug("Loaded config from %s", self._loader.name)
        return tree.normalize(decoded)

    def reload(self) -> bool:
        """
        Re-read the blob and replace the snapshot if it changed.

        Returns:
            True if the content changed.

        Raises:
            ConfigFileError: If the blob can no longer be loaded. The
                previous snapshot stays in place.
        """
        with self._lock:
            updated = self._load()
            if updated == self._tree:
                return False
            self._tree = updated
        _logger.info("Reloaded config from %s", self._loader.name)
        return True

    def get(self, key: str) -> tuple[_typing.Any, bool]:
        return tree.resolve(self._tree, key, self._separator)
