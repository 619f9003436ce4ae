"""
The Config facade.

Config wraps a getter (typically an Overlay of sources) and presents the
merged configuration through typed accessors and struct unmarshalling:

    cfg = tierconf.Config(
        sources.Overlay(
            sources.EnvSource("MYAPP_"),
            sources.BlobSource.from_file("config.yaml"),
        ),
        default=sources.DictSource({"db": {"port": 5432}}),
    )
    port = cfg.get("db.port").as_int()
    cfg.unmarshal("db", db_settings)
"""

from __future__ import annotations

import logging as _logging
import threading as _threading
import typing as _typing

import tierconf.coerce as coerce
import tierconf.errors as errors
import tierconf.keys as keys
import tierconf.settings as settings_mod
import tierconf.sources as sources
import tierconf.tree as tree
import tierconf.value as value_mod

_logger = _logging.getLogger(__name__)


class Config:
    """
    Typed access to configuration provided by a getter.

    Lookups try the main getter first, then the default getter. Sub-configs
    created with get_config() share their parent's lock, so unmarshalling
    anywhere in the tree is serialized against reload().
    """

    def __init__(
        self,
        getter: sources.Getter | None = None,
        *,
        default: sources.Getter | None = None,
        separator: str | None = None,
        tag: str | None = None,
        error_handler: value_mod.ErrorHandler | None = None,
        settings: settings_mod.Settings | None = None,
    ) -> None:
        """
        Initialize the config.

        Args:
            getter: Main source of config values.
            default: Source consulted when the main getter misses.
            separator: Tier separator used to build sub-config keys.
                Defaults to ``settings.separator``.
            tag: Field metadata key for struct key overrides. Defaults to
                ``settings.tag``.
            error_handler: Receives NotFoundError and conversion errors.
                Returning None suppresses the error; returning an
                exception makes get() raise it.
            settings: Library settings providing defaults.
        """
        settings = settings or settings_mod.Settings()
        self._getter = getter
        self._default = default
        self._separator = settings.separator if separator is None else separator
        self._tag = tag or settings.tag
        self._error_handler = error_handler
        self._path = ""
        self._lock = _threading.RLock()

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def tag(self) -> str:
        return self._tag

    def _derive(
        self,
        getter: sources.Getter | None,
        default: sources.Getter | None,
        path: str,
    ) -> Config:
        sub = Config.__new__(Config)
        sub._getter = getter
        sub._default = default
        sub._separator = self._separator
        sub._tag = self._tag
        sub._error_handler = self._error_handler
        sub._path = path
        sub._lock = self._lock
        return sub

    def _join(self, node: str, key: str) -> str:
        return f"{node}{self._separator}{key}" if node else key

    # =========================================================================
    # Getter management
    # =========================================================================

    def append(self, getter: sources.Getter | None) -> None:
        """Add a getter searched after the existing ones (but before default)."""
        if getter is not None:
            self._getter = sources.Overlay(self._getter, getter)

    def insert(self, getter: sources.Getter | None) -> None:
        """Add a getter searched before the existing ones."""
        if getter is not None:
            self._getter = sources.Overlay(getter, self._getter)

    def reload(self) -> bool:
        """
        Reload all reloadable sources.

        Holds the unmarshal lock, so an unmarshal never observes a mix of
        old and new snapshots.

        Returns:
            True if any source changed.
        """
        with self._lock:
            changed = sources.reload_getter(self._getter)
            changed = sources.reload_getter(self._default) or changed
        if changed:
            _logger.info("Configuration changed on reload")
        return changed

    # =========================================================================
    # Lookup
    # =========================================================================

    def _lookup(self, key: str) -> tree.Lookup:
        if self._getter is not None:
            value, found = self._getter.get(key)
            if found:
                return value, True
        if self._default is not None:
            return self._default.get(key)
        return tree.NOT_FOUND

    def get(self, key: str) -> value_mod.Value:
        """
        Get the value for a leaf key.

        Raises:
            NotFoundError: If no getter has the key (unless the error
                handler suppresses it, in which case a Value wrapping None
                is returned).
        """
        raw, found = self._lookup(key)
        if not found:
            error: Exception | None = errors.NotFoundError(key)
            if self._error_handler is not None:
                error = self._error_handler(error)
            if error is not None:
                raise error
        return value_mod.Value(raw, self._error_handler)

    def must_get(self, key: str) -> value_mod.Value:
        """Get the value for a key, raising NotFoundError even with an error handler."""
        raw, found = self._lookup(key)
        if not found:
            raise errors.NotFoundError(key)
        return value_mod.Value(raw, self._error_handler)

    def get_config(self, node: str) -> Config:
        """
        Get a Config rooted at a node of this config.

        ``cfg.get_config("db").get("port")`` reads ``db.port``.
        """
        if not node:
            return self._derive(self._getter, self._default, self._path)
        replacer = keys.prefix_replacer(node + self._separator)
        getter = sources.Mapped(replacer, self._getter) if self._getter is not None else None
        default = sources.Mapped(replacer, self._default) if self._default is not None else None
        return self._derive(getter, default, self._join(self._path, node))

    # =========================================================================
    # Unmarshalling
    # =========================================================================

    def unmarshal(self, node: str, obj: _typing.Any) -> None:
        """
        Populate a dataclass or pydantic instance from a section of config.

        Field keys default to the field name with a lower-cased first
        character, overridable through field metadata under ``tag``.
        Values are converted to the field types with range checks. Fields
        without config keep their values; config without fields is
        ignored. Nested struct fields recurse; ``list[Struct]`` fields are
        sized by the ``key[]`` length and populated from ``key[i]``.

        All fields are attempted. The first failure is raised at the end.

        Args:
            node: Section of the config to read ("" for the root).
            obj: Instance to populate in place.

        Raises:
            InvalidStructError: If obj is not a mutable struct instance, or
                if a nested struct cannot be created and no earlier field
                failed.
            UnmarshalError: Wrapping the first conversion error, or the
                first field whose type has no converter.
        """
        with self._lock:
            self._unmarshal(node, obj)

    def _unmarshal(self, node: str, obj: _typing.Any) -> int:
        """Populate obj, returning the number of keys found."""
        coerce.check_destination(obj)
        node_cfg = self.get_config(node)
        found_count = 0
        first_error: errors.ConfigError | None = None

        def record(error: errors.ConfigError) -> None:
            nonlocal first_error
            if first_error is None:
                first_error = error

        for field in coerce.field_table(type(obj), self._tag):
            if field.struct_type is not None:
                nested = getattr(obj, field.name, None)
                created = not isinstance(nested, field.struct_type)
                try:
                    if created:
                        nested = coerce.new_instance(field.struct_type)
                    count = node_cfg._unmarshal(field.key, nested)
                except errors.ConfigError as e:
                    record(e)
                    count = 1 if isinstance(nested, field.struct_type) else 0
                if count:
                    found_count += count
                    if created:
                        setattr(obj, field.name, nested)
                continue

            if field.element_struct_type is not None:
                try:
                    items = node_cfg._unmarshal_list(field.key, field.element_struct_type)
                except errors.ConfigError as e:
                    items = None
                    record(e)
                if items is not None:
                    found_count += 1
                    setattr(obj, field.name, items)
                continue

            raw, found = node_cfg._lookup(field.key)
            if not found:
                continue
            found_count += 1
            try:
                setattr(obj, field.name, coerce.convert_to(raw, field.annotation, tag=self._tag))
            except errors.ConfigError as e:
                key = self._join(node_cfg._path, field.key)
                _logger.debug("Cannot unmarshal %s: %s", key, e)
                wrapped = errors.UnmarshalError(key, e)
                wrapped.__cause__ = e
                record(wrapped)

        if first_error is not None:
            raise first_error
        return found_count

    def _unmarshal_list(self, key: str, cls: type) -> list[_typing.Any] | None:
        raw_length, found = self._lookup(key + "[]")
        if not found:
            return None
        length = coerce.to_int(raw_length)
        items = []
        first_error: errors.ConfigError | None = None
        for index in range(length):
            item = None
            try:
                item = coerce.new_instance(cls)
                self._unmarshal(f"{key}[{index}]", item)
            except errors.ConfigError as e:
                if first_error is None:
                    first_error = e
            if item is not None:
                items.append(item)
        if first_error is not None:
            raise first_error
        return items

    def unmarshal_to_dict(self, node: str, template: dict[str, _typing.Any]) -> None:
        """
        Populate a template dict from a section of config.

        The template's keys select the config fields. ``None`` entries
        receive the raw value, dict entries recurse as nested sections, a
        list holding one dict template is populated as an array of
        objects, and any other entry is converted to the type of its
        current value.

        Raises:
            UnmarshalError: Wrapping the first conversion error.
        """
        with self._lock:
            self._unmarshal_to_dict(node, template)

    def _unmarshal_to_dict(self, node: str, template: dict[str, _typing.Any]) -> None:
        node_cfg = self.get_config(node)
        first_error: errors.ConfigError | None = None
        for key, current in list(template.items()):
            try:
                if isinstance(current, dict):
                    node_cfg._unmarshal_to_dict(key, current)
                elif _is_object_array_template(current):
                    items = node_cfg._unmarshal_dict_list(key, current[0])
                    if items is not None:
                        template[key] = items
                else:
                    raw, found = node_cfg._lookup(key)
                    if not found:
                        continue
                    if current is None:
                        template[key] = raw
                    else:
                        template[key] = node_cfg._convert_like(key, raw, current)
            except errors.ConfigError as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def _convert_like(self, key: str, raw: _typing.Any, current: _typing.Any) -> _typing.Any:
        try:
            return coerce.convert_to(raw, type(current), tag=self._tag)
        except errors.ConfigError as e:
            wrapped = errors.UnmarshalError(self._join(self._path, key), e)
            raise wrapped from e

    def _unmarshal_dict_list(
        self, key: str, item_template: dict[str, _typing.Any]
    ) -> list[dict[str, _typing.Any]] | None:
        raw_length, found = self._lookup(key + "[]")
        if not found:
            return None
        items = []
        first_error: errors.ConfigError | None = None
        for index in range(coerce.to_int(raw_length)):
            item = dict(item_template)
            try:
                self._unmarshal_to_dict(f"{key}[{index}]", item)
            except errors.ConfigError as e:
                if first_error is None:
                    first_error = e
            items.append(item)
        if first_error is not None:
            raise first_error
        return items


def _is_object_array_template(value: _typing.Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and isinstance(value[0], dict)
