"""
Configuration providers.

A provider is one ordered source of flat ``key -> string`` data. Providers
are stacked inside a :class:`~confviz.config.root.ConfigurationRoot`; for
any key the last provider that defines it wins.

Provider kinds form a closed set (:class:`ProviderKind`):

- FILE: JSON or YAML files (``JsonConfigurationProvider``,
  ``YamlConfigurationProvider``)
- ENVIRONMENT: process environment variables, optionally filtered by prefix
- CHAINED: another whole configuration object
- GENERIC: anything else (in-memory collections, custom providers)

Each kind exposes its metadata through explicit capabilities (``prefix``,
``get_inner_providers()``, ``full_path``) so report code never has to dig
into private state.
"""

import abc as _abc
import collections.abc as _cabc
import enum as _enum
import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import confviz.config.keys as keys

_logger = _logging.getLogger(__name__)

# Environment variable names use a double underscore for the key delimiter
ENV_NESTED_DELIMITER = "__"


class ProviderKind(_enum.Enum):
    """Closed set of provider kinds the report knows how to describe."""

    FILE = "file"
    ENVIRONMENT = "environment"
    CHAINED = "chained"
    GENERIC = "generic"


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


class Configuration(_typing.Protocol):
    """Read-only view shared by configuration roots and sections."""

    def get(self, key: str) -> str | None: ...

    def get_section(self, key: str) -> _typing.Any: ...

    def get_children(self) -> list[_typing.Any]: ...


def _scalar_to_string(value: _typing.Any) -> str:
    """Convert a parsed scalar to its configuration string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_data(
    data: _typing.Any,
    parent_path: str | None = None,
) -> _cabc.Iterator[tuple[str, str]]:
    """
    Flatten nested mappings and sequences into colon-delimited keys.

    Sequences use their item index as the segment (``Hosts:0``, ``Hosts:1``).
    Empty mappings and sequences produce no keys.

    Example:
        >>> dict(flatten_data({"Db": {"Port": 5432, "Hosts": ["a", "b"]}}))
        {'Db:Port': '5432', 'Db:Hosts:0': 'a', 'Db:Hosts:1': 'b'}
    """
    if isinstance(data, _cabc.Mapping):
        for key, value in data.items():
            yield from flatten_data(value, keys.combine_path(parent_path, str(key)))
    elif isinstance(data, (list, tuple)):
        for index, value in enumerate(data):
            yield from flatten_data(value, keys.combine_path(parent_path, str(index)))
    elif parent_path:
        yield parent_path, _scalar_to_string(data)


class ConfigurationProvider(_abc.ABC):
    """
    Base class for all providers.

    Data is stored case-insensitively; the first casing seen for a key is
    kept for display.
    """

    kind: _typing.ClassVar[ProviderKind] = ProviderKind.GENERIC

    def __init__(self) -> None:
        self._data: dict[str, tuple[str, str]] = {}

    @_abc.abstractmethod
    def load(self) -> None:
        """Populate the provider's data."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value. Used while loading."""
        folded = keys.normalize_key(key)
        existing = self._data.get(folded)
        self._data[folded] = (existing[0] if existing else key, value)

    def try_get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if this provider lacks it."""
        entry = self._data.get(keys.normalize_key(key))
        return entry[1] if entry is not None else None

    def get_child_keys(self, parent_path: str | None = None) -> list[str]:
        """Return immediate child segments below ``parent_path``."""
        return keys.child_segments(
            (key for key, _ in self._data.values()),
            parent_path,
        )

    @property
    def display_name(self) -> str:
        """Type name shown in reports."""
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={len(self._data)})"


class MemoryConfigurationProvider(ConfigurationProvider):
    """Provider backed by an in-memory dict (nested dicts are flattened)."""

    def __init__(self, data: _cabc.Mapping[str, _typing.Any] | None = None) -> None:
        super().__init__()
        self._initial = dict(data or {})

    def load(self) -> None:
        self._data.clear()
        for key, value in flatten_data(self._initial):
            self.set(key, value)


class FileConfigurationProvider(ConfigurationProvider):
    """
    Base class for providers that read a single file.

    Args:
        path: File path as registered (usually relative).
        base_path: Directory relative paths are resolved against.
        optional: If True, a missing file loads as empty instead of failing.
    """

    kind = ProviderKind.FILE

    def __init__(
        self,
        path: str | _pathlib.Path,
        *,
        base_path: _pathlib.Path | None = None,
        optional: bool = False,
    ) -> None:
        super().__init__()
        self.path = _pathlib.Path(path)
        self.base_path = base_path if base_path is not None else _pathlib.Path.cwd()
        self.optional = optional

    @property
    def full_path(self) -> _pathlib.Path:
        """Absolute path of the backing file."""
        if self.path.is_absolute():
            return self.path
        return (self.base_path / self.path).absolute()

    @property
    def exists(self) -> bool:
        """Whether the backing file exists right now."""
        return self.full_path.is_file()

    @_abc.abstractmethod
    def parse(self, content: str) -> _typing.Any:
        """Parse file content into nested Python data."""
        ...

    def load(self) -> None:
        """
        Read and flatten the file.

        Raises:
            ConfigFileError: If a required file is missing, or the file cannot
                be read, is malformed, or is not a mapping at the top level.
        """
        self._data.clear()
        path = self.full_path

        if not path.exists():
            if self.optional:
                _logger.debug("Optional config file not found: %s", path)
                return
            raise ConfigFileError(path, "file not found and not optional")

        try:
            content = path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ConfigFileError(path, f"permission denied: {e}") from e
        except OSError as e:
            raise ConfigFileError(path, f"cannot read file: {e}") from e

        parsed = self.parse(content)

        # Handle empty file
        if parsed is None:
            return

        if not isinstance(parsed, dict):
            type_name = type(parsed).__name__
            raise ConfigFileError(
                path,
                f"config must be a mapping at the top level, got {type_name}",
            )

        for key, value in flatten_data(parsed):
            self.set(key, value)
        _logger.debug("Loaded %d keys from %s", len(self._data), path)


class JsonConfigurationProvider(FileConfigurationProvider):
    """Provider reading a JSON file."""

    def parse(self, content: str) -> _typing.Any:
        if not content.strip():
            return None
        try:
            return _json.loads(content)
        except ValueError as e:
            raise ConfigFileError(self.full_path, f"invalid JSON: {e}") from e


class YamlConfigurationProvider(FileConfigurationProvider):
    """Provider reading a YAML file with the safe loader."""

    def parse(self, content: str) -> _typing.Any:
        try:
            return _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(self.full_path, f"invalid YAML: {e}") from e


class EnvironmentVariablesConfigurationProvider(ConfigurationProvider):
    """
    Provider reading environment variables.

    Only variables whose name starts with ``prefix`` (case-insensitive) are
    kept, with the prefix stripped. ``__`` in a name becomes the key
    delimiter, so ``APP_Db__Port`` with prefix ``APP_`` maps to ``Db:Port``.

    An empty prefix means the whole process environment.

    Args:
        prefix: Variable name prefix, or None for all variables.
        environ: Mapping to read instead of ``os.environ``.
    """

    kind = ProviderKind.ENVIRONMENT

    def __init__(
        self,
        prefix: str | None = None,
        *,
        environ: _cabc.Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self._prefix = prefix or ""
        self._environ = environ

    @property
    def prefix(self) -> str:
        """Variable name prefix; empty for the whole process environment."""
        return self._prefix

    @property
    def is_global(self) -> bool:
        """True when this provider exposes the unfiltered process environment."""
        return not self._prefix.strip()

    def load(self) -> None:
        self._data.clear()
        environ = self._environ if self._environ is not None else _os.environ
        folded_prefix = self._prefix.casefold()
        for name, value in environ.items():
            if not name.casefold().startswith(folded_prefix):
                continue
            key = name[len(self._prefix):].replace(ENV_NESTED_DELIMITER, keys.KEY_DELIMITER)
            if key:
                self.set(key, value)


class ChainedConfigurationProvider(ConfigurationProvider):
    """
    Provider backed by another whole configuration object.

    When the wrapped object is a configuration root its providers can be
    listed with :meth:`get_inner_providers`; any other configuration object
    (a section, a custom implementation) is opaque but still answers lookups.
    """

    kind = ProviderKind.CHAINED

    def __init__(self, configuration: Configuration) -> None:
        import confviz.config.root as root

        super().__init__()
        self._configuration = configuration
        self._inner_root = (
            configuration if isinstance(configuration, root.ConfigurationRoot) else None
        )

    def load(self) -> None:
        """Nothing to load; the wrapped configuration is already built."""

    def try_get(self, key: str) -> str | None:
        return self._configuration.get(key)

    def get_child_keys(self, parent_path: str | None = None) -> list[str]:
        if parent_path:
            section = self._configuration.get_section(parent_path)
            children = section.get_children()
        else:
            children = self._configuration.get_children()
        return [child.key for child in children]

    def get_inner_providers(self) -> list[ConfigurationProvider] | None:
        """
        Return the providers of the wrapped root, in resolution order.

        Returns:
            The inner providers, or None if the wrapped object does not
            expose a provider list.
        """
        if self._inner_root is None:
            return None
        return list(self._inner_root.providers)
