"""
Configuration roots, sections and the builder that assembles them.

A :class:`ConfigurationRoot` holds providers in registration order. Lookups
walk the providers from last to first, so later providers override earlier
ones:

    >>> root = (
    ...     ConfigurationBuilder()
    ...     .add_in_memory_collection({"Db": {"Host": "localhost"}})
    ...     .add_in_memory_collection({"Db": {"Host": "db.internal"}})
    ...     .build()
    ... )
    >>> root["Db:Host"]
    'db.internal'
"""

import collections.abc as _cabc
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import confviz.config.keys as keys
import confviz.config.providers as providers

_logger = _logging.getLogger(__name__)

# File suffixes understood by ConfigurationBuilder.add_file
_FILE_PROVIDERS: dict[str, type[providers.FileConfigurationProvider]] = {
    ".json": providers.JsonConfigurationProvider,
    ".yaml": providers.YamlConfigurationProvider,
    ".yml": providers.YamlConfigurationProvider,
}


class ConfigurationSection:
    """A view of one key path inside a configuration root."""

    def __init__(self, root: "ConfigurationRoot", path: str) -> None:
        self._root = root
        self._path = path

    @property
    def path(self) -> str:
        """Full key path of this section."""
        return self._path

    @property
    def key(self) -> str:
        """Last segment of the path."""
        return keys.get_section_key(self._path)

    @property
    def value(self) -> str | None:
        """Effective value at this path, if any."""
        return self._root.get(self._path)

    def get(self, key: str) -> str | None:
        return self._root.get(keys.combine_path(self._path, key))

    def __getitem__(self, key: str) -> str | None:
        return self.get(key)

    def get_section(self, key: str) -> "ConfigurationSection":
        return ConfigurationSection(self._root, keys.combine_path(self._path, key))

    def get_children(self) -> list["ConfigurationSection"]:
        return self._root.get_children_of(self._path)

    def exists(self) -> bool:
        """True if the section has a value or any children."""
        return self.value is not None or bool(self.get_children())

    def __repr__(self) -> str:
        return f"ConfigurationSection(path={self._path!r})"


class ConfigurationRoot:
    """
    Ordered stack of providers with last-wins lookup.

    Providers are loaded when the root is created.
    """

    def __init__(
        self,
        configuration_providers: _cabc.Iterable[providers.ConfigurationProvider],
    ) -> None:
        self._providers = list(configuration_providers)
        for provider in self._providers:
            provider.load()

    @property
    def providers(self) -> tuple[providers.ConfigurationProvider, ...]:
        """Providers in registration order (lowest precedence first)."""
        return tuple(self._providers)

    def get(self, key: str) -> str | None:
        """Return the effective value for ``key``, or None."""
        for provider in reversed(self._providers):
            value = provider.try_get(key)
            if value is not None:
                return value
        return None

    def __getitem__(self, key: str) -> str | None:
        return self.get(key)

    def get_section(self, key: str) -> ConfigurationSection:
        return ConfigurationSection(self, key)

    def get_children(self) -> list[ConfigurationSection]:
        """Return the top-level sections."""
        return self.get_children_of(None)

    def get_children_of(self, path: str | None) -> list[ConfigurationSection]:
        """
        Return the immediate child sections below ``path``.

        Child names are merged across all providers (case-insensitive) and
        sorted case-insensitively.
        """
        segments = keys.child_segments(
            (
                keys.combine_path(path, segment)
                for provider in self._providers
                for segment in provider.get_child_keys(path)
            ),
            path,
        )
        segments.sort(key=keys.normalize_key)
        return [ConfigurationSection(self, keys.combine_path(path, s)) for s in segments]

    def __repr__(self) -> str:
        return f"ConfigurationRoot(providers={len(self._providers)})"


class ConfigurationBuilder:
    """
    Fluent builder for :class:`ConfigurationRoot`.

    Providers are added in precedence order: the last one added wins.
    Relative file paths are resolved against the base path in effect when
    the file is added.
    """

    def __init__(self) -> None:
        self._providers: list[providers.ConfigurationProvider] = []
        self._base_path = _pathlib.Path.cwd()

    @property
    def base_path(self) -> _pathlib.Path:
        return self._base_path

    def set_base_path(self, path: str | _pathlib.Path) -> "ConfigurationBuilder":
        self._base_path = _pathlib.Path(path)
        return self

    def add(self, provider: providers.ConfigurationProvider) -> "ConfigurationBuilder":
        self._providers.append(provider)
        return self

    def add_in_memory_collection(
        self,
        data: _cabc.Mapping[str, _typing.Any] | None = None,
    ) -> "ConfigurationBuilder":
        return self.add(providers.MemoryConfigurationProvider(data))

    def add_json_file(
        self,
        path: str | _pathlib.Path,
        *,
        optional: bool = False,
    ) -> "ConfigurationBuilder":
        return self.add(
            providers.JsonConfigurationProvider(
                path, base_path=self._base_path, optional=optional
            )
        )

    def add_yaml_file(
        self,
        path: str | _pathlib.Path,
        *,
        optional: bool = False,
    ) -> "ConfigurationBuilder":
        return self.add(
            providers.YamlConfigurationProvider(
                path, base_path=self._base_path, optional=optional
            )
        )

    def add_file(
        self,
        path: str | _pathlib.Path,
        *,
        optional: bool = False,
    ) -> "ConfigurationBuilder":
        """
        Add a JSON or YAML file, chosen by suffix.

        Raises:
            ValueError: If the suffix is not recognised.
        """
        suffix = _pathlib.Path(path).suffix.lower()
        provider_cls = _FILE_PROVIDERS.get(suffix)
        if provider_cls is None:
            supported = ", ".join(sorted(_FILE_PROVIDERS))
            raise ValueError(
                f"Unsupported config file type '{suffix}' for {path} "
                f"(supported: {supported})"
            )
        return self.add(provider_cls(path, base_path=self._base_path, optional=optional))

    def add_environment_variables(
        self,
        prefix: str | None = None,
        *,
        environ: _cabc.Mapping[str, str] | None = None,
    ) -> "ConfigurationBuilder":
        return self.add(
            providers.EnvironmentVariablesConfigurationProvider(prefix, environ=environ)
        )

    def add_configuration(
        self,
        configuration: providers.Configuration,
    ) -> "ConfigurationBuilder":
        """Chain another configuration object as a single provider."""
        return self.add(providers.ChainedConfigurationProvider(configuration))

    def build(self) -> ConfigurationRoot:
        """
        Load every provider and return the root.

        Raises:
            ConfigFileError: If a file provider fails to load.
        """
        _logger.debug("Building configuration from %d providers", len(self._providers))
        return ConfigurationRoot(self._providers)
