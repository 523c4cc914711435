"""
Layered configuration for confviz.

Providers (files, environment variables, in-memory data, chained roots) are
stacked in a ConfigurationRoot; the last provider defining a key wins.
"""

from confviz.config.providers import (
    ChainedConfigurationProvider,
    ConfigFileError,
    ConfigurationProvider,
    EnvironmentVariablesConfigurationProvider,
    FileConfigurationProvider,
    JsonConfigurationProvider,
    MemoryConfigurationProvider,
    ProviderKind,
    YamlConfigurationProvider,
)
from confviz.config.root import (
    ConfigurationBuilder,
    ConfigurationRoot,
    ConfigurationSection,
)
from confviz.config.settings import CliSettings

__all__ = [
    "ChainedConfigurationProvider",
    "CliSettings",
    "ConfigFileError",
    "ConfigurationBuilder",
    "ConfigurationProvider",
    "ConfigurationRoot",
    "ConfigurationSection",
    "EnvironmentVariablesConfigurationProvider",
    "FileConfigurationProvider",
    "JsonConfigurationProvider",
    "MemoryConfigurationProvider",
    "ProviderKind",
    "YamlConfigurationProvider",
]
