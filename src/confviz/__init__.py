"""
confviz - configuration and host environment diagnostics

Renders which configuration providers an application loaded, which one
supplied each effective key, and what the host runtime looks like.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("confviz")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Confviz Contributors"

from confviz.config import ConfigurationBuilder, ConfigurationRoot  # noqa: E402
from confviz.hosting import HostEnvironment, RuntimeFacts  # noqa: E402
from confviz.report import HostInfo, create_host_info, display_host_info  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigurationBuilder",
    "ConfigurationRoot",
    "HostEnvironment",
    "HostInfo",
    "RuntimeFacts",
    "create_host_info",
    "display_host_info",
]
