"""
Host environment and runtime facts shown in the report's environment section.

:class:`HostEnvironment` carries what the hosting application knows about
itself (name, environment, content root). :class:`RuntimeFacts` carries what
the interpreter and operating system report.
"""

import dataclasses as _dataclasses
import importlib.metadata as _metadata
import pathlib as _pathlib
import platform as _platform
import sys as _sys

import confviz.config.settings as settings

UNKNOWN_VERSION = "0.0.0"


def resolve_application_version(application_name: str) -> str:
    """Return the installed version of ``application_name``, or 0.0.0."""
    try:
        return _metadata.version(application_name)
    except (_metadata.PackageNotFoundError, ValueError):
        return UNKNOWN_VERSION


@_dataclasses.dataclass(frozen=True)
class HostEnvironment:
    """
    Facts the hosting application supplies about itself.

    Attributes:
        application_name: Name of the application.
        content_root_path: Directory the application treats as its root.
            Relative file provider paths are shown relative to it.
        environment_name: Deployment environment (Development, Production...).
        application_version: Version string. Looked up from installed
            distribution metadata when not given.
    """

    application_name: str
    content_root_path: _pathlib.Path
    environment_name: str = settings.DEFAULT_ENVIRONMENT_NAME
    application_version: str | None = None

    @property
    def version(self) -> str:
        if self.application_version:
            return self.application_version
        return resolve_application_version(self.application_name)

    @classmethod
    def from_settings(cls, cli_settings: settings.CliSettings) -> "HostEnvironment":
        """Build a host environment from command-line defaults."""
        return cls(
            application_name=cli_settings.resolve_application_name(),
            content_root_path=cli_settings.resolve_content_root(),
            environment_name=cli_settings.environment,
        )


@_dataclasses.dataclass(frozen=True)
class RuntimeFacts:
    """Read-only interpreter and operating system facts."""

    architecture: str
    runtime_identifier: str
    runtime_version: str
    runtime_profile: str
    runtime_description: str
    os_description: str

    @classmethod
    def collect(cls) -> "RuntimeFacts":
        """Gather facts about the running interpreter."""
        return cls(
            architecture=_platform.machine() or "unknown",
            runtime_identifier=_platform.python_implementation(),
            runtime_version=_platform.python_version(),
            runtime_profile=_sys.implementation.cache_tag or "",
            runtime_description=" ".join(_sys.version.split()),
            os_description=_platform.platform(),
        )
