"""
Command-line defaults loaded with pydantic-settings.

These settings only describe how the ``confviz`` command presents a report
(host facts it cannot discover, console width, colour). What the report
shows is configured through the ``HostInfo`` section of the inspected
configuration itself, see :mod:`confviz.report.options`.

Environment variables (prefix ``CONFVIZ_``):
  CONFVIZ_ENVIRONMENT=Staging
  CONFVIZ_APPLICATION_NAME=billing-api
  CONFVIZ_CONTENT_ROOT=/srv/billing
  CONFVIZ_WIDTH=160
  CONFVIZ_NO_COLOR=true
"""

import os as _os
import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

DEFAULT_ENVIRONMENT_NAME = "Production"


def _get_env_file() -> str | None:
    """Return CONFVIZ_ENV_FILE if it points at an existing file."""
    if env_file := _os.environ.get("CONFVIZ_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class CliSettings(_pydantic_settings.BaseSettings):
    """
    Defaults for the ``confviz`` command.

    Precedence (highest to lowest):
    1. Command-line options (applied by the CLI on top of these)
    2. Environment variables (CONFVIZ_*)
    3. .env file named by CONFVIZ_ENV_FILE
    4. Field defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="CONFVIZ_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = DEFAULT_ENVIRONMENT_NAME
    """Environment name reported for the host (Development, Production, ...)."""

    application_name: str | None = None
    """Application name; defaults to the content root directory name."""

    content_root: _pathlib.Path | None = None
    """Content root; defaults to the current directory."""

    width: int | None = _pydantic.Field(default=None, ge=40)
    """Fixed console width. None lets rich detect the terminal."""

    no_color: bool = False
    """Disable colour output."""

    def resolve_content_root(self) -> _pathlib.Path:
        """Return the configured content root, or the current directory."""
        return (self.content_root or _pathlib.Path.cwd()).absolute()

    def resolve_application_name(self) -> str:
        """Return the configured application name, or the content root name."""
        return self.application_name or self.resolve_content_root().name
