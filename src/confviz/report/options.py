"""
Report options, read from the ``HostInfo`` section of the inspected
configuration.

Example (YAML)::

    HostInfo:
      DisplayEnvironment: true
      DisplayConfig: true
      IgnoreGlobalEnvironment: false
      RedactSecrets: true

Keys are matched case-insensitively. ``IgnoreGlobalEnv`` is accepted as a
short form of ``IgnoreGlobalEnvironment``.
"""

import pydantic as _pydantic

import confviz.config.keys as keys
import confviz.config.providers as providers

OPTIONS_SECTION = "HostInfo"


class ReportOptionsError(Exception):
    """The HostInfo section holds values that cannot be bound."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid {OPTIONS_SECTION} options: {message}")


class ReportOptions(_pydantic.BaseModel):
    """What the report shows and how it treats sensitive values."""

    model_config = _pydantic.ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    display_environment: bool = _pydantic.Field(
        default=True,
        validation_alias=_pydantic.AliasChoices(
            "display_environment", "displayenvironment"
        ),
    )
    """Render the environment section."""

    display_config: bool = _pydantic.Field(
        default=True,
        validation_alias=_pydantic.AliasChoices("display_config", "displayconfig"),
    )
    """Render the provider table and key tree."""

    ignore_global_environment: bool = _pydantic.Field(
        default=True,
        validation_alias=_pydantic.AliasChoices(
            "ignore_global_environment",
            "ignoreglobalenvironment",
            "ignoreglobalenv",
        ),
    )
    """Leave out environment variable providers without a prefix."""

    redact_secrets: bool = _pydantic.Field(
        default=True,
        validation_alias=_pydantic.AliasChoices("redact_secrets", "redactsecrets"),
    )
    """Mask values whose key looks sensitive."""

    @classmethod
    def from_configuration(cls, configuration: providers.Configuration) -> "ReportOptions":
        """
        Bind options from the ``HostInfo`` section.

        A missing section yields the defaults.

        Raises:
            ReportOptionsError: If a value is not a recognisable boolean.
        """
        section = configuration.get_section(OPTIONS_SECTION)
        data = {
            keys.normalize_key(child.key): child.value
            for child in section.get_children()
            if child.value is not None
        }
        try:
            return cls.model_validate(data)
        except _pydantic.ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ReportOptionsError(details) from e
