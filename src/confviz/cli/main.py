"""
Main CLI entry point for confviz.

Builds a configuration from files, environment variables and command-line
overrides, then renders the host and configuration report.
"""

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import rich.console as _rich_console

import confviz
import confviz.config as config
import confviz.hosting as hosting
import confviz.report as report

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

# Suffix marking a --file argument as optional
OPTIONAL_FILE_MARKER = "?"


def _configure_logging(verbose: bool) -> None:
    level = _logging.DEBUG if verbose else _logging.WARNING
    _logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_assignment(assignment: str) -> tuple[str, str]:
    """Split a KEY=VALUE override."""
    key, sep, value = assignment.partition("=")
    if not sep or not key:
        raise _click.BadParameter(
            f"expected KEY=VALUE, got '{assignment}'", param_hint="--set"
        )
    return key, value


def build_configuration(
    *,
    base_path: _pathlib.Path,
    files: _typing.Sequence[str],
    env_prefixes: _typing.Sequence[str],
    global_env: bool,
    overrides: _typing.Sequence[str],
) -> config.ConfigurationRoot:
    """
    Build the configuration to inspect.

    Providers are added in this order (last wins):
    1. files, in the order given (``name?`` marks a file optional)
    2. prefixed environment variables, in the order given
    3. the whole process environment, if requested
    4. ``--set`` overrides

    Raises:
        click.ClickException: If a file cannot be loaded.
    """
    builder = config.ConfigurationBuilder().set_base_path(base_path)

    try:
        for file_spec in files:
            optional = file_spec.endswith(OPTIONAL_FILE_MARKER)
            path = file_spec[: -len(OPTIONAL_FILE_MARKER)] if optional else file_spec
            builder.add_file(path, optional=optional)
    except ValueError as e:
        raise _click.ClickException(str(e)) from None

    for prefix in env_prefixes:
        builder.add_environment_variables(prefix)
    if global_env:
        builder.add_environment_variables()

    if overrides:
        builder.add_in_memory_collection(dict(_parse_assignment(a) for a in overrides))

    try:
        return builder.build()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from None


def _make_console(use_color: bool | None, settings: config.CliSettings) -> _rich_console.Console:
    """Create the output console.

    Priority for colour:
    1. --color / --no-color
    2. CONFVIZ_NO_COLOR
    3. rich auto-detection (honours NO_COLOR and TTY)
    """
    if use_color is None:
        no_color = True if settings.no_color else None
        force_terminal = None
    else:
        no_color = not use_color
        force_terminal = use_color or None
    return _rich_console.Console(
        no_color=no_color,
        force_terminal=force_terminal,
        width=settings.width,
        highlight=False,
    )


def _configuration_options(func: _typing.Callable[..., _typing.Any]) -> _typing.Callable[..., _typing.Any]:
    """Options shared by commands that build a configuration."""
    decorators = [
        _click.option(
            "-f",
            "--file",
            "files",
            multiple=True,
            metavar="PATH",
            help="JSON or YAML config file, relative to the content root. "
            "Append '?' to make it optional. Repeatable; later files win.",
        ),
        _click.option(
            "-e",
            "--env-prefix",
            "env_prefixes",
            multiple=True,
            metavar="PREFIX",
            help="Load environment variables starting with PREFIX. Repeatable.",
        ),
        _click.option(
            "--global-env",
            is_flag=True,
            help="Also load the whole process environment (no prefix)",
        ),
        _click.option(
            "-s",
            "--set",
            "overrides",
            multiple=True,
            metavar="KEY=VALUE",
            help="Override a key (highest precedence). Use ':' for nesting.",
        ),
        _click.option(
            "--content-root",
            type=_click.Path(file_okay=False, path_type=_pathlib.Path),
            default=None,
            help="Content root directory (default: CONFVIZ_CONTENT_ROOT or cwd)",
        ),
        _click.option(
            "--width",
            type=_click.IntRange(min=40),
            default=None,
            help="Fixed output width (default: terminal width)",
        ),
        _click.option(
            "--color/--no-color",
            "use_color",
            default=None,
            help="Enable/disable colour output (default: auto-detect TTY)",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _apply_overrides(
    settings: config.CliSettings,
    **overrides: _typing.Any,
) -> config.CliSettings:
    """Return a copy of ``settings`` with non-None command-line values applied."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=updates) if updates else settings


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(confviz.__version__, "-V", "--version", prog_name="confviz")
@_click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    confviz - inspect layered configuration and the host environment.

    \b
    Examples:
        confviz show -f appsettings.json -f appsettings.Development.json?
        confviz show -f config.yaml -e MYAPP_ --set Logging:Level=Debug
        confviz providers -f appsettings.json --global-env
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = config.CliSettings()


@cli.command(name="show")
@_configuration_options
@_click.option("--app-name", default=None, help="Application name to report")
@_click.option("--environment", default=None, help="Environment name to report")
@_click.pass_context
def show(
    ctx: _click.Context,
    files: tuple[str, ...],
    env_prefixes: tuple[str, ...],
    global_env: bool,
    overrides: tuple[str, ...],
    content_root: _pathlib.Path | None,
    width: int | None,
    use_color: bool | None,
    app_name: str | None,
    environment: str | None,
) -> None:
    """Render the full host and configuration report.

    What is shown is controlled by the HostInfo section of the inspected
    configuration (DisplayEnvironment, DisplayConfig,
    IgnoreGlobalEnvironment, RedactSecrets).
    """
    settings = _apply_overrides(
        ctx.obj["settings"],
        content_root=content_root,
        width=width,
        application_name=app_name,
        environment=environment,
    )
    host = hosting.HostEnvironment.from_settings(settings)
    configuration = build_configuration(
        base_path=host.content_root_path,
        files=files,
        env_prefixes=env_prefixes,
        global_env=global_env,
        overrides=overrides,
    )

    try:
        host_info = report.create_host_info(
            configuration, host, console=_make_console(use_color, settings)
        )
    except report.ReportOptionsError as e:
        raise _click.ClickException(str(e)) from None
    host_info.display()


@cli.command(name="providers")
@_configuration_options
@_click.pass_context
def providers_cmd(
    ctx: _click.Context,
    files: tuple[str, ...],
    env_prefixes: tuple[str, ...],
    global_env: bool,
    overrides: tuple[str, ...],
    content_root: _pathlib.Path | None,
    width: int | None,
    use_color: bool | None,
) -> None:
    """List the configuration providers in resolution order.

    Chained configurations are expanded; the last provider wins.
    """
    settings = _apply_overrides(ctx.obj["settings"], content_root=content_root, width=width)
    host = hosting.HostEnvironment.from_settings(settings)
    configuration = build_configuration(
        base_path=host.content_root_path,
        files=files,
        env_prefixes=env_prefixes,
        global_env=global_env,
        overrides=overrides,
    )

    try:
        host_info = report.create_host_info(
            configuration, host, console=_make_console(use_color, settings)
        )
    except report.ReportOptionsError as e:
        raise _click.ClickException(str(e)) from None

    entries = host_info.get_provider_entries() or []
    host_info.console.print(host_info.provider_table(entries))


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="confviz")


if __name__ == "__main__":
    main()
