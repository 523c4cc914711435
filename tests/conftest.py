"""
Shared pytest fixtures for confviz tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import io as _io
import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest
import rich.console as _rich_console

import confviz.config as config
import confviz.hosting as hosting

# =============================================================================
# Environment Fixtures
# =============================================================================


@_pytest.fixture
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """
    Remove CONFVIZ_* variables from the process environment for one test.

    Usage:
        def test_something(isolated_env):
            ...  # CliSettings() sees only field defaults
    """
    for name in list(_os.environ):
        if name.startswith("CONFVIZ_"):
            monkeypatch.delenv(name)


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """Click runner whose environment has no CONFVIZ_* variables."""
    unset: dict[str, str | None] = {
        k: None for k in _os.environ if k.startswith("CONFVIZ_")
    }
    return _click_testing.CliRunner(env=unset)


# =============================================================================
# Report Fixtures
# =============================================================================


@_pytest.fixture
def recording_console() -> _rich_console.Console:
    """
    Wide, colourless console that records everything printed to it.

    Use ``console.export_text()`` to read the output.
    """
    return _rich_console.Console(
        file=_io.StringIO(),
        record=True,
        width=200,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )


@_pytest.fixture
def runtime_facts() -> hosting.RuntimeFacts:
    """Fixed interpreter facts so report output is deterministic."""
    return hosting.RuntimeFacts(
        architecture="x86_64",
        runtime_identifier="CPython",
        runtime_version="3.12.4",
        runtime_profile="cpython-312",
        runtime_description="3.12.4 (main) [GCC 13.2.0]",
        os_description="Linux-6.8.0-x86_64-with-glibc2.39",
    )


@_pytest.fixture
def host_environment(tmp_path: _pathlib.Path) -> hosting.HostEnvironment:
    """Host environment rooted at the test's temporary directory."""
    return hosting.HostEnvironment(
        application_name="billing-api",
        content_root_path=tmp_path,
        environment_name="Development",
        application_version="1.4.2",
    )


@_pytest.fixture
def write_json(tmp_path: _pathlib.Path) -> _typing.Callable[[str, _typing.Any], _pathlib.Path]:
    """Return a helper that writes ``data`` as JSON under tmp_path."""

    def _write(name: str, data: _typing.Any) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(_json.dumps(data), encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def layered_configuration(
    tmp_path: _pathlib.Path,
    write_json: _typing.Callable[[str, _typing.Any], _pathlib.Path],
) -> config.ConfigurationRoot:
    """
    A file provider followed by the global environment.

    ``appsettings.json`` holds ``Db=Server=a;Password=p1;`` and the global
    environment holds ``Db=Server=b;Password=p2;``.
    """
    write_json("appsettings.json", {"Db": "Server=a;Password=p1;"})
    return (
        config.ConfigurationBuilder()
        .set_base_path(tmp_path)
        .add_json_file("appsettings.json")
        .add_environment_variables(environ={"Db": "Server=b;Password=p2;"})
        .build()
    )
