"""
Report rendering with rich.

:class:`HostInfo` ties the pipeline together: it binds
:class:`~confviz.report.options.ReportOptions` from the inspected
configuration, normalizes providers, builds the key tree and turns
everything into rich renderables:

1. environment rule and table
2. configuration rule and provider table
3. key tree
4. closing rule
"""

import logging as _logging
import os as _os
import pathlib as _pathlib

import rich.box as _rich_box
import rich.console as _rich_console
import rich.padding as _rich_padding
import rich.rule as _rich_rule
import rich.table as _rich_table
import rich.text as _rich_text
import rich.tree as _rich_tree

import confviz.config.providers as providers
import confviz.config.root as root
import confviz.hosting as hosting
import confviz.report.formatting as formatting
import confviz.report.normalizer as normalizer
import confviz.report.options as report_options
import confviz.report.styles as styles
import confviz.report.tree as tree
import confviz.report.types as types

_logger = _logging.getLogger(__name__)

ENVIRONMENT_TITLE = "🌳 Environment Details"
CONFIGURATION_TITLE = "🔧 Configuration Details"
NO_PREFIX = "(none)"


def _header_text(text: str) -> _rich_text.Text:
    return _rich_text.Text(text, style=styles.HEADER)


def _key_text(text: str, *, branch: bool = False) -> _rich_text.Text:
    style = styles.KEY + styles.BRANCH if branch else styles.KEY
    return _rich_text.Text(text, style=style)


def _value_text(text: str) -> _rich_text.Text:
    return _rich_text.Text(text, style=styles.VALUE)


def _bool_text(value: bool) -> _rich_text.Text:
    return _rich_text.Text("True" if value else "False", style=styles.BOOLEAN)


def _citation(index: int) -> _rich_text.Text:
    text = _rich_text.Text(str(index), style=styles.SECOND_VALUE)
    text.append("|")
    return text


class HostInfo:
    """
    Diagnostic report of a host environment and its configuration.

    Args:
        configuration: The configuration to inspect. Its ``HostInfo`` section
            configures the report itself.
        environment: Facts the hosting application supplies.
        console: Output console (a new one writing to stdout if omitted).
        runtime: Interpreter facts (collected if omitted).

    Raises:
        TypeError: If ``configuration`` is None.
        ReportOptionsError: If the ``HostInfo`` section holds invalid values.
    """

    def __init__(
        self,
        configuration: providers.Configuration,
        environment: hosting.HostEnvironment,
        *,
        console: _rich_console.Console | None = None,
        runtime: hosting.RuntimeFacts | None = None,
    ) -> None:
        if configuration is None:
            raise TypeError("configuration must not be None")
        self._configuration = configuration
        self._environment = environment
        self._console = console or _rich_console.Console()
        self._runtime = runtime or hosting.RuntimeFacts.collect()
        self._options = report_options.ReportOptions.from_configuration(configuration)
        self._formatter = formatting.ValueFormatter(
            redact_secrets=self._options.redact_secrets
        )

    @property
    def options(self) -> report_options.ReportOptions:
        return self._options

    @property
    def console(self) -> _rich_console.Console:
        return self._console

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def get_provider_entries(self) -> list[types.ProviderEntry] | None:
        """
        Return normalized providers, or None if the configuration is not a
        root and has no provider list.
        """
        if not isinstance(self._configuration, root.ConfigurationRoot):
            return None
        return normalizer.normalize_providers(
            self._configuration.providers,
            ignore_global_environment=self._options.ignore_global_environment,
        )

    def build_tree(self, entries: list[types.ProviderEntry]) -> types.KeyNode:
        return tree.build_tree(entries, self._configuration)

    # -------------------------------------------------------------------------
    # Renderables
    # -------------------------------------------------------------------------

    def build_sections(self) -> list[_rich_console.RenderableType]:
        """Return every section of the report in display order."""
        sections: list[_rich_console.RenderableType] = []
        if self._options.display_environment:
            sections.extend(self.environment_sections())
        if self._options.display_config:
            sections.extend(self.configuration_sections())
        sections.append(_rich_rule.Rule(style=styles.HEADER))
        return sections

    def environment_sections(self) -> list[_rich_console.RenderableType]:
        """Environment rule and facts table."""
        env = self._environment
        runtime = self._runtime
        table = _rich_table.Table(
            box=_rich_box.ROUNDED,
            border_style=styles.MAIN,
            show_header=False,
        )
        table.add_column("Key", justify="right")
        table.add_column("Value")

        framework = _rich_text.Text()
        framework.append_text(self._formatter.format_fragment(runtime.runtime_identifier))
        framework.append_text(self._formatter.format_fragment(",Version="))
        framework.append_text(self._formatter.format_fragment(runtime.runtime_version))
        framework.append_text(self._formatter.format_fragment(",Profile="))
        framework.append_text(self._formatter.format_fragment(runtime.runtime_profile))

        table.add_row(_key_text("App Name"), _value_text(env.application_name))
        table.add_row(
            _key_text("App Version"),
            _rich_text.Text(env.version, style=styles.NUMBER),
        )
        table.add_row(_key_text("Environment"), _value_text(env.environment_name))
        table.add_row(
            _key_text("Content Root"),
            self._formatter.format(str(env.content_root_path)),
        )
        table.add_row(_key_text("Architecture"), _value_text(runtime.architecture))
        table.add_row(_key_text("Framework Version"), framework)
        table.add_row(_key_text("Runtime Name"), _value_text(runtime.runtime_description))
        table.add_row(
            _key_text("Runtime Version"),
            _rich_text.Text(runtime.runtime_version, style=styles.NUMBER),
        )
        table.add_row(_key_text("Operating System"), _value_text(runtime.os_description))

        return [
            _rich_rule.Rule(ENVIRONMENT_TITLE, align="left", style=styles.HEADER),
            table,
        ]

    def configuration_sections(self) -> list[_rich_console.RenderableType]:
        """
        Configuration rule, provider table and key tree.

        Empty if the configuration does not expose its providers.
        """
        entries = self.get_provider_entries()
        if entries is None:
            _logger.debug("Configuration is not a root; skipping configuration section")
            return []

        key_tree = self.build_tree(entries)
        rendered_tree = _rich_tree.Tree(
            _header_text("Root"),
            style=styles.MAIN,
            guide_style=styles.MAIN,
        )
        self._render_node(rendered_tree, key_tree)

        return [
            _rich_rule.Rule(CONFIGURATION_TITLE, align="left", style=styles.HEADER),
            self.provider_table(entries),
            _rich_padding.Padding(rendered_tree, (0, 2)),
        ]

    def provider_table(self, entries: list[types.ProviderEntry]) -> _rich_table.Table:
        """One row per normalized provider: index, type and details."""
        table = _rich_table.Table(box=_rich_box.ROUNDED, border_style=styles.MAIN)
        table.add_column(_header_text("#"))
        table.add_column(_header_text("Type"))
        table.add_column(_header_text("Info"))

        for entry in entries:
            table.add_row(
                self._formatter.format(str(entry.index)),
                _value_text(entry.provider.display_name),
                self._provider_info(entry.provider),
            )
        return table

    def _provider_info(self, provider: providers.ConfigurationProvider) -> _rich_text.Text:
        info = _rich_text.Text()
        if provider.kind is providers.ProviderKind.FILE:
            assert isinstance(provider, providers.FileConfigurationProvider)
            full_path = provider.full_path
            info.append(
                self._relative_to_content_root(full_path),
                style=styles.link(full_path.as_uri()),
            )
            info.append(", ")
            info.append("Present", style=styles.KEY)
            info.append("=")
            info.append_text(_bool_text(provider.exists))
            info.append(", ")
            info.append("Optional", style=styles.KEY)
            info.append("=")
            info.append_text(_bool_text(provider.optional))
        elif provider.kind is providers.ProviderKind.ENVIRONMENT:
            assert isinstance(provider, providers.EnvironmentVariablesConfigurationProvider)
            info.append("Prefix", style=styles.KEY)
            info.append(" = ")
            info.append(provider.prefix or NO_PREFIX, style=styles.VALUE)
        return info

    def _relative_to_content_root(self, path: _pathlib.Path) -> str:
        try:
            return _os.path.relpath(path, self._environment.content_root_path)
        except ValueError:
            # Different drive on Windows
            return str(path)

    def _render_node(
        self,
        target: _rich_tree.Tree,
        node: types.KeyNode,
    ) -> None:
        if node.is_empty:
            return

        parent = target
        if node.name:
            winning = node.winning
            # A branch whose descendants are all empty still renders as a dimmed key
            if winning is None:
                parent = target.add(_key_text(node.name, branch=True))
            else:
                parent = target.add(self._value_table(node, winning))

        for child in node.children:
            self._render_node(parent, child)

    def _value_table(
        self,
        node: types.KeyNode,
        winning: types.ValueContribution,
    ) -> _rich_table.Table:
        table = _rich_table.Table(
            box=None,
            show_header=False,
            show_edge=False,
            pad_edge=False,
            collapse_padding=True,
        )
        for _ in range(4):
            table.add_column()

        table.add_row(
            _citation(winning.provider_index),
            _key_text(node.name),
            _rich_text.Text("="),
            self._formatter.format_for_key(node.name, winning.value),
        )
        for contribution in node.overridden:
            table.add_row(
                _citation(contribution.provider_index),
                _rich_text.Text(""),
                _rich_text.Text(""),
                self._formatter.format_for_key(
                    node.name, contribution.value, overridden=True
                ),
            )
        return table

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def display(self) -> None:
        """Print the whole report."""
        for section in self.build_sections():
            self._console.print(section)

    def print_environment(self) -> None:
        for section in self.environment_sections():
            self._console.print(section)

    def print_configuration(self) -> None:
        for section in self.configuration_sections():
            self._console.print(section)


def create_host_info(
    configuration: providers.Configuration,
    environment: hosting.HostEnvironment,
    *,
    console: _rich_console.Console | None = None,
) -> HostInfo:
    """Create a report for ``configuration`` without printing it."""
    return HostInfo(configuration, environment, console=console)


def display_host_info(
    configuration: providers.Configuration,
    environment: hosting.HostEnvironment,
    *,
    console: _rich_console.Console | None = None,
) -> HostInfo:
    """Create a report, print it and return it."""
    instance = create_host_info(configuration, environment, console=console)
    instance.display()
    return instance
