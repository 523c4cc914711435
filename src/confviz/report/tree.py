"""
Key tree construction.

Walks the whole key namespace of a configuration, attaches each key's
contribution stack and orders siblings so output is stable regardless of
provider registration order: pure branches first, then value-bearing
nodes, each group sorted by name.
"""

import collections.abc as _cabc
import logging as _logging
import typing as _typing

import confviz.config.providers as providers
import confviz.report.resolver as resolver
import confviz.report.types as types

_logger = _logging.getLogger(__name__)


def sort_children(children: _cabc.Iterable[types.KeyNode]) -> list[types.KeyNode]:
    """Order siblings: branches first, then value nodes, each by name."""
    return sorted(
        children,
        key=lambda node: (node.has_value, node.name.casefold(), node.name),
    )


def _build_children(
    entries: _typing.Sequence[types.ProviderEntry],
    sections: _cabc.Iterable[_typing.Any],
    parent: types.KeyNode,
) -> None:
    for section in sections:
        node = types.KeyNode(
            name=section.key,
            path=section.path,
            contributions=resolver.resolve_key(entries, section.path),
        )
        _build_children(entries, section.get_children(), node)
        parent.children.append(node)
    parent.children = sort_children(parent.children)


def build_tree(
    entries: _typing.Sequence[types.ProviderEntry],
    configuration: providers.Configuration,
) -> types.KeyNode:
    """
    Build the key tree for ``configuration``.

    Args:
        entries: Normalized providers used to resolve each key's values.
        configuration: Supplies the key namespace (``get_children`` on the
            root and on every section).

    Returns:
        An unnamed root node covering the whole namespace.
    """
    root = types.KeyNode(name="")
    _build_children(entries, configuration.get_children(), root)
    _logger.debug("Built key tree with %d nodes", len(root.walk()))
    return root
