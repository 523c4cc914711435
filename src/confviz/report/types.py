"""
Data types shared by the report pipeline.

All of these are built once per report and never mutated afterwards.
"""

import dataclasses as _dataclasses

import confviz.config.keys as keys
import confviz.config.providers as providers

MAX_VALUE_LENGTH = 130
"""Values longer than this are truncated in the report."""

ELLIPSIS = "..."


def truncate_value(value: str) -> str:
    """
    Truncate ``value`` to MAX_VALUE_LENGTH characters plus an ellipsis.

    Example:
        >>> len(truncate_value("x" * 200))
        133
    """
    if len(value) > MAX_VALUE_LENGTH:
        return value[:MAX_VALUE_LENGTH] + ELLIPSIS
    return value


@_dataclasses.dataclass(frozen=True)
class ProviderEntry:
    """
    A provider after normalization.

    Attributes:
        index: 1-based citation id. List order is precedence: a higher index
            overrides a lower one.
        provider: The provider itself.
    """

    index: int
    provider: providers.ConfigurationProvider

    @property
    def kind(self) -> providers.ProviderKind:
        return self.provider.kind

    def try_get(self, key: str) -> str | None:
        return self.provider.try_get(key)


@_dataclasses.dataclass(frozen=True)
class ValueContribution:
    """One provider's (possibly truncated) value for a key."""

    value: str
    provider_index: int


@_dataclasses.dataclass
class KeyNode:
    """
    A node of the configuration key tree.

    Attributes:
        name: Last key segment ("" for the root).
        path: Full key path ("" for the root).
        children: Child nodes, ordered branches first then value nodes,
            each group alphabetical.
        contributions: Values in provider order; the last one wins.
    """

    name: str
    path: str = ""
    children: list["KeyNode"] = _dataclasses.field(default_factory=list)
    contributions: tuple[ValueContribution, ...] = ()

    @property
    def has_value(self) -> bool:
        return bool(self.contributions)

    @property
    def winning(self) -> ValueContribution | None:
        """The effective contribution, or None for a pure branch."""
        return self.contributions[-1] if self.contributions else None

    @property
    def overridden(self) -> tuple[ValueContribution, ...]:
        """Overridden contributions, highest precedence first."""
        return tuple(reversed(self.contributions[:-1]))

    @property
    def is_empty(self) -> bool:
        """True if the node has neither children nor a value."""
        return not self.children and not self.contributions

    def find(self, path: str) -> "KeyNode | None":
        """Find a descendant by colon-delimited path (case-insensitive)."""
        node: KeyNode | None = self
        for segment in path.split(keys.KEY_DELIMITER):
            if node is None:
                return None
            folded = segment.casefold()
            node = next((c for c in node.children if c.name.casefold() == folded), None)
        return node

    def walk(self) -> "list[KeyNode]":
        """Return this node's descendants in depth-first order."""
        nodes: list[KeyNode] = []
        for child in self.children:
            nodes.append(child)
            nodes.extend(child.walk())
        return nodes
