"""Per-key value resolution across normalized providers."""

import collections.abc as _cabc

import confviz.report.types as types


def resolve_key(
    entries: _cabc.Iterable[types.ProviderEntry],
    key_path: str,
) -> tuple[types.ValueContribution, ...]:
    """
    Collect every provider's value for ``key_path``.

    Providers are queried in resolution order. A provider that does not
    define the key is skipped. Values are truncated for display.

    Returns:
        Contributions ordered lowest precedence first; the last item is the
        effective value. Empty if no provider defines the key.
    """
    contributions: list[types.ValueContribution] = []
    for entry in entries:
        value = entry.try_get(key_path)
        if value is None:
            continue
        contributions.append(
            types.ValueContribution(
                value=types.truncate_value(value),
                provider_index=entry.index,
            )
        )
    return tuple(contributions)
