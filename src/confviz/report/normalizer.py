"""
Provider normalization.

Turns the provider list of a configuration root into the flat, indexed list
the report resolves keys against:

- chained providers are replaced by their inner providers (recursively)
- the unprefixed environment provider is dropped when requested
- every remaining provider gets a 1-based citation index
"""

import collections.abc as _cabc
import logging as _logging

import confviz.config.providers as providers
import confviz.report.types as types

_logger = _logging.getLogger(__name__)


def _expand(
    provider: providers.ConfigurationProvider,
) -> list[providers.ConfigurationProvider]:
    """Return the providers a chained provider stands for, or the provider itself."""
    if provider.kind is not providers.ProviderKind.CHAINED:
        return [provider]
    assert isinstance(provider, providers.ChainedConfigurationProvider)

    inner = provider.get_inner_providers()
    if inner is None:
        _logger.debug("Chained provider %r is opaque; keeping it as one entry", provider)
        return [provider]
    return inner


def _is_global_environment(provider: providers.ConfigurationProvider) -> bool:
    if provider.kind is not providers.ProviderKind.ENVIRONMENT:
        return False
    assert isinstance(provider, providers.EnvironmentVariablesConfigurationProvider)
    return provider.is_global


def flatten_providers(
    configuration_providers: _cabc.Iterable[providers.ConfigurationProvider],
) -> list[providers.ConfigurationProvider]:
    """
    Replace chained providers by their inner providers, preserving order.

    Expansion is depth-first and iterative, so deeply nested chains do not
    hit the recursion limit.
    """
    flat: list[providers.ConfigurationProvider] = []
    # Each pending item carries the ids of the chains it was expanded from
    pending: list[tuple[providers.ConfigurationProvider, frozenset[int]]] = [
        (provider, frozenset()) for provider in reversed(list(configuration_providers))
    ]
    while pending:
        provider, ancestors = pending.pop()
        expanded = _expand(provider)
        if expanded == [provider]:
            flat.append(provider)
            continue
        if id(provider) in ancestors:
            _logger.warning("Chained provider %r refers back to itself; skipping", provider)
            continue
        inner_ancestors = ancestors | {id(provider)}
        pending.extend((inner, inner_ancestors) for inner in reversed(expanded))
    return flat


def normalize_providers(
    configuration_providers: _cabc.Iterable[providers.ConfigurationProvider],
    *,
    ignore_global_environment: bool = True,
) -> list[types.ProviderEntry]:
    """
    Flatten and filter providers, then number them from 1.

    Args:
        configuration_providers: Providers in registration order (lowest
            precedence first).
        ignore_global_environment: Drop environment providers without a
            prefix.

    Returns:
        Provider entries in resolution order. The last entry has the highest
        precedence.
    """
    entries: list[types.ProviderEntry] = []
    for provider in flatten_providers(configuration_providers):
        if ignore_global_environment and _is_global_environment(provider):
            _logger.debug("Ignoring global environment provider %r", provider)
            continue
        entries.append(types.ProviderEntry(index=len(entries) + 1, provider=provider))
    return entries
