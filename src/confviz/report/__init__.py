"""
Configuration introspection and report rendering.

Pipeline: normalizer -> resolver -> tree -> renderer, with formatting
applied to every rendered value.
"""

from confviz.report.formatting import (
    MASK,
    SECRET_KEYWORDS,
    ValueFormatter,
    ValueKind,
    classify,
)
from confviz.report.normalizer import normalize_providers
from confviz.report.options import OPTIONS_SECTION, ReportOptions, ReportOptionsError
from confviz.report.renderer import HostInfo, create_host_info, display_host_info
from confviz.report.resolver import resolve_key
from confviz.report.tree import build_tree
from confviz.report.types import (
    MAX_VALUE_LENGTH,
    KeyNode,
    ProviderEntry,
    ValueContribution,
)

__all__ = [
    "HostInfo",
    "KeyNode",
    "MASK",
    "MAX_VALUE_LENGTH",
    "OPTIONS_SECTION",
    "ProviderEntry",
    "ReportOptions",
    "ReportOptionsError",
    "SECRET_KEYWORDS",
    "ValueContribution",
    "ValueFormatter",
    "ValueKind",
    "build_tree",
    "classify",
    "create_host_info",
    "display_host_info",
    "normalize_providers",
    "resolve_key",
]
