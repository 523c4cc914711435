"""
Value classification, redaction and styling.

Every value shown in the report (tree values, environment facts, values
inside ``key=value;`` strings) goes through :class:`ValueFormatter`.
Classification rules, first match wins:

1. decimal number (locale independent)   -> NUMBER
2. ``true`` / ``false`` (any case)        -> BOOLEAN
3. ``key=value`` pairs split by ``;``     -> KEY_VALUE_PAIRS
4. absolute URL                           -> URL
5. anything else                          -> STRING (rendered quoted)

Redaction happens before classification: if the key a value belongs to
contains one of :data:`SECRET_KEYWORDS`, the value is replaced by
:data:`MASK` and the raw value is dropped.
"""

import enum as _enum
import re as _re
import urllib.parse as _urlparse

import rich.text as _rich_text

import confviz.report.styles as styles

MASK = "*****"
"""Replacement for redacted values."""

SECRET_KEYWORDS = ("key", "password", "secret")
"""Case-insensitive substrings that mark a key as sensitive."""

# Digits with optional thousands separators, decimal point and exponent.
# Leading or trailing sign, or parentheses for negatives, surrounding
# whitespace allowed.
_NUMBER_BODY = r"(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
_NUMBER_RE = _re.compile(
    rf"^\s*(?:[+-]?\s*{_NUMBER_BODY}|{_NUMBER_BODY}\s*[+-]|\(\s*{_NUMBER_BODY}\s*\))\s*$"
)

_PAIR_RE = _re.compile(r"(?P<key>[^=]+)=(?P<value>[^;]+);?")

_URL_SCHEME_RE = _re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


class ValueKind(_enum.Enum):
    """Classification of a configuration value."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    KEY_VALUE_PAIRS = "key_value_pairs"
    URL = "url"
    STRING = "string"


def is_number(text: str) -> bool:
    """
    Check if ``text`` is a decimal number, independent of locale.

    Example:
        >>> is_number("1,024.5"), is_number("-3e2"), is_number("1.2.3")
        (True, True, False)
    """
    return _NUMBER_RE.match(text) is not None


def is_boolean(text: str) -> bool:
    return text.lower() in ("true", "false")


def is_absolute_url(text: str) -> bool:
    """Check if ``text`` has a scheme and something after it."""
    if not text or any(c.isspace() for c in text):
        return False
    if not _URL_SCHEME_RE.match(text):
        return False
    try:
        parts = _urlparse.urlsplit(text)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc or parts.path)


def find_pairs(text: str) -> list[_re.Match[str]]:
    """Return the ``key=value`` matches in ``text``, in order."""
    return list(_PAIR_RE.finditer(text))


def classify(text: str) -> ValueKind:
    """
    Classify a raw value.

    Example:
        >>> [classify(v).name for v in ("42", "True", "a=1;b=2;", "https://x.io", "hi")]
        ['NUMBER', 'BOOLEAN', 'KEY_VALUE_PAIRS', 'URL', 'STRING']
    """
    if is_number(text):
        return ValueKind.NUMBER
    if is_boolean(text):
        return ValueKind.BOOLEAN
    if _PAIR_RE.search(text):
        return ValueKind.KEY_VALUE_PAIRS
    if is_absolute_url(text):
        return ValueKind.URL
    return ValueKind.STRING


def is_sensitive_key(key: str) -> bool:
    """Check if ``key`` contains one of SECRET_KEYWORDS (case-insensitive)."""
    folded = key.casefold()
    return any(keyword in folded for keyword in SECRET_KEYWORDS)


class ValueFormatter:
    """
    Turns raw values into styled rich text.

    Args:
        redact_secrets: Mask values whose key looks sensitive.
    """

    def __init__(self, *, redact_secrets: bool = True) -> None:
        self._redact_secrets = redact_secrets

    def redact(self, key: str, value: str) -> str:
        """Return MASK if redaction is on and ``key`` is sensitive, else ``value``."""
        if self._redact_secrets and is_sensitive_key(key):
            return MASK
        return value

    def format(self, value: str, *, overridden: bool = False) -> _rich_text.Text:
        """
        Classify and style ``value``.

        Args:
            value: Raw value.
            overridden: Dim and strike through the result.
        """
        kind = classify(value)
        if kind is ValueKind.NUMBER:
            text = _rich_text.Text(value, style=styles.NUMBER)
        elif kind is ValueKind.BOOLEAN:
            text = _rich_text.Text(value, style=styles.BOOLEAN)
        elif kind is ValueKind.KEY_VALUE_PAIRS:
            text = self._format_pairs(value)
        elif kind is ValueKind.URL:
            text = _rich_text.Text(value, style=styles.link(value))
        else:
            text = _rich_text.Text(f'"{value}"', style=styles.VALUE)

        if overridden:
            text.stylize(styles.OVERRIDDEN)
        return text

    def format_for_key(
        self,
        key: str,
        value: str,
        *,
        overridden: bool = False,
    ) -> _rich_text.Text:
        """Redact ``value`` by ``key`` and format it."""
        return self.format(self.redact(key, value), overridden=overridden)

    def format_fragment(self, value: str) -> _rich_text.Text:
        """
        Style a value without quoting or structural parsing.

        Numbers and booleans get their own colour, everything else the plain
        value colour. Used inside composite texts.
        """
        if is_number(value):
            return _rich_text.Text(value, style=styles.NUMBER)
        if is_boolean(value):
            return _rich_text.Text(value, style=styles.BOOLEAN)
        return _rich_text.Text(value, style=styles.VALUE)

    def _format_pairs(self, value: str) -> _rich_text.Text:
        text = _rich_text.Text()
        end = 0
        for match in find_pairs(value):
            key = match.group("key")
            pair_value = self.redact(key, match.group("value"))
            text.append(key, style=styles.KEY)
            text.append("=")
            text.append_text(self.format_fragment(pair_value))
            text.append(";")
            end = match.end()
        # Unmatched remainder, verbatim
        text.append(value[end:])
        return text
