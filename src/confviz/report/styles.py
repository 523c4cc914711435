"""Rich styles used across the report."""

import rich.style as _rich_style

MAIN = _rich_style.Style(color="deep_sky_blue3")
HEADER = _rich_style.Style(color="yellow3")
KEY = _rich_style.Style(color="pale_turquoise1")
VALUE = _rich_style.Style(color="light_salmon1")
SECOND_VALUE = _rich_style.Style(color="dark_olive_green2")
NUMBER = _rich_style.Style(color="gold1")
BOOLEAN = _rich_style.Style(color="slate_blue1")

# Applied to branch keys in the tree
BRANCH = _rich_style.Style(dim=True)

# Applied on top of a value that a later provider overrides
OVERRIDDEN = _rich_style.Style(dim=True, strike=True)


def link(url: str, base: _rich_style.Style = SECOND_VALUE) -> _rich_style.Style:
    """Return ``base`` with a hyperlink to ``url``."""
    return base + _rich_style.Style(link=url)
