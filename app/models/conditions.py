"""Condition code categories and background gradients."""

from typing import Callable, Mapping

# weatherapi.com condition codes. Snow, sleet and ice codes belong to no
# category and use the default gradient.
CONDITIONS = {
    "sunny": frozenset({1000}),
    "cloudy": frozenset({1003, 1006}),
    "overcast": frozenset({1009}),
    "foggy": frozenset({1030, 1135, 1147}),
    "drizzle": frozenset({1072, 1150, 1153, 1168, 1171}),
    "rainy": frozenset(
        {
            1063,
            1087,
            1180,
            1183,
            1186,
            1189,
            1192,
            1195,
            1198,
            1201,
            1240,
            1243,
            1246,
            1273,
            1276,
        }
    ),
}


def gradient(start: str, end: str) -> str:
    return f"--from: var(--{start}); --to: var(--{end})"


def _in(*categories: str) -> Callable[[int], bool]:
    return lambda code: any(code in CONDITIONS[name] for name in categories)


# (predicate, day gradient, night gradient); first match wins.
GRADIENT_RULES = [
    (_in("sunny"), gradient("orange", "yellow"), gradient("navy", "blue")),
    (_in("rainy", "cloudy"), gradient("blue", "aqua"), gradient("navy", "blue")),
    (_in("drizzle"), gradient("blue", "teal"), gradient("navy", "teal")),
    (_in("overcast"), gradient("navy", "teal"), gradient("navy", "olive")),
    (_in("foggy"), gradient("blue", "olive"), gradient("navy", "olive")),
]
DEFAULT_GRADIENT = (gradient("blue", "aqua"), gradient("navy", "blue"))


def is_day(icon) -> bool:
    """Return True when the condition icon is a daytime icon."""
    return "day" in (icon or "")


def gradient_for(condition: Mapping) -> str:
    """Map a condition object to a CSS gradient descriptor.

    Args:
        condition: Mapping with `code` and `icon` keys, as in the API payload.

    Returns:
        The "--from/--to" custom property string for the background.
    """
    code = condition.get("code")
    day = is_day(condition.get("icon"))
    for matches, day_gradient, night_gradient in GRADIENT_RULES:
        if matches(code):
            return day_gradient if day else night_gradient
    day_gradient, night_gradient = DEFAULT_GRADIENT
    return day_gradient if day else night_gradient


def category_for(code) -> str:
    """Return the category name of a condition code, or "default"."""
    for name, codes in CONDITIONS.items():
        if code in codes:
            return name
    return "default"
