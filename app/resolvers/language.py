"""Resolve the language code sent to the weather API."""

from typing import Optional

DEFAULT_LANGUAGE = "en"


def resolve_language(locale: Optional[str]) -> str:
    """Return the primary language subtag of a locale.

    Args:
        locale: Locale string such as "en-US", or None.

    Returns:
        The part before the first hyphen, or "en" when no locale is set.
    """
    if not locale:
        return DEFAULT_LANGUAGE
    return locale.split("-")[0]


def locale_from_accept_language(header: Optional[str]) -> Optional[str]:
    """Pick the preferred locale from an Accept-Language header.

    Args:
        header: Raw header value, e.g. "fr-CH, fr;q=0.9, en;q=0.8".

    Returns:
        The highest weighted language range, or None if there is none.
    """
    if not header:
        return None
    best, best_q = None, 0.0
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        q = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                q = float(params[2:])
            except ValueError:
                q = 0.0
        if q > best_q:
            best, best_q = tag, q
    return best
