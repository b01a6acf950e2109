"""Old article locations and where they moved to."""

from __future__ import annotations

REDIRECT_PAGES = {
    ("fundamentals", "go-sdk.html"): ("fundamentals", "go-toolchain.html"),
    ("fundamentals", "tools.html"): ("apps-and-libs", "101.html"),
    ("fundamentals", "tool-gold.html"): ("apps-and-libs", "golds.html"),
    ("fundamentals", "tool-golds.html"): ("apps-and-libs", "golds.html"),
}


def redirect_target(group, file):
    """Return the URL path an old article moved to, or None."""
    target = REDIRECT_PAGES.get((group, file))
    if target is None:
        return None
    return f"/{target[0]}/{target[1]}"