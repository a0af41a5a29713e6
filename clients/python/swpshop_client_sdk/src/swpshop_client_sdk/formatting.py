from __future__ import annotations

PRICE_ON_REQUEST = "Price on request"


def format_price(price: float | None, *, placeholder: str = PRICE_ON_REQUEST) -> str:
    """Format a price the way the storefront shows it (de-DE, EUR)."""
    if price is None:
        return placeholder
    grouped = f"{price:,.2f}"
    # swap en-US separators for de-DE ones
    localized = grouped.replace(",", "\0").replace(".", ",").replace("\0", ".")
    return f"{localized}\u00a0€"
