"""Launch listing package exports."""
from daily_brief.listings.product_hunt import (
    collect_listings,
    fetch_listings,
    listing_window,
    parse_listings_response,
    render_listings
)

__all__ = [
    'collect_listings',
    'fetch_listings',
    'listing_window',
    'parse_listings_response',
    'render_listings'
]
