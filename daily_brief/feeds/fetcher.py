import calendar
from datetime import datetime, timezone
from typing import List, Optional

import feedparser
import requests

from daily_brief.core.constants import MAX_FEED_ITEMS, NO_DESCRIPTION, NO_LINK, NO_TITLE
from daily_brief.core.types import FeedItem
from daily_brief.formatting.text_utils import clean_text
from daily_brief.logging_cfg.logger import setup_logger, update_metrics
from daily_brief.utils.http import create_session

# --- Setup ---
logger = setup_logger()

DEFAULT_TIMEOUT = 20

# Shared session for feed fetching
feed_session = create_session()


def _parse_published(entry) -> Optional[datetime]:
    """Convert feedparser's UTC time tuple into an aware datetime."""
    parsed = entry.get('published_parsed') or entry.get('updated_parsed')
    if not parsed:
        return None
    try:
        return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_entry(entry) -> FeedItem:
    """Build a FeedItem from a feedparser entry; blank fields become None."""
    title = clean_text(entry.get('title'))
    description = clean_text(entry.get('summary') or entry.get('description'))
    link = (entry.get('link') or '').strip()
    return FeedItem(
        title=title or None,
        description=description or None,
        link=link or None,
        published_at=_parse_published(entry),
    )


def parse_feed(xml_text) -> List[FeedItem]:
    """Parse a syndication document into items, in the feed's own order.

    Raises ValueError when the document has no usable item list.
    """
    feed = feedparser.parse(xml_text)
    if not feed.entries:
        if feed.bozo:
            raise ValueError(f"Malformed feed: {feed.bozo_exception}")
        raise ValueError("Feed has no channel items")
    if feed.bozo:
        logger.debug(f"Feedparser recovered from a malformed document: {feed.bozo_exception}")
    return [parse_entry(entry) for entry in feed.entries]


def fetch_feed(url: str, session=None, timeout: float = None) -> List[FeedItem]:
    """Fetch and parse one feed. Never raises; failures yield an empty list."""
    session = session or feed_session
    timeout = timeout or DEFAULT_TIMEOUT
    logger.info(f"Fetching feed: {url}")
    update_metrics('sources_checked', 1)

    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        items = parse_feed(response.content)
    except requests.exceptions.Timeout:
        logger.error(f"Timeout fetching feed: {url}")
        update_metrics('failed_sources', [f"{url} (Timeout)"])
        return []
    except requests.exceptions.RequestException as e:
        logger.error(f"Error fetching feed {url}: {e}")
        update_metrics('failed_sources', [f"{url} (Request Error)"])
        return []
    except ValueError as e:
        logger.warning(f"No items parsed from feed {url}: {e}")
        update_metrics('empty_sources', [url])
        return []
    except Exception as e:
        logger.error(f"Unexpected error processing feed {url}: {e}", exc_info=True)
        update_metrics('failed_sources', [f"{url} (Parse Error)"])
        return []

    update_metrics('successful_sources', 1)
    update_metrics('total_items', len(items))
    logger.info(f"Fetched {len(items)} items from {url}")
    return items


def render_item(item: FeedItem) -> str:
    """Render one item as '{title} ({link}) - {description}' with placeholders."""
    title = item.title or NO_TITLE
    link = item.link or NO_LINK
    description = item.description or NO_DESCRIPTION
    return f"{title} ({link}) - {description}"


def render_items(items: List[FeedItem], limit: int = MAX_FEED_ITEMS) -> str:
    """Render the first `limit` items, one per line, in source order."""
    return "\n".join(render_item(item) for item in items[:limit])
