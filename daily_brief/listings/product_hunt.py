"""Product Hunt launch listings for the last 24 hours."""
from datetime import datetime, timedelta, timezone
from typing import List, Tuple, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from daily_brief.config.settings import PRODUCT_HUNT_URL
from daily_brief.core.constants import LISTINGS_UNAVAILABLE, MAX_LISTINGS, NO_LISTINGS
from daily_brief.core.errors import SourceUnavailable
from daily_brief.core.types import Listing
from daily_brief.logging_cfg.logger import setup_logger, update_metrics
from daily_brief.utils.http import create_session

logger = setup_logger()

LISTING_WINDOW = timedelta(hours=24)

POSTS_QUERY = """
query TopPosts($first: Int!, $postedAfter: DateTime!, $postedBefore: DateTime!) {
  posts(first: $first, order: VOTES, postedAfter: $postedAfter, postedBefore: $postedBefore) {
    edges { node { name tagline url votesCount } }
  }
}
""".strip()


# --- Response models ---

class PostNode(BaseModel):
    model_config = ConfigDict(extra='ignore')

    name: str
    tagline: str = ''
    url: str
    votes_count: int = Field(alias='votesCount')


class PostEdge(BaseModel):
    node: PostNode


class PostConnection(BaseModel):
    edges: List[PostEdge]


class ListingsData(BaseModel):
    posts: PostConnection


class ListingsResponse(BaseModel):
    data: ListingsData


class GraphQLError(BaseModel):
    model_config = ConfigDict(extra='ignore')

    message: str


class GraphQLErrorResponse(BaseModel):
    errors: List[GraphQLError] = Field(min_length=1)


def parse_listings_response(payload) -> Union[ListingsResponse, GraphQLErrorResponse]:
    """Validate a decoded GraphQL response.

    Raises:
        SourceUnavailable: payload is neither a result nor an error list
    """
    try:
        if isinstance(payload, dict) and payload.get('errors'):
            return GraphQLErrorResponse.model_validate(payload)
        return ListingsResponse.model_validate(payload)
    except ValidationError as e:
        raise SourceUnavailable(f"Unexpected Product Hunt response format: {e.error_count()} validation error(s)") from e


def listing_window(now: datetime = None) -> Tuple[datetime, datetime]:
    """Return the [now - 24h, now] window in UTC."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now - LISTING_WINDOW, now


def collect_listings(settings, session=None, now: datetime = None) -> List[Listing]:
    """Top launches in the window, highest votes first.

    Raises:
        SourceUnavailable: transport failure, non-2xx, or GraphQL errors
        ConfigurationError: no Product Hunt token is configured
    """
    token = settings.require('product_hunt_api_key')
    session = session or create_session()
    posted_after, posted_before = listing_window(now)

    body = {
        'query': POSTS_QUERY,
        'variables': {
            'first': MAX_LISTINGS,
            'postedAfter': posted_after.isoformat(),
            'postedBefore': posted_before.isoformat(),
        },
    }
    headers = {
        'Authorization': f"Bearer {token}",
        'Content-Type': 'application/json',
        'Accept': 'application/json',
    }

    try:
        response = session.post(PRODUCT_HUNT_URL, json=body, headers=headers, timeout=settings.http_timeout)
    except requests.exceptions.RequestException as e:
        raise SourceUnavailable(f"Product Hunt request failed: {e}") from e

    if not response.ok:
        raise SourceUnavailable(f"Product Hunt API failed with status {response.status_code}: {response.text[:200]}")

    try:
        payload = response.json()
    except ValueError as e:
        raise SourceUnavailable("Product Hunt returned invalid JSON") from e

    result = parse_listings_response(payload)
    if isinstance(result, GraphQLErrorResponse):
        messages = '; '.join(error.message for error in result.errors)
        raise SourceUnavailable(f"Product Hunt API error: {messages}")

    listings = [
        Listing(name=edge.node.name, tagline=edge.node.tagline, url=edge.node.url, score=edge.node.votes_count)
        for edge in result.data.posts.edges
    ]
    # sorted() is stable, so equal scores keep the provider's order
    return sorted(listings, key=lambda listing: listing.score, reverse=True)[:MAX_LISTINGS]


def render_listings(listings: List[Listing]) -> str:
    if not listings:
        return NO_LISTINGS
    return "\n".join(
        f"{listing.name} ({listing.url}) - {listing.tagline} (Votes: {listing.score})"
        for listing in listings
    )


def fetch_listings(settings, session=None, now: datetime = None) -> str:
    """Rendered listings, or the placeholder on any failure. Never raises."""
    try:
        listings = collect_listings(settings, session=session, now=now)
    except Exception as e:
        logger.error(f"Error fetching Product Hunt posts: {e}")
        update_metrics('failed_sources', ["Product Hunt"])
        return LISTINGS_UNAVAILABLE

    logger.info(f"Fetched {len(listings)} Product Hunt listings")
    return render_listings(listings)
