"""Shared HTTP session setup for outbound provider calls."""
import certifi
import requests
from requests.adapters import HTTPAdapter

USER_AGENT = 'daily-brief/1.0'


def create_session():
    """Create a requests session with certifi verification and a pooled adapter.

    Retries are disabled: a failed source degrades its section instead.
    """
    session = requests.Session()

    # Use certifi's CA bundle for SSL verification
    session.verify = certifi.where()

    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=10,
        pool_maxsize=10,
        pool_block=False
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        'User-Agent': USER_AGENT,
        'Accept': 'application/rss+xml, application/xml, application/json;q=0.9, */*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
    })

    return session
