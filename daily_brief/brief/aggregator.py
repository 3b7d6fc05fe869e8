"""Collects every enabled section concurrently and assembles the brief prompt."""
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict

from daily_brief.core.constants import FEED_SECTIONS, SECTION_ORDER, SECTION_PROMPTS
from daily_brief.core.errors import ConfigurationError
from daily_brief.core.types import Section
from daily_brief.feeds.fetcher import fetch_feed, render_items
from daily_brief.listings.product_hunt import fetch_listings
from daily_brief.llm.prompts import BRIEF_PROMPT_TEMPLATE, MAX_BULLET_SENTENCES, SECTION_BLOCK_TEMPLATE
from daily_brief.logging_cfg.logger import setup_logger
from daily_brief.markets.snapshot import fetch_market_snapshot
from daily_brief.utils.http import create_session

logger = setup_logger()

NO_FEED_ITEMS = "No items available"


def _feed_task(url: str, session, timeout) -> Callable[[], str]:
    def run() -> str:
        items = fetch_feed(url, session=session, timeout=timeout)
        return render_items(items) or NO_FEED_ITEMS
    return run


def collect_sections(settings, session=None) -> Dict[Section, str]:
    """Run every enabled collector concurrently and return rendered text per section.

    Each collector settles to text (possibly a placeholder) instead of raising,
    so the join waits for all of them unconditionally.
    """
    session = session or create_session()
    tasks: Dict[Section, Callable[[], str]] = {}

    for section in SECTION_ORDER:
        if not settings.enabled(section):
            continue
        if section in FEED_SECTIONS:
            tasks[section] = _feed_task(settings.feed_urls[section], session, settings.http_timeout)
        elif section is Section.PRODUCT_LAUNCHES:
            tasks[section] = lambda: fetch_listings(settings, session=session)
        elif section is Section.MARKETS:
            tasks[section] = lambda: fetch_market_snapshot(settings, session=session)

    if not tasks:
        raise ConfigurationError("No brief sections are enabled")

    with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
        futures = {section: executor.submit(task) for section, task in tasks.items()}
        return {section: future.result() for section, future in futures.items()}


def render_prompt(sections: Dict[Section, str]) -> str:
    """Interpolate rendered sections into the fixed template, in contract order."""
    ordered = [section for section in SECTION_ORDER if section in sections]
    instructions = "\n".join(
        f"{number}. {SECTION_PROMPTS[section][1]}," if number < len(ordered)
        else f"{number}. {SECTION_PROMPTS[section][1]}."
        for number, section in enumerate(ordered, start=1)
    )
    raw_sections = "\n\n".join(
        SECTION_BLOCK_TEMPLATE.format(heading=SECTION_PROMPTS[section][0], content=sections[section])
        for section in ordered
    )
    return BRIEF_PROMPT_TEMPLATE.format(
        max_sentences=MAX_BULLET_SENTENCES,
        instructions=instructions,
        raw_sections=raw_sections,
    )


def build_prompt(settings, session=None) -> str:
    """Fetch all enabled sections and return the assembled brief prompt."""
    logger.info(f"Collecting sections: {', '.join(s.value for s in SECTION_ORDER if settings.enabled(s))}")
    sections = collect_sections(settings, session=session)
    prompt = render_prompt(sections)
    logger.info(f"Prompt assembled ({len(prompt)} characters, {len(sections)} sections)")
    return prompt
