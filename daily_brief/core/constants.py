"""Constants and fixed contract values."""
from daily_brief.core.types import Section

# Placeholders for absent feed item fields
NO_TITLE = "No title"
NO_DESCRIPTION = "No description"
NO_LINK = "No link"

# Items rendered per feed section
MAX_FEED_ITEMS = 10

# Listings requested from the launch provider
MAX_LISTINGS = 10

MARKET_UNAVAILABLE = "Market data unavailable"
LISTINGS_UNAVAILABLE = "Product Hunt data unavailable"
NO_LISTINGS = "No launches listed"
BRIEF_FALLBACK = "Failed to generate brief"

# Prompt order is part of the output contract; reordering changes the brief layout
SECTION_ORDER = (
    Section.AI_RESEARCH,
    Section.TECH_NEWS,
    Section.WORLD_NEWS,
    Section.PRODUCT_LAUNCHES,
    Section.MARKETS,
)

FEED_SECTIONS = (Section.AI_RESEARCH, Section.TECH_NEWS, Section.WORLD_NEWS)

# Default syndication sources per feed section
FEED_URLS = {
    Section.AI_RESEARCH: "http://arxiv.org/rss/cs.AI",
    Section.TECH_NEWS: "https://news.ycombinator.com/rss",
    Section.WORLD_NEWS: "https://rss.nytimes.com/services/xml/rss/nyt/World.xml",
}

# (heading in raw data, instruction line)
SECTION_PROMPTS = {
    Section.AI_RESEARCH: ("AI RESEARCH", "notable AI research news (especially large-model papers)"),
    Section.TECH_NEWS: ("TECH / HACKER NEWS", "top tech stories from Hacker News, including any YC/Techstars company milestones"),
    Section.WORLD_NEWS: ("WORLD NEWS", "top world news"),
    Section.PRODUCT_LAUNCHES: ("PRODUCT HUNT", "top products launched on Product Hunt in the last 24 hours"),
    Section.MARKETS: ("MARKETS", "market close snapshot (S&P 500, Nasdaq, Bitcoin)"),
}
