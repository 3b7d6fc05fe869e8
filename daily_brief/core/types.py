"""Type definitions for brief sections, feed items and market data."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class Section(str, Enum):
    """Toggleable brief sections, declared in prompt order."""
    AI_RESEARCH = 'ai_research'
    TECH_NEWS = 'tech_news'
    WORLD_NEWS = 'world_news'
    PRODUCT_LAUNCHES = 'product_launches'
    MARKETS = 'markets'


@dataclass(frozen=True)
class FeedItem:
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    published_at: Optional[datetime] = None


@dataclass(frozen=True)
class MarketQuote:
    label: str
    symbol: str
    last_price: Decimal
    change: Decimal
    change_percent: Decimal  # already rounded for display


@dataclass(frozen=True)
class MarketSnapshot:
    quotes: Tuple[MarketQuote, ...] = ()

    def render(self) -> str:
        parts = [
            f"{quote.label}: ${quote.last_price:.2f} ({quote.change_percent:.2f}%)"
            for quote in self.quotes
        ]
        return "Market snapshot: " + ", ".join(parts)


@dataclass(frozen=True)
class Listing:
    name: str
    tagline: str
    url: str
    score: int


class RunState(str, Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class BriefRun:
    """Record of a single invocation. Nothing here outlives the run."""
    state: RunState = RunState.IDLE
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    document: Optional[str] = None
    message_id: Optional[str] = None
    output_path: Optional[str] = None
    error: Optional[BaseException] = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.SUCCEEDED
