# Configuration for the Daily Brief job
# Settings are read once from the environment (and .env) at startup and passed
# explicitly to every component.

import os
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, List, Optional, Tuple

from dotenv import load_dotenv

from daily_brief.core.constants import FEED_URLS, SECTION_ORDER
from daily_brief.core.errors import ConfigurationError
from daily_brief.core.types import Section

# System-wide settings
SYSTEM_SETTINGS = {
    'http_timeout': 20,
    'timezone': 'America/Los_Angeles',
    'log_level': 'INFO',
    'log_dir': 'logs',
    'output_dir': 'output',
}

# Generative API settings
OPENAI_SETTINGS = {
    'model': 'gpt-4o-mini',
    'temperature': 0.7,
    'max_tokens': 1500,
}

# Email settings
EMAIL_SETTINGS = {
    'transport': 'resend',
    'sender': 'Daily Brief <on@resend.dev>',
    'resend_url': 'https://api.resend.com/emails',
    'smtp_port': 587,
}

# (display label, provider function, symbol, market)
MARKET_INSTRUMENTS = (
    ('S&P 500 (via SPY)', 'TIME_SERIES_DAILY', 'SPY', None),
    ('Nasdaq (via QQQ)', 'TIME_SERIES_DAILY', 'QQQ', None),
    ('Bitcoin', 'DIGITAL_CURRENCY_DAILY', 'BTC', 'USD'),
)

ALPHA_VANTAGE_URL = 'https://www.alphavantage.co/query'
PRODUCT_HUNT_URL = 'https://api.producthunt.com/v2/api/graphql'

# Environment variable backing each required secret
REQUIRED_KEYS = {
    'openai_api_key': 'OPENAI_API_KEY',
    'alpha_vantage_api_key': 'ALPHA_VANTAGE_API_KEY',
    'product_hunt_api_key': 'PRODUCT_HUNT_API_KEY',
    'resend_api_key': 'RESEND_API_KEY',
    'email_recipients': 'EMAIL_RECIPIENTS',
    'smtp_server': 'SMTP_SERVER',
    'smtp_username': 'SMTP_USERNAME',
    'smtp_password': 'SMTP_PASSWORD',
}


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_sections(value: Optional[str]) -> FrozenSet[Section]:
    """Parse a comma-separated section list; empty means every section."""
    names = _split_list(value)
    if not names:
        return frozenset(SECTION_ORDER)
    sections = set()
    for name in names:
        try:
            sections.add(Section(name.lower()))
        except ValueError:
            valid = ', '.join(s.value for s in SECTION_ORDER)
            raise ConfigurationError(f"Unknown brief section '{name}'. Valid sections: {valid}")
    return frozenset(sections)


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""
    openai_api_key: Optional[str] = None
    alpha_vantage_api_key: Optional[str] = None
    product_hunt_api_key: Optional[str] = None
    resend_api_key: Optional[str] = None
    email_recipients: Tuple[str, ...] = ()
    email_sender: str = EMAIL_SETTINGS['sender']
    email_transport: str = EMAIL_SETTINGS['transport']
    smtp_server: Optional[str] = None
    smtp_port: int = EMAIL_SETTINGS['smtp_port']
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    openai_model: str = OPENAI_SETTINGS['model']
    temperature: float = OPENAI_SETTINGS['temperature']
    max_tokens: int = OPENAI_SETTINGS['max_tokens']
    sections: FrozenSet[Section] = frozenset(SECTION_ORDER)
    feed_urls: Dict[Section, str] = field(default_factory=lambda: dict(FEED_URLS))
    timezone: str = SYSTEM_SETTINGS['timezone']
    http_timeout: float = SYSTEM_SETTINGS['http_timeout']
    cron_secret: Optional[str] = None
    log_level: str = SYSTEM_SETTINGS['log_level']
    log_dir: str = SYSTEM_SETTINGS['log_dir']
    output_dir: str = SYSTEM_SETTINGS['output_dir']

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> 'Settings':
        """Build settings from environment variables, loading .env first."""
        if env is None:
            load_dotenv()
            env = dict(os.environ)

        feed_urls = dict(FEED_URLS)
        for section in FEED_URLS:
            override = env.get(f"FEED_URL_{section.name}")
            if override:
                feed_urls[section] = override

        try:
            smtp_port = int(env.get('SMTP_PORT') or EMAIL_SETTINGS['smtp_port'])
            http_timeout = float(env.get('HTTP_TIMEOUT') or SYSTEM_SETTINGS['http_timeout'])
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}")

        return cls(
            openai_api_key=env.get('OPENAI_API_KEY') or None,
            alpha_vantage_api_key=env.get('ALPHA_VANTAGE_API_KEY') or None,
            product_hunt_api_key=env.get('PRODUCT_HUNT_API_KEY') or None,
            resend_api_key=env.get('RESEND_API_KEY') or None,
            email_recipients=tuple(_split_list(env.get('EMAIL_RECIPIENTS'))),
            email_sender=env.get('EMAIL_SENDER') or EMAIL_SETTINGS['sender'],
            email_transport=(env.get('EMAIL_TRANSPORT') or EMAIL_SETTINGS['transport']).lower(),
            smtp_server=env.get('SMTP_SERVER') or None,
            smtp_port=smtp_port,
            smtp_username=env.get('SMTP_USERNAME') or None,
            smtp_password=env.get('SMTP_PASSWORD') or None,
            openai_model=env.get('OPENAI_MODEL') or OPENAI_SETTINGS['model'],
            sections=parse_sections(env.get('BRIEF_SECTIONS')),
            feed_urls=feed_urls,
            timezone=env.get('BRIEF_TIMEZONE') or SYSTEM_SETTINGS['timezone'],
            http_timeout=http_timeout,
            cron_secret=env.get('CRON_SECRET') or None,
            log_level=env.get('LOG_LEVEL') or SYSTEM_SETTINGS['log_level'],
            log_dir=env.get('LOG_DIR') or SYSTEM_SETTINGS['log_dir'],
            output_dir=env.get('OUTPUT_DIR') or SYSTEM_SETTINGS['output_dir'],
        )

    def require(self, name: str):
        """Return a required setting, raising ConfigurationError if it is unset."""
        value = getattr(self, name)
        if not value:
            env_name = REQUIRED_KEYS.get(name, name.upper())
            raise ConfigurationError(f"Missing required configuration: {env_name}")
        return value

    def required_keys(self) -> List[str]:
        """Names of the settings the enabled sections and transport need."""
        keys = ['openai_api_key', 'email_recipients']
        if Section.MARKETS in self.sections:
            keys.append('alpha_vantage_api_key')
        if Section.PRODUCT_LAUNCHES in self.sections:
            keys.append('product_hunt_api_key')
        if self.email_transport == 'smtp':
            keys.extend(['smtp_server', 'smtp_username', 'smtp_password'])
        else:
            keys.append('resend_api_key')
        return keys

    def missing_keys(self) -> List[str]:
        """Environment variable names for required settings that are unset."""
        return [REQUIRED_KEYS[key] for key in self.required_keys() if not getattr(self, key)]

    def enabled(self, section: Section) -> bool:
        return section in self.sections

    def with_sections(self, sections) -> 'Settings':
        """Copy of these settings with a different set of enabled sections."""
        return replace(self, sections=frozenset(sections))
