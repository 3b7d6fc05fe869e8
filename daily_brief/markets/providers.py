"""Boundary models for Alpha Vantage daily series responses.

Every payload is validated right after deserialization into either a
``DailySeries`` or a ``ProviderError``; business logic never reads raw JSON.
"""
from decimal import Decimal
from typing import Dict, List, Literal, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

# Error-shaped payloads Alpha Vantage returns with HTTP 200
ERROR_KEYS = {
    'Error Message': 'error',
    'Note': 'rate_limit',
    'Information': 'information',
}


class ProviderError(BaseModel):
    kind: Literal['error', 'rate_limit', 'information', 'malformed']
    message: str


class DailyBar(BaseModel):
    model_config = ConfigDict(extra='ignore')

    close: Decimal = Field(validation_alias=AliasChoices('4. close', '4a. close (USD)'))


class DailySeries(BaseModel):
    model_config = ConfigDict(extra='ignore')

    series: Dict[str, DailyBar] = Field(
        validation_alias=AliasChoices('Time Series (Daily)', 'Time Series (Digital Currency Daily)')
    )

    def latest_closes(self, count: int = 2) -> List[Tuple[str, Decimal]]:
        """Most recent `count` (date, close) pairs, oldest first."""
        dates = sorted(self.series)[-count:]
        return [(date, self.series[date].close) for date in dates]


def parse_daily_series(payload) -> Union[DailySeries, ProviderError]:
    """Validate a decoded response into a series or an error variant."""
    if not isinstance(payload, dict):
        return ProviderError(kind='malformed', message=f"Expected a JSON object, got {type(payload).__name__}")

    for key, kind in ERROR_KEYS.items():
        if key in payload:
            return ProviderError(kind=kind, message=str(payload[key]))

    try:
        return DailySeries.model_validate(payload)
    except ValidationError as e:
        return ProviderError(kind='malformed', message=f"Unexpected response format: {e.error_count()} validation error(s)")
