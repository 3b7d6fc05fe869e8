"""Exception hierarchy for the brief pipeline."""


class BriefError(Exception):
    """Base class for all pipeline errors."""
    pass


class ConfigurationError(BriefError):
    """A required setting is missing or invalid."""
    pass


class SourceUnavailable(BriefError):
    """A single feed or listing source could not be read."""
    pass


class MarketDataError(BriefError):
    """Market snapshot could not be built for every instrument."""
    pass


class SummarizationError(BriefError):
    """The generative API call failed."""
    pass


class EmailDeliveryError(BriefError):
    """The email provider rejected or failed to accept the brief."""
    pass
