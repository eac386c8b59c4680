class ExtractionError(Exception):
    """Base class for failures surfaced by the extraction engine."""


class ValidationError(ExtractionError, ValueError):
    """The target URL was rejected before any network access."""


class NotFoundError(ExtractionError):
    """The page was fetched but declares no audio meta tag."""


class UpstreamError(ExtractionError):
    """The page could not be fetched, or it was too large to process."""


class RateLimited(ExtractionError):
    """The client exceeded its request allowance for the current window."""
