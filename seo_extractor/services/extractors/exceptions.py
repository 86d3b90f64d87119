"""Exception hierarchy for content extraction."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for all extraction errors."""

    pass


class InvalidUrlError(ExtractionError):
    """Raised when the input URL is malformed or targets a non-public host.

    Never triggers a fallback: an unsafe URL is not fetched by either tier.
    """

    pass


class RemoteExtractionError(ExtractionError):
    """Raised when the remote scraping service cannot produce HTML."""

    pass


class FetchError(ExtractionError):
    """Raised when the local tier's direct HTTP fetch fails."""

    pass


class ParseError(ExtractionError):
    """Raised when no article can be isolated from a fetched document."""

    pass


class AggregateExtractionFailure(ExtractionError):
    """Raised when both extraction tiers failed.

    Attributes:
        remote_error: Message recorded for the remote tier, if any.
        local_error: Message recorded for the local tier, if any.
    """

    def __init__(
        self, remote_error: str | None = None, local_error: str | None = None
    ) -> None:
        self.remote_error = remote_error
        self.local_error = local_error
        details = "; ".join(
            part
            for part in (
                f"Remote: {remote_error}" if remote_error else None,
                f"Local: {local_error}" if local_error else None,
            )
            if part
        )
        super().__init__(f"Extraction failed. {details}".strip())
