from __future__ import annotations


class QuoteWatchError(Exception):
    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message


class FetchError(QuoteWatchError):
    """Quote page could not be retrieved (URL, transport, status or body)."""

    def __init__(self, code: str, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class ExtractError(QuoteWatchError):
    """Quote page selectors are unusable. Bad page data never raises this."""
