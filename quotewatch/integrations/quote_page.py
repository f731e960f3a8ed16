from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import requests

from quotewatch.errors import FetchError


class QuotePageClient:
    """Fetches the public quote page for one symbol."""

    DEFAULT_BASE_URL = "https://www.google.com/finance/quote"
    DEFAULT_USER_AGENT = "Mozilla/5.0"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_sec: float = 10.0,
        session: Optional[Any] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_sec = timeout_sec
        self.session = session or requests

    def build_url(self, symbol: str) -> str:
        return f"{self.base_url}/{quote(symbol.strip(), safe=':')}"

    def fetch(self, symbol: str) -> str:
        url = self.build_url(symbol)
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_sec,
            )
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as exc:
            raise FetchError("PARSE_URL_FAILED", f"{url}: {exc}") from exc
        except (requests.exceptions.ChunkedEncodingError, requests.exceptions.ContentDecodingError) as exc:
            raise FetchError("RESPONSE_BODY_FAILED", str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise FetchError("REQUEST_FAILED", str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise FetchError(
                "RESPONSE_FAILED",
                f"{url} returned {response.status_code}",
                status_code=response.status_code,
            )

        return response.text
