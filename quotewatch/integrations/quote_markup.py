from __future__ import annotations

import re
from typing import Any

import soupsieve
from bs4 import BeautifulSoup

from quotewatch.errors import ExtractError
from quotewatch.schemas.quote import Quote
from quotewatch.services.symbols import normalize_symbol

COMPANY_SELECTOR = ".zzDege"
PRICE_SELECTOR = ".YMlKec.fxKbKc"
MISSING_COMPANY_NAME = "N/A"

# Keeps digits, the decimal point and a leading sign; drops currency symbols,
# non-breaking spaces and thousands separators.
_PRICE_NOISE = re.compile(r"[^0-9.\-]")


def _first_text(element: Any) -> str | None:
    if element is None:
        return None
    return next(element.stripped_strings, None)


def parse_price(text: str | None) -> float | None:
    """``"$172.50"`` -> 172.5, ``"Rp\\u00a015,000"`` -> 15000.0, garbage -> None."""
    if not text:
        return None
    cleaned = _PRICE_NOISE.sub("", text)
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if value != value or value < 0:
        return None
    return value


class QuoteMarkupParser:
    """Reads company name and last price from a quote page.

    Selectors are compiled once, so a typo in either fails at construction
    instead of on every tick. Page content never raises: missing elements fall
    back to ``"N/A"`` and ``0.0``.
    """

    def __init__(
        self,
        company_selector: str = COMPANY_SELECTOR,
        price_selector: str = PRICE_SELECTOR,
        *,
        features: str = "html.parser",
    ) -> None:
        self.company_selector = company_selector
        self.price_selector = price_selector
        self.features = features
        self._company = self._compile(company_selector)
        self._price = self._compile(price_selector)

    @staticmethod
    def _compile(selector: str) -> Any:
        try:
            return soupsieve.compile(selector)
        except soupsieve.SelectorSyntaxError as exc:
            raise ExtractError("SELECTOR_FAILED", f"{selector!r}: {exc}") from exc

    def parse(self, markup: str, symbol_hint: str) -> Quote:
        document = BeautifulSoup(markup, self.features)

        company_name = _first_text(self._company.select_one(document)) or MISSING_COMPANY_NAME
        price = parse_price(_first_text(self._price.select_one(document)))

        return Quote(
            symbol=normalize_symbol(symbol_hint),
            company_name=company_name,
            price=price if price is not None else 0.0,
            price_found=price is not None,
        )
