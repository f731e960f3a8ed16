from __future__ import annotations

import threading
import time

from quotewatch.schemas.quote import Observation, Quote
from quotewatch.services.symbols import normalize_symbol
from quotewatch.services.valuation import FIRST_OBSERVATION_BASELINE, classify


class ValuationStore:
    """Most recent observation per symbol, shared by every poll task.

    The lock only guards dict access; observations are frozen, so a reader
    either gets the previous entry or the new one, never a mix.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: dict[str, Observation] = {}

    def get_previous(self, symbol: str) -> Observation | None:
        key = normalize_symbol(symbol)
        with self._lock:
            return self._rows.get(key)

    def commit(self, symbol: str, observation: Observation) -> None:
        key = normalize_symbol(symbol)
        with self._lock:
            self._rows[key] = observation

    def record(
        self,
        quote: Quote,
        *,
        baseline: float = FIRST_OBSERVATION_BASELINE,
        now: int | None = None,
    ) -> Observation:
        key = normalize_symbol(quote.symbol)
        observed_at = int(time.time()) if now is None else now
        with self._lock:
            previous = self._rows.get(key)
            previous_price = previous.price if previous is not None else baseline
            observation = Observation.from_quote(
                quote,
                symbol=key,
                status=classify(quote.price, previous_price),
                observed_at=observed_at,
            )
            self._rows[key] = observation
        return observation

    def list_all(self) -> list[Observation]:
        with self._lock:
            return list(self._rows.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        key = normalize_symbol(symbol)
        with self._lock:
            return key in self._rows
