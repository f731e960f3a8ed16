from __future__ import annotations

import threading
import time
from typing import Callable, Literal

from quotewatch.errors import QuoteWatchError
from quotewatch.schemas.quote import Observation, WatchedSymbol
from quotewatch.services.valuation import FIRST_OBSERVATION_BASELINE
from quotewatch.services.valuation_store import ValuationStore

DispatchMode = Literal["sequential", "concurrent"]


class PollCoordinator:
    """Polls every watched symbol once per tick and records the valuation change.

    In ``concurrent`` mode each symbol gets its own thread and the tick does not
    wait for them (best effort, at most one dispatch per symbol per interval)
    unless ``wait_for_tick`` is set. The interval runs from the start of one
    tick to the start of the next.
    """

    def __init__(
        self,
        *,
        store: ValuationStore,
        fetcher,
        extractor,
        symbols: list[WatchedSymbol],
        interval_sec: float = 10.0,
        mode: DispatchMode = "sequential",
        wait_for_tick: bool = False,
        baseline_price: float = FIRST_OBSERVATION_BASELINE,
        sleep_fn: Callable[[float], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if mode not in ("sequential", "concurrent"):
            raise ValueError(f"unknown dispatch mode: {mode}")
        self.store = store
        self.fetcher = fetcher
        self.extractor = extractor
        self.symbols = list(symbols)
        self.interval_sec = interval_sec
        self.mode = mode
        self.wait_for_tick = wait_for_tick
        self.baseline_price = baseline_price
        self.clock = clock
        self._stop_event = threading.Event()
        self._sleep_fn = sleep_fn or self._stop_event.wait
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._metrics = {
            "ticks": 0,
            "cycles_started": 0,
            "cycles_committed": 0,
            "cycles_failed": 0,
            "missing_prices": 0,
        }
        self._inflight = 0
        self._last_error: str | None = None

    def _inc(self, key: str, value: int = 1) -> None:
        with self._lock:
            self._metrics[key] = self._metrics.get(key, 0) + value

    def _record_failure(self, symbol: WatchedSymbol, code: str, exc: Exception) -> None:
        with self._lock:
            self._metrics["cycles_failed"] += 1
            self._last_error = f"{symbol.key}: {exc}"
        print(f"[POLL][cycle_failed] symbol={symbol.key} code={code} error={exc}", flush=True)

    def run_cycle(self, symbol: WatchedSymbol) -> Observation | None:
        """Fetch, extract, classify and commit one symbol. Never raises."""
        self._inc("cycles_started")
        try:
            markup = self.fetcher.fetch(symbol.code)
            quote = self.extractor.parse(markup, symbol.code)
        except QuoteWatchError as exc:
            self._record_failure(symbol, exc.code, exc)
            return None
        except Exception as exc:
            self._record_failure(symbol, "UNEXPECTED", exc)
            return None

        if not quote.price_found:
            self._inc("missing_prices")
            print(
                f"[POLL][price_missing] symbol={symbol.key} name={quote.company_name!r} kept_previous=1",
                flush=True,
            )
            return None

        observation = self.store.record(quote, baseline=self.baseline_price)
        self._inc("cycles_committed")
        print(f"[POLL][observation] {observation.describe()}", flush=True)
        return observation

    def _run_task(self, symbol: WatchedSymbol) -> None:
        try:
            self.run_cycle(symbol)
        finally:
            with self._lock:
                self._inflight -= 1

    def dispatch_tick(self) -> list[threading.Thread]:
        """Run one tick. Returns the threads started in concurrent mode."""
        self._inc("ticks")
        if self.mode == "sequential":
            for symbol in self.symbols:
                self.run_cycle(symbol)
            return []

        workers: list[threading.Thread] = []
        for symbol in self.symbols:
            worker = threading.Thread(
                target=self._run_task,
                args=(symbol,),
                daemon=True,
                name=f"quote-poll-{symbol.key}",
            )
            with self._lock:
                self._inflight += 1
            try:
                worker.start()
            except RuntimeError as exc:
                with self._lock:
                    self._inflight -= 1
                self._record_failure(symbol, "DISPATCH_FAILED", exc)
                continue
            workers.append(worker)

        if self.wait_for_tick:
            for worker in workers:
                worker.join()
        return workers

    def run_forever(self, max_ticks: int | None = None) -> None:
        print(
            f"[POLL][loop_start] mode={self.mode} interval_sec={self.interval_sec} "
            f"symbols={','.join(s.code for s in self.symbols)}",
            flush=True,
        )
        ticks = 0
        while not self._stop_event.is_set():
            started = self.clock()
            self.dispatch_tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            elapsed = self.clock() - started
            self._sleep_fn(max(self.interval_sec - elapsed, 0.0))
        print(f"[POLL][loop_stop] ticks={ticks}", flush=True)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run_forever, daemon=True, name="quote-poll-loop")
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=1.0)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def metrics(self) -> dict:
        with self._lock:
            return {
                **self._metrics,
                "inflight": self._inflight,
                "last_error": self._last_error,
                "mode": self.mode,
                "interval_sec": self.interval_sec,
                "symbols": [s.key for s in self.symbols],
            }
