from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from quotewatch.api.routes import router
from quotewatch.config.settings import Settings
from quotewatch.integrations.quote_markup import QuoteMarkupParser
from quotewatch.integrations.quote_page import QuotePageClient
from quotewatch.services.poll_coordinator import PollCoordinator
from quotewatch.services.symbols import parse_symbol_list
from quotewatch.services.valuation_store import ValuationStore


def build_coordinator(settings: Settings, store: ValuationStore | None = None) -> PollCoordinator:
    # selector typos surface here as ExtractError, before the loop starts
    extractor = QuoteMarkupParser()
    fetcher = QuotePageClient(
        base_url=settings.BASE_URL,
        user_agent=settings.USER_AGENT,
        timeout_sec=settings.REQUEST_TIMEOUT_SEC,
    )
    return PollCoordinator(
        store=store or ValuationStore(),
        fetcher=fetcher,
        extractor=extractor,
        symbols=parse_symbol_list(settings.CODES),
        interval_sec=settings.INTERVAL_SEC,
        mode=settings.DISPATCH_MODE,
        wait_for_tick=settings.WAIT_FOR_TICK,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    coordinator: PollCoordinator = app.state.poll_coordinator
    print(f"[API][poll_worker_start] mode={coordinator.mode}", flush=True)
    coordinator.start()
    try:
        yield
    finally:
        coordinator.stop()
        print("[API][poll_worker_stop] thread=quote-poll-loop", flush=True)


def create_app(coordinator: PollCoordinator) -> FastAPI:
    app = FastAPI(title="quotewatch", version="0.1.0", lifespan=lifespan)
    app.include_router(router, prefix="/v1")
    app.state.poll_coordinator = coordinator
    app.state.valuation_store = coordinator.store
    return app
