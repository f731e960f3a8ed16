from __future__ import annotations

import argparse
from typing import Literal, Sequence

from pydantic import BaseModel, Field, field_validator

from quotewatch.integrations.quote_page import QuotePageClient

DEFAULT_CODES = "AAPL:NASDAQ,BBCA:IDX,TLKM:IDX"


class Settings(BaseModel):
    CODES: list[str]
    INTERVAL_SEC: int = Field(default=10, ge=1)
    DISPATCH_MODE: Literal["sequential", "concurrent"] = "sequential"
    WAIT_FOR_TICK: bool = False
    REQUEST_TIMEOUT_SEC: float = Field(default=10.0, gt=0)
    BASE_URL: str = QuotePageClient.DEFAULT_BASE_URL
    USER_AGENT: str = QuotePageClient.DEFAULT_USER_AGENT
    API_HOST: str = "127.0.0.1"
    API_PORT: int | None = Field(default=None, ge=1, le=65535)

    @field_validator("CODES")
    @classmethod
    def _require_codes(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one symbol code is required")
        return value

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="quotewatch",
            description="Poll quote pages and report whether each price went up, down or stayed the same.",
        )
        parser.add_argument("-c", "--codes", default=DEFAULT_CODES, help="comma separated SYMBOL:EXCHANGE list")
        parser.add_argument("-i", "--interval", type=int, default=10, help="seconds between ticks")
        parser.add_argument("-u", "--use-async", action="store_true", help="fetch every symbol on its own thread")
        parser.add_argument(
            "--wait-for-tick",
            action="store_true",
            help="with --use-async, wait for all fetches before sleeping",
        )
        parser.add_argument("--timeout", type=float, default=10.0, help="request timeout in seconds")
        parser.add_argument("--base-url", default=QuotePageClient.DEFAULT_BASE_URL)
        parser.add_argument("--user-agent", default=QuotePageClient.DEFAULT_USER_AGENT)
        parser.add_argument("--api-host", default="127.0.0.1")
        parser.add_argument("--api-port", type=int, default=None, help="serve the status API on this port")
        return parser

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> "Settings":
        args = cls.build_parser().parse_args(argv)
        codes = [c.strip() for c in args.codes.split(",") if c.strip()]

        return cls.model_validate(
            {
                "CODES": codes,
                "INTERVAL_SEC": args.interval,
                "DISPATCH_MODE": "concurrent" if args.use_async else "sequential",
                "WAIT_FOR_TICK": args.wait_for_tick,
                "REQUEST_TIMEOUT_SEC": args.timeout,
                "BASE_URL": args.base_url,
                "USER_AGENT": args.user_agent,
                "API_HOST": args.api_host,
                "API_PORT": args.api_port,
            }
        )
