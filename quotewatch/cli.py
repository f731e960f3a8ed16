from __future__ import annotations

import sys
from typing import Sequence

from pydantic import ValidationError

from quotewatch.config.settings import Settings
from quotewatch.errors import ExtractError
from quotewatch.main import build_coordinator, create_app


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = Settings.from_args(argv)
        coordinator = build_coordinator(settings)
    except (ValidationError, ValueError, ExtractError) as exc:
        print(f"[POLL][config_invalid] {exc}", file=sys.stderr, flush=True)
        return 2

    if settings.API_PORT is not None:
        import uvicorn

        uvicorn.run(create_app(coordinator), host=settings.API_HOST, port=settings.API_PORT)
        return 0

    try:
        coordinator.run_forever()
    except KeyboardInterrupt:
        coordinator.stop()
    return 0
