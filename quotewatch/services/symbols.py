from __future__ import annotations

from quotewatch.schemas.quote import WatchedSymbol

EXCHANGE_SEPARATOR = ":"


def normalize_symbol(code: str) -> str:
    """Return the store key for a configured code: ``"bbca:idx"`` -> ``"BBCA"``."""
    value = str(code).strip().upper()
    return value.split(EXCHANGE_SEPARATOR, 1)[0].strip()


def watched_symbol(code: str) -> WatchedSymbol:
    value = str(code).strip().upper()
    key = normalize_symbol(value)
    if not key:
        raise ValueError(f"symbol is missing in entry {code!r}")
    return WatchedSymbol(code=value, key=key)


def parse_symbol_list(raw: str | list[str]) -> list[WatchedSymbol]:
    """Parse ``"AAPL:NASDAQ,BBCA:IDX"`` (or a list of entries) into watched symbols.

    Blank entries are skipped. Entries that collapse onto an already seen key are
    dropped so each key is polled once per tick.
    """
    entries = raw.split(",") if isinstance(raw, str) else list(raw)

    out: list[WatchedSymbol] = []
    seen: set[str] = set()
    for entry in entries:
        if not str(entry).strip():
            continue
        symbol = watched_symbol(entry)
        if symbol.key in seen:
            continue
        seen.add(symbol.key)
        out.append(symbol)
    return out
