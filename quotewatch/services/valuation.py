from __future__ import annotations

from quotewatch.schemas.quote import ValuationStatus

# A symbol seen for the first time is compared against this price, so its first
# observation reads "up" unless the page itself reports zero.
FIRST_OBSERVATION_BASELINE = 0.0


def classify(new_price: float, previous_price: float) -> ValuationStatus:
    """Compare this tick's price with the previous one.

    Anything that does not order (NaN, ``None``) is reported as SAME.
    """
    try:
        if new_price > previous_price:
            return ValuationStatus.UP
        if new_price < previous_price:
            return ValuationStatus.DOWN
    except TypeError:
        return ValuationStatus.SAME
    return ValuationStatus.SAME
