"""Domain service: order number generation.

Numbers look like ``ORD-20240131143005-0042``: the creation timestamp to
the second plus a 4-digit random suffix.  They are not guaranteed unique;
the order repository enforces uniqueness and the order builder asks for a
fresh number when a collision is reported.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable

from bookstore.domain.clock import utc_now

ORDER_NUMBER_PREFIX = "ORD"


class OrderNumberGenerator:

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.Random()

    def next_number(self) -> str:
        timestamp = self._clock().strftime("%Y%m%d%H%M%S")
        suffix = self._rng.randint(0, 9999)
        return f"{ORDER_NUMBER_PREFIX}-{timestamp}-{suffix:04d}"
