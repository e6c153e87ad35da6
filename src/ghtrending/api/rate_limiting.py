from asyncio import Lock, sleep
from time import monotonic


class RateLimiter:
    """Token bucket pacing outbound requests (one token per request by default)."""

    def __init__(self, *, capacity: int, refill_per_min: int):
        if capacity <= 0 or refill_per_min <= 0:
            raise ValueError("capacity and refill_per_min must be positive")
        self.capacity = capacity
        self._tokens = float(capacity)
        self._refill_rate = refill_per_min / 60  # tokens per second
        self._updated = monotonic()
        self._lock = Lock()

    @property
    def available(self) -> float:
        self._refill()
        return self._tokens

    async def acquire(self, cost: int = 1):
        cost = min(cost, self.capacity)
        async with self._lock:
            self._refill()
            while self._tokens < cost:
                await sleep((cost - self._tokens) / self._refill_rate)
                self._refill()
            self._tokens -= cost

    def _refill(self):
        now = monotonic()
        delta = now - self._updated
        self._updated = now
        self._tokens = min(self.capacity, self._tokens + delta * self._refill_rate)
