import time
from threading import Lock

from redis.exceptions import RedisError

from app.core import config
from app.core.logging_config import get_logger
from app.core.redis import get_redis_client

logger = get_logger()


class RateLimiter:
    """Per-client request counter for the public booking endpoint.

    Counts live in redis (``incr`` + ``expire`` per key) so every worker
    shares them. Without redis the limiter keeps a sliding window per key in
    process memory and drops keys once their window is empty.
    """

    def __init__(self, max_requests: int, window_seconds: int, prefix: str = "rate",
                 clock=time.monotonic, get_client=get_redis_client):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.prefix = prefix
        self._clock = clock
        self._get_client = get_client
        self._hits: dict[str, list] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    def check(self, key: str) -> int | None:
        """Record a hit for ``key``; return seconds to wait when over the limit."""
        client = self._get_client()
        if client is not None:
            try:
                return self._check_redis(client, key)
            except RedisError as e:
                logger.warning(f"Redis unavailable for rate limiting, using local counters: {e}")

        return self._check_local(key)

    # ---------------- REDIS ----------------
    def _check_redis(self, client, key: str) -> int | None:
        redis_key = f"{self.prefix}:ip:{key}"

        hits = client.incr(redis_key)
        if hits == 1:
            client.expire(redis_key, self.window_seconds)

        if hits <= self.max_requests:
            return None

        ttl = client.ttl(redis_key)
        if ttl is None or ttl < 0:
            # Key lost its expiry; start a fresh window
            client.expire(redis_key, self.window_seconds)
            return self.window_seconds
        return max(1, ttl)

    # ---------------- LOCAL FALLBACK ----------------
    def _check_local(self, key: str) -> int | None:
        now = self._clock()
        window_start = now - self.window_seconds

        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(window_start)
                self._last_sweep = now

            hits = [ts for ts in self._hits.get(key, ()) if ts > window_start]

            if len(hits) >= self.max_requests:
                self._hits[key] = hits
                oldest = min(hits)
                return max(1, int(oldest + self.window_seconds - now + 0.999))

            hits.append(now)
            self._hits[key] = hits
            return None

    def _sweep(self, window_start: float):
        stale = [k for k, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for k in stale:
            del self._hits[k]

    def reset(self):
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


booking_limiter = RateLimiter(
    config.BOOKING_RATE_LIMIT_MAX,
    config.BOOKING_RATE_LIMIT_WINDOW_SECONDS,
    prefix="booking_rate",
)


def client_ip(request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return (
        request.headers.get("x-real-ip")
        or request.headers.get("cf-connecting-ip")
        or (request.client.host if request.client else "unknown")
    )
