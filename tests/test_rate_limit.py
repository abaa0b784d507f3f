from types import SimpleNamespace

from redis.exceptions import ConnectionError as RedisConnectionError

from app.utils.rate_limit import RateLimiter, client_ip


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class FakeRedis:
    def __init__(self):
        self.counts = {}
        self.ttls = {}

    def incr(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    def expire(self, key, seconds):
        self.ttls[key] = seconds

    def ttl(self, key):
        return self.ttls.get(key, -1)


class DownRedis:
    def incr(self, key):
        raise RedisConnectionError("connection refused")


def _local(max_requests, window_seconds, clock):
    return RateLimiter(max_requests, window_seconds, clock=clock, get_client=lambda: None)


def test_allows_up_to_limit_then_blocks():
    clock = FakeClock()
    limiter = _local(3, 300, clock)

    assert [limiter.check("1.2.3.4") for _ in range(3)] == [None, None, None]
    assert limiter.check("1.2.3.4") == 300
    assert limiter.check("5.6.7.8") is None


def test_window_slides():
    clock = FakeClock()
    limiter = _local(2, 60, clock)

    limiter.check("ip")
    clock.now += 30
    limiter.check("ip")
    clock.now += 10
    assert limiter.check("ip") == 20

    clock.now += 21
    assert limiter.check("ip") is None


def test_reset_clears_history():
    limiter = _local(1, 60, FakeClock())
    limiter.check("ip")
    limiter.reset()
    assert limiter.check("ip") is None


def test_idle_clients_are_forgotten():
    clock = FakeClock()
    limiter = _local(3, 300, clock)

    for n in range(10_000):
        limiter.check(f"10.0.{n // 256}.{n % 256}")
    clock.now += 10_000
    limiter.check("203.0.113.1")

    assert list(limiter._hits) == ["203.0.113.1"]


def test_counts_in_redis_when_available():
    fake = FakeRedis()
    limiter = RateLimiter(3, 300, prefix="booking_rate", get_client=lambda: fake)

    assert [limiter.check("1.2.3.4") for _ in range(3)] == [None, None, None]
    assert limiter.check("1.2.3.4") == 300
    assert limiter.check("5.6.7.8") is None

    assert fake.counts == {"booking_rate:ip:1.2.3.4": 4, "booking_rate:ip:5.6.7.8": 1}
    assert fake.ttls["booking_rate:ip:1.2.3.4"] == 300
    assert limiter._hits == {}


def test_falls_back_to_local_counts_when_redis_fails():
    limiter = RateLimiter(1, 60, clock=FakeClock(), get_client=DownRedis)

    assert limiter.check("ip") is None
    assert limiter.check("ip") == 60


def _request(headers, host="10.0.0.1"):
    return SimpleNamespace(headers=headers, client=SimpleNamespace(host=host))


def test_client_ip_prefers_forwarded_header():
    request = _request({"x-forwarded-for": "203.0.113.9, 10.0.0.2", "x-real-ip": "198.51.100.1"})
    assert client_ip(request) == "203.0.113.9"


def test_client_ip_falls_back_to_socket():
    assert client_ip(_request({"cf-connecting-ip": "198.51.100.7"})) == "198.51.100.7"
    assert client_ip(_request({})) == "10.0.0.1"
