import time

from devstudio.core.rate_limiter import RateLimiter


def test_allows_up_to_limit():
    limiter = RateLimiter(max_requests=3, window_seconds=60)

    results = [limiter.is_allowed("client") for _ in range(4)]

    assert results == [(True, 2), (True, 1), (True, 0), (False, 0)]


def test_clients_are_tracked_separately():
    limiter = RateLimiter(max_requests=1, window_seconds=60)

    assert limiter.is_allowed("a")[0]
    assert limiter.is_allowed("b")[0]
    assert not limiter.is_allowed("a")[0]


def test_window_slides():
    limiter = RateLimiter(max_requests=1, window_seconds=0.2)

    assert limiter.is_allowed("client")[0]
    assert not limiter.is_allowed("client")[0]
    time.sleep(0.3)
    assert limiter.is_allowed("client")[0]


def test_retry_after_counts_down_from_oldest_request():
    limiter = RateLimiter(max_requests=2, window_seconds=30)
    assert limiter.is_allowed("client") == (True, 1)

    assert 1 <= limiter.retry_after_seconds("client") <= 30
    assert limiter.retry_after_seconds("unknown") == 1
