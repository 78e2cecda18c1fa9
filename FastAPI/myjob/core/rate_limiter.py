import threading
import time


class InMemoryRateLimiter:
    """
    Fixed-window rate limiter keyed by "<client ip>:<path>".
    State lives in process memory, so limits apply per API instance.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: dict[str, tuple[int, float]] = {}

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """
        Returns (allowed, retry_after_seconds).
        """
        now = time.time()
        with self._lock:
            count, window_start = self._state.get(key, (0, now))
            if now - window_start >= window_seconds:
                count = 0
                window_start = now
            if count >= limit:
                retry_after = max(1, int(window_seconds - (now - window_start)))
                return False, retry_after
            self._state[key] = (count + 1, window_start)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._state.clear()


# Auth endpoints guarded by settings.rate_limit_auth_per_min.
RATE_LIMITED_AUTH_PATHS = frozenset({
    "/auth/token",
    "/auth/token/refresh",
    "/auth/check-creds",
    "/auth/job-seeker/register",
    "/auth/employer/register",
})

rate_limiter = InMemoryRateLimiter()
