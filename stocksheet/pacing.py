import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Pacer:
    """
    Keep a minimum gap between consecutive requests.

    The gap is measured from the moment the previous request returned, not
    from when it started. Use it as a context manager around each request:

        with pacer:
            client.fetch(symbol)
    """

    def __init__(
        self,
        delay: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.delay = delay
        self.clock = clock
        self.sleep = sleep
        self.last_finished: float | None = None

    def wait(self):
        if self.delay == 0 or self.last_finished is None:
            return
        remaining = self.delay - (self.clock() - self.last_finished)
        if remaining > 0:
            logger.debug(f"pacing, sleeping {remaining:.3f}s")
            self.sleep(remaining)

    def mark(self):
        self.last_finished = self.clock()

    def __enter__(self) -> "Pacer":
        self.wait()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.mark()
