"""Join-all fan-out: every call succeeds, or the whole batch fails with the first error."""

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def gather_all(calls: Sequence[Callable[[], T]], max_workers: Optional[int] = None) -> List[T]:
    """
    Run `calls` concurrently and return their results in submission order.
    Raises as soon as any call fails; calls still running are not cancelled
    but their results are dropped.
    """
    calls = list(calls)
    if not calls:
        return []
    if len(calls) == 1:
        return [calls[0]()]

    executor = ThreadPoolExecutor(
        max_workers=max_workers or len(calls),
        thread_name_prefix="news-canvas",
    )
    try:
        futures = [executor.submit(call) for call in calls]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
