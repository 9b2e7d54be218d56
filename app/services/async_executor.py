"""
Runs blocking repository calls off the event loop.
Used to fan out independent per-store and per-product work concurrently.
"""
import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

# Thread pool for the Supabase client, whose calls block
_THREAD_POOL = ThreadPoolExecutor(max_workers=10)


async def run_blocking(func: Callable, *args, **kwargs) -> Any:
    """Execute a blocking function in the thread pool and await its result."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_THREAD_POOL, partial(func, *args, **kwargs))


async def run_parallel(calls: List[Callable[[], Any]]) -> List[Any]:
    """
    Execute zero-argument blocking callables concurrently.

    Results come back in call order. The first failure is raised once every
    call has finished; calls that already succeeded are not undone.
    """
    start_time = time.time()
    results = await asyncio.gather(
        *(run_blocking(call) for call in calls),
        return_exceptions=True,
    )
    logger.info(f"Executed {len(calls)} calls in {time.time() - start_time:.2f} seconds")

    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
