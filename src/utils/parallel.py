"""Simple asyncio-aware helpers for running blocking work in an executor."""
from __future__ import annotations

import asyncio
import functools
from concurrent.futures import Executor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


async def run_in_executor(
    func: Callable[..., T], *args: Any, executor: Optional[Executor] = None, **kwargs: Any
) -> T:
    """Run ``func`` off the event loop and await the result.

    Uses the loop's default executor unless ``executor`` is given.
    """

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, functools.partial(func, *args, **kwargs))
