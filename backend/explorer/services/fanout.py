"""Helpers for concurrent upstream fan-out"""

import asyncio
from typing import Any, Awaitable, List, Optional, Sequence

from explorer.errors import is_not_found


async def gather_settled(*aws: Awaitable[Any]) -> List[Any]:
    """Await every call; each slot holds either its result or its exception"""
    return list(await asyncio.gather(*aws, return_exceptions=True))


def first_error(results: Sequence[Any]) -> Optional[BaseException]:
    """
    Pick the error to surface from settled results.

    A failure other than not-found wins over a not-found; within the same
    class the earliest slot wins.
    """
    errors = [r for r in results if isinstance(r, BaseException)]
    if not errors:
        return None
    for error in errors:
        if not is_not_found(error):
            return error
    return errors[0]


def unwrap(results: Sequence[Any]) -> List[Any]:
    """Return the results, or raise ``first_error`` if any slot failed"""
    error = first_error(results)
    if error is not None:
        raise error
    return list(results)


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """Like ``asyncio.gather`` but every call completes before an error is raised"""
    return unwrap(await gather_settled(*aws))
