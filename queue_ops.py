from __future__ import annotations

import logging
from typing import Optional

from errors import AllocationFailure
from string_queue import DEFAULT_CAPACITY, StringQueue

logger = logging.getLogger(__name__)

# -------------------------
# 関数形式の操作
# q が None のときは「何もしない / False / 0」
# -------------------------


def q_new() -> StringQueue:
    try:
        return StringQueue()
    except MemoryError as e:
        logger.warning('could not allocate queue')
        raise AllocationFailure("could not allocate queue") from e


def q_free(q: Optional[StringQueue]) -> None:
    if q is None:
        return
    q.free()


def q_insert_head(q: Optional[StringQueue], s: str) -> bool:
    if q is None:
        return False
    return q.insert_head(s)


def q_insert_tail(q: Optional[StringQueue], s: str) -> bool:
    if q is None:
        return False
    return q.insert_tail(s)


def q_remove_head(
    q: Optional[StringQueue],
    buffer: Optional[bytearray] = None,
    capacity: int = DEFAULT_CAPACITY,
) -> bool:
    if q is None:
        return False
    return q.remove_head(buffer, capacity)


def q_size(q: Optional[StringQueue]) -> int:
    if q is None:
        return 0
    return q.size()


def q_reverse(q: Optional[StringQueue]) -> None:
    if q is None:
        return
    q.reverse()


def q_sort(q: Optional[StringQueue]) -> None:
    if q is None:
        return
    q.sort()
