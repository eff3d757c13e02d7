from __future__ import annotations

from typing import List, Optional

from models import Node, SortRange


class RangeStack:
    """
    sort の未処理区間を積む Stack（LIFO）
    push/pop: O(1)

    ※ 再帰呼び出しの代わりに使う。要素数 1 以下の区間は積まない
      （整列済みなので処理不要）。
    """

    def __init__(self) -> None:
        self._ranges: List[SortRange] = []

    def push(self, start: Optional[Node], end: Optional[Node], count: int) -> bool:
        if start is None or end is None or count <= 1:
            return False
        self._ranges.append(SortRange(start=start, end=end, count=count))
        return True

    def pop(self) -> Optional[SortRange]:
        if not self._ranges:
            return None
        return self._ranges.pop()

    def __len__(self) -> int:
        return len(self._ranges)

    def is_empty(self) -> bool:
        return not self._ranges
