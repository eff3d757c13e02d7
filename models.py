from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class Node:
    """
    単方向リストの1セル
    value は所有する文字列、next は次のセル（末尾は None）
    """
    value: Optional[str]
    next: Optional["Node"] = None

    def release(self) -> None:
        # 解放済みのセルは値もリンクも持たない
        self.value = None
        self.next = None


@dataclass(eq=False)
class SortRange:
    """
    sort の処理単位 [start, end]（count 個のノード）
    start/end はリスト内のノードを参照するだけで、リンクは変更しない
    """
    start: Optional[Node]
    end: Optional[Node]
    count: int
