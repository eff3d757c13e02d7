from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from errors import EmptyQueue, InvalidArgument, QueueError
from models import Node, SortRange
from work_stack import RangeStack

logger = logging.getLogger(__name__)

# remove_head で容量を省略したときの上限（終端の NUL を含む）
DEFAULT_CAPACITY = 1024


class StringQueue:
    """
    単方向リンクで実装した文字列の Queue
    insert_head / insert_tail / remove_head / size: O(1)
    reverse: O(n)、sort: 平均 O(n log n)

    - head がチェーン全体を所有し、tail は末尾ノードを参照するだけ
    - free() 後のキューは使用不可（InvalidArgument）
    """

    def __init__(self) -> None:
        self._head: Optional[Node] = None
        self._tail: Optional[Node] = None
        self._size: int = 0
        self._closed: bool = False

    # -------------------------
    # 解放
    # -------------------------
    def free(self) -> None:
        """
        全ノードを先頭から順に切り離して解放する
        解放済みなら何もしない
        """
        if self._closed:
            return
        released = 0
        node = self._head
        while node is not None:
            next_node = node.next
            node.release()
            node = next_node
            released += 1
        self._head = None
        self._tail = None
        self._size = 0
        self._closed = True
        logger.debug(f'queue freed: {released} nodes released')

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------
    # 挿入
    # -------------------------
    def insert_head(self, s: str) -> bool:
        self._ensure_open()
        node = self._new_node(s)
        if node is None:
            return False

        node.next = self._head
        self._head = node
        if self._tail is None:
            self._tail = node
        self._size += 1
        return True

    def insert_tail(self, s: str) -> bool:
        self._ensure_open()
        node = self._new_node(s)
        if node is None:
            return False

        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        return True

    # -------------------------
    # 取り出し
    # -------------------------
    def remove_head(self, buffer: Optional[bytearray] = None, capacity: int = DEFAULT_CAPACITY) -> bool:
        """
        先頭を取り除く。空なら False（キューは変更しない）

        buffer があれば値の UTF-8 を最大 capacity - 1 バイトまでコピーし、
        直後に NUL を書く。buffer の長さも超えない。
        """
        self._ensure_open()
        node = self._detach_head()
        if node is None:
            return False

        if buffer is not None and capacity > 0:
            _copy_out(node.value, buffer, capacity)
        node.release()
        return True

    def pop_head(self, capacity: Optional[int] = None, strict: bool = False) -> Optional[str]:
        """
        先頭を取り除いて値を返す（capacity 指定時は capacity - 1 文字まで）
        空なら None、strict=True なら EmptyQueue
        """
        self._ensure_open()
        node = self._detach_head()
        if node is None:
            if strict:
                raise EmptyQueue("cannot remove from an empty queue")
            return None

        value = node.value
        node.release()
        if capacity is not None:
            value = value[:max(capacity - 1, 0)]
        return value

    # -------------------------
    # 参照
    # -------------------------
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def peek_head(self) -> Optional[str]:
        return None if self._head is None else self._head.value

    def peek_tail(self) -> Optional[str]:
        return None if self._tail is None else self._tail.value

    def __iter__(self) -> Iterator[str]:
        node = self._head
        while node is not None:
            yield node.value
            node = node.next

    def to_list(self) -> List[str]:
        return list(self)

    # -------------------------
    # 並べ替え
    # -------------------------
    def reverse(self) -> None:
        """
        リンクの向きを付け替えて逆順にする（ノードの生成・解放はしない）
        """
        self._ensure_open()
        if self._head is None:
            return

        self._tail = self._head
        prev: Optional[Node] = None
        node = self._head
        while node is not None:
            next_node = node.next
            node.next = prev
            prev = node
            node = next_node
        self._head = prev

    def sort(self) -> None:
        """
        大文字小文字を区別せず昇順に並べる（安定ではない）

        区間 [start, end] ごとに median-of-three の quicksort を行う。
        値だけを入れ替え、ノードのリンクは変えない。
        未処理の区間は RangeStack に積む（左区間を先に処理）。
        """
        self._ensure_open()
        if self._size <= 1:
            return

        pending = RangeStack()
        pending.push(self._head, self._tail, self._size)
        partitions = 0
        while not pending.is_empty():
            r = pending.pop()
            front, count, boundary = _partition(r)
            partitions += 1

            pending.push(boundary.next, r.end, r.count - count - 1)
            pending.push(r.start, front, count)
        logger.debug(f'sorted {self._size} values in {partitions} partitions')

    # -------------------------
    # 検証
    # -------------------------
    def check_invariants(self) -> None:
        """
        head / tail / size の整合性を確認する。崩れていれば QueueError
        """
        empty_by_size = self._size == 0
        if empty_by_size != (self._head is None) or empty_by_size != (self._tail is None):
            raise QueueError(
                f'size/head/tail disagree: size={self._size}, '
                f'head={self._head is not None}, tail={self._tail is not None}'
            )
        if empty_by_size:
            return

        node = self._head
        for i in range(self._size - 1):
            node = node.next
            if node is None:
                raise QueueError(f'chain ended after {i + 1} nodes, size={self._size}')
        if node is not self._tail:
            raise QueueError(f'node #{self._size} is not the tail')
        if self._tail.next is not None:
            raise QueueError('tail.next is not None (chain longer than size or cyclic)')

    # -------------------------
    # 内部
    # -------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidArgument("queue has already been freed")

    def _new_node(self, s: str) -> Optional[Node]:
        if not isinstance(s, str):
            return None
        try:
            return Node(value=str(s))
        except MemoryError:
            logger.warning(f'could not allocate node for a value of length {len(s)}')
            return None

    def _detach_head(self) -> Optional[Node]:
        node = self._head
        if node is None:
            return None

        self._head = node.next
        self._size -= 1
        if self._size == 0:
            self._tail = None
        node.next = None
        return node


def _copy_out(value: str, buffer: bytearray, capacity: int) -> int:
    limit = min(capacity, len(buffer))
    if limit <= 0:
        return 0
    data = value.encode("utf-8")[:limit - 1]
    buffer[:len(data)] = data
    buffer[len(data)] = 0
    return len(data)


def _compare(a: Node, b: Node) -> int:
    # strcasecmp 相当
    ka = a.value.lower()
    kb = b.value.lower()
    return (ka > kb) - (ka < kb)


def _swap_value(a: Node, b: Node) -> None:
    a.value, b.value = b.value, a.value


def _choose_pivot(start: Node, middle: Node, end: Node) -> Node:
    if _compare(start, middle) > 0 and _compare(end, middle) > 0:
        return end if _compare(start, end) > 0 else start
    if _compare(middle, start) > 0 and _compare(middle, end) > 0:
        return start if _compare(start, end) > 0 else end
    if _compare(start, middle) == 0 and _compare(middle, end) == 0:
        return end
    return middle


def _partition(r: SortRange) -> Tuple[Optional[Node], int, Node]:
    """
    区間を pivot 未満 / pivot / 残り に分ける
    戻り値: (未満側の最後のノード, 未満側の個数, pivot を置いたノード)
    """
    middle = r.start
    for _ in range(r.count // 2):
        middle = middle.next

    # pivot の値を末尾へ
    _swap_value(_choose_pivot(r.start, middle, r.end), r.end)

    count = 0
    process = r.start
    cursor = r.start
    front: Optional[Node] = None
    while process is not r.end:
        if _compare(r.end, process) > 0:
            _swap_value(process, cursor)
            front = cursor
            cursor = cursor.next
            count += 1
        process = process.next

    _swap_value(cursor, r.end)
    return front, count, cursor
