from __future__ import annotations


class QueueError(Exception):
    """キュー操作の基底例外"""


class AllocationFailure(QueueError, MemoryError):
    """
    キュー/ノードの領域を確保できなかった
    挿入では False を返し、キューは変更前のまま
    """


class InvalidArgument(QueueError, ValueError):
    """解放済みのキューを操作しようとした"""


class EmptyQueue(QueueError):
    """空のキューから取り出そうとした（strict 指定時のみ）"""
