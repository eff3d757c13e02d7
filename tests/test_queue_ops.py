import pytest

import queue_ops
from errors import AllocationFailure
from queue_ops import (
    q_free,
    q_insert_head,
    q_insert_tail,
    q_new,
    q_remove_head,
    q_reverse,
    q_size,
    q_sort,
)


def _drain(q, capacity=64):
    values = []
    buf = bytearray(capacity)
    while q_remove_head(q, buf, capacity):
        values.append(bytes(buf[:buf.index(0)]).decode("utf-8"))
    return values


def test_new_then_free():
    q = q_new()
    assert q_size(q) == 0
    q_free(q)


def test_new_reports_allocation_failure(monkeypatch):
    def fail():
        raise MemoryError

    monkeypatch.setattr(queue_ops, "StringQueue", fail)
    with pytest.raises(AllocationFailure) as excinfo:
        q_new()
    assert isinstance(excinfo.value, MemoryError)


def test_absent_queue_is_tolerated():
    assert not q_insert_head(None, "a")
    assert not q_insert_tail(None, "a")
    assert not q_remove_head(None, bytearray(4), 4)
    assert q_size(None) == 0
    q_reverse(None)
    q_sort(None)
    q_free(None)


def test_free_non_empty_queue():
    q = q_new()
    for s in ["a", "b", "c"]:
        assert q_insert_tail(q, s)
    q_free(q)
    assert q.closed


def test_fifo_and_lifo_through_functions():
    q = q_new()
    q_insert_tail(q, "b")
    q_insert_tail(q, "c")
    q_insert_head(q, "a")
    assert q_size(q) == 3
    assert _drain(q) == ["a", "b", "c"]
    assert q_size(q) == 0
    q_free(q)


def test_sort_scenario():
    q = q_new()
    q_insert_tail(q, "b")
    q_insert_tail(q, "a")
    q_insert_tail(q, "c")
    assert q_size(q) == 3
    q_sort(q)
    assert _drain(q) == ["a", "b", "c"]
    q_free(q)


def test_reverse_twice():
    q = q_new()
    for s in ["1", "2", "3"]:
        q_insert_tail(q, s)
    q_reverse(q)
    q_reverse(q)
    assert _drain(q) == ["1", "2", "3"]
    q_free(q)


def test_remove_head_truncation():
    q = q_new()
    q_insert_tail(q, "hello")
    buf = bytearray(3)
    assert q_remove_head(q, buf, 3)
    assert bytes(buf) == b"he\x00"
    q_free(q)


def test_remove_head_default_capacity_limited_by_buffer():
    q = q_new()
    q_insert_tail(q, "hello")
    buf = bytearray(4)
    assert q_remove_head(q, buf)
    assert bytes(buf) == b"hel\x00"
    q_free(q)


def test_remove_head_multibyte_value():
    q = q_new()
    q_insert_tail(q, "héllo")
    buf = bytearray(16)
    assert q_remove_head(q, buf, len(buf))
    assert bytes(buf[:buf.index(0)]).decode("utf-8") == "héllo"
    q_free(q)
