"""Tests for the readers-writer lock."""

import threading
import time

import pytest

from tabletcontrol.core.locks import RWLock


def wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached")
        time.sleep(0.001)


@pytest.mark.unit
def test_readers_share_the_lock():
    lock = RWLock()

    lock.acquire_read()
    lock.acquire_read()

    assert lock.readers == 2
    lock.release_read()
    lock.release_read()
    assert lock.readers == 0


@pytest.mark.unit
def test_writer_excludes_readers():
    lock = RWLock()
    entered = threading.Event()

    def reader():
        with lock.read_locked():
            entered.set()

    with lock.write_locked():
        assert lock.write_held
        thread = threading.Thread(target=reader)
        thread.start()
        assert not entered.wait(0.05)

    thread.join(timeout=2)
    assert entered.is_set()
    assert not lock.write_held


@pytest.mark.unit
def test_waiting_writer_blocks_new_readers():
    """Writer preference: a queued writer goes before readers arriving later."""
    lock = RWLock()
    order = []

    def writer():
        with lock.write_locked():
            order.append("writer")

    def reader():
        with lock.read_locked():
            order.append("reader")

    lock.acquire_read()
    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    wait_until(lambda: lock._waiting_writers == 1)

    reader_thread = threading.Thread(target=reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    lock.release_read()
    writer_thread.join(timeout=2)
    reader_thread.join(timeout=2)
    assert order == ["writer", "reader"]


@pytest.mark.unit
def test_release_without_acquire():
    lock = RWLock()

    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


@pytest.mark.unit
def test_lock_released_on_exception():
    lock = RWLock()

    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")

    assert not lock.write_held
