from __future__ import annotations

import queue
import threading

import pytest

from library.errors import ScanCancelled
from library.models import Library
from library.progress import ProgressChannel, ScanComplete, ScanProgress, ScanResult, ScanStarted


def test_offer_drops_when_consumer_is_busy() -> None:
    channel = ProgressChannel()
    assert channel.offer(1)
    assert not channel.offer(2)
    assert channel.next_event() == ScanProgress(1)
    assert channel.offer(3)
    assert channel.next_event() == ScanProgress(3)


def test_publish_waits_for_the_consumer() -> None:
    channel = ProgressChannel()
    channel.offer(1)
    delivered = threading.Event()

    def producer() -> None:
        channel.publish(5)
        delivered.set()

    thread = threading.Thread(target=producer)
    thread.start()
    assert not delivered.wait(0.1)
    assert channel.next_event() == ScanProgress(1)
    assert channel.next_event() == ScanProgress(5)
    thread.join(timeout=5)
    assert delivered.is_set()


def test_finish_closes_stream_after_pending_values() -> None:
    channel = ProgressChannel()
    library = Library()
    channel.offer(1)
    thread = threading.Thread(target=channel.finish, args=(ScanResult(library=library),))
    thread.start()
    assert channel.next_event() == ScanProgress(1)
    event = channel.next_event()
    thread.join(timeout=5)
    assert isinstance(event, ScanComplete)
    assert event.result.library is library
    assert event.result.ok
    assert channel.closed


def test_values_must_increase() -> None:
    channel = ProgressChannel()
    channel.offer(2)
    channel.next_event()
    with pytest.raises(ValueError):
        channel.offer(2)
    with pytest.raises(ValueError):
        channel.publish(1)


def test_closed_channel_rejects_values() -> None:
    channel = ProgressChannel()
    channel.finish(ScanResult(library=None, error=ScanCancelled()))
    with pytest.raises(RuntimeError):
        channel.offer(1)
    with pytest.raises(RuntimeError):
        channel.finish(ScanResult(library=None))


def test_next_event_timeout() -> None:
    with pytest.raises(queue.Empty):
        ProgressChannel().next_event(timeout=0.01)


def test_scan_result_flags() -> None:
    assert ScanResult(library=None, error=ScanCancelled()).cancelled
    assert not ScanResult(library=None, error=OSError("boom")).cancelled
    assert not ScanResult(library=None, error=OSError("boom")).ok


def test_announce_goes_ahead_of_progress() -> None:
    channel = ProgressChannel()
    channel.announce(3)
    assert channel.next_event() == ScanStarted(3)
    channel.publish(3)
    assert channel.next_event() == ScanProgress(3)


def test_announce_only_once_and_before_progress() -> None:
    channel = ProgressChannel()
    channel.announce(2)
    channel.next_event()
    with pytest.raises(RuntimeError):
        channel.announce(2)

    late = ProgressChannel()
    late.offer(1)
    with pytest.raises(RuntimeError):
        late.announce(2)
