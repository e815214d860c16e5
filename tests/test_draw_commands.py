import queue

import pytest

from neovide.editor.draw_commands import (
    DRAW_COMMAND_BATCH,
    CloseWindow,
    DrawClear,
    DrawCommandBatcher,
    DrawShow,
    FontChanged,
    LineSpaceChanged,
    WindowDraw,
)
from neovide.event_aggregator import EventAggregator


@pytest.fixture
def channel():
    aggregator = EventAggregator()
    receiver = aggregator.register_event(DRAW_COMMAND_BATCH)
    return DrawCommandBatcher(aggregator), receiver


def test_batch_keeps_order(channel):
    batcher, receiver = channel
    batcher.queue(FontChanged("Fira"))
    batcher.queue(LineSpaceChanged(2))
    batcher.queue(CloseWindow(3))
    batcher.send_batch()
    assert receiver.get_nowait() == [FontChanged("Fira"), LineSpaceChanged(2), CloseWindow(3)]


def test_send_batch_drains_queue(channel):
    batcher, receiver = channel
    batcher.queue(WindowDraw(1, DrawClear()))
    batcher.send_batch()
    batcher.send_batch()
    assert receiver.get_nowait() == [WindowDraw(1, DrawClear())]
    assert receiver.get_nowait() == []


def test_nothing_sent_until_batch(channel):
    batcher, receiver = channel
    batcher.queue(WindowDraw(1, DrawShow()))
    with pytest.raises(queue.Empty):
        receiver.get_nowait()


def test_batch_sent_before_registration_is_kept():
    aggregator = EventAggregator()
    batcher = DrawCommandBatcher(aggregator)
    batcher.queue(CloseWindow(7))
    batcher.send_batch()
    receiver = aggregator.register_event(DRAW_COMMAND_BATCH)
    assert receiver.get_nowait() == [CloseWindow(7)]


def test_window_draw_equality_depends_on_command():
    assert WindowDraw(1, DrawClear()) == WindowDraw(1, DrawClear())
    assert not WindowDraw(1, DrawClear()) == WindowDraw(1, DrawShow())