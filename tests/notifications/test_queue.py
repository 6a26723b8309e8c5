from __future__ import annotations

import logging
import threading

import pytest

from src.timesheet_admin.timesheet_admin.core.enums import ToastVariant
from src.timesheet_admin.timesheet_admin.notifications.queue import NotificationCenter, NotificationQueue, notify


def test_toast_expires_after_ttl(clock):
    queue = NotificationQueue(clock=clock)
    queue.toast(title="Saved")

    clock.advance(2.9)
    assert len(queue) == 1

    clock.advance(0.1)
    assert queue.toasts == []


def test_toasts_keep_insertion_order_and_unique_ids(clock):
    queue = NotificationQueue(clock=clock)
    a = queue.success("first")
    clock.advance(1)
    b = queue.error("second")
    c = queue.toast(description="third")

    assert [t.description for t in queue.toasts] == ["first", "second", "third"]
    assert len({a.toast_id, b.toast_id, c.toast_id}) == 3
    assert b.is_destructive
    assert b.to_dict() == {"id": b.toast_id, "title": "Error", "description": "second", "variant": "destructive"}

    clock.advance(2.5)
    assert [t.description for t in queue.toasts] == ["second", "third"]


def test_dismiss(clock):
    queue = NotificationQueue(clock=clock)
    a = queue.toast(title="a")
    b = queue.toast(title="b")

    assert queue.dismiss(a.toast_id)
    assert not queue.dismiss(a.toast_id)
    assert queue.toasts == [b]


def test_custom_ttl(clock):
    queue = NotificationQueue(ttl=10, clock=clock)
    queue.toast(title="long")

    clock.advance(9)
    assert len(queue) == 1

    with pytest.raises(ValueError):
        NotificationQueue(ttl=0)


def test_center_keeps_one_queue_per_session(clock):
    center = NotificationCenter(clock=clock)
    center.for_session("a").toast(title="for a")

    assert center.for_session("a") is center.for_session("a")
    assert center.for_session("b").toasts == []
    assert [t.title for t in center.for_session("a").toasts] == ["for a"]

    center.discard("a")
    assert "a" not in center


def test_notify_without_queue_only_logs(caplog):
    caplog.set_level(logging.INFO)

    assert notify(None, title="Error", description="Nothing to show", variant=ToastVariant.DESTRUCTIVE) is None
    assert "Toast:" in caplog.text
    assert "Nothing to show" in caplog.text


def test_notify_with_queue(clock):
    queue = NotificationQueue(clock=clock)

    toast = notify(queue, title="Success", description="Done")

    assert queue.toasts == [toast]


def test_center_drops_idle_sessions_without_live_toasts(clock):
    center = NotificationCenter(clock=clock, idle_ttl=60)
    for n in range(50):
        center.for_session(f"s{n}").success("Signed in")

    clock.advance(61)
    center.for_session("fresh")

    assert len(center) == 1
    assert "fresh" in center
    assert "s0" not in center


def test_center_keeps_recent_sessions_and_live_toasts(clock):
    center = NotificationCenter(ttl=120, clock=clock, idle_ttl=60)
    center.for_session("idle-with-toast").toast(title="still showing")
    center.for_session("idle-empty")

    clock.advance(30)
    center.for_session("active")
    clock.advance(31)
    center.for_session("active")

    assert "idle-with-toast" in center
    assert "idle-empty" not in center
    assert "active" in center


def test_concurrent_adds_and_dismisses_lose_nothing(clock):
    queue = NotificationQueue(ttl=60, clock=clock)

    def worker(n):
        for i in range(200):
            queue.toast(title=f"{n}-{i}")
            queue.dismiss("missing")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(queue) == 1600
