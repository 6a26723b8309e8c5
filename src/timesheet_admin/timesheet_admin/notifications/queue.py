"""Transient status messages ("toasts") for one UI session.

A queue is owned by whoever renders the session's pages. Toasts expire
``ttl`` clock units after they are issued; expiry is applied whenever the
queue is read, so no background timer is needed.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from ..core.constants import DEFAULT_SESSION_DAYS, DEFAULT_TOAST_TTL_SECONDS
from ..core.enums import ToastVariant
from .model import Toast

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class NotificationQueue:
    def __init__(self, *, ttl: float = DEFAULT_TOAST_TTL_SECONDS, clock: Clock = time.monotonic):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._ttl = float(ttl)
        self._clock = clock
        self._ids = itertools.count(1)
        self._toasts: List[Toast] = []
        self._lock = threading.RLock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def toast(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> Toast:
        with self._lock:
            item = Toast(
                toast_id=str(next(self._ids)),
                title=title,
                description=description,
                variant=ToastVariant(variant),
                expires_at=self._clock() + self._ttl,
            )
            self._toasts.append(item)
            return item

    def success(self, description: str) -> Toast:
        return self.toast(title="Success", description=description)

    def error(self, description: str) -> Toast:
        return self.toast(title="Error", description=description, variant=ToastVariant.DESTRUCTIVE)

    def dismiss(self, toast_id: str) -> bool:
        with self._lock:
            before = len(self._toasts)
            self._toasts = [t for t in self._toasts if t.toast_id != str(toast_id)]
            return len(self._toasts) != before

    def expire(self) -> None:
        with self._lock:
            now = self._clock()
            self._toasts = [t for t in self._toasts if t.expires_at > now]

    @property
    def toasts(self) -> List[Toast]:
        with self._lock:
            self.expire()
            return list(self._toasts)

    def __len__(self) -> int:
        return len(self.toasts)


class NotificationCenter:
    """One NotificationQueue per UI session id.

    A queue with no live toasts that has not been looked up for ``idle_ttl``
    clock units is dropped on the next lookup.
    """

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_TOAST_TTL_SECONDS,
        idle_ttl: float = DEFAULT_SESSION_DAYS * 24 * 60 * 60,
        clock: Clock = time.monotonic,
    ):
        self._ttl = ttl
        self._idle_ttl = float(idle_ttl)
        self._clock = clock
        self._queues: Dict[str, NotificationQueue] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        stale = [
            sid
            for sid, seen in self._last_seen.items()
            if now - seen > self._idle_ttl and len(self._queues[sid]) == 0
        ]
        for sid in stale:
            self._queues.pop(sid, None)
            self._last_seen.pop(sid, None)

    def for_session(self, session_id: str) -> NotificationQueue:
        with self._lock:
            now = self._clock()
            self._prune(now)
            queue = self._queues.get(session_id)
            if queue is None:
                queue = NotificationQueue(ttl=self._ttl, clock=self._clock)
                self._queues[session_id] = queue
            self._last_seen[session_id] = now
            return queue

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._queues.pop(session_id, None)
            self._last_seen.pop(session_id, None)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._queues

    def __len__(self) -> int:
        return len(self._queues)


def notify(
    queue: Optional[NotificationQueue],
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    variant: ToastVariant = ToastVariant.DEFAULT,
) -> Optional[Toast]:
    """Issue a toast, or just log it when there is no session to show it in."""
    if queue is None:
        logger.info("Toast: title=%r description=%r variant=%s", title, description, ToastVariant(variant).value)
        return None
    return queue.toast(title=title, description=description, variant=variant)
