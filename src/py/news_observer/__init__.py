"""Observer pattern example: a News feed and the observers that follow it.

All subject operations are coroutines; subscriber and news state sit behind
an asyncio ``RwLock``.
"""

from .core import (
    DuplicateSubscriptionError,
    IEventSource,
    IObservable,
    IObserver,
    News,
    NewsEventType,
    NewsObserver,
    NotSubscribedError,
    ObserverError,
    SubscriptionError,
)
from .rwlock import RwLock

__all__ = [
    "RwLock",
    "IEventSource",
    "IObservable",
    "IObserver",
    "News",
    "NewsEventType",
    "NewsObserver",
    "ObserverError",
    "SubscriptionError",
    "DuplicateSubscriptionError",
    "NotSubscribedError",
]
