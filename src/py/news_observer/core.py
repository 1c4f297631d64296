from enum import Enum
from typing import Optional
from typing_extensions import assert_never, override
import logging

from .rwlock import RwLock


class SubscriptionError(Exception):
    """Base class for invalid subscribe/unsubscribe calls."""


class DuplicateSubscriptionError(SubscriptionError):
    """The observer is already subscribed."""


class NotSubscribedError(SubscriptionError):
    """The observer is not currently subscribed."""


class ObserverError(Exception):
    """Signals an expected failure in an observer update that should not stop delivery."""


class NewsEventType(Enum):
    NO_EVENT = "no_event"
    NEWS = "news"


class IEventSource:
    """
    What an observer is allowed to see of the object notifying it.
    """

    def get_name(self) -> str:
        raise NotImplementedError

    def get_event_type(self) -> NewsEventType:
        raise NotImplementedError


class IObserver:
    async def update(self, observable: IEventSource) -> None:
        """
        React to a notification from `observable`.
        """
        raise NotImplementedError


class IObservable(IEventSource):
    async def subscribe(self, observer: IObserver) -> None:
        """
        Register an observer. Raises DuplicateSubscriptionError if it already is.
        """
        raise NotImplementedError

    async def unsubscribe(self, observer: IObserver) -> None:
        """
        Remove an observer. Raises NotSubscribedError if it is not registered.
        """
        raise NotImplementedError

    async def notify(self) -> None:
        """
        Call `update` on every subscribed observer, in subscription order.
        """
        raise NotImplementedError


def _index_of(observers: list[IObserver], observer: IObserver) -> Optional[int]:
    for i, candidate in enumerate(observers):
        if candidate is observer:
            return i
    return None


class News(IObservable):
    """
    A named news feed. Every call to `on_news_update` appends to the log and
    notifies the current subscribers.

    The event type latches to NEWS on the first update and is never reset.
    """

    def __init__(self, id: int, name: str) -> None:
        self._id = id
        self._name = name
        self._event_type = NewsEventType.NO_EVENT
        self._observers: RwLock[list[IObserver]] = RwLock([])
        self._news: RwLock[list[str]] = RwLock([])

    def get_id(self) -> int:
        return self._id

    @override
    def get_name(self) -> str:
        return self._name

    @override
    def get_event_type(self) -> NewsEventType:
        return self._event_type

    async def get_news(self) -> tuple[str, ...]:
        async with self._news.read() as news:
            return tuple(news)

    async def get_observers(self) -> tuple[IObserver, ...]:
        async with self._observers.read() as observers:
            return tuple(observers)

    @override
    async def subscribe(self, observer: IObserver) -> None:
        async with self._observers.write() as writer:
            observers = writer.get_value()
            if _index_of(observers, observer) is not None:
                raise DuplicateSubscriptionError(
                    "The observer had already been subscribed"
                )
            observers.append(observer)
        logging.getLogger(__name__).debug(
            "News %s: subscribed %r", self._name, observer
        )

    @override
    async def unsubscribe(self, observer: IObserver) -> None:
        async with self._observers.write() as writer:
            observers = writer.get_value()
            index = _index_of(observers, observer)
            if index is None:
                raise NotSubscribedError("The observer has not been subscribed")
            del observers[index]
        logging.getLogger(__name__).debug(
            "News %s: unsubscribed %r", self._name, observer
        )

    @override
    async def notify(self) -> None:
        """
        Observers are awaited one after another. ObserverError is logged and
        skipped; any other exception is logged, the remaining observers are
        still updated, and the first such exception is re-raised at the end.
        """
        # Snapshot so observers can (un)subscribe from inside update
        observers = await self.get_observers()

        failure: Optional[Exception] = None
        for observer in observers:
            try:
                await observer.update(self)
            except ObserverError:
                logging.getLogger(__name__).exception(
                    "Observer update skipped due to ObserverError."
                )
            except Exception as e:
                logging.getLogger(__name__).exception("Observer update failed.")
                if failure is None:
                    failure = e
        if failure is not None:
            raise failure

    async def on_news_update(self, news: str) -> None:
        self._event_type = NewsEventType.NEWS
        async with self._news.write() as writer:
            writer.get_value().append(news)
        await self.notify()


class NewsObserver(IObserver):
    def __init__(self, id: int, name: str) -> None:
        self._id = id
        self._name = name

    def get_id(self) -> int:
        return self._id

    def get_name(self) -> str:
        return self._name

    @override
    async def update(self, observable: IEventSource) -> None:
        event_type = observable.get_event_type()
        match event_type:
            case NewsEventType.NEWS:
                logging.getLogger(__name__).info(
                    "I am a NewsObserver called %s and I have observed that News %s update",
                    self._name,
                    observable.get_name(),
                )
            case NewsEventType.NO_EVENT:
                pass
            case _:
                assert_never(event_type)
