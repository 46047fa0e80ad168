from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel


S = TypeVar("S", bound=BaseModel)
Listener = Callable[[BaseModel], None]


class Store(Generic[S]):
    """Holder of one immutable state snapshot plus the listeners watching it.

    Actions never mutate ``state`` in place; ``set`` swaps in a copy with the
    given fields replaced and then calls every listener with the new snapshot.
    """

    def __init__(self, state: S):
        self._state = state
        self._listeners: List[Listener] = []

    @property
    def state(self) -> S:
        return self._state

    def set(self, **changes) -> S:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        self.set(error=None)
