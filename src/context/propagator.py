"""
Execution-scoped context propagation.

A ``ContextPropagator`` makes one value the "current" one for the dynamic extent
of a callback without passing it through every call. The binding lives in a
``ContextVar``, so it follows the logical chain of execution: asyncio tasks and
threads started via ``contextvars.copy_context`` each see their own value, it
survives ``await`` suspension, and nested bindings unwind last-in-first-out
through ``ContextVar.reset``.
"""

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class ContextNotActiveError(LookupError):
    """Raised by ``require_current`` when called outside any context extent."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No active '{name}' context for the current execution")


class ContextPropagator(Generic[T]):
    """Binds a value to the current execution chain for the duration of a callback."""

    def __init__(self, name: str) -> None:
        self.name = name
        # None is the absence indicator; callers never see a default context.
        self._var: ContextVar[T | None] = ContextVar(name, default=None)

    def __repr__(self) -> str:
        return f"ContextPropagator(name={self.name!r}, active={self.is_active})"

    @contextmanager
    def scope(self, initial_value: T) -> Iterator[T]:
        """
        Make ``initial_value`` current until the block exits, then restore the previous value.

        None is reserved as the absence indicator returned by ``get_current``, so it
        cannot be bound; binding it raises ValueError.
        """
        if initial_value is None:
            raise ValueError(f"Cannot bind None as the '{self.name}' context value")
        token = self._var.set(initial_value)
        try:
            yield initial_value
        finally:
            self._var.reset(token)

    def run(self, initial_value: T, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Call ``callback`` with ``initial_value`` as the current context and return its result."""
        with self.scope(initial_value):
            return callback(*args, **kwargs)

    async def arun(
        self,
        initial_value: T,
        callback: Callable[..., Awaitable[R]],
        *args: Any,
        **kwargs: Any,
    ) -> R:
        """Await ``callback`` with ``initial_value`` as the current context and return its result."""
        with self.scope(initial_value):
            return await callback(*args, **kwargs)

    def get_current(self) -> T | None:
        """Return the current context value, or None outside any extent."""
        return self._var.get()

    def require_current(self) -> T:
        """Return the current context value, raising ContextNotActiveError when there is none."""
        value = self._var.get()
        if value is None:
            raise ContextNotActiveError(self.name)
        return value

    @property
    def is_active(self) -> bool:
        return self._var.get() is not None
