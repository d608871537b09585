"""
Outcome types for API calls.

Every dispatch resolves to exactly one of ``Ok(data)`` or ``Err(DispatchError)``.
Callers either branch on it::

    match await api.get(url):
        case Ok(value=leads):
            ...
        case Err(error=error):
            ...

or call ``unwrap()`` and handle ``DispatchError`` as an exception.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class DispatchError(Exception):
    """Normalized failure of an API call. status_code is 0 for transport failures."""

    def __init__(self, human_message: str, status_code: int, payload: Any = None):
        super().__init__(human_message)
        self._human_message = human_message
        self._status_code = status_code
        self._payload = payload

    @property
    def human_message(self) -> str:
        return self._human_message

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def is_network_error(self) -> bool:
        return self._status_code == 0

    @property
    def is_unauthorized(self) -> bool:
        return self._status_code == 401

    def __repr__(self) -> str:
        return f"DispatchError(status_code={self._status_code}, human_message={self._human_message!r})"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    error: DispatchError

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self


Result = Union[Ok[T], Err]
