"""
Result type for explicit success/failure returns.

Domain and repository operations return either ``Ok(value)`` or
``Err(error)`` instead of raising for expected business failures:

    result = Money.create(amount, "USD")
    if result.is_err():
        return result          # propagate the ValidationError
    money = result.value

Exceptions are still used for programming errors (e.g. calling
``unwrap()`` on an ``Err``).
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err"""

    def __init__(self, error):
        self.error = error
        super().__init__(f"Called unwrap() on Err: {error!r}")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value"""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error (or list of errors)"""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise UnwrapError(self.error)

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Shortcut for Ok(value)"""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Shortcut for Err(error)"""
    return Err(error)
