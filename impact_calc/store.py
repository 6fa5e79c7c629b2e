# MIT License
"""Single‑slot store for the last calculation result."""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

R = TypeVar("R")


class ResultStore(Generic[R]):
    """Holds at most one result.

    Each successful calculation replaces the stored result; a failed one
    leaves it untouched.  Only :meth:`clear` removes it.  The store does
    no locking: callers serialise calculations.
    """

    def __init__(self) -> None:
        self._result: Optional[R] = None
        self._key: Optional[str] = None

    def put(self, result: R, key: Optional[str] = None) -> None:
        self._result = result
        self._key = key

    def get(self) -> Optional[R]:
        return self._result

    @property
    def key(self) -> Optional[str]:
        """Hash of the inputs that produced the stored result, if recorded."""
        return self._key

    def has_result(self) -> bool:
        return self._result is not None

    def clear(self) -> None:
        self._result = None
        self._key = None
