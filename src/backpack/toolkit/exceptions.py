# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

from typing import Callable

__all__ = ["UnbelievableException"]


class UnbelievableException(RuntimeError):
    """
    Raised when something that is not supposed to fail does: a configuration that reported itself
    as set could not be read, a URL is malformed, a document could not be mapped to an object.

    The toolkit never retries. When the fault comes from another error, that error is chained as
    the __cause__ of this one.
    """

    @classmethod
    def because(cls, reason: str) -> Callable[[], UnbelievableException]:
        """
        Returns a factory for an exception with the given reason. Useful to defer building the
        exception until it is actually needed, e.g. as the fallback of a lookup.

        Args:
            reason (str): The message of the exception.
        """
        return lambda: cls(reason)
