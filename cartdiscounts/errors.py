"""Exceptions raised by the discount engine."""

from __future__ import annotations


class DiscountError(Exception):
    """Base class for every error the discount engine raises."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(DiscountError):
    """Input was rejected as invalid."""


class NotFoundError(DiscountError):
    """A requested discount does not exist."""


class InternalError(DiscountError):
    """An unexpected failure, optionally wrapping its cause."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message