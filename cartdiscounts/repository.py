"""Storage of discounts, with an in-memory implementation."""

from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable

from .errors import NotFoundError, ValidationError
from .models import Discount


class DiscountRepository(ABC):
    """Operations on stored discounts."""

    @abstractmethod
    def active_discounts(self) -> list[Discount]:
        """All discounts that are currently valid."""

    @abstractmethod
    def get_by_code(self, code: str) -> Discount:
        """The discount with a voucher code; raises NotFoundError."""

    @abstractmethod
    def get_by_id(self, discount_id: str) -> Discount:
        """The discount with an id; raises NotFoundError."""

    @abstractmethod
    def create(self, discount: Discount) -> None:
        """Store a new discount; raises ValidationError on a clash."""

    @abstractmethod
    def update(self, discount: Discount) -> None:
        """Replace a stored discount with the same id."""

    @abstractmethod
    def delete(self, discount_id: str) -> None:
        """Remove a discount by id."""

    @abstractmethod
    def increment_usage_count(self, discount_id: str) -> None:
        """Count one more use of a discount."""


class InMemoryDiscountRepository(DiscountRepository):
    """Thread-safe repository keeping discounts in dictionaries."""

    def __init__(self) -> None:
        self._discounts: dict[str, Discount] = {}
        self._code_index: dict[str, str] = {}
        self._lock = threading.RLock()

    def active_discounts(self) -> list[Discount]:
        with self._lock:
            return [
                copy.deepcopy(discount)
                for discount in self._discounts.values()
                if discount.is_valid()
            ]

    def get_by_code(self, code: str) -> Discount:
        with self._lock:
            try:
                discount_id = self._code_index[code]
            except KeyError:
                raise NotFoundError(f"discount code not found: {code}") from None
            try:
                return self._discounts[discount_id]
            except KeyError:
                raise NotFoundError(f"discount not found for code: {code}") from None

    def get_by_id(self, discount_id: str) -> Discount:
        with self._lock:
            return self._require(discount_id)

    def create(self, discount: Discount) -> None:
        with self._lock:
            if discount.id in self._discounts:
                raise ValidationError(f"discount already exists: {discount.id}")
            if discount.code and discount.code in self._code_index:
                raise ValidationError(f"discount code already exists: {discount.code}")
            self._discounts[discount.id] = copy.deepcopy(discount)
            if discount.code:
                self._code_index[discount.code] = discount.id

    def update(self, discount: Discount) -> None:
        with self._lock:
            existing = self._require(discount.id)
            if existing.code != discount.code:
                if discount.code and discount.code in self._code_index:
                    raise ValidationError(
                        f"discount code already exists: {discount.code}"
                    )
                if existing.code:
                    self._code_index.pop(existing.code, None)
                if discount.code:
                    self._code_index[discount.code] = discount.id
            self._discounts[discount.id] = copy.deepcopy(discount)

    def delete(self, discount_id: str) -> None:
        with self._lock:
            discount = self._require(discount_id)
            if discount.code:
                self._code_index.pop(discount.code, None)
            del self._discounts[discount_id]

    def increment_usage_count(self, discount_id: str) -> None:
        with self._lock:
            discount = self._require(discount_id)
            self._discounts[discount_id] = replace(
                discount, used_count=discount.used_count + 1
            )

    def seed(self, discounts: Iterable[Discount]) -> None:
        """Load discounts without clash checks, overwriting equal ids."""
        with self._lock:
            for discount in discounts:
                self._discounts[discount.id] = copy.deepcopy(discount)
                if discount.code:
                    self._code_index[discount.code] = discount.id

    def clear(self) -> None:
        """Remove every stored discount."""
        with self._lock:
            self._discounts = {}
            self._code_index = {}

    def _require(self, discount_id: str) -> Discount:
        try:
            return self._discounts[discount_id]
        except KeyError:
            raise NotFoundError(f"discount not found: {discount_id}") from None