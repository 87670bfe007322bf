"""Strategies deciding whether and how much each kind of discount applies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Sequence

from .models import (
    PERCENTAGE_BASE,
    CartItem,
    CustomerProfile,
    Discount,
    DiscountType,
    PaymentInfo,
    PaymentMethod,
)


def calculate_discount_value(discount: Discount, base_amount: Decimal) -> Decimal:
    """Discount on base_amount, capped by max_amount and by the base itself."""
    if base_amount == 0:
        return Decimal(0)
    if discount.is_percentage:
        amount = base_amount * discount.value / PERCENTAGE_BASE
    else:
        amount = discount.value
    if discount.max_amount != 0 and amount > discount.max_amount:
        amount = discount.max_amount
    return min(amount, base_amount)


def cart_total(cart: Iterable[CartItem]) -> Decimal:
    return sum((item.total_price() for item in cart), Decimal(0))


def _passes_common_checks(
    discount: Discount,
    expected: DiscountType,
    customer: CustomerProfile,
) -> bool:
    return (
        discount.type == expected
        and discount.is_valid()
        and discount.is_applicable_to_customer(customer)
    )


def _meets_minimum(discount: Discount, cart: Sequence[CartItem]) -> bool:
    return discount.min_amount == 0 or cart_total(cart) >= discount.min_amount


def _any_item_matches(discount: Discount, cart: Sequence[CartItem]) -> bool:
    return any(discount.matches_product(item.product) for item in cart)


def _matching_total(discount: Discount, cart: Sequence[CartItem]) -> Decimal:
    return cart_total(item for item in cart if discount.matches_product(item.product))


class DiscountStrategy(ABC):
    """Decides applicability and amount for one discount type."""

    @abstractmethod
    def is_applicable(
        self,
        discount: Discount,
        cart: Sequence[CartItem],
        customer: CustomerProfile,
        payment: PaymentInfo | None,
    ) -> bool: ...

    @abstractmethod
    def calculate(
        self,
        discount: Discount,
        cart: Sequence[CartItem],
        current_total: Decimal,
    ) -> Decimal: ...


class BrandDiscountStrategy(DiscountStrategy):
    def is_applicable(self, discount, cart, customer, payment):
        return (
            _passes_common_checks(discount, DiscountType.BRAND, customer)
            and _meets_minimum(discount, cart)
            and _any_item_matches(discount, cart)
        )

    def calculate(self, discount, cart, current_total):
        return calculate_discount_value(discount, _matching_total(discount, cart))


class CategoryDiscountStrategy(DiscountStrategy):
    def is_applicable(self, discount, cart, customer, payment):
        return (
            _passes_common_checks(discount, DiscountType.CATEGORY, customer)
            and _meets_minimum(discount, cart)
            and _any_item_matches(discount, cart)
        )

    def calculate(self, discount, cart, current_total):
        return calculate_discount_value(discount, _matching_total(discount, cart))


class VoucherDiscountStrategy(DiscountStrategy):
    def is_applicable(self, discount, cart, customer, payment):
        if not _passes_common_checks(discount, DiscountType.VOUCHER, customer):
            return False
        if not _meets_minimum(discount, cart):
            return False
        if _any_item_matches(discount, cart):
            return True
        return not discount.excluded_items and len(cart) > 0

    def calculate(self, discount, cart, current_total):
        return calculate_discount_value(discount, current_total)


class BankDiscountStrategy(DiscountStrategy):
    def is_applicable(self, discount, cart, customer, payment):
        if not _passes_common_checks(discount, DiscountType.BANK, customer):
            return False
        if payment is None or payment.method != PaymentMethod.CARD:
            return False
        if discount.applicable_to and (
            payment.bank_name is None or payment.bank_name not in discount.applicable_to
        ):
            return False
        # A non-zero minimum does not block the offer; only a zero one is checked.
        return discount.min_amount != 0 or cart_total(cart) >= discount.min_amount

    def calculate(self, discount, cart, current_total):
        return calculate_discount_value(discount, current_total)


class StrategyFactory:
    """Maps each discount type to its strategy."""

    def __init__(self) -> None:
        self._strategies: dict[DiscountType, DiscountStrategy] = {
            DiscountType.BRAND: BrandDiscountStrategy(),
            DiscountType.CATEGORY: CategoryDiscountStrategy(),
            DiscountType.VOUCHER: VoucherDiscountStrategy(),
            DiscountType.BANK: BankDiscountStrategy(),
        }

    def get(self, discount_type: DiscountType | str) -> DiscountStrategy | None:
        """The strategy for a type, or None when the type is unknown."""
        return self._strategies.get(discount_type)