"""Cart-level discount calculation and voucher code validation."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from .errors import DiscountError, InternalError, NotFoundError, ValidationError
from .models import CartItem, CustomerProfile, DiscountedPrice, PaymentInfo
from .repository import DiscountRepository
from .strategies import StrategyFactory, cart_total


def _format_amount(amount: Decimal) -> str:
    """Plain decimal notation without trailing zeros."""
    text = format(amount.normalize(), "f")
    return "0" if text in ("-0", "") else text


class DiscountService:
    """Applies every matching active discount to a cart.

    Discounts run in descending priority. Brand and category discounts work
    on the matching items' prices, vouchers and bank offers on the running
    total.
    """

    def __init__(self, repository: DiscountRepository) -> None:
        self._repository = repository
        self._strategies = StrategyFactory()

    def calculate_cart_discounts(
        self,
        cart_items: Sequence[CartItem],
        customer: CustomerProfile,
        payment_info: PaymentInfo | None,
    ) -> DiscountedPrice:
        """Final price of a cart after all applicable discounts."""
        if not cart_items:
            raise ValidationError("cart is empty")

        original_price = cart_total(cart_items)

        try:
            discounts = self._repository.active_discounts()
        except DiscountError as exc:
            raise InternalError("failed to get discounts", exc) from exc

        result = DiscountedPrice(
            original_price=original_price,
            final_price=original_price,
            message="No discounts applied",
        )

        for discount in sorted(discounts, key=lambda d: d.priority, reverse=True):
            strategy = self._strategies.get(discount.type)
            if strategy is None:
                continue
            if not strategy.is_applicable(discount, cart_items, customer, payment_info):
                continue

            amount = strategy.calculate(discount, cart_items, result.final_price)
            if amount > 0:
                result.final_price -= amount
                result.applied_discounts[discount.name] = amount
                try:
                    self._repository.increment_usage_count(discount.id)
                except DiscountError as exc:
                    raise InternalError("failed to increment usage", exc) from exc

        if result.applied_discounts:
            result.message = (
                f"Applied {len(result.applied_discounts)} discount(s) - "
                f"Savings: {_format_amount(result.total_discount())}"
            )
        return result

    def validate_discount_code(
        self,
        code: str,
        cart_items: Sequence[CartItem],
        customer: CustomerProfile,
    ) -> bool:
        """Whether a voucher code could be applied to this cart and customer."""
        if not code:
            raise ValidationError("code cannot be empty")

        try:
            discount = self._repository.get_by_code(code)
        except NotFoundError:
            return False
        except DiscountError as exc:
            raise InternalError("repo error", exc) from exc

        strategy = self._strategies.get(discount.type)
        if strategy is None:
            return False
        return strategy.is_applicable(discount, cart_items, customer, None)