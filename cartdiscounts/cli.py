"""Command that runs a demonstration of the discount engine on sample data."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta
from decimal import Decimal

from .errors import DiscountError
from .models import (
    Brand,
    BrandTier,
    CardType,
    CartItem,
    Category,
    CustomerProfile,
    Discount,
    DiscountType,
    PaymentInfo,
    PaymentMethod,
    Product,
)
from .repository import InMemoryDiscountRepository
from .service import DiscountService

_TEST_CODES = ("SUPER69", "PREMIUM15", "INVALID123", "")


def _format_amount(amount: Decimal) -> str:
    text = format(amount.normalize(), "f")
    return "0" if text in ("-0", "") else text


def _label(value: object) -> str:
    return str(getattr(value, "value", value))


def _sample_discounts() -> list[Discount]:
    now = datetime.now()
    window = {"valid_from": now - timedelta(days=1), "valid_to": now + timedelta(days=30)}
    return [
        Discount(
            id="disc-001", name="PUMA Brand Discount - Min 40% off",
            type=DiscountType.BRAND, value=Decimal(40), is_percentage=True,
            min_amount=Decimal(500), applicable_to=["PUMA"], is_active=True,
            priority=100, **window,
        ),
        Discount(
            id="disc-002", name="T-shirts Category Discount - Extra 10% off",
            type=DiscountType.CATEGORY, value=Decimal(10), is_percentage=True,
            max_amount=Decimal(200), applicable_to=["T-shirts"], is_active=True,
            priority=90, **window,
        ),
        Discount(
            id="disc-003", name="ICICI Bank Offer - 10% instant discount",
            type=DiscountType.BANK, value=Decimal(10), is_percentage=True,
            min_amount=Decimal(1000), max_amount=Decimal(500),
            applicable_to=["ICICI"], is_active=True, priority=80, **window,
        ),
        Discount(
            id="disc-004", name="SUPER69 Voucher - 69% off",
            type=DiscountType.VOUCHER, value=Decimal(69), is_percentage=True,
            min_amount=Decimal(2000), max_amount=Decimal(1000),
            excluded_items=["Electronics", "Luxury"], customer_tiers=["premium"],
            code="SUPER69", is_active=True, usage_limit=100, priority=70, **window,
        ),
        Discount(
            id="disc-005", name="Nike Brand Discount - 30% off",
            type=DiscountType.BRAND, value=Decimal(30), is_percentage=True,
            min_amount=Decimal(1000), applicable_to=["Nike"], is_active=True,
            priority=95, **window,
        ),
        Discount(
            id="disc-006", name="Premium Customer Discount - 15% off",
            type=DiscountType.VOUCHER, value=Decimal(15), is_percentage=True,
            min_amount=Decimal(500), max_amount=Decimal(300),
            customer_tiers=["premium"], code="PREMIUM15", is_active=True,
            priority=60, **window,
        ),
    ]


def _demo_scenario() -> tuple[list[CartItem], CustomerProfile, PaymentInfo]:
    """Two PUMA T-shirts at base price, a premium customer, an ICICI credit card."""
    shirt = Product(
        id="prod-001",
        brand=Brand(id="PUMA", name="PUMA", tier=BrandTier.PREMIUM),
        category=Category(id="T-shirts", name="T-shirts"),
        base_price=Decimal(1000),
        current_price=Decimal(1000),
    )
    cart = [CartItem(product=shirt, quantity=2, size="M")]
    customer = CustomerProfile(id="cust-001", tier="premium")
    payment = PaymentInfo(
        method=PaymentMethod.CARD, bank_name="ICICI", card_type=CardType.CREDIT
    )
    return cart, customer, payment


def run_demo(service: DiscountService) -> None:
    """Print a worked discount calculation and a round of code validations."""
    print("\n📋 Running Multiple Discount Scenario Demonstration")
    print("Scenario: PUMA T-shirt with brand, category, and bank discounts")
    print("---------------------------------------------------------------")

    cart, customer, payment = _demo_scenario()
    for item in cart:
        item.product.current_price = item.product.base_price

    print("Cart Items:")
    for item in cart:
        product = item.product
        print(
            f"- {product.brand.id} {product.category.id} ({item.size}) "
            f"x{item.quantity} @ ₹{_format_amount(product.current_price)} each"
        )

    print(f"\nCustomer: {customer.id} (Tier: {customer.tier})")
    if payment is not None:
        line = f"Payment: {_label(payment.method)}"
        if payment.bank_name is not None:
            line += f" ({payment.bank_name})"
        print(line)

    result = service.calculate_cart_discounts(cart, customer, payment)

    print("\n💰 Discount Calculation Results")
    print("------------------------------")
    print(f"Original Price: ₹{_format_amount(result.original_price)}")
    print(f"Final Price: ₹{_format_amount(result.final_price)}")
    percentage = _format_amount(result.discount_percentage())[:2]
    print(
        f"Total Savings: ₹{_format_amount(result.total_discount())} ({percentage}%)"
    )

    print("\n🎯 Applied Discounts:")
    for name, amount in result.applied_discounts.items():
        print(f"- {name}: ₹{_format_amount(amount)}")

    print(f"\nMessage: {result.message}")

    print("\n🔍 Testing Discount Code Validation")
    print("-----------------------------------")
    for code in _TEST_CODES:
        prefix = "Testing empty code: " if not code else f"Testing code '{code}': "
        try:
            valid = service.validate_discount_code(code, cart, customer)
        except DiscountError as exc:
            print(f"{prefix}Error - {exc}")
        else:
            print(prefix + ("✅ Valid" if valid else "❌ Invalid"))

    print("\n✨ Demonstration completed successfully!")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Demonstrate cart discount calculation on sample data."
    )
    parser.parse_args(argv)

    repository = InMemoryDiscountRepository()
    repository.seed(_sample_discounts())
    service = DiscountService(repository)
    try:
        run_demo(service)
    except DiscountError as exc:
        print(f"Failed to calculate discounts: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())