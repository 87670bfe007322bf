"""Domain types for carts, customers, payments and discounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

PERCENTAGE_BASE = 100


class BrandTier(str, Enum):
    PREMIUM = "premium"
    REGULAR = "regular"
    BUDGET = "budget"


@dataclass
class Brand:
    id: str
    name: str
    tier: BrandTier = BrandTier.REGULAR


@dataclass
class Category:
    id: str
    name: str


@dataclass
class Product:
    id: str
    brand: Brand
    category: Category
    base_price: Decimal
    current_price: Decimal


@dataclass
class CartItem:
    product: Product
    quantity: int
    size: str = ""

    def total_price(self) -> Decimal:
        """Current unit price multiplied by quantity."""
        return self.product.current_price * self.quantity


class CardType(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class PaymentMethod(str, Enum):
    UPI = "UPI"
    CARD = "CARD"


@dataclass
class PaymentInfo:
    method: PaymentMethod | str
    bank_name: str | None = None
    card_type: CardType | None = None


@dataclass
class CustomerProfile:
    id: str
    tier: str = ""


class DiscountType(str, Enum):
    BRAND = "brand"
    CATEGORY = "category"
    BANK = "bank"
    VOUCHER = "voucher"


@dataclass
class DiscountedPrice:
    original_price: Decimal
    final_price: Decimal
    applied_discounts: dict[str, Decimal] = field(default_factory=dict)
    message: str = ""

    def total_discount(self) -> Decimal:
        """Sum of all applied discount amounts."""
        return sum(self.applied_discounts.values(), Decimal(0))

    def discount_percentage(self) -> Decimal:
        """Total discount as a percentage of the original price."""
        if self.original_price == 0:
            return Decimal(0)
        return self.total_discount() / self.original_price * PERCENTAGE_BASE


@dataclass
class Discount:
    id: str
    name: str
    type: DiscountType | str
    value: Decimal = Decimal(0)
    is_percentage: bool = False
    min_amount: Decimal = Decimal(0)
    max_amount: Decimal = Decimal(0)
    applicable_to: list[str] = field(default_factory=list)
    excluded_items: list[str] = field(default_factory=list)
    customer_tiers: list[str] = field(default_factory=list)
    code: str = ""
    valid_from: datetime = datetime.min
    valid_to: datetime = datetime.min
    is_active: bool = False
    usage_limit: int = 0
    used_count: int = 0
    priority: int = 0

    def is_valid(self) -> bool:
        """Active, inside its validity window and under its usage limit."""
        now = datetime.now(self.valid_from.tzinfo)
        return (
            self.is_active
            and self.valid_from < now < self.valid_to
            and (self.usage_limit == 0 or self.used_count < self.usage_limit)
        )

    def is_excluded(self, product: Product) -> bool:
        return any(
            excluded in (product.brand.id, product.category.id)
            for excluded in self.excluded_items
        )

    def matches_product(self, product: Product) -> bool:
        if self.is_excluded(product):
            return False
        if self.type == DiscountType.BRAND:
            return _allows(product.brand.id, self.applicable_to)
        if self.type == DiscountType.CATEGORY:
            return _allows(product.category.id, self.applicable_to)
        return True

    def is_applicable_to_customer(self, customer: CustomerProfile) -> bool:
        return _allows(customer.tier, self.customer_tiers)

    def calculate_discount(self, price: Decimal) -> Decimal:
        """Discount on a price, capped by max_amount for percentages."""
        if self.is_percentage:
            amount = price * self.value / PERCENTAGE_BASE
            if self.max_amount != 0 and amount > self.max_amount:
                return self.max_amount
            return amount
        return self.value


def _allows(item: str, restrictions: list[str]) -> bool:
    """An empty restriction list allows everything."""
    return not restrictions or item in restrictions