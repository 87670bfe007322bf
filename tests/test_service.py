from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from cartdiscounts.errors import InternalError, NotFoundError, ValidationError
from cartdiscounts.models import (
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
from cartdiscounts.repository import DiscountRepository, InMemoryDiscountRepository
from cartdiscounts.service import DiscountService


def _product(pid, brand, category, base, current=None, tier=BrandTier.PREMIUM):
    return Product(
        id=pid,
        brand=Brand(id=brand, name=brand, tier=tier),
        category=Category(id=category, name=category),
        base_price=Decimal(base),
        current_price=Decimal(base if current is None else current),
    )


def sample_products():
    return [
        _product("prod-001", "PUMA", "T-shirts", 1000, 600),
        _product("prod-002", "Nike", "Shoes", 5000),
        _product("prod-003", "Adidas", "T-shirts", 800),
        _product("prod-004", "Zara", "Jeans", 1200, tier=BrandTier.REGULAR),
    ]


PREMIUM = CustomerProfile(id="cust-001", tier="premium")
REGULAR = CustomerProfile(id="cust-002", tier="regular")


def icici_card():
    return PaymentInfo(
        method=PaymentMethod.CARD, bank_name="ICICI", card_type=CardType.CREDIT
    )


def sample_discounts():
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


def multiple_discount_cart():
    product = sample_products()[0]
    product.current_price = product.base_price
    return [CartItem(product=product, quantity=2, size="M")]


@pytest.fixture
def repo():
    repository = InMemoryDiscountRepository()
    repository.seed(sample_discounts())
    return repository


@pytest.fixture
def service(repo):
    return DiscountService(repo)


def test_empty_cart_raises(service):
    with pytest.raises(ValidationError, match="cart is empty"):
        service.calculate_cart_discounts([], PREMIUM, icici_card())


@pytest.mark.parametrize(
    "item, customer, payment, expected_final, expected_count",
    [
        (
            CartItem(_product("prod-001", "PUMA", "T-shirts", 1000), 2, "M"),
            PREMIUM, icici_card(), Decimal("237.15"), 5,
        ),
        (
            CartItem(_product("prod-002", "Nike", "Shoes", 5000), 1, "42"),
            PREMIUM, icici_card(), Decimal(1850), 4,
        ),
        (
            CartItem(_product("prod-001", "PUMA", "T-shirts", 1000), 1, "M"),
            PREMIUM, None, Decimal(425), 3,
        ),
        (
            CartItem(
                _product("prod-004", "Zara", "Jeans", 1200, tier=BrandTier.REGULAR),
                1, "32",
            ),
            REGULAR, icici_card(), Decimal(1080), 1,
        ),
        (
            CartItem(_product("prod-003", "Adidas", "T-shirts", 500), 1, "S"),
            PREMIUM, icici_card(), Decimal("344.25"), 3,
        ),
    ],
)
def test_calculate_cart_discounts(
    service, item, customer, payment, expected_final, expected_count
):
    result = service.calculate_cart_discounts([item], customer, payment)

    assert len(result.applied_discounts) == expected_count
    assert result.final_price == expected_final
    assert result.total_discount() == result.original_price - result.final_price


def test_multiple_discount_scenario(service):
    result = service.calculate_cart_discounts(
        multiple_discount_cart(), PREMIUM, icici_card()
    )

    assert result.original_price == Decimal(2000)
    assert len(result.applied_discounts) >= 3
    assert "PUMA Brand Discount - Min 40% off" in result.applied_discounts
    assert "T-shirts Category Discount - Extra 10% off" in result.applied_discounts
    assert "ICICI Bank Offer - 10% instant discount" in result.applied_discounts
    assert result.total_discount() > Decimal(800)
    assert Decimal(0) < result.final_price < result.original_price


def test_message_reports_count_and_savings(service):
    result = service.calculate_cart_discounts(
        multiple_discount_cart(), PREMIUM, icici_card()
    )
    assert result.message == "Applied 5 discount(s) - Savings: 1762.85"


def test_no_discounts_message(service):
    cart = [CartItem(_product("x", "Other", "Misc", 100), 1)]
    result = service.calculate_cart_discounts(cart, REGULAR, None)
    assert result.applied_discounts == {}
    assert result.final_price == result.original_price
    assert result.message == "No discounts applied"


def test_usage_counts_increment_for_applied_discounts(service, repo):
    service.calculate_cart_discounts(multiple_discount_cart(), PREMIUM, icici_card())
    assert repo.get_by_id("disc-001").used_count == 1
    assert repo.get_by_id("disc-005").used_count == 0


def test_unknown_discount_type_is_skipped(repo, service):
    now = datetime.now()
    repo.seed([
        Discount(
            id="disc-x", name="Loyalty", type="loyalty", value=Decimal(10),
            is_active=True, priority=500,
            valid_from=now - timedelta(days=1), valid_to=now + timedelta(days=1),
        )
    ])
    cart = [CartItem(_product("x", "Other", "Misc", 100), 1)]
    result = service.calculate_cart_discounts(cart, REGULAR, None)
    assert "Loyalty" not in result.applied_discounts


@pytest.mark.parametrize(
    "code, cart, customer, expected",
    [
        ("SUPER69", multiple_discount_cart(), PREMIUM, True),
        ("PREMIUM15", [CartItem(sample_products()[0], 1, "M")], PREMIUM, True),
        ("SUPER69", [CartItem(sample_products()[0], 1, "M")], REGULAR, False),
        ("INVALID123", [CartItem(sample_products()[0], 1, "M")], PREMIUM, False),
        (
            "SUPER69",
            [CartItem(_product("prod-small", "TestBrand", "TestCategory", 500), 1, "S")],
            PREMIUM,
            False,
        ),
    ],
)
def test_validate_discount_code(service, code, cart, customer, expected):
    assert service.validate_discount_code(code, cart, customer) is expected


def test_validate_empty_code_raises(service):
    with pytest.raises(ValidationError, match="code cannot be empty"):
        service.validate_discount_code("", multiple_discount_cart(), PREMIUM)


def test_integration_with_created_discounts():
    repository = InMemoryDiscountRepository()
    for discount in sample_discounts():
        repository.create(discount)
    service = DiscountService(repository)
    cart = multiple_discount_cart()

    result = service.calculate_cart_discounts(cart, PREMIUM, icici_card())
    assert result.final_price < result.original_price
    assert len(result.applied_discounts) > 0

    assert service.validate_discount_code("SUPER69", cart, PREMIUM) is True
    assert service.validate_discount_code("PREMIUM15", cart, PREMIUM) is True
    assert service.validate_discount_code("INVALID", cart, PREMIUM) is False


class _BrokenRepository(DiscountRepository):
    def active_discounts(self):
        raise NotFoundError("storage offline")

    def get_by_code(self, code):
        raise ValidationError("bad lookup")

    def get_by_id(self, discount_id):
        raise NotFoundError(discount_id)

    def create(self, discount):
        raise ValidationError("read only")

    def update(self, discount):
        raise ValidationError("read only")

    def delete(self, discount_id):
        raise ValidationError("read only")

    def increment_usage_count(self, discount_id):
        raise ValidationError("read only")


def test_repository_failure_is_wrapped():
    service = DiscountService(_BrokenRepository())
    with pytest.raises(InternalError) as info:
        service.calculate_cart_discounts(multiple_discount_cart(), PREMIUM, None)
    assert str(info.value) == "failed to get discounts: storage offline"


def test_code_lookup_failure_is_wrapped():
    service = DiscountService(_BrokenRepository())
    with pytest.raises(InternalError) as info:
        service.validate_discount_code("SUPER69", multiple_discount_cart(), PREMIUM)
    assert str(info.value) == "repo error: bad lookup"