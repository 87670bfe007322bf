# cartdiscounts

A small discount engine for shopping carts. The active discounts are applied to
a cart one after another, highest `priority` first. There are four kinds
(`DiscountType`):

- **brand**: a share of the price of the cart items whose brand id is listed
  in `applicable_to`;
- **category**: a share of the price of the cart items whose category id is
  listed in `applicable_to`;
- **voucher**: a share of the running total; vouchers carry a `code` that can
  be checked with `validate_discount_code`;
- **bank**: a share of the running total, offered only when paying by
  `PaymentMethod.CARD` with a bank listed in `applicable_to` (an empty list
  accepts any bank).

A discount is either a percentage of its base (`is_percentage=True`) or a
fixed `value`. The amount is capped by `max_amount` when that is non-zero, and
never exceeds the base it is taken from. A discount takes part only if it is
active, the current time lies between `valid_from` and `valid_to`, and its
`used_count` is below `usage_limit` (a limit of 0 means unlimited). It may be
limited to customer tiers (`customer_tiers`) and may exclude brand or
category ids (`excluded_items`). Brand, category and voucher discounts also
require the cart total to reach `min_amount` when that is non-zero; bank
offers do not check a non-zero `min_amount`. Every time a discount is applied
its usage count in the repository goes up by one.

Amounts are `decimal.Decimal` throughout. The package has no dependencies
beyond the standard library.

## Installation

```
pip install cartdiscounts
```

## Usage

```python
from datetime import datetime, timedelta
from decimal import Decimal

from cartdiscounts.models import (
    Brand, BrandTier, CartItem, Category, CustomerProfile,
    Discount, DiscountType, PaymentInfo, PaymentMethod, Product,
)
from cartdiscounts.repository import InMemoryDiscountRepository
from cartdiscounts.service import DiscountService

now = datetime.now()
repo = InMemoryDiscountRepository()
repo.seed([
    Discount(
        id="disc-001",
        name="PUMA Brand Discount - Min 40% off",
        type=DiscountType.BRAND,
        value=Decimal(40),
        is_percentage=True,
        min_amount=Decimal(500),
        applicable_to=["PUMA"],
        valid_from=now - timedelta(days=1),
        valid_to=now + timedelta(days=30),
        is_active=True,
        priority=100,
    ),
])

service = DiscountService(repo)
product = Product(
    id="prod-001",
    brand=Brand(id="PUMA", name="PUMA", tier=BrandTier.PREMIUM),
    category=Category(id="T-shirts", name="T-shirts"),
    base_price=Decimal(1000),
    current_price=Decimal(1000),
)
cart = [CartItem(product=product, quantity=2, size="M")]
customer = CustomerProfile(id="cust-001", tier="premium")

result = service.calculate_cart_discounts(cart, customer, PaymentInfo(method=PaymentMethod.UPI))
print(result.original_price, result.final_price, result.applied_discounts)
print(result.total_discount(), result.discount_percentage())
print(result.message)
```

`calculate_cart_discounts` returns a `DiscountedPrice` holding the original
and final price, the applied amounts keyed by discount name, and a message. It
raises `cartdiscounts.errors.ValidationError` for an empty cart.

`validate_discount_code(code, cart_items, customer)` returns `True` when the
discount with that code exists and could be applied to the cart and customer,
`False` otherwise. It raises `ValidationError` for an empty code.

### Modules

- `cartdiscounts.models`: the dataclasses and enums (`Product`, `CartItem`,
  `CustomerProfile`, `PaymentInfo`, `Discount`, `DiscountedPrice`, ...).
- `cartdiscounts.strategies`: one strategy class per discount type, the
  `StrategyFactory` that maps a type to its strategy, and the helpers
  `calculate_discount_value` and `cart_total`.
- `cartdiscounts.repository`: the abstract `DiscountRepository` and the
  thread-safe `InMemoryDiscountRepository` (`create`, `update`, `delete`,
  `get_by_id`, `get_by_code`, `active_discounts`, `increment_usage_count`,
  `seed`, `clear`). It raises `NotFoundError` for unknown ids or codes and
  `ValidationError` when an id or code is already taken; `seed` overwrites
  without checks.
- `cartdiscounts.service`: `DiscountService`.
- `cartdiscounts.errors`: `DiscountError` and its subclasses
  `ValidationError`, `NotFoundError` and `InternalError`.

## Demonstration

A command seeds a set of sample discounts, prices two PUMA T-shirts for a
premium customer paying with an ICICI credit card, prints the result, and then
checks the codes `SUPER69`, `PREMIUM15`, `INVALID123` and an empty code:

```
cartdiscounts-demo
```

## What it does not do

Discounts are kept in memory only; nothing is stored on disk or in a database,
and there is no server or network interface. The only command is the
demonstration above.

## Tests

```
pip install "cartdiscounts[test]"
pytest
```