"""GraphQL object types.

Each type wraps one hydrated domain entity (kept as a private field) and
resolves its fields through the entity's accessors and behavior methods,
so variant-specific answers come straight from the domain model.
"""

import strawberry

from storefront.domain.model.attribute import Attribute, AttributeItem
from storefront.domain.model.category import Category
from storefront.domain.model.order import Order
from storefront.domain.model.price import Price
from storefront.domain.model.product import Product


@strawberry.type(name="Category", description="Product category")
class CategoryType:
    category: strawberry.Private[Category]

    @strawberry.field
    def id(self) -> strawberry.ID | None:
        return None if self.category.id is None else strawberry.ID(str(self.category.id))

    @strawberry.field
    def name(self) -> str:
        return self.category.name

    @strawberry.field
    def type(self) -> str:
        return self.category.type

    @strawberry.field
    def display_name(self) -> str:
        return self.category.display_name()

    @strawberry.field
    def can_contain_products(self) -> bool:
        return self.category.can_contain_products()


@strawberry.type(name="Currency", description="Currency information")
class CurrencyType:
    label: str
    symbol: str


@strawberry.type(name="Price", description="Product price with currency")
class PriceType:
    price: strawberry.Private[Price]

    @strawberry.field
    def amount(self) -> float:
        return float(self.price.amount.amount)

    @strawberry.field
    def currency(self) -> CurrencyType:
        return CurrencyType(label=self.price.label or "", symbol=self.price.symbol or "")


@strawberry.type(name="AttributeItem", description="Product attribute item")
class AttributeItemType:
    item: strawberry.Private[AttributeItem]

    @strawberry.field
    def id(self) -> str | None:
        return self.item.id or None

    @strawberry.field
    def display_value(self) -> str:
        return self.item.display_value or ""

    @strawberry.field(name="display_value")
    def display_value_snake(self) -> str:
        return self.item.display_value or ""

    @strawberry.field
    def value(self) -> str:
        return self.item.value or ""


@strawberry.type(name="Attribute", description="Product attribute")
class AttributeType:
    attribute: strawberry.Private[Attribute]

    @strawberry.field
    def id(self) -> str:
        return self.attribute.id or ""

    @strawberry.field
    def name(self) -> str:
        return self.attribute.name or ""

    @strawberry.field
    def type(self) -> str:
        return self.attribute.type.value

    @strawberry.field
    def input_type(self) -> str:
        return self.attribute.input_type()

    @strawberry.field
    def items(self) -> list[AttributeItemType]:
        return [AttributeItemType(item=item) for item in self.attribute.items]


@strawberry.type(name="ProductOption", description="Selectable values of one attribute")
class ProductOptionType:
    name: str
    values: list[str]


@strawberry.type(name="Product", description="Product with polymorphic behavior")
class ProductType:
    product: strawberry.Private[Product]

    @strawberry.field
    def id(self) -> str:
        return self.product.id

    @strawberry.field
    def name(self) -> str:
        return self.product.name

    @strawberry.field
    def brand(self) -> str:
        return self.product.brand

    @strawberry.field
    def description(self) -> str | None:
        return self.product.description

    @strawberry.field
    def category(self) -> str:
        return self.product.category

    @strawberry.field
    def in_stock(self) -> bool:
        return self.product.in_stock

    @strawberry.field
    def type(self) -> str:
        return self.product.type

    @strawberry.field
    def display_type(self) -> str:
        return self.product.process_for_display()["displayType"]

    @strawberry.field
    def gallery(self) -> list[str]:
        return list(self.product.gallery)

    @strawberry.field
    def prices(self) -> list[PriceType]:
        return [PriceType(price=price) for price in self.product.prices]

    @strawberry.field
    def attributes(self) -> list[AttributeType]:
        return [AttributeType(attribute=a) for a in self.product.attributes]

    @strawberry.field
    def has_configurable_options(self) -> bool:
        return self.product.has_configurable_options()

    @strawberry.field
    def available_options(self) -> list[ProductOptionType]:
        return [
            ProductOptionType(name=name, values=values)
            for name, values in self.product.available_options().items()
        ]


@strawberry.type(name="Order", description="Customer order with polymorphic behavior")
class OrderType:
    order: strawberry.Private[Order]

    @strawberry.field
    def id(self) -> strawberry.ID | None:
        return None if self.order.id is None else strawberry.ID(str(self.order.id))

    @strawberry.field
    def status(self) -> str:
        return self.order.status.value

    @strawberry.field
    def total_amount(self) -> float:
        return float(self.order.total_amount)

    @strawberry.field
    def currency(self) -> str:
        return self.order.currency

    @strawberry.field
    def customer_email(self) -> str | None:
        return self.order.customer_email

    @strawberry.field
    def shipping_address(self) -> str | None:
        return self.order.shipping_address

    @strawberry.field
    def items(self) -> list[str]:
        return list(self.order.items)

    @strawberry.field
    def can_be_modified(self) -> bool:
        return self.order.can_be_modified()

    @strawberry.field
    def can_be_cancelled(self) -> bool:
        return self.order.can_be_cancelled()

    @strawberry.field
    def available_actions(self) -> list[str]:
        return self.order.available_actions()

    @strawberry.field
    def created_at(self) -> str | None:
        return self.order.created_at
