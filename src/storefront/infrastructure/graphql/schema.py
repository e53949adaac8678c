"""GraphQL schema: queries over the catalog and the order mutation.

Resolvers never build repositories themselves; they use the ones placed
in the per-request ``StorefrontContext``.
"""

from dataclasses import dataclass

import strawberry
from strawberry.types import Info

from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.graphql.types import CategoryType, OrderType, ProductType


@dataclass
class StorefrontContext:
    """Repositories for one request."""

    categories: CategoryRepository
    products: ProductRepository
    orders: OrderRepository


@strawberry.type
class Query:

    @strawberry.field(description="Get all categories")
    def categories(self, info: Info) -> list[CategoryType]:
        return [CategoryType(category=c) for c in info.context.categories.find_all()]

    @strawberry.field(description="Get category by name")
    def category(self, info: Info, name: str) -> CategoryType | None:
        category = info.context.categories.find_by_name(name)
        return None if category is None else CategoryType(category=category)

    @strawberry.field(description="Get products with optional filtering")
    def products(
        self,
        info: Info,
        category: str | None = None,
        in_stock: bool | None = None,
        search: str | None = None,
    ) -> list[ProductType]:
        # One filter at a time: search, then category, then inStock.
        repo: ProductRepository = info.context.products
        if search is not None:
            products = repo.search_by_text(search)
        elif category is not None:
            products = repo.find_by_category(category)
        elif in_stock:
            products = repo.find_in_stock()
        else:
            products = repo.find_all()
        return [ProductType(product=p) for p in products]

    @strawberry.field(description="Get single product by ID")
    def product(self, info: Info, id: str) -> ProductType | None:
        product = info.context.products.find_by_id(id)
        return None if product is None else ProductType(product=product)


@strawberry.type
class Mutation:

    @strawberry.mutation(description="Place a new order")
    def place_order(
        self,
        info: Info,
        items: list[str],
        total_amount: float,
        customer_email: str | None = None,
    ) -> OrderType:
        handler = PlaceOrderHandler(
            order_repo=info.context.orders,
            product_repo=info.context.products,
        )
        order = handler.handle(
            items=items, total_amount=total_amount, customer_email=customer_email
        )
        return OrderType(order=order)


schema = strawberry.Schema(query=Query, mutation=Mutation)
