"""Tests for the SQLite repositories, against an in-memory database."""

from decimal import Decimal

import pytest

from storefront.domain.model.attribute import Attribute, AttributeItem
from storefront.domain.model.category import Category, CategoryKind
from storefront.domain.model.gallery import GalleryImage
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.product import Product
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sqlite_attribute_repository import (
    SqliteAttributeRepository,
)
from storefront.infrastructure.persistence.sqlite_category_repository import (
    SqliteCategoryRepository,
)
from storefront.infrastructure.persistence.sqlite_gallery_repository import (
    SqliteGalleryRepository,
)
from storefront.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)
from storefront.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


@pytest.fixture
def db():
    database = Database(":memory:")
    database.init_schema()
    yield database
    database.close()


def _product(product_id: str, name: str, category: str = "tech", **extra) -> Product:
    data = {
        "id": product_id,
        "name": name,
        "brand": "Apple",
        "category": category,
        "prices": [{"amount": 100, "currency": {"label": "USD", "symbol": "$"}}],
    }
    data.update(extra)
    return Product.create(data)


def _capacity() -> dict:
    return {
        "id": "Capacity",
        "name": "Capacity",
        "type": "text",
        "items": [
            {"id": "256GB", "displayValue": "256GB", "value": "256GB"},
            {"id": "512GB", "displayValue": "512GB", "value": "512GB"},
        ],
    }


def _color() -> dict:
    return {
        "id": "Color",
        "name": "Color",
        "type": "swatch",
        "items": [{"id": "Black", "displayValue": "Black", "value": "#000000"}],
    }


# --- Database ------------------------------------------------------------------


class TestDatabase:

    def test_transaction_rolls_back_on_error(self, db):
        with pytest.raises(RuntimeError):
            with db.transaction():
                db.execute("INSERT INTO categories (name) VALUES ('tech')")
                raise RuntimeError("boom")
        assert db.table_counts()["categories"] == 0

    def test_nested_transactions_commit_once(self, db):
        with db.transaction():
            with db.transaction():
                db.execute("INSERT INTO categories (name) VALUES ('tech')")
            db.execute("INSERT INTO categories (name) VALUES ('clothes')")
        assert db.table_counts()["categories"] == 2

    def test_failed_nested_scope_keeps_outer_writes(self, db):
        with db.transaction():
            db.execute("INSERT INTO categories (name) VALUES ('tech')")
            with pytest.raises(RuntimeError):
                with db.transaction():
                    db.execute("INSERT INTO categories (name) VALUES ('clothes')")
                    raise RuntimeError("boom")
        assert [r["name"] for r in db.fetch_all("SELECT name FROM categories")] == ["tech"]

    def test_outer_failure_undoes_committed_nested_scope(self, db):
        with pytest.raises(RuntimeError):
            with db.transaction():
                with db.transaction():
                    db.execute("INSERT INTO categories (name) VALUES ('tech')")
                raise RuntimeError("boom")
        assert db.table_counts()["categories"] == 0


# --- Categories ----------------------------------------------------------------


class TestCategoryRepository:

    def test_save_assigns_id(self, db):
        repo = SqliteCategoryRepository(db)
        category = Category.create("tech")
        assert repo.save(category)
        assert category.id is not None
        assert category.created_at is not None

    def test_rehydrates_variant(self, db):
        repo = SqliteCategoryRepository(db)
        for name in ("tech", "all", "clothes"):
            repo.save(Category.create(name))
        assert [(c.name, c.kind) for c in repo.find_all()] == [
            ("all", CategoryKind.ALL),
            ("clothes", CategoryKind.PRODUCT),
            ("tech", CategoryKind.PRODUCT),
        ]
        assert [c.name for c in repo.find_product_categories()] == ["clothes", "tech"]

    def test_duplicate_name_reuses_row(self, db):
        repo = SqliteCategoryRepository(db)
        first, second = Category.create("tech"), Category.create("tech")
        repo.save(first)
        assert repo.save(second)
        assert second.id == first.id
        assert len(repo.find_all()) == 1

    def test_invalid_category_not_saved(self, db):
        repo = SqliteCategoryRepository(db)
        assert not repo.save(Category.create(""))
        assert repo.find_all() == []

    def test_lookup_and_delete(self, db):
        repo = SqliteCategoryRepository(db)
        category = Category.create("tech")
        repo.save(category)
        assert repo.exists("tech")
        assert repo.find_by_name("tech").id == category.id
        assert repo.find_by_id(category.id).display_name() == "Tech"
        assert repo.delete(category.id)
        assert not repo.exists("tech")
        assert not repo.delete(category.id)


# --- Attributes ----------------------------------------------------------------


class TestAttributeRepository:

    def test_round_trip_keeps_item_order(self, db):
        repo = SqliteAttributeRepository(db)
        attribute = Attribute.from_payload(_capacity())
        assert repo.save(attribute)
        loaded = repo.find_by_id("Capacity")
        assert loaded.type is attribute.type
        assert loaded.selectable_values() == ["256GB", "512GB"]

    def test_attribute_without_items(self, db):
        repo = SqliteAttributeRepository(db)
        repo.save(Attribute.create("Empty", "Empty", "text"))
        assert repo.find_by_id("Empty").items == []

    def test_invalid_items_are_skipped(self, db):
        repo = SqliteAttributeRepository(db)
        attribute = Attribute.create("Size", "Size", "text")
        attribute.items = [
            AttributeItem("S", "Size", "Small", "S"),
            AttributeItem("", "Size", "Broken", "X"),
        ]
        repo.save(attribute)
        assert repo.find_by_id("Size").selectable_values() == ["S"]

    def test_swatch_values_are_normalized(self, db):
        repo = SqliteAttributeRepository(db)
        attribute = Attribute.create("Color", "Color", "swatch")
        attribute.items = [
            AttributeItem("Bad", "Color", "Bad", "notacolor"),
            AttributeItem("Green", "Color", "Green", "44FF03"),
        ]
        assert repo.save(attribute)
        assert repo.find_by_id("Color").selectable_values() == ["#44ff03"]

    def test_missing(self, db):
        assert SqliteAttributeRepository(db).find_by_id("nope") is None


# --- Gallery -------------------------------------------------------------------


class TestGalleryRepository:

    def test_images_come_back_in_sort_order(self, db):
        SqliteProductRepository(db).save(_product("p1", "iMac"))
        gallery = SqliteGalleryRepository(db)
        for position in (2, 0, 1):
            gallery.save(
                GalleryImage("p1", f"https://example.com/{position}.jpg", sort_order=position)
            )

        images = gallery.get_by_product_id("p1")
        assert [i.sort_order for i in images] == [0, 1, 2]
        assert images[0].is_primary_image()
        assert not images[1].is_primary_image()

    def test_invalid_url_not_saved(self, db):
        SqliteProductRepository(db).save(_product("p1", "iMac"))
        gallery = SqliteGalleryRepository(db)
        assert not gallery.save(GalleryImage("p1", "not a url"))


# --- Products ------------------------------------------------------------------


class TestProductRepository:

    def test_round_trip_simple_product(self, db):
        repo = SqliteProductRepository(db)
        product = _product(
            "airtag", "AirTag",
            description="<p>Tracker</p>",
            gallery=["https://example.com/a.jpg", "https://example.com/b.jpg"],
        )
        assert repo.save(product)

        loaded = repo.find_by_id("airtag")
        assert loaded.name == "AirTag"
        assert loaded.description == "<p>Tracker</p>"
        assert loaded.in_stock is True
        assert loaded.gallery == ["https://example.com/a.jpg", "https://example.com/b.jpg"]
        assert loaded.prices[0].amount.amount == Decimal("100")
        assert loaded.prices[0].formatted() == "$100.00"
        assert not loaded.has_configurable_options()
        assert loaded.created_at is not None

    def test_kind_follows_loaded_attributes(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("iphone", "iPhone", attributes=[_capacity(), _color()]))

        loaded = repo.find_by_id("iphone")
        assert loaded.has_configurable_options()
        assert [a.name for a in loaded.attributes] == ["Capacity", "Color"]
        assert loaded.available_options() == {
            "Capacity": ["256GB", "512GB"],
            "Color": ["Black"],
        }

    def test_resave_replaces_relations(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("iphone", "iPhone", attributes=[_capacity()]))
        repo.save(_product("iphone", "iPhone 15", attributes=[]))

        loaded = repo.find_by_id("iphone")
        assert loaded.name == "iPhone 15"
        assert loaded.attributes == []
        assert len(loaded.prices) == 1
        assert not loaded.has_configurable_options()

    def test_invalid_product_not_saved(self, db):
        repo = SqliteProductRepository(db)
        assert not repo.save(_product("x", ""))
        assert repo.find_by_id("x") is None

    def test_queries(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("imac", "iMac 2021"))
        repo.save(_product("jacket", "Jacket", category="clothes", inStock=False,
                           description="Warm winter jacket"))
        repo.save(_product("iphone", "iPhone 12 Pro", attributes=[_capacity()]))

        assert [p.id for p in repo.find_all()] == ["imac", "iphone", "jacket"]
        assert [p.id for p in repo.find_by_category("tech")] == ["imac", "iphone"]
        assert [p.id for p in repo.find_by_category("all")] == ["imac", "iphone", "jacket"]
        assert [p.id for p in repo.find_in_stock()] == ["imac", "iphone"]
        assert [p.id for p in repo.search_by_text("WINTER")] == ["jacket"]
        assert [p.id for p in repo.find_configurable_products()] == ["iphone"]
        assert [p.id for p in repo.find_simple_products()] == ["imac", "jacket"]
        assert repo.get_count_by_category() == {"clothes": 1, "tech": 2}

    def test_search_folds_accented_letters(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("scarf", "Écharpe", category="clothes"))
        repo.save(_product("imac", "iMac"))

        assert [p.id for p in repo.search_by_text("écharpe")] == ["scarf"]
        assert [p.id for p in repo.search_by_text("ÉCHARPE")] == ["scarf"]

    def test_find_with_attributes(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("iphone", "iPhone", attributes=[_capacity(), _color()]))
        repo.save(_product("ipad", "iPad", attributes=[_capacity()]))
        repo.save(_product("imac", "iMac"))

        assert {p.id for p in repo.find_with_attributes()} == {"iphone", "ipad"}
        assert {p.id for p in repo.find_with_attributes({"Capacity": ["512GB"]})} == {
            "iphone", "ipad",
        }
        assert [p.id for p in repo.find_with_attributes(
            {"Capacity": ["512GB"], "Color": ["#000000"]}
        )] == ["iphone"]
        assert repo.find_with_attributes({"Capacity": ["1TB"]}) == []

    def test_delete(self, db):
        repo = SqliteProductRepository(db)
        repo.save(_product("iphone", "iPhone", attributes=[_capacity()],
                           gallery=["https://example.com/a.jpg"]))
        assert repo.delete("iphone")
        assert repo.find_by_id("iphone") is None
        assert db.table_counts()["product_gallery"] == 0
        assert db.table_counts()["prices"] == 0
        assert db.table_counts()["product_attributes"] == 0
        assert not repo.delete("iphone")


# --- Orders --------------------------------------------------------------------


class TestOrderRepository:

    def _order(self, email: str | None = "a@example.com") -> Order:
        order = Order.create(OrderStatus.PENDING, "99.99", customer_email=email)
        order.add_item("p1")
        order.add_item("p2")
        order.add_item("p1")
        return order

    def test_save_assigns_id_and_timestamps(self, db):
        repo = SqliteOrderRepository(db)
        order = self._order()
        assert repo.save(order)
        assert order.id is not None
        assert order.created_at is not None
        assert order.updated_at is not None

    def test_round_trip_keeps_items_in_order(self, db):
        repo = SqliteOrderRepository(db)
        order = self._order()
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status is OrderStatus.PENDING
        assert loaded.total_amount == Decimal("99.99")
        assert loaded.items == ["p1", "p2", "p1"]
        assert loaded.customer_email == "a@example.com"

    def test_status_change_is_persisted(self, db):
        repo = SqliteOrderRepository(db)
        order = self._order()
        repo.save(order)
        order.process()
        assert repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status is OrderStatus.COMPLETED
        assert not loaded.can_be_modified()
        assert not loaded.can_be_cancelled()

    def test_order_without_email_completes(self, db):
        repo = SqliteOrderRepository(db)
        order = self._order(email=None)
        repo.save(order)
        assert order.process()
        assert repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status is OrderStatus.COMPLETED
        assert loaded.customer_email is None

    def test_invalid_order_not_saved(self, db):
        repo = SqliteOrderRepository(db)
        order = Order.create(OrderStatus.PENDING, "0")
        assert not repo.save(order)
        assert order.id is None
        assert db.table_counts()["orders"] == 0

    def test_list_all_newest_first(self, db):
        repo = SqliteOrderRepository(db)
        first, second = self._order(), self._order()
        repo.save(first)
        repo.save(second)
        assert [o.id for o in repo.list_all()] == [second.id, first.id]

    def test_missing(self, db):
        assert SqliteOrderRepository(db).get_by_id(42) is None
