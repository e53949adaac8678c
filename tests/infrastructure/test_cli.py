"""Tests for the click CLI, run with CliRunner against a temporary database."""

import json

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli

CATALOG = {
    "data": {
        "categories": [{"name": "all"}, {"name": "tech"}],
        "products": [
            {
                "id": "apple-airtag",
                "name": "AirTag",
                "brand": "Apple",
                "category": "tech",
                "inStock": True,
                "gallery": ["https://example.com/airtag.jpg"],
                "prices": [{"amount": 120.57, "currency": {"label": "USD", "symbol": "$"}}],
                "attributes": [],
            },
            {
                "id": "iphone-12-pro",
                "name": "iPhone 12 Pro",
                "brand": "Apple",
                "category": "tech",
                "inStock": False,
                "prices": [{"amount": 1000.76, "currency": {"label": "USD", "symbol": "$"}}],
                "attributes": [
                    {
                        "id": "Capacity",
                        "name": "Capacity",
                        "type": "text",
                        "items": [
                            {"id": "512G", "displayValue": "512G", "value": "512G"},
                            {"id": "1T", "displayValue": "1T", "value": "1T"},
                        ],
                    }
                ],
            },
        ],
    }
}


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATABASE", str(tmp_path / "shop.db"))
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "WARNING")
    return CliRunner()


@pytest.fixture
def seeded(runner, tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    result = runner.invoke(cli, ["db", "import", str(path)])
    assert result.exit_code == 0, result.output
    return runner


class TestDbCommands:

    def test_init(self, runner, tmp_path):
        result = runner.invoke(cli, ["db", "init"])
        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert (tmp_path / "shop.db").exists()

    def test_import_reports_counts(self, seeded):
        result = seeded.invoke(cli, ["db", "stats"])
        assert result.exit_code == 0
        lines = {line.split()[0]: line.split()[-1] for line in result.output.splitlines()[2:]}
        assert lines["categories"] == "2"
        assert lines["products"] == "2"
        assert lines["attribute_items"] == "2"

    def test_second_import_is_skipped(self, seeded, tmp_path):
        result = seeded.invoke(cli, ["db", "import", str(tmp_path / "catalog.json")])
        assert result.exit_code == 0
        assert "already populated" in result.output

    def test_forced_import(self, seeded, tmp_path):
        result = seeded.invoke(cli, ["db", "import", str(tmp_path / "catalog.json"), "--force"])
        assert result.exit_code == 0
        assert "Imported 4, skipped 0, failed 0" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["db", "import", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Data file not found" in result.output


class TestCatalogCommands:

    def test_category_list(self, seeded):
        result = seeded.invoke(cli, ["category", "list"])
        assert result.exit_code == 0
        assert "All Products" in result.output
        assert "Tech" in result.output

    def test_product_list(self, seeded):
        result = seeded.invoke(cli, ["product", "list"])
        assert "apple-airtag" in result.output
        assert "configurable" in result.output
        assert "$120.57" in result.output

    def test_product_list_in_stock(self, seeded):
        result = seeded.invoke(cli, ["product", "list", "--in-stock"])
        assert "apple-airtag" in result.output
        assert "iphone-12-pro" not in result.output

    def test_product_search(self, seeded):
        result = seeded.invoke(cli, ["product", "list", "--search", "iphone"])
        assert "iphone-12-pro" in result.output
        assert "apple-airtag" not in result.output

    def test_product_show(self, seeded):
        result = seeded.invoke(cli, ["product", "show", "iphone-12-pro"])
        assert result.exit_code == 0
        assert "Configurable Product" in result.output
        assert "512G, 1T" in result.output
        assert "$1,000.76 USD" in result.output

    def test_product_show_missing(self, seeded):
        result = seeded.invoke(cli, ["product", "show", "nope"])
        assert result.exit_code == 1
        assert "Product not found" in result.output


class TestOrderCommands:

    def _place(self, runner, *extra):
        return runner.invoke(
            cli, ["order", "place", "--items", "apple-airtag,iphone-12-pro", "--total", "1121.33", *extra]
        )

    def test_place_and_show(self, seeded):
        result = self._place(seeded, "--email", "a@example.com")
        assert result.exit_code == 0, result.output
        assert "Order #1 placed  (status=pending)" in result.output

        shown = seeded.invoke(cli, ["order", "show", "1"])
        assert shown.exit_code == 0
        assert "a@example.com" in shown.output
        assert "iphone-12-pro" in shown.output
        assert "1121.33 USD" in shown.output

    def test_place_unknown_product(self, seeded):
        result = seeded.invoke(cli, ["order", "place", "--items", "ghost", "--total", "5"])
        assert result.exit_code == 1
        assert "Product not found" in result.output

    def test_place_empty_items(self, seeded):
        result = seeded.invoke(cli, ["order", "place", "--items", " , ", "--total", "5"])
        assert result.exit_code == 2

    def test_process(self, seeded):
        self._place(seeded, "--email", "a@example.com")
        result = seeded.invoke(cli, ["order", "process", "1"])
        assert result.exit_code == 0
        assert "status=completed" in seeded.invoke(cli, ["order", "show", "1"]).output

    def test_process_without_email(self, seeded):
        self._place(seeded)
        result = seeded.invoke(cli, ["order", "process", "1"])
        assert result.exit_code == 0, result.output
        assert "status=completed" in seeded.invoke(cli, ["order", "show", "1"]).output

    def test_cancel(self, seeded):
        self._place(seeded)
        assert seeded.invoke(cli, ["order", "cancel", "1"]).exit_code == 0
        result = seeded.invoke(cli, ["order", "cancel", "1"])
        assert result.exit_code == 1
        assert "Cannot cancel order in cancelled status" in result.output

    def test_show_missing(self, seeded):
        result = seeded.invoke(cli, ["order", "show", "7"])
        assert result.exit_code == 1
        assert "Order #7 not found" in result.output


class TestQueryCommand:

    def test_query(self, seeded):
        result = seeded.invoke(cli, ["query", '{ products(category: "tech") { id type } }'])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["data"]["products"] == [
            {"id": "apple-airtag", "type": "simple"},
            {"id": "iphone-12-pro", "type": "configurable"},
        ]

    def test_query_with_variables(self, seeded):
        result = seeded.invoke(cli, [
            "query", "query P($id: String!) { product(id: $id) { name } }",
            "--variables", '{"id": "apple-airtag"}',
        ])
        assert json.loads(result.output)["data"]["product"]["name"] == "AirTag"

    def test_query_error_exit_code(self, seeded):
        result = seeded.invoke(cli, ["query", "{ nothing }"])
        assert result.exit_code == 1
        assert "errors" in json.loads(result.output)
