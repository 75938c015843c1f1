"""End-to-end tests for the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from farmbox.infrastructure import bootstrap
from farmbox.infrastructure.cli import main
from farmbox.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    (tmp_path / "farms.json").write_text(json.dumps([
        {"id": "F1", "name": "Ferme Bio"},
        {"id": "F2", "name": "Domaine Olivier"},
    ]))
    (tmp_path / "products.json").write_text(json.dumps([
        {"id": "1", "farm_id": "F1", "name": "Tomatoes", "price": "30"},
        {"id": "2", "farm_id": "F1", "name": "Carrots", "price": "20"},
        {"id": "3", "farm_id": "F2", "name": "Olive oil", "price": "50", "unit": "L"},
    ]))
    monkeypatch.setenv("FARMBOX_DATA_DIR", str(tmp_path))
    # Leave the process-wide structlog config alone
    monkeypatch.setattr(main, "configure_logging", lambda level, json: None)
    bootstrap.settings.cache_clear()
    bootstrap.zone_table.cache_clear()
    yield CliRunner()
    bootstrap.settings.cache_clear()
    bootstrap.zone_table.cache_clear()


def _fill_cart(runner):
    for product, qty in (("1", "2"), ("2", "1"), ("3", "1")):
        result = runner.invoke(cli, ["cart", "add", "--product", product, "--qty", qty])
        assert result.exit_code == 0, result.output


class TestCartCommands:

    def test_show_priced_cart(self, runner):
        _fill_cart(runner)
        result = runner.invoke(cli, ["cart", "show", "--zone", "ZONE_A"])
        assert result.exit_code == 0, result.output
        assert "135.000 TND" in result.output
        assert "Domaine Olivier" in result.output

    def test_add_unknown_product_fails(self, runner):
        result = runner.invoke(cli, ["cart", "add", "--product", "99"])
        assert result.exit_code != 0
        assert "not found" in result.output


class TestCheckout:

    def test_checkout_places_order_per_farm(self, runner, tmp_path):
        _fill_cart(runner)
        result = runner.invoke(cli, [
            "checkout", "--customer", "c-1", "--zone", "ZONE_A",
            "--address", "Tunis", "--date", "2026-10-21",
        ])
        assert result.exit_code == 0, result.output
        assert "2 order(s) placed." in result.output

        orders = json.loads((tmp_path / "orders.json").read_text())
        assert [o["total"] for o in orders] == ["80.000", "55.000"]

        empty = runner.invoke(cli, ["cart", "show"])
        assert "Your cart is empty." in empty.output

    def test_delivery_without_address_fails(self, runner):
        _fill_cart(runner)
        result = runner.invoke(cli, ["checkout", "--customer", "c-1", "--zone", "ZONE_A"])
        assert result.exit_code != 0
        assert "address and zone are required" in result.output


class TestSubscriptionCommands:

    def test_create_and_skip_until_cap(self, runner, monkeypatch):
        monkeypatch.setenv("FARMBOX_MAX_SKIPS_PER_CYCLE", "1")
        bootstrap.settings.cache_clear()

        created = runner.invoke(cli, [
            "subscription", "create", "--customer", "c-1", "--farm", "F1",
            "--zone", "ZONE_A", "--address", "Tunis",
        ])
        assert created.exit_code == 0, created.output

        first = runner.invoke(cli, ["subscription", "skip", "--id", "1"])
        assert first.exit_code == 0, first.output
        second = runner.invoke(cli, ["subscription", "skip", "--id", "1"])
        assert second.exit_code != 0
        assert "Maximum skips" in second.output

    def _create(self, runner):
        created = runner.invoke(cli, [
            "subscription", "create", "--customer", "c-1", "--farm", "F1",
            "--zone", "ZONE_A", "--address", "Tunis", "--preferences", "no beets",
        ])
        assert created.exit_code == 0, created.output

    def test_pause_weeks_until_yearly_cap(self, runner, monkeypatch):
        monkeypatch.setenv("FARMBOX_MAX_PAUSES_PER_YEAR", "1")
        bootstrap.settings.cache_clear()
        self._create(runner)

        paused = runner.invoke(cli, ["subscription", "pause", "--id", "1", "--weeks", "2"])
        assert paused.exit_code == 0, paused.output
        assert "paused until" in paused.output
        resumed = runner.invoke(cli, ["subscription", "resume", "--id", "1"])
        assert resumed.exit_code == 0, resumed.output

        again = runner.invoke(cli, ["subscription", "pause", "--id", "1", "--weeks", "1"])
        assert again.exit_code != 0
        assert "Maximum pauses for this year reached (1)" in again.output

        assert runner.invoke(cli, ["subscription", "reset-pauses"]).output.startswith(
            "Pause counts reset on 1"
        )

    def test_pause_weeks_out_of_range(self, runner):
        self._create(runner)
        result = runner.invoke(cli, ["subscription", "pause", "--id", "1", "--weeks", "5"])
        assert result.exit_code == 2

    def test_pause_needs_weeks_or_end_date(self, runner):
        self._create(runner)
        result = runner.invoke(cli, ["subscription", "pause", "--id", "1"])
        assert result.exit_code != 0
        assert "Either weeks or an end date" in result.output

    def test_skip_then_unskip(self, runner, tmp_path):
        self._create(runner)
        before = json.loads((tmp_path / "subscriptions.json").read_text())[0]
        assert runner.invoke(cli, ["subscription", "skip", "--id", "1"]).exit_code == 0

        restored = runner.invoke(cli, ["subscription", "unskip", "--id", "1"])
        assert restored.exit_code == 0, restored.output
        assert before["next_delivery_date"] in restored.output

    def test_update_size_and_clear_preferences(self, runner, tmp_path):
        self._create(runner)
        result = runner.invoke(cli, [
            "subscription", "update", "--id", "1", "--size", "LARGE", "--preferences", "",
        ])
        assert result.exit_code == 0, result.output
        assert "LARGE" in result.output

        stored = json.loads((tmp_path / "subscriptions.json").read_text())[0]
        assert stored["box_size"] == "LARGE"
        assert stored["preferences"] is None

    def test_update_without_options_fails(self, runner):
        self._create(runner)
        result = runner.invoke(cli, ["subscription", "update", "--id", "1"])
        assert result.exit_code != 0
        assert "Nothing to update" in result.output


class TestProductAndZoneCommands:

    def test_update_product_price(self, runner):
        result = runner.invoke(cli, ["product", "update", "--id", "1", "--price", "32.500"])
        assert result.exit_code == 0, result.output

        listing = runner.invoke(cli, ["product", "list", "--farm", "F1"])
        assert "32.500 TND" in listing.output

    def test_zone_list(self, runner):
        result = runner.invoke(cli, ["zone", "list"])
        assert result.exit_code == 0
        assert "ZONE_C" in result.output
