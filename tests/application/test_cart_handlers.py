"""Integration tests for the cart use cases (add, update, price)."""

import pytest

from farmbox.application.add_to_cart import AddToCartHandler
from farmbox.application.price_cart import PriceCartHandler
from farmbox.application.update_cart import UpdateCartHandler
from farmbox.domain.exceptions import EntityNotFoundError, ValidationError
from farmbox.domain.model.order import DeliveryType
from farmbox.domain.model.product import Farm, Product
from farmbox.domain.model.value_objects import Money
from farmbox.domain.model.zone import ZoneTable
from farmbox.domain.service.pricing_service import PricingEngine
from tests.fakes import FakeFarmRepository, FakeProductRepository, InMemoryCartStorage

CART = "cart-1"


def _setup():
    farm_repo = FakeFarmRepository([
        Farm("F1", "Ferme Bio"),
        Farm("F2", "Domaine Olivier"),
        Farm("F3", "Closed Farm", is_active=False),
    ])
    product_repo = FakeProductRepository([
        Product("p1", "F1", "Tomatoes", Money.of("30")),
        Product("p2", "F1", "Carrots", Money.of("20")),
        Product("p3", "F2", "Olive oil", Money.of("50"), unit="L"),
        Product("p4", "F2", "Figs", Money.of("12"), is_available=False),
        Product("p5", "F3", "Honey", Money.of("25")),
    ])
    carts = InMemoryCartStorage()
    return AddToCartHandler(carts, product_repo, farm_repo), carts


class TestAddToCart:

    def test_line_carries_catalog_data(self):
        add, carts = _setup()
        add.handle(CART, "p3", 2)

        line = carts.load(CART).get("p3")
        assert line.farm_id == "F2"
        assert line.farm_name == "Domaine Olivier"
        assert line.unit_price == Money.of("50")
        assert line.unit == "L"
        assert line.quantity == 2

    def test_adding_again_merges(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        add.handle(CART, "p1", 2)
        assert carts.load(CART).get("p1").quantity == 3

    def test_merge_takes_current_catalog_price(self):
        farm_repo = FakeFarmRepository([Farm("F1", "Ferme Bio")])
        product_repo = FakeProductRepository([Product("p1", "F1", "Tomatoes", Money.of("30"))])
        carts = InMemoryCartStorage()
        add = AddToCartHandler(carts, product_repo, farm_repo)

        add.handle(CART, "p1")
        product_repo.save(Product("p1", "F1", "Tomatoes", Money.of("35.500")))
        add.handle(CART, "p1", 2)

        line = carts.load(CART).get("p1")
        assert line.quantity == 3
        assert line.unit_price == Money.of("35.500")
        assert line.line_total == Money.of("106.500")

    def test_unknown_product_rejected(self):
        add, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            add.handle(CART, "nope")

    def test_unavailable_product_rejected(self):
        add, _ = _setup()
        with pytest.raises(ValidationError, match="is not available"):
            add.handle(CART, "p4")

    def test_inactive_farm_rejected(self):
        add, _ = _setup()
        with pytest.raises(ValidationError, match="not found or inactive"):
            add.handle(CART, "p5")

    def test_zero_quantity_rejected(self):
        add, carts = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            add.handle(CART, "p1", 0)
        assert not carts.load(CART)


class TestUpdateCart:

    def test_update_quantity(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        UpdateCartHandler(carts).handle(CART, "p1", 4)
        assert carts.load(CART).get("p1").quantity == 4

    def test_zero_quantity_removes(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        UpdateCartHandler(carts).handle(CART, "p1", 0)
        assert not carts.load(CART)

    def test_remove(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        add.handle(CART, "p2")
        UpdateCartHandler(carts).remove(CART, "p1")
        assert [i.product_id for i in carts.load(CART).items] == ["p2"]

    def test_clear_one_farm(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        add.handle(CART, "p3")
        UpdateCartHandler(carts).clear(CART, farm_id="F1")
        assert carts.load(CART).farm_ids == ["F2"]

    def test_clear_all(self):
        add, carts = _setup()
        add.handle(CART, "p1")
        add.handle(CART, "p3")
        UpdateCartHandler(carts).clear(CART)
        assert not carts.load(CART)


class TestPriceCart:

    def test_summary(self):
        add, carts = _setup()
        add.handle(CART, "p1", 2)
        add.handle(CART, "p2", 1)
        add.handle(CART, "p3", 1)

        dto = PriceCartHandler(carts, PricingEngine(ZoneTable.default())).handle(CART, "ZONE_A")
        assert dto.item_count == 4
        assert dto.subtotal == "130.000 TND"
        assert dto.delivery_fee == "5.000 TND"
        assert dto.total == "135.000 TND"
        assert [g.farm_id for g in dto.groups] == ["F1", "F2"]
        assert dto.groups[1].amount_to_free_delivery == "30.000 TND"

    def test_pickup_summary(self):
        add, carts = _setup()
        add.handle(CART, "p3", 1)
        dto = PriceCartHandler(carts, PricingEngine(ZoneTable.default())).handle(
            CART, None, DeliveryType.PICKUP
        )
        assert dto.total == "50.000 TND"

    def test_empty_cart(self):
        _, carts = _setup()
        dto = PriceCartHandler(carts, PricingEngine(ZoneTable.default())).handle(CART, "ZONE_A")
        assert dto.groups == []
        assert dto.total == "0.000 TND"
