"""Tests for the inventory service and the stock movement ledger."""

import pytest

from shopbooks.domain.entities import InventoryMovement, MovementKind, Product
from shopbooks.domain.errors import (
    BackendError,
    ConflictError,
    DependencyError,
    InsufficientStock,
    NotFoundError,
    ValidationError,
)


def _ledger_quantity(inventory_service, product_id, opening):
    movements = inventory_service.list_movements(product_id=product_id)
    return opening + sum(m.signed_quantity for m in movements)


class TestProducts:
    def test_create_product(self, inventory_service, notifier):
        product_id = inventory_service.create_product(
            sku="KB-01", name="Keyboard", description="USB", initial_quantity=3
        )

        product = inventory_service.get_product(product_id)
        assert isinstance(product, Product)
        assert product.sku == "KB-01"
        assert product.current_quantity == 3
        assert "Product added" in notifier.titles

    def test_create_product_defaults_to_zero_stock(self, inventory_service):
        product_id = inventory_service.create_product(sku="KB-02", name="Keyboard")
        assert inventory_service.get_product(product_id).current_quantity == 0

    def test_create_product_duplicate_sku(self, inventory_service, sample_product, notifier):
        with pytest.raises(ConflictError, match="already exists"):
            inventory_service.create_product(sku="CAB-01", name="Other cable")
        assert ("Product not added", "Product with SKU 'CAB-01' already exists") in notifier.errors

    @pytest.mark.parametrize("sku,name", [("", "Name"), ("SKU", "  "), (None, "Name")])
    def test_create_product_requires_sku_and_name(self, inventory_service, sku, name):
        with pytest.raises(ValidationError):
            inventory_service.create_product(sku=sku, name=name)

    @pytest.mark.parametrize("quantity", [-1, 1.5, True])
    def test_create_product_rejects_bad_quantity(self, inventory_service, quantity):
        with pytest.raises(ValidationError):
            inventory_service.create_product(sku="X", name="X", initial_quantity=quantity)

    def test_update_product(self, inventory_service, sample_product):
        inventory_service.update_product(sample_product.id, name="HDMI cable 2m")

        product = inventory_service.get_product(sample_product.id)
        assert product.name == "HDMI cable 2m"
        assert product.sku == "CAB-01"
        assert product.current_quantity == 10

    def test_update_product_sku_conflict(self, inventory_service, sample_product):
        other_id = inventory_service.create_product(sku="CAB-02", name="USB cable")
        with pytest.raises(ConflictError):
            inventory_service.update_product(other_id, sku="CAB-01")

    def test_update_missing_product(self, inventory_service):
        with pytest.raises(NotFoundError):
            inventory_service.update_product(999, name="Ghost")

    def test_delete_product_without_history(self, inventory_service, sample_product):
        inventory_service.delete_product(sample_product.id)
        assert inventory_service.get_product(sample_product.id) is None

    def test_delete_product_with_movements_is_blocked(self, inventory_service, sample_product):
        inventory_service.apply_movement(sample_product.id, MovementKind.IN, 1)

        with pytest.raises(DependencyError, match="1 stock movement"):
            inventory_service.delete_product(sample_product.id)
        assert inventory_service.get_product(sample_product.id) is not None

    def test_list_products_ordered_by_name(self, inventory_service):
        inventory_service.create_product(sku="B", name="Zebra")
        inventory_service.create_product(sku="A", name="Apple")

        assert [p.name for p in inventory_service.list_products()] == ["Apple", "Zebra"]


class TestApplyMovement:
    def test_in_then_rejected_out(self, inventory_service, sample_product, notifier):
        """Stock 10, IN 5 gives 15; OUT 20 is rejected and stock stays 15."""
        product, movement = inventory_service.apply_movement(sample_product.id, MovementKind.IN, 5)

        assert product.current_quantity == 15
        assert isinstance(movement, InventoryMovement)
        assert movement.quantity_before == 10
        assert movement.quantity_after == 15

        with pytest.raises(InsufficientStock, match="15 available, 20 requested"):
            inventory_service.apply_movement(sample_product.id, MovementKind.OUT, 20)

        assert inventory_service.get_product(sample_product.id).current_quantity == 15
        assert len(inventory_service.list_movements(product_id=sample_product.id)) == 1
        assert notifier.errors[-1][0] == "Movement not recorded"

    def test_out_to_exactly_zero(self, inventory_service, sample_product):
        product, movement = inventory_service.apply_movement(sample_product.id, MovementKind.OUT, 10)

        assert product.current_quantity == 0
        assert movement.kind is MovementKind.OUT
        assert movement.signed_quantity == -10

    def test_accepts_kind_as_string(self, inventory_service, sample_product):
        product, _ = inventory_service.apply_movement(sample_product.id, "OUT", 4, note="Sample")
        assert product.current_quantity == 6

    def test_rejects_unknown_kind(self, inventory_service, sample_product):
        with pytest.raises(ValidationError, match="IN or OUT"):
            inventory_service.apply_movement(sample_product.id, "SIDEWAYS", 1)

    @pytest.mark.parametrize("quantity", [0, -3, 2.5, True])
    def test_rejects_non_positive_quantity(self, inventory_service, sample_product, quantity):
        with pytest.raises(ValidationError):
            inventory_service.apply_movement(sample_product.id, MovementKind.IN, quantity)
        assert inventory_service.list_movements(product_id=sample_product.id) == []

    def test_missing_product(self, inventory_service):
        with pytest.raises(NotFoundError):
            inventory_service.apply_movement(42, MovementKind.IN, 1)

    def test_ledger_explains_current_quantity(self, inventory_service, sample_product):
        for kind, quantity in [("IN", 5), ("OUT", 3), ("OUT", 12), ("IN", 7)]:
            inventory_service.apply_movement(sample_product.id, kind, quantity)

        product = inventory_service.get_product(sample_product.id)
        assert product.current_quantity == 7
        assert _ledger_quantity(inventory_service, sample_product.id, 10) == 7

    def test_movement_snapshots_chain(self, inventory_service, sample_product):
        inventory_service.apply_movement(sample_product.id, "IN", 2)
        inventory_service.apply_movement(sample_product.id, "OUT", 5)

        newest, oldest = inventory_service.list_movements(product_id=sample_product.id)
        assert (oldest.quantity_before, oldest.quantity_after) == (10, 12)
        assert (newest.quantity_before, newest.quantity_after) == (12, 7)

    def test_failed_quantity_write_keeps_stock_and_ledger(
        self, inventory_service, temp_db, sample_product, notifier, monkeypatch
    ):
        def fail_quantity_write(product_id, quantity):
            raise BackendError("disk I/O error")

        monkeypatch.setattr(temp_db, "set_product_quantity", fail_quantity_write)

        with pytest.raises(BackendError, match="disk I/O error"):
            inventory_service.apply_movement(sample_product.id, MovementKind.IN, 5)

        assert inventory_service.get_product(sample_product.id).current_quantity == 10
        assert inventory_service.list_movements(product_id=sample_product.id) == []
        assert notifier.errors == [("Movement not recorded", "disk I/O error")]

    def test_list_movements_limit(self, inventory_service, sample_product):
        for _ in range(4):
            inventory_service.apply_movement(sample_product.id, "IN", 1)

        assert len(inventory_service.list_movements(limit=2)) == 2


class TestCorrectQuantity:
    def test_correction_down_posts_out(self, inventory_service, sample_product):
        product, movement = inventory_service.correct_quantity(sample_product.id, 7)

        assert product.current_quantity == 7
        assert movement.kind is MovementKind.OUT
        assert movement.quantity == 3
        assert movement.note == "Stock count correction"

    def test_correction_up_posts_in(self, inventory_service, sample_product):
        _, movement = inventory_service.correct_quantity(sample_product.id, 12, note="Recount")

        assert movement.kind is MovementKind.IN
        assert movement.quantity == 2
        assert movement.note == "Recount"
        assert _ledger_quantity(inventory_service, sample_product.id, 10) == 12

    def test_matching_count_is_a_no_op(self, inventory_service, sample_product):
        assert inventory_service.correct_quantity(sample_product.id, 10) is None
        assert inventory_service.list_movements(product_id=sample_product.id) == []

    def test_negative_count_rejected(self, inventory_service, sample_product):
        with pytest.raises(ValidationError):
            inventory_service.correct_quantity(sample_product.id, -1)


class TestInventorySummary:
    def test_summary_counts_low_stock(self, inventory_service, sample_product):
        inventory_service.create_product(sku="LOW", name="Adapter", initial_quantity=5)
        inventory_service.create_product(sku="NONE", name="Battery", initial_quantity=0)

        summary = inventory_service.get_inventory_summary()

        assert summary.total_products == 3
        assert summary.total_stock == 15
        assert summary.low_stock_threshold == 5
        assert sorted(p.sku for p in summary.low_stock_products) == ["LOW", "NONE"]

    def test_summary_custom_threshold(self, inventory_service, sample_product):
        summary = inventory_service.get_inventory_summary(low_stock_threshold=10)
        assert [p.sku for p in summary.low_stock_products] == ["CAB-01"]

    def test_summary_empty(self, inventory_service):
        summary = inventory_service.get_inventory_summary()
        assert summary.total_products == 0
        assert summary.total_stock == 0
        assert summary.low_stock_products == ()
