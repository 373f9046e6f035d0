"""
Tests for InventoryStore mutators.

Covers the department registry, item catalog and transaction ledger,
including the cascading department delete and the all-or-nothing commit.
"""

from __future__ import annotations

import pytest

from inventory_core.constants import CHECK_IN, CHECK_OUT, UNKNOWN_DEPARTMENT
from inventory_core.exceptions import ValidationError
from inventory_core.store import InventoryStore

# =============================================================================
# Department Registry
# =============================================================================


class TestDepartments:

    def test_add_department_appends_with_fresh_id(self, store):
        before = store.snapshot().departments
        dept = store.add_department("  Kitchen  ", "Pots and pans")
        departments = store.snapshot().departments
        assert len(departments) == len(before) + 1
        assert departments[-1] == dept
        assert dept.name == "Kitchen"
        assert dept.notes == "Pots and pans"
        assert dept.id not in {d.id for d in before}

    def test_ids_are_unique(self, empty_store):
        ids = {empty_store.add_department(f"D{i}").id for i in range(50)}
        assert len(ids) == 50

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, store, name):
        before = store.snapshot()
        with pytest.raises(ValidationError, match="name is required"):
            store.add_department(name)
        assert store.snapshot() is before

    def test_delete_cascades_to_items(self, store):
        store.add_item("ELEC002", "Raspberry Pi", "1", "pcs", quantity=4)
        store.delete_department("1")
        state = store.snapshot()
        assert "1" not in {d.id for d in state.departments}
        assert all(it.department_id != "1" for it in state.items)
        assert [it.sku for it in state.items] == ["OFF001", "TOOL001"]
        assert len(state.departments) == 2

    def test_delete_unknown_department_is_noop(self, store):
        before = store.snapshot()
        store.delete_department("does-not-exist")
        after = store.snapshot()
        assert after.items == before.items
        assert after.departments == before.departments

    def test_update_department_keeps_item_snapshot(self, store):
        store.update_department("1", name="Electronics & IoT", notes="Boards")
        dept = store.get_department("1")
        assert dept.name == "Electronics & IoT"
        assert dept.notes == "Boards"
        assert store.get_item("ELEC001").department == "Electronics"

    def test_update_department_rejects_blank_name(self, store):
        with pytest.raises(ValidationError):
            store.update_department("1", name="  ")
        assert store.get_department("1").name == "Electronics"

    def test_update_department_partial(self, store):
        store.update_department("2", notes="Paper only")
        dept = store.get_department("2")
        assert dept.name == "Office Supplies"
        assert dept.notes == "Paper only"


# =============================================================================
# Item Catalog
# =============================================================================


class TestItems:

    def test_add_item_denormalizes_department(self, store):
        item = store.add_item("TOOL002", "Hammer", "3", "pcs", quantity="7", reorder_point="2")
        assert item.department == "Tools"
        assert item.quantity == 7
        assert item.reorder_point == 2
        assert store.snapshot().items[-1] == item

    def test_add_item_with_absent_department_is_unknown(self, store):
        store.delete_department("3")
        item = store.add_item("TOOL009", "Wrench", "3", "pcs")
        assert item.department == UNKNOWN_DEPARTMENT
        assert item.department_id == "3"
        assert store.get_item("TOOL009") == item

    @pytest.mark.parametrize(
        "raw, expected",
        [("abc", 0), ("-5", 0), (None, 0), ("", 0), (" 12 ", 12), (3, 3), (-1, 0)],
    )
    def test_counts_coerce_to_zero(self, empty_store, raw, expected):
        item = empty_store.add_item("X1", "Thing", "d", "pcs", quantity=raw, reorder_point=raw)
        assert item.quantity == expected
        assert item.reorder_point == expected

    @pytest.mark.parametrize("raw, expected", [(3.0, 3), (3.7, 0), (True, 0), ("2.5", 0)])
    def test_add_accepts_whole_numbers_only(self, empty_store, raw, expected):
        item = empty_store.add_item("X2", "Thing", "d", "pcs", quantity=raw)
        assert item.quantity == expected

    @pytest.mark.parametrize("missing", ["sku", "name", "department_id", "unit"])
    def test_required_fields(self, store, missing):
        fields = {"sku": "NEW1", "name": "New", "department_id": "1", "unit": "pcs"}
        fields[missing] = "  "
        before = store.snapshot()
        with pytest.raises(ValidationError, match="required"):
            store.add_item(**fields)
        assert store.snapshot() is before

    def test_invalid_condition_rejected(self, store):
        with pytest.raises(ValidationError, match="condition"):
            store.add_item("NEW1", "New", "1", "pcs", condition="Broken")

    def test_duplicate_sku_is_not_rejected(self, store):
        store.add_item("ELEC001", "Shadow", "1", "pcs", quantity=1)
        skus = [it.sku for it in store.snapshot().items]
        assert skus.count("ELEC001") == 2
        assert store.get_item("ELEC001").name == "Arduino Uno"

    def test_update_merges_fields(self, store):
        store.update_item("OFF001", name="A4 Paper 80gsm", condition="Good")
        item = store.get_item("OFF001")
        assert item.name == "A4 Paper 80gsm"
        assert item.condition == "Good"
        assert item.quantity == 5

    def test_update_clamps_quantity(self, store):
        store.update_item("OFF001", quantity=-8, reorder_point=-1)
        item = store.get_item("OFF001")
        assert item.quantity == 0
        assert item.reorder_point == 0

    def test_update_does_not_refresh_department_name(self, store):
        store.update_item("ELEC001", department_id="3")
        item = store.get_item("ELEC001")
        assert item.department_id == "3"
        assert item.department == "Electronics"

    def test_update_unknown_sku_is_noop(self, store):
        before = store.snapshot().items
        store.update_item("NOPE", name="Ghost")
        assert store.snapshot().items == before

    def test_update_rejects_unknown_field(self, store):
        with pytest.raises(ValidationError, match="colour"):
            store.update_item("ELEC001", colour="red")

    def test_update_rejects_non_integer_quantity(self, store):
        with pytest.raises(ValidationError):
            store.update_item("ELEC001", quantity="lots")
        assert store.get_item("ELEC001").quantity == 15

    def test_update_accepts_integral_float(self, store):
        store.update_item("ELEC001", quantity=3.0)
        assert store.get_item("ELEC001").quantity == 3

    @pytest.mark.parametrize("raw", [3.7, True, "2.5"])
    def test_update_rejects_fractional_quantity(self, store, raw):
        before = store.snapshot()
        with pytest.raises(ValidationError, match="whole number"):
            store.update_item("ELEC001", quantity=raw)
        assert store.snapshot() is before

    @pytest.mark.parametrize("field", ["sku", "name", "department_id", "unit"])
    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_update_rejects_blank_required_field(self, store, field, blank):
        before = store.snapshot()
        with pytest.raises(ValidationError, match="required"):
            store.update_item("OFF001", **{field: blank})
        assert store.snapshot() is before

    def test_update_strips_required_fields(self, store):
        store.update_item("OFF001", name="  A4 Paper  ", unit=" reams ")
        item = store.get_item("OFF001")
        assert item.name == "A4 Paper"
        assert item.unit == "reams"

    def test_delete_item(self, store):
        store.delete_item("OFF001")
        assert store.get_item("OFF001") is None
        assert len(store.snapshot().items) == 2

    def test_delete_unknown_item_is_noop(self, store):
        before = store.snapshot().items
        store.delete_item("NOPE")
        assert store.snapshot().items == before


# =============================================================================
# Transaction Ledger
# =============================================================================


class TestTransactions:

    def test_check_out_reduces_quantity_and_prepends(self, store):
        store.commit_transaction("OFF001", 1, CHECK_IN)
        before = len(store.snapshot().transactions)
        txn = store.commit_transaction("ELEC001", 5, CHECK_OUT, user="sam", notes="lab")
        state = store.snapshot()
        assert store.get_item("ELEC001").quantity == 10
        assert len(state.transactions) == before + 1
        assert state.transactions[0] == txn
        assert txn.type == CHECK_OUT
        assert txn.quantity == 5
        assert txn.item_name == "Arduino Uno"
        assert txn.user == "sam"
        assert txn.notes == "lab"
        assert txn.date == "2024-03-01T09:30:00+00:00"

    def test_check_in_has_no_upper_clamp(self, store):
        store.commit_transaction("OFF001", 1000, CHECK_IN)
        assert store.get_item("OFF001").quantity == 1005

    def test_default_user(self, store):
        txn = store.commit_transaction("OFF001", 1, CHECK_IN)
        assert txn.user == "tester"

    def test_over_sized_check_out_rejected(self, store):
        before = store.snapshot()
        with pytest.raises(ValidationError, match="only 3 available"):
            store.commit_transaction("TOOL001", 4, CHECK_OUT)
        after = store.snapshot()
        assert after is before
        assert store.get_item("TOOL001").quantity == 3
        assert len(after.transactions) == 0

    def test_check_out_whole_stock(self, store):
        store.commit_transaction("TOOL001", 3, CHECK_OUT)
        assert store.get_item("TOOL001").quantity == 0

    @pytest.mark.parametrize("qty", [0, -2, "x", None, 1.5, True])
    def test_quantity_must_be_positive_integer(self, store, qty):
        before = store.snapshot()
        with pytest.raises(ValidationError):
            store.commit_transaction("ELEC001", qty, CHECK_IN)
        assert store.snapshot() is before

    def test_quantity_string_accepted(self, store):
        store.commit_transaction("ELEC001", "2", CHECK_IN)
        assert store.get_item("ELEC001").quantity == 17

    def test_integral_float_quantity_accepted(self, store):
        txn = store.commit_transaction("ELEC001", 2.0, CHECK_IN)
        assert txn.quantity == 2
        assert store.get_item("ELEC001").quantity == 17

    def test_unknown_type_rejected(self, store):
        with pytest.raises(ValidationError, match="type"):
            store.commit_transaction("ELEC001", 1, "transfer")

    def test_unknown_sku_recorded_without_catalog_change(self, store):
        items_before = store.snapshot().items
        txn = store.commit_transaction("GHOST", 3, CHECK_OUT)
        state = store.snapshot()
        assert txn.item_name == ""
        assert state.transactions[0] == txn
        assert state.items == items_before

    def test_newest_first(self, store):
        first = store.commit_transaction("ELEC001", 1, CHECK_IN)
        second = store.commit_transaction("ELEC001", 1, CHECK_OUT)
        assert store.snapshot().transactions[:2] == (second, first)

    def test_quantities_never_negative(self, store):
        ops = [
            ("ELEC001", 15, CHECK_OUT),
            ("ELEC001", 2, CHECK_IN),
            ("OFF001", 5, CHECK_OUT),
            ("TOOL001", 1, CHECK_OUT),
        ]
        for sku, qty, kind in ops:
            store.commit_transaction(sku, qty, kind)
        for sku in ("ELEC001", "OFF001", "TOOL001"):
            with pytest.raises(ValidationError):
                store.commit_transaction(sku, 99, CHECK_OUT)
        store.update_item("TOOL001", quantity=-3)
        assert all(it.quantity >= 0 for it in store.snapshot().items)


# =============================================================================
# Listeners, search state, refresh
# =============================================================================


class TestListeners:

    def test_listener_sees_every_successful_mutation(self, store):
        seen = []
        store.subscribe(seen.append)
        store.add_department("Kitchen")
        store.set_search_term("paper")
        store.set_department_filter("2")
        store.refresh()
        assert len(seen) == 4
        assert seen[-1] is store.snapshot()
        assert seen[-1].search_term == "paper"
        assert seen[-1].department_filter == "2"

    def test_listener_not_called_on_rejection(self, store):
        seen = []
        store.subscribe(seen.append)
        with pytest.raises(ValidationError):
            store.commit_transaction("TOOL001", 100, CHECK_OUT)
        assert seen == []

    def test_failing_listener_does_not_roll_back(self, store, caplog):
        def boom(state):
            raise RuntimeError("disk full")

        store.subscribe(boom)
        store.commit_transaction("ELEC001", 5, CHECK_OUT)
        assert store.get_item("ELEC001").quantity == 10
        assert "State listener" in caplog.text

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        store.refresh()
        assert seen == []

    def test_listener_observes_ledger_and_catalog_together(self, store):
        observed = []

        def check(state):
            item = next(it for it in state.items if it.sku == "ELEC001")
            observed.append((len(state.transactions), item.quantity))

        store.subscribe(check)
        store.commit_transaction("ELEC001", 5, CHECK_OUT)
        assert observed == [(1, 10)]

    def test_refresh_keeps_state(self, store):
        before = store.snapshot()
        store.refresh()
        assert store.snapshot() == before


def test_new_store_is_empty():
    store = InventoryStore()
    state = store.snapshot()
    assert state.items == ()
    assert state.departments == ()
    assert state.transactions == ()
