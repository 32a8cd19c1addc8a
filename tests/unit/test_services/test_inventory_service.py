"""Tests for stock and manual collections."""

import pytest

from equipcare.models.inventory import MANUALS_KEY, STOCK_KEY
from equipcare.services.inventory import ManualEditor, ManualLibrary, StockBoard, StockEditor
from equipcare.utils.errors import FormValidationError
from tests.utils.factories import create_manual_form_data, create_stock_form_data


@pytest.mark.unit
def test_stock_board_seeds_and_flags_low_stock(store):
    board = StockBoard(store).mount()

    assert len(board.items) == 4
    assert [item.id for item in board.low_stock()] == ["stk002"]


@pytest.mark.unit
def test_stock_board_follows_other_context(store, other_tab):
    board = StockBoard(store).mount()

    result = StockEditor(other_tab).save(create_stock_form_data(quantity=1, min_stock_level=3))

    assert result.record.id.startswith("stk")
    assert result.notice.title == "Stock Item Created"
    assert result.redirect_to == "/dashboard/stock"
    assert len(board.items) == 5
    assert result.record.id in [item.id for item in board.low_stock()]


@pytest.mark.unit
def test_stock_edit_keeps_image_when_blank(store):
    StockBoard(store).mount()

    StockEditor(store).save(
        create_stock_form_data(componentName="Bearing SKF-6205", quantity=40, imageUrl=""),
        existing_id="stk001",
    )

    stored = next(r for r in store.read(STOCK_KEY) if r["id"] == "stk001")
    assert stored["quantity"] == 40
    assert stored["imageUrl"] == "https://placehold.co/600x400.png"


@pytest.mark.unit
def test_stock_invalid_quantity(store):
    with pytest.raises(FormValidationError) as exc_info:
        StockEditor(store).save(create_stock_form_data(quantity=-5))

    assert exc_info.value.field_errors == {"quantity": ["Quantity cannot be negative."]}


@pytest.mark.unit
def test_stock_delete_notice(store):
    board = StockBoard(store).mount()

    notice = board.delete("stk003")

    assert notice.title == "Stock Item Deleted"
    assert notice.variant == "destructive"
    assert "stk003" not in [r["id"] for r in store.read(STOCK_KEY)]


@pytest.mark.unit
def test_manual_library(store):
    library = ManualLibrary(store).mount()
    assert [manual.id for manual in library.items] == ["man001", "man002", "man003"]

    result = ManualEditor(store).save(create_manual_form_data(manualTitle="Lathe L-9 Guide"))
    library.reload()

    assert result.notice.description == "Lathe L-9 Guide has been added successfully."
    assert library.find(result.record.id).manual_title == "Lathe L-9 Guide"
    assert library.delete("man001").title == "Manual Deleted"
    assert len(store.read(MANUALS_KEY)) == 3
