"""Component stock and manual library."""

from typing import Optional

from equipcare.models.inventory import (
    MANUALS_KEY,
    STOCK_KEY,
    Manual,
    ManualForm,
    StockItem,
    StockItemForm,
)
from equipcare.services.collections import RecordCollection
from equipcare.services.record_store import RecordStore
from equipcare.services.viewers import RecordBoard


class StockEditor(RecordCollection[StockItem]):
    key = STOCK_KEY
    model_cls = StockItem
    form_cls = StockItemForm
    id_prefix = "stk"
    label = "Stock Item"
    listing_path = "/dashboard/stock"

    def build(self, form: StockItemForm, record_id: str, previous: Optional[StockItem]) -> StockItem:
        return StockItem(
            id=record_id,
            component_name=form.component_name,
            part_number=form.part_number,
            quantity=form.quantity,
            location=form.location,
            min_stock_level=form.min_stock_level,
            image_url=form.image_url or (previous.image_url if previous else None),
            data_aihint=form.data_aihint,
        )

    def display_name(self, item: StockItem) -> str:
        return item.component_name


class StockBoard(RecordBoard[StockItem]):
    def __init__(self, store: RecordStore):
        super().__init__(store, StockEditor(store))

    def low_stock(self) -> list[StockItem]:
        """Items below their minimum stock level."""
        return [item for item in self.items if item.is_low_stock]


class ManualEditor(RecordCollection[Manual]):
    key = MANUALS_KEY
    model_cls = Manual
    form_cls = ManualForm
    id_prefix = "man"
    label = "Manual"
    listing_path = "/dashboard/manuals"

    def build(self, form: ManualForm, record_id: str, previous: Optional[Manual]) -> Manual:
        return Manual(
            id=record_id,
            manual_title=form.manual_title,
            machine_type=form.machine_type,
            version=form.version,
            last_updated=form.last_updated,
            pdf_url=form.pdf_url,
            cover_image_url=form.cover_image_url or (previous.cover_image_url if previous else None),
            data_aihint=form.data_aihint,
        )

    def display_name(self, item: Manual) -> str:
        return item.manual_title


class ManualLibrary(RecordBoard[Manual]):
    def __init__(self, store: RecordStore):
        super().__init__(store, ManualEditor(store))

