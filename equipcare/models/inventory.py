"""Component stock and manual library models."""

from typing import Optional, Any
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

STOCK_KEY = "stockItems"
MANUALS_KEY = "manuals"

_url_adapter = TypeAdapter(AnyUrl)


def _is_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


class StockItem(BaseModel):
    """A spare component held in stock."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Record ID (stk...)")
    component_name: str = Field(..., alias="componentName", description="Component name")
    part_number: str = Field(..., alias="partNumber", description="Manufacturer part number")
    quantity: int = Field(..., ge=0, description="Units on hand")
    location: str = Field(..., description="Storage location")
    min_stock_level: Optional[int] = Field(None, alias="minStockLevel", ge=0, description="Reorder threshold")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    data_aihint: Optional[str] = Field(None, alias="dataAihint", description="Image search keywords")

    @property
    def is_low_stock(self) -> bool:
        return self.min_stock_level is not None and self.quantity < self.min_stock_level

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StockItemForm(BaseModel):
    """Create/edit form for a stock item."""
    model_config = ConfigDict(populate_by_name=True)

    component_name: str = Field(..., alias="componentName")
    part_number: str = Field(..., alias="partNumber")
    quantity: int
    location: str
    min_stock_level: Optional[int] = Field(None, alias="minStockLevel")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    data_aihint: Optional[str] = Field(None, alias="dataAihint")

    @field_validator("component_name")
    @classmethod
    def _component_name_length(cls, value: str) -> str:
        if len(value.strip()) < 3:
            raise ValueError("Component name must be at least 3 characters.")
        return value

    @field_validator("part_number")
    @classmethod
    def _part_number_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Part number is required.")
        return value

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Quantity cannot be negative.")
        return value

    @field_validator("location")
    @classmethod
    def _location_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Location is required.")
        return value

    @field_validator("min_stock_level", mode="before")
    @classmethod
    def _blank_min_stock(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("min_stock_level")
    @classmethod
    def _min_stock_non_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("Minimum stock level cannot be negative.")
        return value

    @field_validator("image_url")
    @classmethod
    def _image_url_valid(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not _is_url(value):
            raise ValueError("Please enter a valid Image URL.")
        return value

    @field_validator("data_aihint")
    @classmethod
    def _hint_length(cls, value: Optional[str]) -> Optional[str]:
        if value and len(value) > 60:
            raise ValueError("AI Hint too long, max 60 characters")
        return value or None


class Manual(BaseModel):
    """An equipment manual in the library."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Record ID (man...)")
    manual_title: str = Field(..., alias="manualTitle", description="Manual title")
    machine_type: str = Field(..., alias="machineType", description="Machine type it covers")
    version: Optional[str] = None
    last_updated: Optional[str] = Field(None, alias="lastUpdated")
    pdf_url: str = Field(..., alias="pdfUrl", description="Link to the PDF")
    cover_image_url: Optional[str] = Field(None, alias="coverImageUrl")
    data_aihint: Optional[str] = Field(None, alias="dataAihint")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ManualForm(BaseModel):
    """Create/edit form for a manual."""
    model_config = ConfigDict(populate_by_name=True)

    manual_title: str = Field(..., alias="manualTitle")
    machine_type: str = Field(..., alias="machineType")
    version: Optional[str] = None
    last_updated: Optional[str] = Field(None, alias="lastUpdated")
    pdf_url: str = Field(..., alias="pdfUrl")
    cover_image_url: Optional[str] = Field(None, alias="coverImageUrl")
    data_aihint: Optional[str] = Field(None, alias="dataAihint")

    @field_validator("manual_title")
    @classmethod
    def _title_length(cls, value: str) -> str:
        if len(value.strip()) < 3:
            raise ValueError("Manual title must be at least 3 characters.")
        return value

    @field_validator("machine_type")
    @classmethod
    def _machine_type_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Machine type is required.")
        return value

    @field_validator("pdf_url")
    @classmethod
    def _pdf_url_valid(cls, value: str) -> str:
        if not _is_url(value):
            raise ValueError("Please enter a valid PDF URL.")
        return value

    @field_validator("cover_image_url")
    @classmethod
    def _cover_url_valid(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not _is_url(value):
            raise ValueError("Please enter a valid Cover Image URL.")
        return value

    @field_validator("version", "last_updated")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("data_aihint")
    @classmethod
    def _hint_length(cls, value: Optional[str]) -> Optional[str]:
        if value and len(value) > 60:
            raise ValueError("AI Hint too long, max 60 characters")
        return value or None
