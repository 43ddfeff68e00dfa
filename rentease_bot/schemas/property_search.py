# rentease_bot/schemas/property_search.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

class PropertySearchFilters(BaseModel):
    """
    Sanitized search constraints extracted from the assistant reply.
    Every field is optional: a missing field means "no constraint", never zero.
    Only the sanitizer should build this; it does not re-validate values itself.
    """
    model_config = ConfigDict(populate_by_name=True)

    # --- 1. FREE TEXT ---
    search: Optional[str] = Field(
        None,
        description="Property name or keyword the user quoted (e.g., 'Sample 2')."
    )
    location: Optional[str] = Field(
        None,
        description="Target area or city (e.g., 'Cebu City', 'Lahug', 'IT Park')."
    )

    # --- 2. UNIT SPECIFICS ---
    property_type: Optional[str] = Field(
        None,
        alias="propertyType",
        description="Kind of property (apartment, condominium, boarding house, single house)."
    )
    amenities: Optional[List[str]] = Field(
        None,
        description="Required amenities, deduplicated (e.g., 'WiFi', 'Balcony')."
    )

    # --- 3. BUDGET (PHP per month) ---
    min_price: Optional[Union[int, float]] = Field(
        None,
        alias="minPrice",
        description="Lowest acceptable monthly rent."
    )
    max_price: Optional[Union[int, float]] = Field(
        None,
        alias="maxPrice",
        description="Highest acceptable monthly rent. Never below min_price."
    )

    def to_payload(self) -> Dict[str, Any]:
        """camelCase dict with absent fields omitted, as the search UI expects."""
        return self.model_dump(by_alias=True, exclude_none=True)
