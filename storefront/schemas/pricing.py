from pydantic import BaseModel, Field
from typing import Optional, List


class PricingItem(BaseModel):
    """A line item snapshot taken from the catalog"""
    product_id: str
    name: Optional[str] = None
    price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int = Field(..., ge=1)
    weight: float = Field(0, ge=0, allow_inf_nan=False, description="Unit weight in kg")


class PricingRequest(BaseModel):
    items: List[PricingItem] = Field(..., min_length=1)
    destination: str = Field(..., description="Destination pincode")
    coupon_code: Optional[str] = None
    region: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Overrides the summed item weight")


class PricingMetadata(BaseModel):
    zone_name: str
    estimated_days: str
    is_free_shipping: bool
    tax_name: str
    tax_rate: float
    coupon_code: Optional[str] = None
    coupon_message: Optional[str] = None


class PricingResult(BaseModel):
    subtotal: float
    discount: float
    shipping_cost: float
    tax_amount: float
    total: float
    metadata: PricingMetadata

    model_config = {"frozen": True}
