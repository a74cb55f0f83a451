from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime


class ShippingZoneBase(BaseModel):
    name: str
    pincodes: List[str] = []
    base_cost: float = Field(..., ge=0, allow_inf_nan=False)
    per_kg_cost: float = Field(0, ge=0, allow_inf_nan=False)
    min_days: int = Field(3, ge=1)
    max_days: int = Field(7, ge=1)
    free_above: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    is_active: bool = True

    @field_validator("pincodes")
    @classmethod
    def dedupe_pincodes(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(p.strip() for p in value if p.strip()))


class ShippingZoneCreate(ShippingZoneBase):

    @model_validator(mode="after")
    def check_delivery_window(self):
        if self.min_days > self.max_days:
            raise ValueError("min_days cannot be greater than max_days")
        return self


class ShippingZoneUpdate(BaseModel):
    name: Optional[str] = None
    pincodes: Optional[List[str]] = None
    base_cost: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    per_kg_cost: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_days: Optional[int] = Field(None, ge=1)
    max_days: Optional[int] = Field(None, ge=1)
    free_above: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    is_active: Optional[bool] = None

    @field_validator("pincodes")
    @classmethod
    def dedupe_pincodes(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return list(dict.fromkeys(p.strip() for p in value if p.strip()))


class ShippingZoneResponse(ShippingZoneBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PincodesRequest(BaseModel):
    pincodes: List[str] = Field(..., min_length=1)


class ZoneSummary(BaseModel):
    id: int
    name: str
    base_cost: float
    free_above: Optional[float] = None


class ServiceabilityResult(BaseModel):
    serviceable: bool
    zone: Optional[ZoneSummary] = None
    estimated_days: Optional[str] = None


class CalculateShippingRequest(BaseModel):
    pincode: str
    order_total: float = Field(..., ge=0, allow_inf_nan=False)
    weight: float = Field(0, ge=0, allow_inf_nan=False, description="Weight in kg")


class ShippingQuote(BaseModel):
    cost: float
    is_free: bool
    estimated_days: str
    zone_name: str
