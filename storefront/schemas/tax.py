from pydantic import BaseModel, Field
from typing import Optional


class TaxRateCreate(BaseModel):
    name: str
    rate: float = Field(..., ge=0, allow_inf_nan=False, description="Percentage rate")
    region: Optional[str] = Field(None, description="Leave empty for the default rate")


class TaxRateUpdate(BaseModel):
    name: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    region: Optional[str] = None
    is_active: Optional[bool] = None


class TaxRateResponse(BaseModel):
    id: int
    name: str
    rate: float
    region: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class TaxResult(BaseModel):
    tax_amount: float
    tax_rate: float
    tax_name: str
