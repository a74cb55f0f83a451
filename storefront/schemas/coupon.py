from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime

from ..enums import DiscountType


class CouponBase(BaseModel):
    """Base schema for coupons"""
    code: str = Field(..., min_length=1)
    description: Optional[str] = None
    discount_type: DiscountType = Field(..., description="Either 'percentage' or 'fixed'")
    discount_value: float = Field(ge=0, allow_inf_nan=False, description="Percentage or fixed amount")
    min_order_value: float = Field(0, ge=0, allow_inf_nan=False, description="Minimum order amount required")
    max_discount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Maximum discount for percentage types")
    max_uses: Optional[int] = Field(None, ge=1, description="Maximum number of times coupon can be used")
    per_user_limit: int = Field(1, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: bool = True


class CouponCreate(CouponBase):
    """Schema for creating coupons"""

    @model_validator(mode="after")
    def check_percentage_bounds(self):
        if self.discount_type == DiscountType.PERCENTAGE and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class CouponUpdate(BaseModel):
    """Schema for updating coupons"""
    code: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_order_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    max_discount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    max_uses: Optional[int] = Field(None, ge=1)
    per_user_limit: Optional[int] = Field(None, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None


class CouponUsageResponse(BaseModel):
    id: int
    coupon_id: int
    user_id: str
    order_id: Optional[int] = None
    discount: float
    created_at: datetime

    class Config:
        from_attributes = True


class CouponResponse(CouponBase):
    """Schema for coupon responses"""
    id: int
    used_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CouponDetail(CouponResponse):
    usages: List[CouponUsageResponse] = []


class ValidateCouponRequest(BaseModel):
    code: str
    order_total: float = Field(..., ge=0, allow_inf_nan=False)


class ApplyCouponRequest(ValidateCouponRequest):
    user_id: str


class CouponSummary(BaseModel):
    id: int
    code: str
    discount_type: DiscountType
    discount_value: float


class ValidationResult(BaseModel):
    valid: bool
    discount: float = 0.0
    message: str
    coupon: Optional[CouponSummary] = None


class ApplyResult(BaseModel):
    valid: bool
    discount: float = 0.0
    message: str
    coupon_id: Optional[int] = None
