from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from ..enums import OrderStatus, PaymentMethod, PaymentStatus
from .pricing import PricingItem


class OrderCreate(BaseModel):
    """Schema for creating orders"""
    customer_id: str
    customer_email: Optional[EmailStr] = None
    items: List[PricingItem] = Field(..., min_length=1)
    shipping_address: Dict[str, Any]
    destination: str = Field(..., description="Destination pincode")
    region: Optional[str] = None
    coupon_code: Optional[str] = None
    payment_method: PaymentMethod
    notes: Optional[str] = None


class OrderItemResponse(BaseModel):
    """Schema for order item responses"""
    id: int
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    price: float
    weight: float

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    customer_id: str
    status: OrderStatus
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    subtotal: float
    discount: float
    shipping_cost: float
    tax: float
    total: float
    coupon_code: Optional[str] = None
    shipping_zone: Optional[str] = None
    estimated_delivery: Optional[str] = None
    tax_name: Optional[str] = None
    items: List[OrderItemResponse] = []
    created_at: datetime

    class Config:
        from_attributes = True


class PlacedOrderResponse(BaseModel):
    order: OrderResponse
    coupon_message: Optional[str] = None
