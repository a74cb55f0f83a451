from fastapi import APIRouter, Depends, Path

from ..core.dependencies import get_shipping_service
from ..schemas.shipping import CalculateShippingRequest, ServiceabilityResult, ShippingQuote
from ..services.shipping_service import ShippingService


router = APIRouter()


@router.get("/check/{pincode}", response_model=ServiceabilityResult)
async def check_serviceability(
    pincode: str = Path(..., description="Destination pincode"),
    service: ShippingService = Depends(get_shipping_service),
):
    """Check if a pincode is serviceable"""
    return await service.check_serviceability(pincode)


@router.post("/calculate", response_model=ShippingQuote)
async def calculate_shipping(
    data: CalculateShippingRequest,
    service: ShippingService = Depends(get_shipping_service),
):
    """Calculate shipping cost for an order"""
    return await service.calculate_shipping(data.pincode, data.order_total, data.weight)
