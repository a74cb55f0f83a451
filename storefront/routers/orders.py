from fastapi import APIRouter, Depends, status, BackgroundTasks

from ..core.dependencies import get_order_service
from ..schemas.order import OrderCreate, OrderResponse, PlacedOrderResponse
from ..services.order_service import OrderService


router = APIRouter()


@router.post("/", response_model=PlacedOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    background_tasks: BackgroundTasks,
    service: OrderService = Depends(get_order_service),
):
    """
    **Create New Order**

    Price the submitted items and persist the order. A coupon that cannot be
    applied is skipped and the reason returned in `coupon_message`.

    **Process:**
    1. Checks the coupon, including the customer's redemption limit
    2. Calculates discount, shipping and tax
    3. Creates the order and records the coupon redemption in one transaction
    4. Sends an order confirmation email when an address is given
    """
    order, coupon_message = await service.place_order(order_data, background_tasks)
    return PlacedOrderResponse(order=OrderResponse.model_validate(order), coupon_message=coupon_message)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    """Get an order with its line items"""
    return await service.get_order(order_id)
