import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from ..core.config import Config
from ..enums import OrderStatus, PaymentMethod, PaymentStatus
from ..exceptions import NotFoundException
from ..models import Order, OrderItem
from ..schemas.order import OrderCreate
from .email_service import EmailService
from .pricing_service import PricingService


logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, db: AsyncSession, email_service: Optional[EmailService] = None):
        self.db = db
        self.pricing_service = PricingService(db)
        self.coupon_service = self.pricing_service.coupon_service
        self.email_service = email_service or EmailService()


    async def place_order(
        self,
        order_data: OrderCreate,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Tuple[Order, Optional[str]]:
        """
        Price and persist an order, redeeming its coupon in the same transaction.

        A coupon that cannot be applied is dropped and its message returned
        alongside the order; checkout goes ahead at full price. Shipping
        unavailability and a coupon cap hit while recording abort the order.
        """
        coupon_code = None
        coupon_message = None
        coupon_id = None

        try:
            if order_data.coupon_code:
                subtotal = self.pricing_service.calculate_subtotal(order_data.items)
                applied = await self.coupon_service.apply(order_data.coupon_code, subtotal, order_data.customer_id)
                coupon_message = applied.message
                if applied.valid:
                    coupon_code = order_data.coupon_code
                    coupon_id = applied.coupon_id

            pricing = await self.pricing_service.price_order(
                order_data.items,
                order_data.destination,
                coupon_code=coupon_code,
                region=order_data.region,
            )

            new_order = Order(
                order_number=f"ORDER-{uuid.uuid4().hex[:8].upper()}",
                customer_id=order_data.customer_id,
                customer_email=order_data.customer_email,
                status=OrderStatus.PROCESSING if order_data.payment_method == PaymentMethod.CASH_ON_DELIVERY else OrderStatus.PENDING,
                shipping_address=order_data.shipping_address,
                destination=order_data.destination,
                region=order_data.region,
                payment_method=order_data.payment_method,
                payment_status=PaymentStatus.PENDING,
                subtotal=pricing.subtotal,
                discount=pricing.discount,
                shipping_cost=pricing.shipping_cost,
                tax=pricing.tax_amount,
                total=pricing.total,
                coupon_code=pricing.metadata.coupon_code,
                shipping_zone=pricing.metadata.zone_name,
                estimated_delivery=pricing.metadata.estimated_days,
                tax_name=pricing.metadata.tax_name,
                notes=order_data.notes,
                items=[
                    OrderItem(
                        product_id=item.product_id,
                        product_name=item.name,
                        quantity=item.quantity,
                        price=item.price,
                        weight=item.weight,
                    )
                    for item in order_data.items
                ],
            )

            self.db.add(new_order)
            await self.db.flush()  # Get the order ID without committing

            if coupon_id is not None:
                await self.coupon_service.record_usage(coupon_id, order_data.customer_id, new_order.id, pricing.discount)

            await self.db.commit()

        except Exception:
            # Rollback transaction in case of any error
            await self.db.rollback()
            raise

        order = await self.get_order(new_order.id)
        logger.info(f"Order {order.order_number} placed for customer {order.customer_id}, total {order.total}")

        if order.customer_email and background_tasks is not None:
            # Schedule order confirmation email as a background task
            background_tasks.add_task(
                self.email_service.send_order_confirmation,
                order.customer_email,
                self._confirmation_context(order),
            )

        return order, coupon_message


    async def get_order(self, order_id: int) -> Order:
        query = select(Order).where(Order.id == order_id).options(selectinload(Order.items))
        result = await self.db.execute(query)
        order = result.scalars().first()

        if not order:
            raise NotFoundException(f"Order with ID {order_id} not found")

        return order


    def _confirmation_context(self, order: Order) -> Dict[str, Any]:
        return {
            "order_number": order.order_number,
            "items": [
                {"name": item.product_name or item.product_id, "quantity": item.quantity, "price": item.price}
                for item in order.items
            ],
            "subtotal": order.subtotal,
            "discount": order.discount,
            "shipping_cost": order.shipping_cost,
            "tax": order.tax,
            "total": order.total,
            "coupon_code": order.coupon_code,
            "estimated_delivery": order.estimated_delivery,
            "currency_symbol": Config.CURRENCY_SYMBOL,
            "frontend_url": Config.DOMAIN,
            "current_year": datetime.now().year,
        }
