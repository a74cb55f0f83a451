import pytest
from fastapi import BackgroundTasks
from sqlalchemy import func, select

from storefront.enums import DiscountType, OrderStatus, PaymentMethod
from storefront.exceptions import CouponUsageLimitReachedException
from storefront.models import Coupon, CouponUsage, Order
from storefront.schemas.order import OrderCreate
from storefront.schemas.pricing import PricingItem
from storefront.services.order_service import OrderService


class RecordingEmailService:
    def __init__(self):
        self.sent = []

    async def send_order_confirmation(self, to_email, order_data):
        self.sent.append((to_email, order_data))
        return True


def make_order(**overrides):
    values = dict(
        customer_id="user-1",
        items=[PricingItem(product_id="sku-1", name="Kettle", price=100, quantity=2)],
        shipping_address={"street": "1 Main St", "city": "New York"},
        destination="10001",
        region="US",
        payment_method=PaymentMethod.CARD,
    )
    values.update(overrides)
    return OrderCreate(**values)


async def count(db, column):
    return (await db.execute(select(func.count(column)))).scalar_one()


async def test_place_order_persists_pricing(db_session, domestic_zone, us_tax, save20):
    order, message = await OrderService(db_session).place_order(make_order(coupon_code="save20"))
    await db_session.refresh(save20)

    assert message == "Coupon applied successfully"
    assert order.subtotal == 200
    assert order.discount == 30
    assert order.shipping_cost == 0
    assert order.tax == 12.75
    assert order.total == 182.75
    assert order.shipping_zone == "Domestic"
    assert order.estimated_delivery == "2-4 days"
    assert order.status == OrderStatus.PENDING
    assert len(order.items) == 1
    assert save20.used_count == 1
    assert await count(db_session, CouponUsage.id) == 1


async def test_cash_on_delivery_starts_processing(db_session, domestic_zone):
    order, message = await OrderService(db_session).place_order(
        make_order(payment_method=PaymentMethod.CASH_ON_DELIVERY)
    )

    assert message is None
    assert order.status == OrderStatus.PROCESSING


async def test_per_user_limit_drops_coupon(db_session, domestic_zone, flat10):
    service = OrderService(db_session)

    for _ in range(2):
        await service.place_order(make_order(coupon_code="FLAT10"))
    order, message = await service.place_order(make_order(coupon_code="FLAT10"))

    assert message == "You have already used this coupon maximum times"
    assert order.discount == 0
    assert order.coupon_code is None


async def test_coupon_rounding_to_zero_still_counts_as_used(db_session, domestic_zone):
    tiny = Coupon(
        code="TINY",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10,
        min_order_value=0,
        max_uses=1,
        per_user_limit=1,
        used_count=0,
        is_active=True,
    )
    db_session.add(tiny)
    await db_session.commit()
    service = OrderService(db_session)
    cheap = [PricingItem(product_id="sku-2", name="Sticker", price=0.04, quantity=1)]

    first, first_message = await service.place_order(make_order(items=cheap, coupon_code="TINY"))
    second, second_message = await service.place_order(make_order(items=cheap, coupon_code="TINY"))
    await db_session.refresh(tiny)

    assert first.coupon_code == "TINY"
    assert first.discount == 0
    assert first_message == "Coupon applied successfully"
    assert tiny.used_count == 1
    assert await count(db_session, CouponUsage.id) == 1
    assert second.coupon_code is None
    assert second_message == "Coupon usage limit reached"


async def test_cap_reached_while_recording_voids_order(db_session, domestic_zone, save20, monkeypatch):
    service = OrderService(db_session)

    async def cap_already_reached(coupon_id):
        return False

    monkeypatch.setattr(service.coupon_service.repository, "increment_usage", cap_already_reached)

    with pytest.raises(CouponUsageLimitReachedException):
        await service.place_order(make_order(coupon_code="SAVE20"))

    assert await count(db_session, Order.id) == 0
    assert await count(db_session, CouponUsage.id) == 0


async def test_confirmation_email_is_scheduled(db_session, domestic_zone):
    emails = RecordingEmailService()
    background_tasks = BackgroundTasks()

    order, _ = await OrderService(db_session, email_service=emails).place_order(
        make_order(customer_email="buyer@example.com"), background_tasks
    )
    await background_tasks()

    assert len(emails.sent) == 1
    to_email, context = emails.sent[0]
    assert to_email == "buyer@example.com"
    assert context["order_number"] == order.order_number
    assert context["total"] == order.total
    assert context["items"][0]["name"] == "Kettle"
