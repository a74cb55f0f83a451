import pytest

from storefront.exceptions import ShippingUnavailableException
from storefront.schemas.pricing import PricingItem
from storefront.services.pricing_service import PricingService
from storefront.utils.money import round_money


def items(*lines):
    return [
        PricingItem(product_id=str(i), name=f"Product {i}", price=price, quantity=quantity, weight=weight)
        for i, (price, quantity, weight) in enumerate(lines, start=1)
    ]


class TestPriceOrder:

    async def test_without_coupon(self, db_session, domestic_zone, us_tax):
        result = await PricingService(db_session).price_order(
            items((10, 2, 0), (5.5, 1, 0)), "10001", region="US"
        )

        assert result.subtotal == 25.5
        assert result.discount == 0
        assert result.shipping_cost == 5.99
        assert result.tax_amount == 1.91
        assert result.total == 33.4
        assert result.metadata.zone_name == "Domestic"
        assert result.metadata.tax_name == "US Sales Tax"
        assert result.metadata.is_free_shipping is False
        assert result.metadata.coupon_code is None
        assert result.metadata.coupon_message is None

    async def test_with_coupon(self, db_session, domestic_zone, us_tax, save20):
        result = await PricingService(db_session).price_order(
            items((100, 2, 0)), "10001", coupon_code="save20", region="US"
        )

        assert result.subtotal == 200
        assert result.discount == 30
        assert result.shipping_cost == 0
        assert result.metadata.is_free_shipping is True
        assert result.tax_amount == 12.75
        assert result.total == 182.75
        assert result.metadata.coupon_code == "SAVE20"
        assert result.metadata.coupon_message == "Coupon applied successfully"

    async def test_invalid_coupon_prices_without_discount(self, db_session, domestic_zone, save20):
        result = await PricingService(db_session).price_order(items((20, 2, 0)), "10001", coupon_code="SAVE20")

        assert result.discount == 0
        assert result.metadata.coupon_code is None
        assert result.metadata.coupon_message.startswith("Minimum order value is")
        assert result.total == 45.99

    async def test_free_shipping_uses_discounted_subtotal(self, db_session, domestic_zone, flat10):
        # 55 - 10 = 45, below the 50 threshold
        result = await PricingService(db_session).price_order(items((55, 1, 0)), "10001", coupon_code="FLAT10")

        assert result.discount == 10
        assert result.shipping_cost == 5.99
        assert result.total == 50.99

    async def test_free_shipping_on_pre_discount_subtotal_when_configured(self, db_session, domestic_zone, flat10):
        service = PricingService(db_session, free_shipping_on_discounted_subtotal=False)

        result = await service.price_order(items((55, 1, 0)), "10001", coupon_code="FLAT10")

        assert result.shipping_cost == 0
        assert result.total == 45

    async def test_item_weights_drive_shipping(self, db_session, domestic_zone):
        result = await PricingService(db_session).price_order(items((10, 2, 1.5), (5, 1, 1)), "10001")

        # 5.99 + (2 * 1.5 + 1) * 1.5
        assert result.shipping_cost == 11.99

    async def test_explicit_weight_overrides_items(self, db_session, domestic_zone):
        result = await PricingService(db_session).price_order(items((10, 2, 1.5)), "10001", weight=0)

        assert result.shipping_cost == 5.99

    async def test_no_tax_configured(self, db_session, domestic_zone):
        result = await PricingService(db_session).price_order(items((10, 1, 0)), "10001", region="US")

        assert result.tax_amount == 0
        assert result.metadata.tax_name == "No Tax"

    async def test_unserviceable_destination(self, db_session, domestic_zone):
        with pytest.raises(ShippingUnavailableException):
            await PricingService(db_session).price_order(items((10, 1, 0)), "99999")

    @pytest.mark.parametrize(
        "lines, code",
        [
            (((19.99, 3, 0.2),), None),
            (((0.99, 7, 0), (12.49, 2, 0.75)), "FLAT10"),
            (((333.33, 1, 0),), "SAVE20"),
            (((9.99, 1, 0),), "FLAT10"),
        ],
    )
    async def test_total_is_sum_of_rounded_terms(self, db_session, domestic_zone, us_tax, save20, flat10, lines, code):
        result = await PricingService(db_session).price_order(items(*lines), "10001", coupon_code=code, region="US")

        assert result.discount <= result.subtotal
        assert result.total == round_money(
            result.subtotal - result.discount + result.shipping_cost + result.tax_amount
        )

    async def test_pricing_does_not_redeem_coupon(self, db_session, domestic_zone, save20):
        await PricingService(db_session).price_order(items((100, 2, 0)), "10001", coupon_code="SAVE20")
        await db_session.refresh(save20)

        assert save20.used_count == 0
