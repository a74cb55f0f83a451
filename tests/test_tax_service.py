import pytest

from storefront.exceptions import ConflictException, NotFoundException
from storefront.models import TaxRate
from storefront.schemas.tax import TaxRateCreate, TaxRateUpdate
from storefront.services.tax_service import TaxService


class TestCalculateTax:

    async def test_region_rate(self, db_session, us_tax, default_tax):
        result = await TaxService(db_session).calculate_tax(100, "US")

        assert result.tax_amount == 7.5
        assert result.tax_rate == 7.5
        assert result.tax_name == "US Sales Tax"

    async def test_falls_back_to_default(self, db_session, us_tax, default_tax):
        result = await TaxService(db_session).calculate_tax(200, "CA")

        assert result.tax_amount == 36
        assert result.tax_name == "GST"

    async def test_no_region_uses_default(self, db_session, default_tax):
        result = await TaxService(db_session).calculate_tax(50)

        assert result.tax_amount == 9
        assert result.tax_rate == 18

    async def test_nothing_configured(self, db_session, us_tax):
        result = await TaxService(db_session).calculate_tax(100, "CA")

        assert result.tax_amount == 0
        assert result.tax_rate == 0
        assert result.tax_name == "No Tax"

    async def test_inactive_region_rate_is_skipped(self, db_session, us_tax, default_tax):
        us_tax.is_active = False
        await db_session.commit()

        result = await TaxService(db_session).calculate_tax(100, "US")

        assert result.tax_name == "GST"

    async def test_amount_is_rounded(self, db_session):
        db_session.add(TaxRate(name="Odd", rate=8.875, region="NY", is_active=True))
        await db_session.commit()

        result = await TaxService(db_session).calculate_tax(19.99, "NY")

        assert result.tax_amount == 1.77


class TestTaxAdmin:

    async def test_create_default_rate(self, db_session):
        rate = await TaxService(db_session).create_tax_rate(TaxRateCreate(name="VAT", rate=20))

        assert rate.region is None
        assert rate.is_active is True

    async def test_second_default_is_rejected(self, db_session, default_tax):
        with pytest.raises(ConflictException):
            await TaxService(db_session).create_tax_rate(TaxRateCreate(name="VAT", rate=20, region=""))

    async def test_reactivating_a_second_default_is_rejected(self, db_session, default_tax):
        db_session.add(TaxRate(name="Old VAT", rate=15, region=None, is_active=False))
        await db_session.commit()
        service = TaxService(db_session)
        old = (await service.list_tax_rates(include_inactive=True))[-1]

        with pytest.raises(ConflictException):
            await service.update_tax_rate(old.id, TaxRateUpdate(is_active=True))

    async def test_update_rate(self, db_session, us_tax):
        rate = await TaxService(db_session).update_tax_rate(us_tax.id, TaxRateUpdate(rate=8.25))

        assert rate.rate == 8.25
        assert rate.region == "US"

    async def test_delete_rate(self, db_session, us_tax):
        service = TaxService(db_session)

        assert await service.delete_tax_rate(us_tax.id) == {"message": "Tax rate deleted"}
        with pytest.raises(NotFoundException):
            await service.get_tax_rate(us_tax.id)
