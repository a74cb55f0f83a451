from fastapi import APIRouter, Depends, Path, Query, status
from typing import List

from ..core.dependencies import get_coupon_service, get_shipping_service, get_tax_service
from ..schemas.coupon import CouponCreate, CouponDetail, CouponResponse, CouponUpdate
from ..schemas.shipping import PincodesRequest, ShippingZoneCreate, ShippingZoneResponse, ShippingZoneUpdate
from ..schemas.tax import TaxRateCreate, TaxRateResponse, TaxRateUpdate
from ..services.coupon_service import CouponService
from ..services.shipping_service import ShippingService
from ..services.tax_service import TaxService


router = APIRouter()


# ========== COUPONS ==========

@router.post("/coupons", response_model=CouponResponse, status_code=status.HTTP_201_CREATED)
async def create_coupon(
    data: CouponCreate,
    service: CouponService = Depends(get_coupon_service),
):
    """Create a new coupon. Codes are stored uppercase and must be unique."""
    return await service.create_coupon(data)


@router.get("/coupons", response_model=List[CouponResponse])
async def list_coupons(
    include_inactive: bool = Query(False),
    service: CouponService = Depends(get_coupon_service),
):
    return await service.list_coupons(include_inactive)


@router.get("/coupons/{id}", response_model=CouponDetail)
async def get_coupon(
    id: int = Path(..., description="ID of the coupon"),
    service: CouponService = Depends(get_coupon_service),
):
    return await service.get_coupon(id, with_usages=True)


@router.put("/coupons/{id}", response_model=CouponResponse)
async def update_coupon(
    data: CouponUpdate,
    id: int = Path(..., description="ID of the coupon"),
    service: CouponService = Depends(get_coupon_service),
):
    return await service.update_coupon(id, data)


@router.delete("/coupons/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coupon(
    id: int = Path(..., description="ID of the coupon"),
    service: CouponService = Depends(get_coupon_service),
):
    """Delete a coupon together with its usage records"""
    await service.delete_coupon(id)


# ========== SHIPPING ZONES ==========

@router.get("/shipping/zones", response_model=List[ShippingZoneResponse])
async def list_zones(
    include_inactive: bool = Query(False),
    service: ShippingService = Depends(get_shipping_service),
):
    return await service.list_zones(include_inactive)


@router.get("/shipping/zones/{id}", response_model=ShippingZoneResponse)
async def get_zone(
    id: int = Path(..., description="ID of the shipping zone"),
    service: ShippingService = Depends(get_shipping_service),
):
    return await service.get_zone(id)


@router.post("/shipping/zones", response_model=ShippingZoneResponse, status_code=status.HTTP_201_CREATED)
async def create_zone(
    data: ShippingZoneCreate,
    service: ShippingService = Depends(get_shipping_service),
):
    """Create a shipping zone. Pincodes already served by another active zone are rejected."""
    return await service.create_zone(data)


@router.put("/shipping/zones/{id}", response_model=ShippingZoneResponse)
async def update_zone(
    data: ShippingZoneUpdate,
    id: int = Path(..., description="ID of the shipping zone"),
    service: ShippingService = Depends(get_shipping_service),
):
    return await service.update_zone(id, data)


@router.delete("/shipping/zones/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_zone(
    id: int = Path(..., description="ID of the shipping zone"),
    service: ShippingService = Depends(get_shipping_service),
):
    await service.delete_zone(id)


@router.post("/shipping/zones/{id}/pincodes", response_model=ShippingZoneResponse)
async def add_pincodes(
    data: PincodesRequest,
    id: int = Path(..., description="ID of the shipping zone"),
    service: ShippingService = Depends(get_shipping_service),
):
    return await service.add_pincodes(id, data.pincodes)


@router.delete("/shipping/zones/{id}/pincodes", response_model=ShippingZoneResponse)
async def remove_pincodes(
    data: PincodesRequest,
    id: int = Path(..., description="ID of the shipping zone"),
    service: ShippingService = Depends(get_shipping_service),
):
    return await service.remove_pincodes(id, data.pincodes)


# ========== TAX RATES ==========

@router.get("/tax", response_model=List[TaxRateResponse])
async def list_tax_rates(
    include_inactive: bool = Query(False),
    service: TaxService = Depends(get_tax_service),
):
    return await service.list_tax_rates(include_inactive)


@router.get("/tax/{id}", response_model=TaxRateResponse)
async def get_tax_rate(
    id: int = Path(..., description="ID of the tax rate"),
    service: TaxService = Depends(get_tax_service),
):
    return await service.get_tax_rate(id)


@router.post("/tax", response_model=TaxRateResponse, status_code=status.HTTP_201_CREATED)
async def create_tax_rate(
    data: TaxRateCreate,
    service: TaxService = Depends(get_tax_service),
):
    """Create a tax rate. Omit the region to create the default rate."""
    return await service.create_tax_rate(data)


@router.put("/tax/{id}", response_model=TaxRateResponse)
async def update_tax_rate(
    data: TaxRateUpdate,
    id: int = Path(..., description="ID of the tax rate"),
    service: TaxService = Depends(get_tax_service),
):
    return await service.update_tax_rate(id, data)


@router.delete("/tax/{id}")
async def delete_tax_rate(
    id: int = Path(..., description="ID of the tax rate"),
    service: TaxService = Depends(get_tax_service),
):
    return await service.delete_tax_rate(id)
