from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from ..core.dependencies import get_tax_service
from ..schemas.tax import TaxRateResponse, TaxResult
from ..services.tax_service import TaxService


router = APIRouter()


@router.get("/", response_model=List[TaxRateResponse])
async def get_all_tax_rates(service: TaxService = Depends(get_tax_service)):
    """Get all active tax rates"""
    return await service.list_tax_rates()


@router.get("/calculate", response_model=TaxResult)
async def calculate_tax(
    subtotal: float = Query(..., ge=0, allow_inf_nan=False),
    region: Optional[str] = Query(None, description="Region code, e.g. US"),
    service: TaxService = Depends(get_tax_service),
):
    """Calculate tax for a subtotal, falling back to the default rate"""
    return await service.calculate_tax(subtotal, region)
