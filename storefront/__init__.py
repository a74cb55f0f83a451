import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from storefront.core.config import Config  # noqa: E402
from storefront.db.database import init_db  # noqa: E402
from storefront.exceptions import (  # noqa: E402
    create_exception_handler,
    CouponUsageLimitReachedException,
    ShippingUnavailableException,
)
from storefront.routers.admin import router as admin_router  # noqa: E402
from storefront.routers.coupons import router as coupons_router  # noqa: E402
from storefront.routers.orders import router as orders_router  # noqa: E402
from storefront.routers.pricing import router as pricing_router  # noqa: E402
from storefront.routers.shipping import router as shipping_router  # noqa: E402
from storefront.routers.tax import router as tax_router  # noqa: E402


logging.basicConfig(
    level=Config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

api_version = "v1"
swagger_docs_url = f"/api/{api_version}/docs"
redoc_docs_url = f"/api/{api_version}/redoc"
openapi_url = f"/api/{api_version}/openapi.json"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(
    docs_url=swagger_docs_url,
    redoc_url=redoc_docs_url,
    openapi_url=openapi_url,
    title="Storefront Pricing API",
    description="Coupon, shipping, tax and order pricing for the storefront checkout.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        'http://localhost',
        'http://localhost:3000',
        f'https://{Config.DOMAIN}',
    ],
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'],
    allow_headers=["*"],
)

# Register endpoints
app.include_router(coupons_router, prefix=f'/api/{api_version}/coupons', tags=["Coupons"])
app.include_router(shipping_router, prefix=f'/api/{api_version}/shipping', tags=["Shipping"])
app.include_router(tax_router, prefix=f'/api/{api_version}/tax', tags=["Tax"])
app.include_router(pricing_router, prefix=f'/api/{api_version}/pricing', tags=["Pricing"])
app.include_router(orders_router, prefix=f'/api/{api_version}/orders', tags=["Orders"])
app.include_router(admin_router, prefix=f'/api/{api_version}/admin', tags=["Admin"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Register custom exceptions
app.add_exception_handler(ShippingUnavailableException, create_exception_handler(400))
app.add_exception_handler(CouponUsageLimitReachedException, create_exception_handler(409))
