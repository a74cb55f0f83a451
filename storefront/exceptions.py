from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from typing import Any, Callable, Optional


class APIException(Exception):
    """ Base class for all exceptions in the Storefront API. """
    pass


class ShippingUnavailableException(APIException):
    """ Exception is raised when no active shipping zone serves the destination. """

    def __init__(self, destination: str):
        self.destination = destination
        super().__init__(f"Delivery not available to pincode {destination}")


class CouponUsageLimitReachedException(APIException):
    """ Exception is raised when a coupon hit its redemption cap while an order was being finalized. """

    def __init__(self, code: Optional[str] = None):
        self.code = code
        super().__init__("Coupon usage limit reached")


class NotFoundException(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestException(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictException(HTTPException):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


def create_exception_handler(status_code: int, detail: Any = None) -> Callable[[Request, Exception], JSONResponse]:
    async def exception_handler(request: Request, exception: APIException):
        return JSONResponse(
            content={"detail": detail if detail is not None else str(exception)},
            status_code=status_code
        )

    return exception_handler
