"""
Wishlist API Routes.

Customer wishlist endpoints. Path parameters are plain strings; identifier
formats are checked by the application service so every rejection shares
the same error body.
"""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from wishlist.api.deps import WishlistServiceDep
from wishlist.application.dtos import (
    AddItemRequest,
    AddItemResponse,
    ApiErrorResponse,
    ItemExistsResponse,
    ReorderRequest,
    SetQuantityRequest,
    WishlistResponse,
)

router = APIRouter(prefix="/customers/{customer_id}/wishlist", tags=["wishlist"])

ERROR_RESPONSES = {
    400: {"model": ApiErrorResponse, "description": "Invalid request"},
    404: {"model": ApiErrorResponse, "description": "Wishlist or product not found"},
    409: {"model": ApiErrorResponse, "description": "Concurrent modification"},
    503: {"model": ApiErrorResponse, "description": "Document store unavailable"},
}


@router.get(
    "",
    summary="Get customer wishlist",
    description="Retrieve all products in the customer's wishlist, in display order.",
    response_model=WishlistResponse,
    responses={400: ERROR_RESPONSES[400], 503: ERROR_RESPONSES[503]},
)
async def get_wishlist(
    customer_id: str, service: WishlistServiceDep
) -> WishlistResponse:
    return await service.get_wishlist(customer_id)


@router.delete(
    "",
    summary="Clear customer wishlist",
    description="Remove all products from the customer's wishlist.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def clear_wishlist(customer_id: str, service: WishlistServiceDep) -> Response:
    await service.clear(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/products/{product_id}",
    summary="Add product to wishlist",
    description=(
        "Append a product to the customer's wishlist. With `idempotent=true` "
        "re-adding a present product returns 200 instead of an error."
    ),
    response_model=AddItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": AddItemResponse}, **ERROR_RESPONSES},
)
async def add_product(
    customer_id: str,
    product_id: str,
    service: WishlistServiceDep,
    request: AddItemRequest | None = None,
) -> JSONResponse:
    request = request or AddItemRequest()
    result = await service.add_item(
        customer_id,
        product_id,
        quantity=request.quantity,
        note=request.note,
        idempotent=request.idempotent,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        content=result.model_dump(mode="json"),
    )


@router.get(
    "/products/{product_id}",
    summary="Check if product exists in wishlist",
    response_model=ItemExistsResponse,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
)
async def check_product_exists(
    customer_id: str, product_id: str, service: WishlistServiceDep
) -> ItemExistsResponse:
    return await service.check_item(customer_id, product_id)


@router.patch(
    "/products/{product_id}",
    summary="Change product quantity",
    response_model=WishlistResponse,
    responses=ERROR_RESPONSES,
)
async def set_product_quantity(
    customer_id: str,
    product_id: str,
    request: SetQuantityRequest,
    service: WishlistServiceDep,
) -> WishlistResponse:
    return await service.set_quantity(customer_id, product_id, request.quantity)


@router.delete(
    "/products/{product_id}",
    summary="Remove product from wishlist",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def remove_product(
    customer_id: str, product_id: str, service: WishlistServiceDep
) -> Response:
    await service.remove_item(customer_id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/order",
    summary="Reorder wishlist",
    description="Replace the display order; must list every current product exactly once.",
    response_model=WishlistResponse,
    responses=ERROR_RESPONSES,
)
async def reorder_wishlist(
    customer_id: str, request: ReorderRequest, service: WishlistServiceDep
) -> WishlistResponse:
    return await service.reorder(customer_id, request.product_ids)
