from typing import Optional, Type, TypeVar
from fastapi import APIRouter, Body, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from app.core.security import validate_request
from app.schemas.product_schemas import (
    AddProductRequest,
    EditProductRequest,
    ErrorResponse,
    ProductIdRequest,
)
from app.services.base_product_service import BaseProductService
from app.services.product_service import get_product_service
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/Product", tags=["Product"])

# Shared error documentation; every route is behind the auth header
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Request failed field validation"},
    401: {"model": ErrorResponse, "description": "Missing or invalid x-auth-token"},
}

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def require_body(model: Type[RequestModel], payload: Optional[RequestModel]) -> RequestModel:
    """Return the parsed body, or run the field rules against ``{}`` when none was sent."""
    if payload is not None:
        return payload
    try:
        return model.model_validate({})
    except ValidationError as e:
        raise RequestValidationError([{**error, "loc": ("body", *error["loc"])} for error in e.errors()])


@router.post(
    "/AddProduct",
    summary="Add the product",
    response_description="Product is successfully added",
    responses=ERROR_RESPONSES,
)
async def add_product(
    payload: Optional[AddProductRequest] = Body(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    payload = require_body(AddProductRequest, payload)
    logger.info("AddProduct", user_id=current_user.get("user_id"))
    return await service.add_product(payload, current_user)


@router.patch(
    "/LikeProduct",
    summary="Like the product",
    response_description="Product is liked and added to wishlist",
    responses=ERROR_RESPONSES,
)
async def like_product(
    payload: Optional[ProductIdRequest] = Body(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    payload = require_body(ProductIdRequest, payload)
    logger.info("LikeProduct", user_id=current_user.get("user_id"), product_id=payload.productId)
    return await service.like_product(payload, current_user)


@router.patch(
    "/AddProductToCart",
    summary="Add the product to cart",
    response_description="Product is added to the cart",
    responses=ERROR_RESPONSES,
)
async def add_product_to_cart(
    payload: Optional[ProductIdRequest] = Body(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    payload = require_body(ProductIdRequest, payload)
    logger.info("AddProductToCart", user_id=current_user.get("user_id"), product_id=payload.productId)
    return await service.add_product_to_cart(payload, current_user)


@router.get(
    "/GetProductById",
    summary="Get product details",
    response_description="Product details are successfully fetched",
    responses=ERROR_RESPONSES,
)
async def get_product_by_id(
    productId: Optional[str] = Query(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    return await service.get_product_by_id(productId, current_user)


# limit/skip stay raw strings here; the handler parses and defaults them
@router.get(
    "/GetSellingProducts",
    summary="Get selling products",
    response_description="Selling products are successfully fetched",
    responses=ERROR_RESPONSES,
)
async def get_selling_products(
    limit: Optional[str] = Query(None),
    skip: Optional[str] = Query(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    return await service.get_selling_products(limit, skip, current_user)


@router.get(
    "/GetExchangeProducts",
    summary="Get exchange products",
    response_description="Exchange products are successfully fetched",
    responses=ERROR_RESPONSES,
)
async def get_exchange_products(
    limit: Optional[str] = Query(None),
    skip: Optional[str] = Query(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    return await service.get_exchange_products(limit, skip, current_user)


@router.put(
    "/EditProduct",
    summary="Edit the product",
    response_description="Product is successfully edited",
    responses=ERROR_RESPONSES,
)
async def edit_product(
    payload: Optional[EditProductRequest] = Body(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    payload = require_body(EditProductRequest, payload)
    logger.info("EditProduct", user_id=current_user.get("user_id"), product_id=payload.productId)
    return await service.edit_product(payload, current_user)


@router.delete(
    "/DeleteProduct",
    summary="Delete the product",
    response_description="Product is successfully deleted",
    responses=ERROR_RESPONSES,
)
async def delete_product(
    payload: Optional[ProductIdRequest] = Body(None),
    current_user=Depends(validate_request),
    service: BaseProductService = Depends(get_product_service),
):
    payload = require_body(ProductIdRequest, payload)
    logger.info("DeleteProduct", user_id=current_user.get("user_id"), product_id=payload.productId)
    return await service.delete_product(payload, current_user)
