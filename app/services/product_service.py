from typing import Any, Awaitable, Dict, Optional
from fastapi import HTTPException, status
import httpx
from app.core.config import settings
from app.sao.product_sao import ProductBackendNotConfiguredError, ProductSAO, product_sao
from app.schemas.product_schemas import (
    AddProductRequest,
    EditProductRequest,
    PaginationParams,
    ProductIdRequest,
)
from app.services.base_product_service import BaseProductService
import structlog

logger = structlog.get_logger()

PRODUCT_ID_REQUIRED = "Product id is required"


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_pagination(limit: Optional[str], skip: Optional[str]) -> PaginationParams:
    """Turn raw ``limit``/``skip`` query strings into safe pagination values.

    Garbage never errors: it falls back to the configured defaults.
    """
    parsed_skip = _parse_int(skip)
    if parsed_skip is None or parsed_skip < 0:
        parsed_skip = 0

    parsed_limit = _parse_int(limit)
    if parsed_limit is None or parsed_limit <= 0:
        parsed_limit = settings.default_page_limit
    parsed_limit = min(parsed_limit, settings.max_page_limit)

    return PaginationParams(skip=parsed_skip, limit=parsed_limit)


def _upstream_detail(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Product backend error"
    if isinstance(body, dict):
        return body.get("message") or body.get("msg") or body.get("detail") or body
    return body


class ProductService(BaseProductService):
    """Forwards validated product requests to the marketplace backend."""

    def __init__(self, sao: Optional[ProductSAO] = None):
        self.product_sao = sao or product_sao

    async def _forward(self, operation: str, call: Awaitable[Dict[str, Any]], current_user: dict) -> Dict[str, Any]:
        user_id = current_user.get("user_id")
        try:
            result = await call
            logger.info("Product request handled", operation=operation, user_id=user_id)
            return result
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Product backend rejected request",
                operation=operation,
                user_id=user_id,
                status_code=e.response.status_code,
            )
            raise HTTPException(
                status_code=e.response.status_code,
                detail=_upstream_detail(e.response),
            )
        except httpx.RequestError as e:
            logger.error("Product backend unreachable", operation=operation, user_id=user_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Product backend unavailable",
            )
        except ProductBackendNotConfiguredError as e:
            logger.error("Product backend not configured", operation=operation, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Product backend is not configured",
            )

    async def add_product(self, payload: AddProductRequest, current_user: dict) -> Dict[str, Any]:
        return await self._forward(
            "AddProduct",
            self.product_sao.add_product(payload.model_dump(mode="json"), current_user["token"]),
            current_user,
        )

    async def like_product(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        return await self._forward(
            "LikeProduct",
            self.product_sao.like_product(payload.model_dump(mode="json"), current_user["token"]),
            current_user,
        )

    async def add_product_to_cart(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        return await self._forward(
            "AddProductToCart",
            self.product_sao.add_product_to_cart(payload.model_dump(mode="json"), current_user["token"]),
            current_user,
        )

    async def get_product_by_id(self, product_id: Optional[str], current_user: dict) -> Dict[str, Any]:
        if not product_id or not product_id.strip():
            logger.warning("Product lookup without id", user_id=current_user.get("user_id"))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=PRODUCT_ID_REQUIRED,
            )
        return await self._forward(
            "GetProductById",
            self.product_sao.get_product_by_id(product_id, current_user["token"]),
            current_user,
        )

    async def get_selling_products(
        self, limit: Optional[str], skip: Optional[str], current_user: dict
    ) -> Dict[str, Any]:
        pagination = parse_pagination(limit, skip)
        return await self._forward(
            "GetSellingProducts",
            self.product_sao.get_selling_products(pagination.model_dump(), current_user["token"]),
            current_user,
        )

    async def get_exchange_products(
        self, limit: Optional[str], skip: Optional[str], current_user: dict
    ) -> Dict[str, Any]:
        pagination = parse_pagination(limit, skip)
        return await self._forward(
            "GetExchangeProducts",
            self.product_sao.get_exchange_products(pagination.model_dump(), current_user["token"]),
            current_user,
        )

    async def edit_product(self, payload: EditProductRequest, current_user: dict) -> Dict[str, Any]:
        return await self._forward(
            "EditProduct",
            self.product_sao.edit_product(payload.model_dump(mode="json"), current_user["token"]),
            current_user,
        )

    async def delete_product(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        return await self._forward(
            "DeleteProduct",
            self.product_sao.delete_product(payload.model_dump(mode="json"), current_user["token"]),
            current_user,
        )


product_service = ProductService()


def get_product_service() -> BaseProductService:
    """FastAPI dependency returning the handler the product routes delegate to."""
    return product_service
