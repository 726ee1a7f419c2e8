from __future__ import annotations

import httpx
import structlog
from typing import Any, Dict, Optional

from app.core.config import settings


class ProductBackendNotConfiguredError(RuntimeError):
    pass


class ProductSAO:
    """Service Access Object for the upstream marketplace product backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url if base_url is not None else settings.product_backend_url).rstrip("/")
        self._timeout = request_timeout if request_timeout is not None else settings.product_backend_timeout
        self._transport = transport
        self._logger = structlog.get_logger().bind(component="ProductSAO")

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            settings.auth_header_name: token,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        token: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request to the product backend and return its decoded JSON body.

        Raises httpx.HTTPStatusError for non-2xx answers and
        ProductBackendNotConfiguredError when the backend URL is not configured.
        """
        if not self.base_url:
            raise ProductBackendNotConfiguredError("Product backend URL is not configured")

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers(token),
            )

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                self._logger.error(
                    "Product backend request failed",
                    method=method,
                    path=path,
                    status_code=exc.response.status_code,
                    response_body=exc.response.text[:500],
                )
                raise

            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                return {"message": response.text}

    async def add_product(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("POST", "/AddProduct", token, json=payload)

    async def like_product(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("PATCH", "/LikeProduct", token, json=payload)

    async def add_product_to_cart(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("PATCH", "/AddProductToCart", token, json=payload)

    async def get_product_by_id(self, product_id: str, token: str) -> Dict[str, Any]:
        return await self.request("GET", "/GetProductById", token, params={"productId": product_id})

    async def get_selling_products(self, params: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("GET", "/GetSellingProducts", token, params=params)

    async def get_exchange_products(self, params: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("GET", "/GetExchangeProducts", token, params=params)

    async def edit_product(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("PUT", "/EditProduct", token, json=payload)

    async def delete_product(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        return await self.request("DELETE", "/DeleteProduct", token, json=payload)


product_sao = ProductSAO()
