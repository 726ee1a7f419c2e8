"""
Contract for the product handlers the route table delegates to.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.schemas.product_schemas import AddProductRequest, EditProductRequest, ProductIdRequest


class BaseProductService(ABC):
    """Business logic behind the product routes.

    Every method receives an already authenticated user (``user_id``, ``payload``,
    ``token``) and, for body routes, a request that passed every field rule.
    Listing methods get the raw ``limit``/``skip`` query strings and must parse
    them themselves. Return values are sent to the client as JSON.
    """

    @abstractmethod
    async def add_product(self, payload: AddProductRequest, current_user: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def like_product(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def add_product_to_cart(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_product_by_id(self, product_id: Optional[str], current_user: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_selling_products(
        self, limit: Optional[str], skip: Optional[str], current_user: dict
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_exchange_products(
        self, limit: Optional[str], skip: Optional[str], current_user: dict
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def edit_product(self, payload: EditProductRequest, current_user: dict) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def delete_product(self, payload: ProductIdRequest, current_user: dict) -> Dict[str, Any]:
        pass
