"""
Shared fixtures for the product API tests.

Settings are read at import time, so the environment is prepared here before
any ``app`` module is imported.
"""

from __future__ import annotations

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["PRODUCT_BACKEND_URL"] = ""

from collections.abc import Generator
from unittest.mock import AsyncMock, create_autospec

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.services.base_product_service import BaseProductService
from app.services.product_service import get_product_service
from tests.helpers import make_token


@pytest.fixture
def token() -> str:
    return make_token()


@pytest.fixture
def auth_headers(token: str) -> dict[str, str]:
    return {settings.auth_header_name: token}


@pytest.fixture
def product_handler() -> BaseProductService:
    """Handler double whose coroutines record calls and answer ``{"ok": True}``."""
    handler = create_autospec(BaseProductService, instance=True)
    for name in (
        "add_product",
        "like_product",
        "add_product_to_cart",
        "get_product_by_id",
        "get_selling_products",
        "get_exchange_products",
        "edit_product",
        "delete_product",
    ):
        setattr(handler, name, AsyncMock(return_value={"ok": True}))
    return handler


@pytest.fixture
def client(product_handler: BaseProductService) -> Generator[TestClient, None, None]:
    from app.main import app

    app.dependency_overrides[get_product_service] = lambda: product_handler
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def valid_product() -> dict:
    return {
        "productName": "Bike",
        "price": "100",
        "forExchange": "false",
        "description": "Used bike",
        "categoryId": "1",
        "cityId": "1",
        "conditionId": "1",
        "images": ["a.jpg", "b.jpg", "c.jpg"],
    }
