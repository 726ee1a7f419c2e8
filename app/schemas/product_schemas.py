from pydantic import BaseModel, Field
from typing import Optional, List, Any

from app.schemas.field_rules import non_empty, numeric, boolean, min_items

MIN_PRODUCT_IMAGES = 3

ProductId = non_empty("Product id is required")
ProductName = non_empty("Product name is required")
Price = numeric("Price should be a number")
ForExchange = boolean("ForExchange should be boolean")
Description = non_empty("Description is required")
CategoryId = non_empty("Category should be a number")
CityId = non_empty("City should be a number")
ConditionId = non_empty("Condition should be a number")
Images = min_items(MIN_PRODUCT_IMAGES, "Each product should have at least 3 images")


def _rule():
    # Missing fields must still reach the rule so its own message is reported
    return Field(default=None, validate_default=True)


class ProductIdRequest(BaseModel):
    productId: ProductId = _rule()


class ProductDetailsRequest(BaseModel):
    productName: ProductName = _rule()
    price: Price = _rule()
    forExchange: ForExchange = _rule()
    description: Description = _rule()
    categoryId: CategoryId = _rule()
    cityId: CityId = _rule()
    conditionId: ConditionId = _rule()
    images: Images = _rule()


class AddProductRequest(ProductDetailsRequest):
    pass


class EditProductRequest(ProductDetailsRequest):
    productId: ProductId = _rule()


class PaginationParams(BaseModel):
    skip: int = 0
    limit: int


class ValidationErrorItem(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: Any
    success: bool = False
    status_code: int
    errors: Optional[List[ValidationErrorItem]] = None
