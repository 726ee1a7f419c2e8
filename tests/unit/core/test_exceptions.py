from app.core.exceptions import error_envelope, format_validation_errors


def test_body_prefix_is_stripped():
    errors = [{"type": "not_numeric", "loc": ("body", "price"), "msg": "Price should be a number"}]

    assert format_validation_errors(errors) == [{"field": "price", "message": "Price should be a number"}]


def test_nested_location_is_dotted():
    errors = [{"type": "string_type", "loc": ("body", "images", 1), "msg": "Input should be a valid string"}]

    assert format_validation_errors(errors)[0]["field"] == "images.1"


def test_whole_body_error_keeps_body():
    errors = [{"type": "missing", "loc": ("body",), "msg": "Field required"}]

    assert format_validation_errors(errors) == [{"field": "body", "message": "Field required"}]


def test_json_invalid_maps_to_body():
    errors = [{"type": "json_invalid", "loc": ("body", 17), "msg": "JSON decode error"}]

    assert format_validation_errors(errors)[0]["field"] == "body"


def test_order_is_kept():
    errors = [
        {"type": "a", "loc": ("body", "productName"), "msg": "first"},
        {"type": "b", "loc": ("query", "limit"), "msg": "second"},
    ]

    assert [e["message"] for e in format_validation_errors(errors)] == ["first", "second"]


def test_envelope_without_errors():
    assert error_envelope(401, "Token is not valid") == {
        "message": "Token is not valid",
        "success": False,
        "status_code": 401,
    }


def test_envelope_with_errors():
    items = [{"field": "price", "message": "Price should be a number"}]

    assert error_envelope(400, "Validation failed", items)["errors"] == items
