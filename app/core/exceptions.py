from typing import Any, Dict, List, Optional, Sequence

# Request sections FastAPI prefixes onto error locations
REQUEST_SECTIONS = ("body", "query", "path", "header", "cookie")


def _field_name(error: Dict[str, Any]) -> str:
    loc = list(error.get("loc", ()))
    if error.get("type") == "json_invalid":
        return "body"
    if loc and loc[0] in REQUEST_SECTIONS:
        loc = loc[1:] or loc[:1]
    return ".".join(str(part) for part in loc) or "body"


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic/FastAPI error dicts into ``{field, message}`` pairs, keeping their order."""
    return [{"field": _field_name(error), "message": error.get("msg", "Invalid value")} for error in errors]


def error_envelope(status_code: int, message: Any, errors: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    content = {
        "message": message,
        "success": False,
        "status_code": status_code,
    }
    if errors is not None:
        content["errors"] = errors
    return content
