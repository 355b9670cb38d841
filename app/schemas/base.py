from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every API schema: snake_case in Python, camelCase on the wire.
    Both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Utility functions for creating consistent responses
def create_success_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    response = {
        "success": True,
        "message": message,
    }
    if data is not None:
        response["data"] = data
    return response

def create_error_response(message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": error_code}
    if details:
        error["details"] = details
    return {
        "success": False,
        "message": message,
        "error": error,
    }

def create_paginated_response(
    items: List[Any],
    total: int,
    page: int,
    per_page: int,
    order_by: str,
    order_direction: str,
    message: str = "Success"
) -> Dict[str, Any]:
    return create_success_response(
        {
            "items": items,
            "totalData": total,
            "pageNumber": page,
            "pageSize": per_page,
            "orderBy": order_by,
            "orderDirection": order_direction,
        },
        message,
    )


def to_payload(schema: type, obj: Any) -> Dict[str, Any]:
    """Validate an ORM object against `schema` and dump it with camelCase keys."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")
