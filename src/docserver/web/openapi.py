from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="docserver API",
            version="0.1.0",
            summary="Document sharing with bearer sessions and per-user grants",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Bearer token authentication (preferred)",
            },
            "TokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "token",
                "description": "Session token stored in cookie",
            },
        }

        # Only document endpoints require a session
        for path, path_item in openapi_schema["paths"].items():
            if not path.startswith("/api/docs"):
                continue
            for operation in path_item.values():
                operation["security"] = [{"BearerAuth": []}, {"TokenCookie": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorDetail(BaseModel):
    code: int = Field(..., description="HTTP status code")
    text: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": {"code": 401, "text": "Invalid credentials"}},
                {"error": {"code": 403, "text": "Permission denied"}},
                {"error": {"code": 404, "text": "Document not found"}},
            ]
        }
    }
