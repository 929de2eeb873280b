"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "field",
                "message": "Must be one of: price, title",
                "code": "INVALID_SORT_FIELD",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "detail": "A product fetch is already in progress",
                "code": "CONFLICT"
            }

        Validation error with fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "page_size",
                        "message": "Input should be a valid integer",
                        "code": "int_parsing"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "A product fetch is already in progress", "code": "CONFLICT"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "field",
                            "message": "Must be one of: price, title",
                            "code": "INVALID_SORT_FIELD",
                        },
                    ],
                },
            ]
        }
    )
