# gpustore/core/errors.py
from fastapi import HTTPException, status


def field_error(field: str, message: str) -> HTTPException:
    """
    Build a 422 attached to a single body field, shaped like FastAPI's
    own request validation errors so clients can render it next to
    the offending form input.
    """
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[
            {
                "loc": ["body", field],
                "msg": message,
                "type": "value_error",
            }
        ],
    )


def not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{entity} not found",
    )
