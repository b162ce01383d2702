"""
NSX Client - Input Validation

Builds object models from caller input and turns every pydantic error into a
single ValidationError listing all offending fields.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_error(error: dict[str, Any]) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())) or "input"
    if error.get("type") == "missing":
        return f"{field} must be specified"
    return f"{field}: {error.get('msg')}"


def build_model(model_cls: type[ModelT], operation: str, **values: Any) -> ModelT:
    """Validate ``values`` into ``model_cls``.

    Args:
        model_cls: Object model to build
        operation: Operation name for error context
        **values: Caller-supplied field values; None means not supplied

    Returns:
        The validated model

    Raises:
        ValidationError: Listing every violated field
    """
    try:
        return model_cls(**values)
    except PydanticValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
        raise ValidationError(
            f"Invalid {model_cls.__name__} arguments: " + "; ".join(errors),
            errors=errors,
            context={"operation": operation, "fields": fields},
        ) from e
