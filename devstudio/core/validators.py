"""
Input Validators - Payload validation for every operation.

Each incoming payload is checked against the Pydantic model registered for
its operation. Validation either produces the typed request or raises
ValidationError listing every violated field; there is no partial success.
"""
from typing import Any, Dict, List, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from devstudio.core.exceptions import ValidationError
from devstudio.core.logging_config import get_logger
from devstudio.models.requests import REQUEST_MODELS, Operation

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds that carry no meaning for clients
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def format_violations(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert Pydantic/FastAPI error dicts into field-level violations.

    Args:
        errors: Output of ValidationError.errors()

    Returns:
        List of {"field", "message", "type"} dicts, one per violation
    """
    violations = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if len(location) > 1 and location[0] in _LOCATION_PREFIXES:
            location = location[1:]
        violations.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })
    return violations


def validate_payload(model_cls: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a raw payload against a request model.

    Args:
        model_cls: Pydantic model describing the payload
        payload: Raw decoded JSON body

    Returns:
        Typed, constraint-satisfying model instance

    Raises:
        ValidationError: With every violated field
    """
    if not isinstance(payload, dict):
        raise ValidationError([{
            "field": "body",
            "message": "Request body must be a JSON object",
            "type": "dict_type",
        }])

    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as e:
        violations = format_violations(e.errors())
        logger.info(
            f"Rejected {model_cls.__name__}: "
            f"{', '.join(v['field'] for v in violations)}"
        )
        raise ValidationError(violations) from e


def validate_request(operation: Operation, payload: Any) -> BaseModel:
    """Validate a payload for one of the AI operations."""
    return validate_payload(REQUEST_MODELS[Operation(operation)], payload)
