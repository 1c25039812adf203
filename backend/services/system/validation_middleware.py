"""
Request body validation against pydantic models.
"""
from typing import Any, Dict, List, Type

from pydantic import BaseModel, ValidationError

from backend.common.errors import ValidationFailed
from backend.common.rest.request_context import RequestContext
from backend.common.rest.routing import Middleware
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)


def to_violations(exc: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into {field, message, type} entries."""
    violations = []
    for error in exc.errors():
        loc = [str(part) for part in error.get('loc', ())]
        violations.append({
            'field': '.'.join(loc) or '__root__',
            'message': error.get('msg', 'Invalid value'),
            'type': error.get('type', 'value_error'),
        })
    return violations


def parse_model(shape: Type[BaseModel], data: Any) -> BaseModel:
    try:
        return shape.model_validate(data if data is not None else {})
    except ValidationError as e:
        raise ValidationFailed(to_violations(e))


def validate(shape: Type[BaseModel]) -> Middleware:
    """Replace ctx.body with a validated `shape` instance or raise ValidationFailed."""

    async def validation_middleware(ctx: RequestContext) -> None:
        try:
            ctx.body = parse_model(shape, ctx.body)
        except ValidationFailed as e:
            logger.info(
                "Request body rejected",
                extra={'shape': shape.__name__, 'violation_count': len(e.violations)}
            )
            raise

    return validation_middleware
