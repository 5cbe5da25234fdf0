"""Helpers that turn pydantic validation failures into issue strings."""

from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Location prefixes FastAPI adds in front of the field name
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


def format_issues(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Render pydantic error dicts as ``"<field>: <reason>"`` strings.

    Args:
        errors: Output of ``ValidationError.errors()``.

    Returns:
        One human-readable string per issue.
    """
    issues = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        msg = error.get("msg", "Invalid value")
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX):]
        issues.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return issues


def parse(schema: Type[SchemaT], **data: Any) -> SchemaT:
    """Validate keyword data against a schema.

    Raises:
        ValidationError: With one issue string per failed constraint.
    """
    try:
        return schema(**data)
    except PydanticValidationError as e:
        raise ValidationError(format_issues(e.errors())) from None
