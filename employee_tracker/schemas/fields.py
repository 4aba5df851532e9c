"""
Shared field types and payload parsing for the create/update schemas.
"""

from typing import Annotated, TypeVar

from pydantic import BaseModel, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from employee_tracker.core.exceptions import ValidationError


# Matches the varchar(30) columns of the schema
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: type[SchemaT], **data) -> SchemaT:
    """Validate raw input against a schema, raising the tracker's ValidationError."""
    try:
        return schema(**data)
    except PydanticValidationError as e:
        problems = []
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or schema.__name__
            problems.append(f"{field}: {error['msg']}")
        raise ValidationError("; ".join(problems)) from e
