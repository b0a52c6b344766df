"""
Shared Pydantic types for schema validation.

IdStr: Accepts str, int and uuid.UUID identifiers, coercing them to str.
Entity ids reach the activity log from several tables (UUID and integer keys),
but the log stores every foreign identifier as a plain string.
"""

from typing import Annotated
from pydantic import BeforeValidator, StringConstraints

IdStr = Annotated[
    str,
    BeforeValidator(lambda v: str(v) if v is not None and not isinstance(v, str) else v),
    StringConstraints(min_length=1, max_length=64),
]
