from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Wire models: snake_case in Python, camelCase in JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

def flag(value: Optional[str]) -> bool:
    # query flags only count when literally "true"
    return value == "true"

def body_flag(value: Any, default: bool = True) -> bool:
    """JSON booleans only; anything else is a bad write."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Expected a boolean, got {value!r}")
    return value
