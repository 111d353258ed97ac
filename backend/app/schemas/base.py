from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds on every supported backend
MAX_INT = 2**31 - 1


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (what the POS UI sends and reads)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
