"""Base schema — camelCase on the wire, snake_case in Python.

Learn: The frontend speaks camelCase (authorId, createdAt). The alias
generator maps every field, populate_by_name lets Python code and
tests use either spelling, and FastAPI serializes responses by alias.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
