"""Shared pydantic base for camelCase request/response bodies."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; builds from ORM objects too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
