"""Shared pydantic base for API-facing schemas.

Fields are snake_case in Python and camelCase on the wire; both spellings
are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
