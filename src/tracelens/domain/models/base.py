from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models whose JSON shape is consumed outside the core (camelCase keys)."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
