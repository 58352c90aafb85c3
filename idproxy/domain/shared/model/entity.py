from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for domain objects with identity. Mutations are validated."""

    model_config = ConfigDict(validate_assignment=True)
