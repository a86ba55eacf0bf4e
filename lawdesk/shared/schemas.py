from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Accepts snake_case or the browser client's camelCase keys; emits snake_case."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
    )


def reject_null(value):
    """For partial updates: a field may be omitted but not set to null."""
    if value is None:
        raise ValueError("may not be null")
    return value
