"""Shared base model: snake_case in Python and storage, camelCase on the wire"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every persisted entity and API payload.

    Attributes are snake_case; JSON produced for API clients uses camelCase
    aliases (``startDate``, ``confirmationCode``), matching the web client.
    Either spelling is accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
