"""Shared base model for contracts serialized in camelCase."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """Base for every contract.

    Attributes are snake_case in Python; the persisted and LLM-facing JSON
    uses camelCase (``successCriteria``, ``estHoursByRole``). Both spellings
    are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_json_dict(self) -> dict:
        """Dump in the camelCase wire shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
