"""
Base model shared by persisted HerFlow records.
"""
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """
    Model persisted with camelCase keys.

    Attributes are snake_case in Python; input accepts either spelling and
    ``to_storage`` dumps the camelCase form used on disk and in backups.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_storage(self) -> Dict[str, Any]:
        """Dump to JSON-compatible values under camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
