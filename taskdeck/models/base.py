"""Shared pydantic base for persisted and API models"""
import secrets

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose JSON field names are camelCase.

    The persisted document and the HTTP API both use camelCase keys
    (projectId, dueDate, completedAt ...); Python code uses snake_case.
    Input is accepted under either name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump with camelCase keys and JSON-compatible values"""
        return self.model_dump(mode="json", by_alias=True)


def generate_id() -> str:
    """Random identifier shaped like 'xxxx-xxxx-xxxx-xxxx' (hex digits)"""
    raw = secrets.token_hex(8)
    return "-".join(raw[i:i + 4] for i in range(0, 16, 4))
