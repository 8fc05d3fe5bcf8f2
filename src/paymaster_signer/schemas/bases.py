"""
Base Schema Models

Pydantic base class shared by every request and response body. Field names
are snake_case in Python and camelCase on the wire (``payerAddress``,
``totalUserPays``), matching the JSON contract wallets already speak.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CanonicalModel(BaseModel):
    """
    Pydantic base model with camelCase aliases and deterministic dumps.

    Example:
        class Quote(CanonicalModel):
            amount_out: str

        Quote.model_validate({"amountOut": "1"}).to_dict()
        # {'amountOut': '1'}
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Dump to a JSON-ready dict using wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
