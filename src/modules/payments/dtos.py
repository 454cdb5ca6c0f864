"""Payment DTOs for the Service Layer.

``PurchaseDTO`` re-checks every purchase input even though the API layer
validated it already: the purchase engine may be called from other entry
points (management commands, tests).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.products.dtos import validate_http_url


class PurchaseDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(ge=1)
    bank_account_id: int = Field(ge=1)
    quantity: int = Field(ge=1)
    payment_proof_image_url: str

    @field_validator("payment_proof_image_url")
    @classmethod
    def proof_url_must_be_http(cls, v: str) -> str:
        return validate_http_url(v)
