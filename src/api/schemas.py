"""
Request bodies of the HTTP API (camelCase on the wire).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateOrderRequest(CamelModel):
    """Body of POST /api/cashfree/create-order."""

    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    telegram_link: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)


class OrderDetailsRequest(CamelModel):
    """Body of POST /api/cashfree/order."""

    order_id: str = Field(..., min_length=1)
