import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from core.errors import OrderValidationError

NumericId = Union[int, str]


class OrderRequest(BaseModel):
    customerNumericId: Optional[NumericId] = None
    productNumericId: Optional[NumericId] = None
    variantNumericId: Optional[NumericId] = None
    quantity: Any = None


class OrderSummary(BaseModel):
    # Shopify payload is passed through verbatim
    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None
    statusUrl: Optional[str] = None


class RelayResponse(BaseModel):
    ok: bool
    order: Optional[OrderSummary] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ValidatedOrder:
    customer_id: NumericId
    product_id: Optional[NumericId]
    variant_id: Optional[NumericId]
    quantity: int


def coerce_quantity(value: Any) -> int:
    """Falsy or non-numeric quantities default to 1.

    Negative and fractional values are rejected instead of forwarded.
    """
    if not value:
        return 1
    # ints are kept exact; float() would round anything above 2**53
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise OrderValidationError("quantity debe ser un entero positivo")
        return value
    if isinstance(value, str):
        try:
            return coerce_quantity(int(value.strip()))
        except ValueError:
            pass
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 1
    if math.isnan(number) or number == 0:
        return 1
    if number < 0 or not number.is_integer():
        raise OrderValidationError("quantity debe ser un entero positivo")
    return int(number)


def validate_order_request(request: OrderRequest) -> ValidatedOrder:
    if not request.customerNumericId:
        raise OrderValidationError("Falta customerNumericId")

    if not request.productNumericId and not request.variantNumericId:
        raise OrderValidationError("Pon productNumericId o variantNumericId")

    return ValidatedOrder(
        customer_id=request.customerNumericId,
        product_id=request.productNumericId or None,
        variant_id=request.variantNumericId or None,
        quantity=coerce_quantity(request.quantity),
    )
