import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.errors import RelayError
from core.shopify import ShopifyClient
from models.orders import OrderRequest, RelayResponse, validate_order_request
from services.order_relay import OrderRelay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


def get_shopify_client(settings: Settings = Depends(get_settings)) -> ShopifyClient:
    return ShopifyClient(settings)


def get_order_relay(
    settings: Settings = Depends(get_settings),
    client: ShopifyClient = Depends(get_shopify_client),
) -> OrderRelay:
    return OrderRelay(settings, client)


def _relay_response(status_code: int, body: RelayResponse) -> JSONResponse:
    # order is passed through as-is; only the top-level absent fields are omitted
    content = {"ok": body.ok}
    if body.order is not None:
        content["order"] = body.order.model_dump()
    if body.error is not None:
        content["error"] = body.error
    return JSONResponse(status_code=status_code, content=content)


@router.post("/create-order", response_model=RelayResponse)
async def create_order(
    order: Optional[OrderRequest] = Body(default=None),
    relay: OrderRelay = Depends(get_order_relay),
):
    try:
        validated = validate_order_request(order or OrderRequest())
        logger.info(
            " [->] Creando pedido customer=%s product=%s variant=%s qty=%s",
            validated.customer_id,
            validated.product_id,
            validated.variant_id,
            validated.quantity,
        )
        summary = await relay.create_order(validated)
    except RelayError as e:
        if e.status_code >= 500:
            logger.error(" [!] Error creando pedido: %s", e.message)
        return _relay_response(e.status_code, RelayResponse(ok=False, error=e.message))
    except Exception as e:
        logger.exception(" [!] Error inesperado creando pedido")
        return _relay_response(500, RelayResponse(ok=False, error=str(e) or "Error interno"))

    logger.info(" [v] Pedido creado: %s", summary.name or summary.id)
    return _relay_response(200, RelayResponse(ok=True, order=summary))
