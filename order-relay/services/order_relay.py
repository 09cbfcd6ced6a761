import logging
from typing import Any, Dict, List

from core.config import Settings
from core.errors import OrderValidationError, ShopifyAPIError, UpstreamUserError
from core.gid import make_global_id
from core.shopify import ShopifyClient
from models.orders import OrderSummary, ValidatedOrder

logger = logging.getLogger(__name__)

# Business rule: every relayed order is tagged and annotated the same way
ORDER_TAGS = ["pedido_por_admin"]
ORDER_NOTE = "Pedido creado desde backend Render"

GET_DEFAULT_VARIANT_QUERY = """
query GetDefaultVariant($id: ID!) {
  product(id: $id) {
    variants(first: 1) {
      edges {
        node { id }
      }
    }
  }
}
"""

CREATE_ORDER_MUTATION = """
mutation CreateOrder($order: OrderCreateOrderInput!) {
  orderCreate(order: $order) {
    order {
      id
      name
      statusUrl
    }
    userErrors {
      field
      message
    }
  }
}
"""


class OrderRelay:
    """Resolves the variant, submits orderCreate and maps the answer."""

    def __init__(self, settings: Settings, client: ShopifyClient):
        self.settings = settings
        self.client = client

    async def resolve_default_variant(self, product_id) -> str:
        data = await self.client.execute(
            GET_DEFAULT_VARIANT_QUERY,
            {"id": make_global_id("Product", product_id)},
        )
        product = data.get("product") or {}
        edges = (product.get("variants") or {}).get("edges") or []
        if not edges:
            raise OrderValidationError("El producto no tiene variantes disponibles")

        variant_gid = edges[0]["node"]["id"]
        logger.info(" [i] Producto %s -> variante por defecto %s", product_id, variant_gid)
        return variant_gid

    async def create_order(self, order: ValidatedOrder) -> OrderSummary:
        self.settings.require_shopify()

        customer_gid = make_global_id("Customer", order.customer_id)
        if order.variant_id:
            variant_gid = make_global_id("ProductVariant", order.variant_id)
        else:
            variant_gid = await self.resolve_default_variant(order.product_id)

        data = await self.client.execute(
            CREATE_ORDER_MUTATION,
            {
                "order": {
                    "customerId": customer_gid,
                    "lineItems": [{"variantId": variant_gid, "quantity": order.quantity}],
                    "tags": list(ORDER_TAGS),
                    "note": ORDER_NOTE,
                }
            },
        )
        return self._map_order_create(data)

    @staticmethod
    def _map_order_create(data: Dict[str, Any]) -> OrderSummary:
        payload = data.get("orderCreate")
        if not isinstance(payload, dict):
            raise ShopifyAPIError("Respuesta inesperada de Shopify: falta orderCreate")

        # userErrors win even when an order object came back too
        user_errors: List[dict] = payload.get("userErrors") or []
        if user_errors:
            logger.warning(" [x] Shopify rechazó el pedido: %s", user_errors)
            raise UpstreamUserError(user_errors)

        order = payload.get("order")
        if not order:
            raise ShopifyAPIError("Respuesta inesperada de Shopify: pedido vacío")
        return OrderSummary.model_validate(order)
