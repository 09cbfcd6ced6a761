from typing import Union

GID_PLATFORM = "shopify"


def make_global_id(resource_type: str, numeric_id: Union[int, str]) -> str:
    """Build a Shopify global id, e.g. gid://shopify/Customer/123."""
    return f"gid://{GID_PLATFORM}/{resource_type}/{numeric_id}"
