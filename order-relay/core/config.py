import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from core.errors import ConfigurationError

DEFAULT_API_VERSION = "2024-07"


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _get_float(name: str) -> Optional[float]:
    raw_value = os.getenv(name)
    if not raw_value:
        return None
    return float(raw_value)


@dataclass(frozen=True)
class Settings:
    store_domain: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    admin_token: Optional[str] = None
    timeout_seconds: Optional[float] = None
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            store_domain=os.getenv("SHOPIFY_STORE_DOMAIN") or None,
            api_version=os.getenv("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
            admin_token=os.getenv("SHOPIFY_ADMIN_TOKEN") or None,
            timeout_seconds=_get_float("SHOPIFY_TIMEOUT_SECONDS"),
            allowed_origins=_get_list("ALLOWED_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "3000")),
        )

    @property
    def shopify_configured(self) -> bool:
        return bool(self.store_domain and self.admin_token)

    @property
    def graphql_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}/graphql.json"

    def require_shopify(self) -> None:
        if not self.shopify_configured:
            raise ConfigurationError(
                "Faltan variables de entorno SHOPIFY_STORE_DOMAIN o SHOPIFY_ADMIN_TOKEN"
            )


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings.from_env()
