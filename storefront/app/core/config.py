"""Storefront Service Configuration"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from cart.tax import DEFAULT_TAX_RATE


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Marketplace Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"

    # Pricing
    currency: str = "usd"
    default_tax_rate: Decimal = Field(default=DEFAULT_TAX_RATE, ge=0, lt=1)

    # Cart persistence; in-memory when unset
    cart_storage_dir: Optional[str] = None
    # Engines kept in memory; older carts are reloaded from storage
    cart_cache_size: int = Field(default=1000, gt=0)

    # Preselect the first active shipping method on new carts
    auto_select_shipping: bool = True

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = "../config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def persistent_carts(self) -> bool:
        """Whether carts survive a service restart"""
        return bool(self.cart_storage_dir)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
