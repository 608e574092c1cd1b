"""Application configuration.

Loads settings from environment variables with sensible defaults.
Facet vocabularies can be overridden with JSON, e.g.
``BRANDS='{"titleist": "Titleist", "srixon": "Srixon"}'``.
"""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings

from storefront.catalog.vocabulary import (
    DEFAULT_BRANDS,
    DEFAULT_CLUB_CATEGORIES,
    FacetVocabulary,
)
from storefront.domain.value_objects import PriceDomain


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    service_name: str = "golf-storefront"
    api_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Listing
    page_size: int = Field(default=12, ge=1, le=250)
    price_domain_min: Decimal = Decimal("0")
    price_domain_max: Decimal = Decimal("2000")
    price_step: Decimal = Decimal("50")

    # Storefront API (in-memory demo catalog when unset)
    storefront_api_url: str | None = None
    storefront_access_token: str = ""
    storefront_api_version: str = "2024-10"
    storefront_timeout: float = 10.0

    # Demo catalog
    catalog_seed: int = 42
    products_per_category: int = 5

    # Facet vocabularies (token -> label, in display order)
    club_categories: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CLUB_CATEGORIES)
    )
    brands: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_BRANDS))

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def price_domain(self) -> PriceDomain:
        """Price domain every range is clamped to."""
        return PriceDomain(lower=self.price_domain_min, upper=self.price_domain_max)

    @property
    def vocabulary(self) -> FacetVocabulary:
        """Facet vocabulary built from the configured mappings."""
        return FacetVocabulary.from_mappings(self.club_categories, self.brands)


settings = Settings()
