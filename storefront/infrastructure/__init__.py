"""Infrastructure layer - settings, logging and the Storefront API client."""
