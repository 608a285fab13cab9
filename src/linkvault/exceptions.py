"""Custom exceptions for linkvault."""


class LinkVaultError(Exception):
    """Base exception for linkvault."""


class ConfigError(LinkVaultError):
    """Raised when configuration is missing or invalid."""


class InvalidInputError(LinkVaultError):
    """Raised when a caller passes URLs or fields that cannot be accepted."""


class ExtractionError(LinkVaultError):
    """Raised when scraping, mapping or searching through Firecrawl fails."""


class StoreError(LinkVaultError):
    """Raised when the item store cannot complete an operation."""


class ItemNotFoundError(StoreError):
    """Raised when an item does not exist for the requesting user."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class InvalidTransitionError(LinkVaultError):
    """Raised when a status change would leave a terminal state or go backwards."""


class ItemNotReadyError(LinkVaultError):
    """Raised when enrichment is requested for an item without extracted content."""


class LLMError(LinkVaultError):
    """Raised when LLM API calls fail."""
