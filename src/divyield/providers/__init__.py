"""Quote provider registry."""

from __future__ import annotations

from divyield.config import QuoteProviderType
from divyield.providers.base import BaseQuoteProvider

# Lazy registry: actual classes imported on demand.
PROVIDER_CLASSES: dict[QuoteProviderType, str] = {
    QuoteProviderType.YAHOO: "divyield.providers.yahoo.YahooProvider",
    QuoteProviderType.MOCK: "divyield.providers.mock.MockProvider",
}


def create_provider(
    provider_type: QuoteProviderType,
    **kwargs,
) -> BaseQuoteProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseQuoteProvider", "PROVIDER_CLASSES", "create_provider"]
