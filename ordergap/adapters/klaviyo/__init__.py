"""Marketing platform adapters.

Provides the Klaviyo REST API implementation of MarketingPort.
"""

from .client import KlaviyoMarketingAdapter

__all__ = ["KlaviyoMarketingAdapter"]
