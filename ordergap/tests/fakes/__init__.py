"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeMarketingPort: In-memory events, metrics and captured profile updates
- FakeProfileSyncPort: Canned pipeline results and captured runs
"""

from .marketing import FakeMarketingPort
from .sync import FakeProfileSyncPort

__all__ = [
    "FakeMarketingPort",
    "FakeProfileSyncPort",
]
