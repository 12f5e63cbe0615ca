"""Test suite for the ordergap profile sync.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Tests against mocked HTTP transports or a local HTTP server
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementations of MarketingPort and ProfileSyncPort
   - Used by core and adapter tests
"""
