"""External adapters for the ordergap profile sync.

This package contains all external dependencies (Klaviyo, HTTP servers,
the interactive prompt) and provides implementations of the core port
interfaces.

Adapter Organization:

- klaviyo/: Adapter for the marketing platform's REST API
- webhook/: HTTP webhook receiver for inbound profile triggers
- cli/: Interactive command handler for processing profiles by hand
"""
