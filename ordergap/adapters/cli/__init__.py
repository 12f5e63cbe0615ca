"""Command-line interface adapter.

Provides an interactive prompt for processing profiles by hand.
"""
