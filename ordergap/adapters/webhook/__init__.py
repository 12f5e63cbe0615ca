"""Webhook receiver adapters.

Provides HTTP endpoints for the marketing platform (or any caller) to
trigger processing of a profile.
"""
