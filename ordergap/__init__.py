"""Webhook-triggered sync of subscription-to-first-order delay onto Klaviyo profiles."""
