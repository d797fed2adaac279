"""Dropshipping fulfillment: supplier dispatch, status polling, tracking and order risk."""
