"""Webhook request model, handlers and HTTP server."""
