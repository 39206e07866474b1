"""Webhook management"""

from .routes import webhooks_bp

__all__ = ['webhooks_bp']
