"""Dashboard for a gateway account"""

from .routes import dashboard_bp

__all__ = ['dashboard_bp']
