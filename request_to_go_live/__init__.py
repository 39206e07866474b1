"""
Request to go live
Collects the organisation's address and contact number before a service is
taken live.
"""

from .form import request_to_go_live_bp

__all__ = ['request_to_go_live_bp']
