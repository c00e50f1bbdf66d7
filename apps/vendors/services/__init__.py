"""
Vendor Services Package
Centralized imports for all services
"""

from .notifications import notification_service

__all__ = [
    'notification_service',
]
