"""
Context processors for Run Marketplace users app.
Makes variables available to all templates.
Location: apps/users/context_processors.py
"""

from django.conf import settings

from apps.vendors.decorators import is_vendor_suspended


def user_role_context(request):
    """
    Add user role information to template context.
    Drives which navigation links the header shows.

    Usage in templates:
        {% if is_vendor %}
            <!-- Vendor-specific content -->
        {% endif %}
    """
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return {
            'is_customer': user.is_customer,
            'is_vendor': user.is_vendor,
            'is_admin': user.is_admin_role,
            'user_role': user.role,
            'vendor_approved': user.vendor_approved,
            'vendor_suspended': is_vendor_suspended(user),
        }
    return {
        'is_customer': False,
        'is_vendor': False,
        'is_admin': False,
        'user_role': None,
        'vendor_approved': False,
        'vendor_suspended': False,
    }


def site_settings(request):
    """
    Add common site settings to template context.

    Usage in templates:
        {{ SITE_NAME }}
        {{ SUPPORT_EMAIL }}
    """
    return {
        'SITE_NAME': getattr(settings, 'SITE_NAME', 'Run Marketplace'),
        'SITE_URL': getattr(settings, 'SITE_URL', ''),
        'SUPPORT_EMAIL': getattr(settings, 'SUPPORT_EMAIL', ''),
    }


def otp_settings(request):
    """
    Add OTP configuration to template context.

    Usage in templates:
        Code expires in {{ OTP_EXPIRY_TIME }} minutes
    """
    return {
        'OTP_EXPIRY_TIME': getattr(settings, 'OTP_EXPIRY_TIME', 10),
        'OTP_LENGTH': getattr(settings, 'OTP_LENGTH', 6),
    }
