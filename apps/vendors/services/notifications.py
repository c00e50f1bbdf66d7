"""
Notification Service
Handles email notifications for vendors and admins

Environment Variables:
- EMAIL_BACKEND (default: console backend)
- EMAIL_HOST, EMAIL_PORT, EMAIL_HOST_USER, EMAIL_HOST_PASSWORD
- USE_MOCK_NOTIFICATIONS (set to 'True' to only log outgoing mail)
"""

import logging
from typing import Dict, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from core.utils.email_service import send_marketplace_email

logger = logging.getLogger(__name__)


class EmailService:
    """
    Email service on top of Django's email backend
    """

    @property
    def use_mock(self) -> bool:
        return getattr(settings, 'USE_MOCK_NOTIFICATIONS', False)

    def send_email(
        self,
        to_email: str,
        subject: str,
        message: str,
        html_message: Optional[str] = None,
    ) -> bool:
        """
        Send email using Django's email backend

        Args:
            to_email: Recipient email
            subject: Email subject
            message: Plain text message
            html_message: HTML message (optional)

        Returns:
            True if sent successfully, False otherwise
        """
        if self.use_mock:
            return self._mock_send_email(to_email, subject, message)

        try:
            send_marketplace_email(
                subject=subject,
                message=message,
                recipient_list=[to_email],
                html_message=html_message,
            )
            logger.info('Email sent to %s: %s', to_email, subject)
            return True

        except Exception as e:
            logger.error('Email send error: %s', e)
            return False

    def send_template_email(
        self,
        to_email: str,
        subject: str,
        template_name: str,
        context: Dict
    ) -> bool:
        """
        Send email rendered from a Django template

        Args:
            to_email: Recipient email
            subject: Email subject
            template_name: Template path (e.g., 'vendors/emails/vendor_approved.html')
            context: Template context data

        Returns:
            True if sent successfully
        """
        try:
            html_message = render_to_string(template_name, context)
        except Exception as e:
            logger.error('Template email error: %s', e)
            return False

        return self.send_email(
            to_email=to_email,
            subject=subject,
            message=strip_tags(html_message),
            html_message=html_message
        )

    def _mock_send_email(self, to_email: str, subject: str, message: str) -> bool:
        """Mock email sending for local runs"""
        logger.info('[MOCK EMAIL] To: %s | Subject: %s', to_email, subject)
        logger.info('[MOCK EMAIL] Message: %s...', message[:100])
        return True


class NotificationService:
    """
    Vendor lifecycle notifications. Every method is best-effort and
    returns False instead of raising.
    """

    def __init__(self):
        self.email = EmailService()

    # ==========================================
    # VENDOR STATUS NOTIFICATIONS
    # ==========================================

    def _send_status_email(self, vendor, subject: str, template_name: str) -> bool:
        return self.email.send_template_email(
            to_email=vendor.user.email,
            subject=subject,
            template_name=template_name,
            context={
                'vendor': vendor,
                'vendor_name': vendor.user.get_full_name(),
                'dashboard_url': f'{settings.SITE_URL}/vendor-dashboard/',
                'support_email': getattr(settings, 'SUPPORT_EMAIL', ''),
            }
        )

    def send_vendor_approved(self, vendor) -> bool:
        """
        Send email when an admin approves a vendor

        Args:
            vendor: Vendor instance
        """
        return self._send_status_email(
            vendor, 'Your Vendor Account is Approved! 🎉', 'vendors/emails/vendor_approved.html'
        )

    def send_vendor_suspended(self, vendor) -> bool:
        """Send email when an admin suspends a vendor"""
        return self._send_status_email(
            vendor, 'Your Vendor Account Has Been Suspended', 'vendors/emails/vendor_suspended.html'
        )

    def send_vendor_reactivated(self, vendor) -> bool:
        """Send email when a suspended vendor is reactivated"""
        return self._send_status_email(
            vendor, 'Your Vendor Account Has Been Reactivated', 'vendors/emails/vendor_approved.html'
        )

    def send_status_change(self, vendor, previous_status: str) -> bool:
        """Dispatch the email matching a vendor status change."""
        if vendor.status == 'suspended':
            return self.send_vendor_suspended(vendor)
        if vendor.status == 'approved' and previous_status == 'suspended':
            return self.send_vendor_reactivated(vendor)
        if vendor.status == 'approved':
            return self.send_vendor_approved(vendor)
        return False

    # ==========================================
    # ADMIN NOTIFICATIONS
    # ==========================================

    def notify_admin_new_vendor(self, vendor) -> bool:
        """
        Notify admins that a vendor signed up and is waiting for review
        """
        User = get_user_model()
        admin_emails = list(
            User.objects.filter(role=User.ROLE_ADMIN, is_active=True).values_list('email', flat=True)
        )
        if not admin_emails:
            return False

        message = f"""
A new vendor has registered and is waiting for approval.

Business: {vendor.business_name}
Contact: {vendor.user.get_full_name()} <{vendor.user.email}>
Email verified: {vendor.user.email_verified}

Review in the admin dashboard: {settings.SITE_URL}/admin-dashboard/

Best regards,
Run Marketplace System
"""
        sent = True
        for admin_email in admin_emails:
            sent = self.email.send_email(
                to_email=admin_email,
                subject=f'New vendor pending approval: {vendor.business_name}',
                message=message,
            ) and sent
        return sent


# Singleton instance
notification_service = NotificationService()
