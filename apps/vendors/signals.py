"""
Vendor App Signals
Create vendor records for vendor accounts and send status notifications
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Vendor
from .services import notification_service

User = get_user_model()
logger = logging.getLogger(__name__)


# ==========================================
# USER SIGNALS (CREATE VENDOR)
# ==========================================

@receiver(post_save, sender=User)
def create_vendor_for_vendor_users(sender, instance, created, **kwargs):
    """
    Create the pending Vendor record when a vendor User is created.
    Runs inside the same transaction as the user insert.
    """
    if created and instance.role == User.ROLE_VENDOR:
        Vendor.get_or_create_for_user(instance)


# ==========================================
# VENDOR STATUS SIGNALS
# ==========================================

@receiver(pre_save, sender=Vendor)
def remember_previous_status(sender, instance, **kwargs):
    if instance.pk:
        instance._previous_status = (
            Vendor.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
        )
    else:
        instance._previous_status = None


@receiver(post_save, sender=Vendor)
def send_vendor_notifications(sender, instance, created, **kwargs):
    """
    New vendors are announced to admins; status changes are emailed to
    the vendor once the transaction commits.
    """
    if created:
        transaction.on_commit(lambda: notification_service.notify_admin_new_vendor(instance))
        return

    previous = getattr(instance, '_previous_status', None)
    if previous and previous != instance.status:
        logger.info('Queueing status email for vendor %s (%s -> %s)', instance.pk, previous, instance.status)
        transaction.on_commit(lambda: notification_service.send_status_change(instance, previous))
