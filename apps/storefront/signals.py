"""
Storefront signals
"""

import logging

from django.conf import settings
from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .wishlist import LocalWishlist, merge_into_account

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def merge_local_wishlist_on_login(sender, request, user, **kwargs):
    """
    Copy the browser wishlist into the account on sign-in.
    Off unless WISHLIST_MERGE_ON_LOGIN is set; the cookie is left in place
    because the response is not available here.
    """
    if not getattr(settings, 'WISHLIST_MERGE_ON_LOGIN', False) or request is None:
        return

    local = LocalWishlist(request)
    if not local.ids:
        return

    try:
        merge_into_account(user, local)
    except Exception:
        logger.exception('Wishlist merge on login failed for user %s', user.pk)
