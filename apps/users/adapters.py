"""
allauth adapter for Run Marketplace.
Location: apps/users/adapters.py

Every sign-in that goes through allauth (social logins, email
confirmation, password reset) ends in ``login()``. The checks the
sign-in portals make are repeated there, before any session exists.
"""

import logging

from allauth.account.adapter import DefaultAccountAdapter
from allauth.core.exceptions import ImmediateHttpResponse
from django.contrib import messages
from django.shortcuts import redirect

from .views import start_email_verification

logger = logging.getLogger(__name__)


class MarketplaceAccountAdapter(DefaultAccountAdapter):

    def login(self, request, user):
        """
        Refuse admin accounts (they sign in on the Admin Portal) and
        route unverified accounts to OTP verification.

        Raises:
            ImmediateHttpResponse: carrying the redirect when refused
        """
        if user.is_admin_role:
            logger.info('Refused allauth sign-in for admin account %s', user.email)
            messages.error(request, 'Admin accounts should use the Admin Portal to sign in.')
            raise ImmediateHttpResponse(redirect('users:admin_auth'))

        if not user.email_verified:
            logger.info('Routing unverified allauth sign-in for %s to verification', user.email)
            raise ImmediateHttpResponse(start_email_verification(
                request, user,
                'Please verify your email before signing in. We sent you a new code.'
            ))

        super().login(request, user)
