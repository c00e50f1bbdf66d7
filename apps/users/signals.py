import logging

from django.dispatch import receiver
from allauth.account.signals import user_signed_up

from .models import CustomUser

logger = logging.getLogger(__name__)


def _assign_role_from_request(request, user):
    """Helper that inspects the request and assigns user.role.

    Uses simple substring checks (case-insensitive) on the request path
    and the `next` GET parameter.
    """
    path = (getattr(request, 'path', '') or '').lower()
    query = getattr(request, 'GET', None)
    next_url = ((query.get('next', '') if query is not None else '') or '').lower()

    if 'vendor' in path or 'vendor' in next_url:
        user.role = CustomUser.ROLE_VENDOR
    else:
        user.role = CustomUser.ROLE_CUSTOMER

    logger.info("Assigned role '%s' to %s (path=%s, next=%s)", user.role, user.email, path, next_url)
    user.save(update_fields=['role'])


@receiver(user_signed_up)
def assign_role_on_account_signup(request, user, **kwargs):
    """Role assignment for accounts created through allauth (including social)."""
    if request is None:
        logger.info("No request available; left role as '%s' for %s", user.role, user.email)
        return

    _assign_role_from_request(request, user)
