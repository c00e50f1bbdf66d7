from __future__ import annotations

from typing import Iterable, List, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives


def _clean_recipients(recipient_list: Iterable[str]) -> List[str]:
    return [str(r).strip() for r in recipient_list if str(r).strip()]


def send_marketplace_email(
    subject: str,
    message: str,
    recipient_list: Iterable[str],
    html_message: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> int:
    """
    Send a marketplace email through Django's configured email backend.

    - Sent from `settings.DEFAULT_FROM_EMAIL`
    - Replies go to `reply_to`, else `settings.SUPPORT_EMAIL` when set
    - `html_message` is attached as a text/html alternative
    - Raises if sending fails or the backend reports nothing sent
    - Returns the number of messages sent
    """
    if not subject or not isinstance(subject, str):
        raise ValueError("subject must be a non-empty string")

    if message is None or not isinstance(message, str):
        raise ValueError("message must be a string")

    if recipient_list is None:
        raise ValueError("recipient_list must be provided")

    # Subjects must be a single line
    subject = " ".join(subject.splitlines()).strip()

    recipients = _clean_recipients(recipient_list)
    if not recipients:
        raise ValueError("recipient_list must contain at least one email address")

    reply_address = reply_to or getattr(settings, "SUPPORT_EMAIL", "")

    email = EmailMultiAlternatives(
        subject=subject,
        body=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=recipients,
        reply_to=[reply_address] if reply_address else None,
    )
    if html_message:
        email.attach_alternative(html_message, "text/html")

    sent_count = email.send(fail_silently=False)
    if sent_count < 1:
        raise RuntimeError("Email was not sent (backend returned 0).")

    return sent_count
