from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from core.utils.email_service import send_marketplace_email

# Sample contexts for previewing the marketplace's HTML emails
EMAIL_PREVIEWS = {
    "otp": (
        "users/emails/otp_email.html",
        {"user": {"get_short_name": "Ada"}, "otp": "123456", "expiry_time": 10},
    ),
    "vendor_approved": (
        "vendors/emails/vendor_approved.html",
        {"vendor": {"business_name": "Sample Store"}, "vendor_name": "Ada Obi"},
    ),
    "vendor_suspended": (
        "vendors/emails/vendor_suspended.html",
        {"vendor": {"business_name": "Sample Store"}, "vendor_name": "Ada Obi"},
    ),
}


class Command(BaseCommand):
    help = "Send a test email, optionally rendering one of the marketplace email templates."

    def add_arguments(self, parser):
        parser.add_argument("to", help="Recipient email address")
        parser.add_argument(
            "--subject",
            default=f"{settings.SITE_NAME} test email",
            help="Email subject",
        )
        parser.add_argument(
            "--message",
            default=f"This is a test email sent from {settings.SITE_NAME}.",
            help="Plain-text body (ignored with --template)",
        )
        parser.add_argument(
            "--template",
            choices=sorted(EMAIL_PREVIEWS),
            help="Send a preview of this email template with sample data",
        )

    def handle(self, *args, **options):
        if settings.EMAIL_BACKEND.endswith("smtp.EmailBackend") and not settings.EMAIL_HOST_PASSWORD:
            raise CommandError(
                "EMAIL_HOST_PASSWORD is not set. "
                "Set it in your environment or in your .env file."
            )

        html_message = None
        message = options["message"]
        if options["template"]:
            template_name, context = EMAIL_PREVIEWS[options["template"]]
            context = {
                **context,
                "dashboard_url": f"{settings.SITE_URL}/vendor-dashboard/",
                "support_email": settings.SUPPORT_EMAIL,
            }
            html_message = render_to_string(template_name, context)
            message = strip_tags(html_message)

        to_email = options["to"]
        try:
            send_marketplace_email(
                subject=options["subject"],
                message=message,
                recipient_list=[to_email],
                html_message=html_message,
            )
        except Exception as exc:
            raise CommandError(f"Email send failed: {exc}") from exc

        self.stdout.write(self.style.SUCCESS(f"Test email sent to {to_email}"))
