"""
Authentication and profile views for Run Marketplace.
Location: apps/users/views.py
"""

import logging
import secrets
import string
from datetime import timedelta

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags
from django.views import View
from django.views.decorators.http import require_http_methods

from core.utils.email_service import send_marketplace_email
from .forms import (
    CustomerSignupForm,
    VendorSignupForm,
    LoginForm,
    OTPVerificationForm,
    ResendOTPForm,
    ProfileForm,
)
from .models import CustomUser

logger = logging.getLogger(__name__)

MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


# ===========================
# HELPER FUNCTIONS
# ===========================

def generate_otp(length=6):
    """
    Generate a random OTP code.

    Args:
        length (int): Length of OTP code (default: 6)

    Returns:
        str: Random numeric OTP code
    """
    return ''.join(secrets.choice(string.digits) for _ in range(length))


def send_otp_email(user, otp):
    """
    Send OTP verification email to user.

    Args:
        user (CustomUser): User instance
        otp (str): OTP code to send

    Returns:
        bool: True if email sent successfully, False otherwise
    """
    try:
        html_message = render_to_string('users/emails/otp_email.html', {
            'user': user,
            'otp': otp,
            'expiry_time': settings.OTP_EXPIRY_TIME,
        })
        send_marketplace_email(
            subject=f'Verify Your Email - {settings.SITE_NAME}',
            message=strip_tags(html_message),
            recipient_list=[user.email],
            html_message=html_message,
        )
        return True

    except Exception:
        logger.exception('Error sending OTP email to %s', user.email)
        return False


def save_otp_to_user(user, otp):
    """
    Save OTP code to user model with timestamp.
    """
    user.otp_code = otp
    user.otp_sent_at = timezone.now()
    user.save(update_fields=['otp_code', 'otp_sent_at'])


def is_otp_valid(user, otp):
    """
    Check if OTP is valid and not expired.

    Args:
        user (CustomUser): User instance
        otp (str): OTP code to validate

    Returns:
        bool: True if OTP is valid, False otherwise
    """
    if not user.otp_code or not user.otp_sent_at:
        return False
    if not secrets.compare_digest(user.otp_code, otp):
        return False

    otp_expiry = getattr(settings, 'OTP_EXPIRY_TIME', 10)
    return timezone.now() <= user.otp_sent_at + timedelta(minutes=otp_expiry)


def start_email_verification(request, user, success_message):
    """Issue a fresh OTP, remember the email in the session and go to the OTP page."""
    otp = generate_otp(getattr(settings, 'OTP_LENGTH', 6))
    save_otp_to_user(user, otp)
    request.session['verify_email'] = user.email

    if send_otp_email(user, otp):
        messages.success(request, success_message)
    else:
        messages.error(
            request,
            'We couldn\'t send the verification email. Please try resending.'
        )
    return redirect('users:verify_otp')


def redirect_for_role(user):
    """Landing page for a signed-in user."""
    if user.is_admin_role:
        return redirect('vendors:admin_dashboard')
    if user.is_vendor:
        return redirect('vendors:dashboard')
    return redirect('storefront:home')


# ===========================
# AUTHENTICATION PORTALS
# ===========================

class PortalView(View):
    """
    Sign-in (and optionally sign-up) page for one kind of account.

    A successful password check is not enough: the account's role must
    belong to this portal and its email must be verified, otherwise the
    session is cleared and the user is told where to go.
    """

    template_name = None
    signup_form_class = None
    portal_role = None
    signup_success_message = 'Registration successful! Please check your email for the verification code.'

    def wrong_portal_message(self, user):
        raise NotImplementedError

    def get(self, request):
        if request.user.is_authenticated:
            return redirect_for_role(request.user)
        return self.render_page(request)

    def post(self, request):
        if request.POST.get('action') == 'signup' and self.signup_form_class:
            return self.handle_signup(request)
        return self.handle_signin(request)

    def render_page(self, request, login_form=None, signup_form=None, active_tab='signin'):
        context = {
            'login_form': login_form or LoginForm(),
            'active_tab': active_tab,
        }
        if self.signup_form_class:
            context['signup_form'] = signup_form or self.signup_form_class()
        return render(request, self.template_name, context)

    def handle_signin(self, request):
        form = LoginForm(request=request, data=request.POST)
        if not form.is_valid():
            return self.render_page(request, login_form=form)

        user = form.get_user()

        message = self.wrong_portal_message(user)
        if message:
            logout(request)
            messages.error(request, message)
            logger.info('Refused %s sign-in for %s (role %s)', self.portal_role, user.email, user.role)
            return self.render_page(request, login_form=LoginForm())

        if not user.email_verified:
            logout(request)
            return start_email_verification(
                request, user,
                'Please verify your email before signing in. We sent you a new code.'
            )

        login(request, user, backend=MODEL_BACKEND)
        if not form.cleaned_data.get('remember_me'):
            request.session.set_expiry(0)

        messages.success(request, f'Welcome back, {user.get_short_name()}!')
        return redirect_for_role(user)

    def handle_signup(self, request):
        form = self.signup_form_class(request.POST)
        if not form.is_valid():
            return self.render_page(request, signup_form=form, active_tab='signup')

        try:
            user = form.save()
        except Exception:
            logger.exception('Sign-up failed for %s', form.cleaned_data.get('email'))
            messages.error(request, 'We could not create your account. Please try again.')
            return self.render_page(request, signup_form=form, active_tab='signup')

        logger.info('New %s account %s', user.role, user.email)
        return start_email_verification(request, user, self.signup_success_message)


class AuthView(PortalView):
    """Customer sign-in and sign-up."""

    template_name = 'users/auth.html'
    signup_form_class = CustomerSignupForm
    portal_role = CustomUser.ROLE_CUSTOMER

    def wrong_portal_message(self, user):
        if user.is_vendor:
            return 'Vendor accounts should use the Vendor Portal to sign in.'
        if user.is_admin_role:
            return 'Admin accounts should use the Admin Portal to sign in.'
        return None


class VendorAuthView(PortalView):
    """Vendor sign-in and sign-up."""

    template_name = 'users/vendor_auth.html'
    signup_form_class = VendorSignupForm
    portal_role = CustomUser.ROLE_VENDOR
    signup_success_message = (
        'Vendor account created! Verify your email, then an admin will review your account.'
    )

    def wrong_portal_message(self, user):
        if not user.is_vendor:
            return 'This account is not registered as a vendor. Please use the correct login page.'
        return None


class AdminAuthView(PortalView):
    """Admin sign-in. Admin accounts are created with createsuperuser."""

    template_name = 'users/admin_auth.html'
    portal_role = CustomUser.ROLE_ADMIN

    def wrong_portal_message(self, user):
        if not user.is_admin_role:
            return 'This account does not have admin access.'
        return None


# ===========================
# EMAIL VERIFICATION
# ===========================

class OTPVerificationView(View):
    """Handle OTP verification."""

    template_name = 'users/verify_otp.html'
    form_class = OTPVerificationForm

    def get(self, request):
        email = request.session.get('verify_email')
        if not email:
            messages.error(request, 'No verification pending. Please sign up first.')
            return redirect('users:auth')

        return render(request, self.template_name, {
            'form': self.form_class(),
            'email': email,
        })

    def post(self, request):
        email = request.session.get('verify_email')
        if not email:
            messages.error(request, 'Session expired. Please sign up again.')
            return redirect('users:auth')

        form = self.form_class(request.POST)

        if form.is_valid():
            user = CustomUser.objects.filter(email=email).first()
            if user is None:
                messages.error(request, 'User not found. Please sign up again.')
                return redirect('users:auth')

            if is_otp_valid(user, form.cleaned_data['otp_code']):
                user.email_verified = True
                user.otp_code = None
                user.save(update_fields=['email_verified', 'otp_code'])

                request.session.pop('verify_email', None)
                login(request, user, backend=MODEL_BACKEND)

                messages.success(
                    request,
                    f'Email verified successfully! Welcome to {settings.SITE_NAME}.'
                )
                if user.is_vendor and not user.vendor_approved:
                    messages.info(
                        request,
                        'Your vendor account is pending approval. You can look around your dashboard in the meantime.'
                    )
                return redirect_for_role(user)

            messages.error(
                request,
                'Invalid or expired verification code. Please try again or request a new code.'
            )

        return render(request, self.template_name, {
            'form': form,
            'email': email,
        })


class ResendOTPView(View):
    """Handle OTP resend requests."""

    template_name = 'users/resend_otp.html'
    form_class = ResendOTPForm

    def get(self, request):
        email = request.session.get('verify_email', '')
        form = self.form_class(initial={'email': email})
        return render(request, self.template_name, {'form': form})

    def post(self, request):
        form = self.form_class(request.POST)

        if form.is_valid():
            user = CustomUser.objects.get(email__iexact=form.cleaned_data['email'])
            return start_email_verification(
                request, user, 'A new verification code has been sent to your email.'
            )

        return render(request, self.template_name, {'form': form})


@require_http_methods(["GET", "POST"])
def logout_view(request):
    """Handle user logout."""
    if request.user.is_authenticated:
        user_name = request.user.get_short_name()
        logout(request)
        messages.success(request, f'Goodbye, {user_name}! You have been signed out.')

    return redirect('storefront:home')


# ===========================
# PROFILE
# ===========================

@login_required
def profile_view(request):
    """View and update the signed-in user's profile."""
    user = request.user

    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=user)
        if form.is_valid():
            try:
                form.save()
            except Exception:
                logger.exception('Profile update failed for %s', user.email)
                messages.error(request, 'Could not update your profile. Please try again.')
            else:
                messages.success(request, 'Profile updated successfully.')
                return redirect('users:profile')
    else:
        form = ProfileForm(instance=user)

    wishlist_items = (
        user.wishlist_items.select_related('product', 'product__vendor')
        .prefetch_related('product__images')
    )

    return render(request, 'users/profile.html', {
        'form': form,
        'wishlist_items': wishlist_items,
    })
