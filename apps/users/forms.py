"""
Forms for Run Marketplace authentication, registration and profiles.
Location: apps/users/forms.py
"""

import logging

from django import forms
from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.forms import BaseUserCreationForm
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from apps.vendors.services.utils import encrypt_phone
from .models import CustomUser

logger = logging.getLogger(__name__)


class BaseSignupForm(forms.ModelForm):
    """
    Base signup form with shared logic for customers and vendors.
    Handles email uniqueness and password validation.
    """
    email = forms.EmailField(
        label=_('Email Address'),
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'Enter your email address',
            'autocomplete': 'email',
        }),
        error_messages={
            'required': _('Email address is required.'),
            'invalid': _('Enter a valid email address.'),
        }
    )

    password1 = forms.CharField(
        label=_('Password'),
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Create a password',
            'autocomplete': 'new-password',
        }),
        error_messages={
            'required': _('Password is required.'),
        }
    )

    password2 = forms.CharField(
        label=_('Confirm Password'),
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Re-enter your password',
            'autocomplete': 'new-password',
        }),
        error_messages={
            'required': _('Please confirm your password.'),
        }
    )

    role = CustomUser.ROLE_CUSTOMER

    class Meta:
        model = CustomUser
        fields = ['full_name', 'email']
        widgets = {
            'full_name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Your full name',
                'autocomplete': 'name',
            }),
        }

    def clean_email(self):
        """Validate email uniqueness."""
        email = self.cleaned_data.get('email', '').lower().strip()

        if CustomUser.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                _('An account with this email already exists. Please sign in instead.')
            )

        return email

    def clean_password1(self):
        """Validate password length and the configured validators."""
        password = self.cleaned_data.get('password1')
        min_length = getattr(settings, 'PASSWORD_MIN_LENGTH', 6)

        if len(password) < min_length:
            raise ValidationError(
                _('Password must be at least %(min)d characters.') % {'min': min_length}
            )

        validate_password(password)
        return password

    def clean(self):
        """Validate that passwords match."""
        cleaned_data = super().clean()
        password1 = cleaned_data.get('password1')
        password2 = cleaned_data.get('password2')

        if password1 and password2 and password1 != password2:
            raise ValidationError({
                'password2': _('Passwords do not match.')
            })

        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        user.role = self.role
        user.set_password(self.cleaned_data['password1'])

        if commit:
            user.save()

        return user


class CustomerSignupForm(BaseSignupForm):
    """
    Signup form for customers.
    """
    role = CustomUser.ROLE_CUSTOMER


class VendorSignupForm(BaseSignupForm):
    """
    Signup form for vendors.

    Saving creates the account and, through the post_save signal, its
    pending vendor record in one transaction.
    """
    role = CustomUser.ROLE_VENDOR

    class Meta(BaseSignupForm.Meta):
        fields = ['full_name', 'email', 'matric_number', 'business_name', 'phone']
        widgets = {
            'full_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Your full name'}),
            'matric_number': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Matric number'}),
            'business_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Business name'}),
            'phone': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'WhatsApp number e.g. 08031234567'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ('full_name', 'business_name', 'phone'):
            self.fields[name].required = True

    def clean_business_name(self):
        business_name = self.cleaned_data.get('business_name', '').strip()
        if not business_name:
            raise ValidationError(_('Business name is required.'))
        return business_name

    def save(self, commit=True):
        user = super().save(commit=False)

        try:
            user.encrypted_phone = encrypt_phone(user.phone)
        except Exception:
            logger.exception('Phone encryption failed for %s', user.email)
            user.encrypted_phone = ''

        if commit:
            with transaction.atomic():
                user.save()

        return user


class LoginForm(forms.Form):
    """
    Login form using email and password (no username).
    Portal and verification checks happen in the view.
    """
    email = forms.EmailField(
        label=_('Email Address'),
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'Enter your email address',
            'autocomplete': 'email',
            'autofocus': True,
        }),
        error_messages={
            'required': _('Email address is required.'),
            'invalid': _('Enter a valid email address.'),
        }
    )

    password = forms.CharField(
        label=_('Password'),
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Enter your password',
            'autocomplete': 'current-password',
        }),
        error_messages={
            'required': _('Password is required.'),
        }
    )

    remember_me = forms.BooleanField(
        label=_('Remember Me'),
        required=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input',
        })
    )

    def __init__(self, request=None, *args, **kwargs):
        """Initialize form with request object for authentication."""
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        """Validate user credentials."""
        cleaned_data = super().clean()
        email = cleaned_data.get('email', '').lower().strip()
        password = cleaned_data.get('password')

        if email and password:
            self.user_cache = authenticate(
                self.request,
                username=email,
                password=password
            )

            if self.user_cache is None:
                raise ValidationError(
                    _('Invalid email or password. Please try again.')
                )

            if not self.user_cache.is_active:
                raise ValidationError(
                    _('This account has been deactivated. Please contact support.')
                )

        return cleaned_data

    def get_user(self):
        """Return authenticated user."""
        return self.user_cache


class OTPVerificationForm(forms.Form):
    """
    Form for OTP-based email verification.
    Accepts a numeric code of OTP_LENGTH digits.
    """
    otp_code = forms.CharField(
        label=_('Verification Code'),
        widget=forms.TextInput(attrs={
            'class': 'form-control text-center',
            'autocomplete': 'off',
            'inputmode': 'numeric',
        }),
        error_messages={
            'required': _('Verification code is required.'),
        }
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.otp_length = getattr(settings, 'OTP_LENGTH', 6)

        field = self.fields['otp_code']
        field.help_text = _('Enter the %(length)d-digit code sent to your email.') % {'length': self.otp_length}
        field.widget.attrs.update({
            'placeholder': '0' * self.otp_length,
            'maxlength': str(self.otp_length),
            'pattern': '[0-9]{%d}' % self.otp_length,
        })

    def clean_otp_code(self):
        """Validate OTP format."""
        otp_code = self.cleaned_data.get('otp_code', '').strip()

        if not otp_code.isdigit():
            raise ValidationError(
                _('Verification code must contain only numbers.')
            )
        if len(otp_code) != self.otp_length:
            raise ValidationError(
                _('Verification code must be %(length)d digits.') % {'length': self.otp_length}
            )

        return otp_code


class ResendOTPForm(forms.Form):
    """
    Simple form to resend OTP to user's email.
    """
    email = forms.EmailField(
        label=_('Email Address'),
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'Enter your email address',
            'autocomplete': 'email',
        }),
        error_messages={
            'required': _('Email address is required.'),
            'invalid': _('Enter a valid email address.'),
        }
    )

    def clean_email(self):
        """Validate that an unverified user exists."""
        email = self.cleaned_data.get('email', '').lower().strip()

        user = CustomUser.objects.filter(email__iexact=email).first()
        if user is None:
            raise ValidationError(
                _('No account found with this email address.')
            )
        if user.email_verified:
            raise ValidationError(
                _('This email is already verified. You can sign in now.')
            )

        return email


class ProfileForm(forms.ModelForm):
    """
    Editable profile fields. Business fields are dropped for non-vendors.
    """

    class Meta:
        model = CustomUser
        fields = ['full_name', 'phone', 'business_name', 'brand_description']
        widgets = {
            'full_name': forms.TextInput(attrs={'class': 'form-control'}),
            'phone': forms.TextInput(attrs={'class': 'form-control'}),
            'business_name': forms.TextInput(attrs={'class': 'form-control'}),
            'brand_description': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.instance.is_vendor:
            del self.fields['business_name']
            del self.fields['brand_description']

    def save(self, commit=True):
        """Save the profile and copy contact details onto the vendor record."""
        user = super().save(commit=False)
        if 'phone' in self.changed_data:
            try:
                user.encrypted_phone = encrypt_phone(user.phone)
            except Exception:
                logger.exception('Phone encryption failed for %s', user.email)

        if commit:
            with transaction.atomic():
                user.save()
                vendor = getattr(user, 'vendor', None) if user.is_vendor else None
                if vendor is not None:
                    vendor.whatsapp_number = user.phone
                    vendor.encrypted_whatsapp = user.encrypted_phone
                    if user.business_name:
                        vendor.business_name = user.business_name
                    vendor.save(update_fields=[
                        'whatsapp_number', 'encrypted_whatsapp', 'business_name', 'updated_at'
                    ])

        return user


class AdminUserCreationForm(BaseUserCreationForm):
    """
    User creation form for the Django admin (email instead of username).
    """

    class Meta:
        model = CustomUser
        fields = ('email', 'full_name', 'role', 'email_verified')
