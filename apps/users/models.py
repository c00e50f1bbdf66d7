from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.vendors.services.utils import generate_unique_filename


def avatar_upload_path(instance, filename):
    return f'avatars/{generate_unique_filename(filename, prefix="avatar")}'


def business_image_upload_path(instance, filename):
    return f'business/{generate_unique_filename(filename, prefix="business")}'


class CustomUserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user with the given email and password.
        """
        if not email:
            raise ValueError(_('The Email field must be set'))

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser with the given email and password.
        Superusers sign in through the admin portal.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('email_verified', True)
        extra_fields.setdefault('role', CustomUser.ROLE_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractBaseUser, PermissionsMixin):
    """
    Marketplace identity. One row per account; the role is fixed at sign-up.

    Vendor accounts also carry their business metadata here, while the
    approval status lives on the related ``Vendor`` record only.
    """

    ROLE_CUSTOMER = 'customer'
    ROLE_VENDOR = 'vendor'
    ROLE_ADMIN = 'admin'

    ROLE_CHOICES = (
        (ROLE_CUSTOMER, 'Customer'),
        (ROLE_VENDOR, 'Vendor'),
        (ROLE_ADMIN, 'Admin'),
    )

    email = models.EmailField(
        _('email address'),
        unique=True,
        error_messages={
            'unique': _('A user with that email already exists.'),
        },
    )
    full_name = models.CharField(_('full name'), max_length=200, blank=True)
    role = models.CharField(
        _('role'),
        max_length=10,
        choices=ROLE_CHOICES,
        default=ROLE_CUSTOMER,
        help_text=_('User role in the marketplace')
    )
    email_verified = models.BooleanField(
        _('email verified'),
        default=False,
        help_text=_('Designates whether this user has verified their email address.')
    )
    otp_code = models.CharField(
        _('OTP code'),
        max_length=6,
        blank=True,
        null=True,
        help_text=_('Temporary OTP code for verification')
    )
    otp_sent_at = models.DateTimeField(_('OTP sent at'), null=True, blank=True)

    matric_number = models.CharField(_('matric number'), max_length=50, blank=True)
    phone = models.CharField(_('phone'), max_length=20, blank=True)
    encrypted_phone = models.TextField(_('encrypted phone'), blank=True)
    avatar = models.ImageField(upload_to=avatar_upload_path, blank=True, null=True)

    # Vendor business metadata
    business_name = models.CharField(_('business name'), max_length=150, blank=True)
    brand_description = models.TextField(_('brand description'), blank=True)
    business_image = models.ImageField(upload_to=business_image_upload_path, blank=True, null=True)

    date_joined = models.DateTimeField(
        _('date joined'),
        default=timezone.now
    )
    is_staff = models.BooleanField(
        _('staff status'),
        default=False,
        help_text=_('Designates whether the user can log into the admin site.')
    )
    is_active = models.BooleanField(
        _('active'),
        default=True,
        help_text=_(
            'Designates whether this user should be treated as active. '
            'Unselect this instead of deleting accounts.'
        )
    )

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']
        db_table = 'users_customuser'

    def __str__(self):
        return self.email

    def get_full_name(self):
        """
        Return the full name, falling back to the email.
        """
        return self.full_name or self.email

    def get_short_name(self):
        """
        Return the first name or first part of email.
        """
        if self.full_name:
            return self.full_name.split()[0]
        return self.email.split('@')[0]

    @property
    def is_customer(self):
        """Check if user is a customer."""
        return self.role == self.ROLE_CUSTOMER

    @property
    def is_vendor(self):
        """Check if user is a vendor."""
        return self.role == self.ROLE_VENDOR

    @property
    def is_admin_role(self):
        """Check if user has admin role."""
        return self.role == self.ROLE_ADMIN or self.is_superuser

    @property
    def vendor_approved(self):
        """True when the linked vendor record is approved."""
        if not self.is_vendor:
            return False
        vendor = getattr(self, 'vendor', None)
        return vendor is not None and vendor.status == 'approved'


def is_admin(user):
    """Return True if ``user`` may act as a marketplace administrator."""
    return bool(user and user.is_authenticated and user.is_admin_role)
