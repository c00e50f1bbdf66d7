"""
Vendor App Models
Catalog reference data, vendors with their approval workflow, products
with their availability lifecycle, and engagement analytics.
"""

import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.db.models import F
from django.urls import reverse
from django.utils import timezone

from .services.utils import (
    generate_unique_filename,
    generate_unique_slug,
    vendor_slug_from_business_name,
)

logger = logging.getLogger(__name__)


def category_image_upload_path(instance, filename):
    return f'categories/{generate_unique_filename(filename)}'


def brand_logo_upload_path(instance, filename):
    return f'brands/{generate_unique_filename(filename, prefix="logo")}'


def vendor_logo_upload_path(instance, filename):
    return f'vendors/logos/{generate_unique_filename(filename, prefix="logo")}'


def vendor_banner_upload_path(instance, filename):
    return f'vendors/banners/{generate_unique_filename(filename, prefix="banner")}'


def product_image_upload_path(instance, filename):
    return f'products/{generate_unique_filename(filename)}'


# ==========================================
# CATEGORIES & BRANDS
# ==========================================

class Category(models.Model):
    """
    Product categories (admin-managed)
    Examples: Men's Fashion, Electronics, Food & Groceries
    """
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=120, unique=True)
    description = models.TextField(blank=True)
    icon = models.CharField(max_length=16, blank=True, help_text="Emoji shown on the category grid")
    image_url = models.URLField(blank=True)
    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children'
    )
    sort_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(Category, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('storefront:category_detail', kwargs={'slug': self.slug})


class Brand(models.Model):
    """
    Brands; vendors get one named after their business
    """
    name = models.CharField(max_length=150, unique=True)
    slug = models.SlugField(max_length=170, unique=True)
    description = models.TextField(blank=True)
    logo = models.ImageField(upload_to=brand_logo_upload_path, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Brand"
        verbose_name_plural = "Brands"
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(Brand, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('storefront:brand_detail', kwargs={'slug': self.slug})


# ==========================================
# VENDOR
# ==========================================

class VendorStatusError(Exception):
    """Raised when a vendor status change is not allowed."""
    pass


class Vendor(models.Model):
    """
    Seller account attached to a vendor-role user.

    ``status`` is the only place approval is recorded. It changes only
    through ``transition_to`` and the approve/suspend/unsuspend helpers.
    """

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_SUSPENDED = 'suspended'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending Approval'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_SUSPENDED, 'Suspended'),
    ]

    STATUS_TRANSITIONS = {
        STATUS_PENDING: [STATUS_APPROVED],
        STATUS_APPROVED: [STATUS_SUSPENDED],
        STATUS_SUSPENDED: [STATUS_APPROVED],
    }

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vendor'
    )

    # Business Info
    business_name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=170, unique=True)
    description = models.TextField(blank=True)

    # Contact
    whatsapp_number = models.CharField(max_length=20, blank=True, help_text="Number customers order through")
    encrypted_whatsapp = models.TextField(blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    # Branding
    logo = models.ImageField(upload_to=vendor_logo_upload_path, blank=True, null=True)
    banner = models.ImageField(upload_to=vendor_banner_upload_path, blank=True, null=True)

    # Social Links (Public)
    instagram_url = models.URLField(blank=True)
    facebook_url = models.URLField(blank=True)
    twitter_url = models.URLField(blank=True)
    tiktok_url = models.URLField(blank=True)
    website_url = models.URLField(blank=True)

    # Admin Review
    approved_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_vendors'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Vendor"
        verbose_name_plural = "Vendors"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='vendor_status_idx'),
        ]

    def __str__(self):
        return f"{self.business_name} - {self.status}"

    def save(self, *args, **kwargs):
        if not self.slug:
            base = vendor_slug_from_business_name(self.business_name, self.user_id)
            self.slug = generate_unique_slug(Vendor, base, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    @classmethod
    def get_or_create_for_user(cls, user):
        """
        Vendor record for a vendor-role user, created as pending from the
        user's business details when missing.
        """
        vendor, created = cls.objects.get_or_create(
            user=user,
            defaults={
                'business_name': user.business_name or user.get_full_name(),
                'description': user.brand_description,
                'whatsapp_number': user.phone,
                'encrypted_whatsapp': user.encrypted_phone,
            }
        )
        if created:
            logger.info('Vendor record created for %s', user.email)
        return vendor

    @property
    def is_approved(self):
        return self.status == self.STATUS_APPROVED

    @property
    def is_pending(self):
        return self.status == self.STATUS_PENDING

    @property
    def is_suspended(self):
        return self.status == self.STATUS_SUSPENDED

    def can_transition_to(self, new_status):
        return new_status in self.STATUS_TRANSITIONS.get(self.status, [])

    def transition_to(self, new_status, actor, expected_status=None):
        """
        Move the vendor to ``new_status`` on behalf of an admin ``actor``.

        The row is locked while the current status is re-read, so two admins
        acting on the same vendor cannot interleave.

        Raises:
            PermissionDenied: actor is not an admin
            VendorStatusError: transition not allowed from the stored status,
                the stored status is not ``expected_status``, or the vendor
                has not verified their email (approval only)
        """
        from apps.users.models import is_admin

        if not is_admin(actor):
            raise PermissionDenied('Only administrators can change vendor status.')

        with transaction.atomic():
            locked = (
                Vendor.objects.select_for_update()
                .select_related('user')
                .get(pk=self.pk)
            )
            previous = locked.status

            if expected_status is not None and previous != expected_status:
                raise VendorStatusError(
                    f'Vendor is {previous}, expected {expected_status}.'
                )
            if not locked.can_transition_to(new_status):
                raise VendorStatusError(
                    f'Cannot change vendor status from {previous} to {new_status}.'
                )
            if new_status == self.STATUS_APPROVED and not locked.user.email_verified:
                raise VendorStatusError(
                    'Vendor must verify their email before approval.'
                )

            now = timezone.now()
            locked.status = new_status
            locked.reviewed_by = actor
            locked.reviewed_at = now
            update_fields = ['status', 'reviewed_by', 'reviewed_at', 'updated_at']
            if new_status == self.STATUS_APPROVED:
                locked.approved_at = now
                update_fields.append('approved_at')
            locked.save(update_fields=update_fields)

        for field in ('status', 'reviewed_by', 'reviewed_at', 'approved_at', 'updated_at'):
            setattr(self, field, getattr(locked, field))

        logger.info(
            'Vendor %s status %s -> %s by %s', self.pk, previous, new_status, actor.email
        )
        return previous

    def approve(self, actor):
        """pending -> approved"""
        return self.transition_to(self.STATUS_APPROVED, actor, expected_status=self.STATUS_PENDING)

    def suspend(self, actor):
        """approved -> suspended"""
        return self.transition_to(self.STATUS_SUSPENDED, actor, expected_status=self.STATUS_APPROVED)

    def unsuspend(self, actor):
        """suspended -> approved"""
        return self.transition_to(self.STATUS_APPROVED, actor, expected_status=self.STATUS_SUSPENDED)

    @property
    def social_links(self):
        """(label, url) pairs for the links the vendor has filled in."""
        links = [
            ('Instagram', self.instagram_url),
            ('Facebook', self.facebook_url),
            ('Twitter', self.twitter_url),
            ('TikTok', self.tiktok_url),
            ('Website', self.website_url),
        ]
        return [(label, url) for label, url in links if url]


# ==========================================
# PRODUCTS
# ==========================================

class ProductQuerySet(models.QuerySet):

    def public(self):
        """Products customers can see: active and not archived."""
        return self.filter(status=Product.STATUS_ACTIVE, is_archived=False)

    def featured(self):
        return self.public().filter(featured=True)


class Product(models.Model):
    """
    A vendor's catalog item, priced in whole Naira.

    Stock changes go through ``update_stock_quantity`` so that status and
    quantity never disagree: positive stock means active, zero means
    out_of_stock. ``inactive`` is only set by staff and hides the product.
    """

    STATUS_ACTIVE = 'active'
    STATUS_OUT_OF_STOCK = 'out_of_stock'
    STATUS_INACTIVE = 'inactive'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_OUT_OF_STOCK, 'Out of Stock'),
        (STATUS_INACTIVE, 'Inactive'),
    ]

    vendor = models.ForeignKey(Vendor, on_delete=models.CASCADE, related_name='products')
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )
    brand = models.ForeignKey(
        Brand,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )

    # Basic Info
    name = models.CharField(max_length=200)
    slug = models.SlugField(unique=True, max_length=250)
    description = models.TextField(blank=True)

    # Pricing & Inventory
    price_naira = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    stock_quantity = models.PositiveIntegerField(default=1)

    # Status
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    is_archived = models.BooleanField(default=False)
    featured = models.BooleanField(default=False)

    # Vendor-reported sales
    manual_purchases = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = "Product"
        verbose_name_plural = "Products"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['vendor', 'status'], name='product_vendor_status_idx'),
            models.Index(fields=['status', 'is_archived'], name='product_public_idx'),
            models.Index(fields=['category', 'status'], name='product_category_status_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(Product, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('storefront:product_detail', kwargs={'slug': self.slug})

    @property
    def primary_image(self):
        """First image by sort order, or None."""
        images = list(self.images.all()[:1])
        return images[0] if images else None

    @property
    def is_public(self):
        return self.status == self.STATUS_ACTIVE and not self.is_archived

    @property
    def is_in_stock(self):
        return self.status == self.STATUS_ACTIVE

    # ==========================================
    # AVAILABILITY LIFECYCLE
    # ==========================================

    def update_stock_quantity(self, quantity):
        """
        Set the stock level and derive the status from it.

        Raises:
            ValidationError: negative quantity
        """
        quantity = int(quantity)
        if quantity < 0:
            raise ValidationError('Stock quantity cannot be negative.')

        self.stock_quantity = quantity
        self.status = self.STATUS_ACTIVE if quantity > 0 else self.STATUS_OUT_OF_STOCK
        self.save(update_fields=['stock_quantity', 'status', 'updated_at'])

    def mark_sold_out(self):
        self.update_stock_quantity(0)

    def mark_in_stock(self):
        self.update_stock_quantity(max(self.stock_quantity, 1))

    def mark_as_sold(self):
        """
        Record a sale the vendor completed outside the platform.
        Status and stock are left alone.
        """
        with transaction.atomic():
            Product.objects.filter(pk=self.pk).update(manual_purchases=F('manual_purchases') + 1)
            AnalyticsEvent.objects.create(
                event_type=AnalyticsEvent.MANUAL_PURCHASE,
                product=self,
                vendor_id=self.vendor_id,
            )
        self.refresh_from_db(fields=['manual_purchases'])

    def toggle_archived(self):
        self.is_archived = not self.is_archived
        self.save(update_fields=['is_archived', 'updated_at'])
        return self.is_archived


class ProductImage(models.Model):
    """
    Multiple images per product; the lowest sort_order is the primary one
    """
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='images')
    image = models.ImageField(upload_to=product_image_upload_path)
    alt_text = models.CharField(max_length=200, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Product Image"
        verbose_name_plural = "Product Images"
        ordering = ['sort_order', 'created_at']

    def __str__(self):
        return f"{self.product.name} - Image {self.sort_order}"


# ==========================================
# ANALYTICS
# ==========================================

class AnalyticsEvent(models.Model):
    """
    Append-only engagement record. Dashboards count these at read time.
    """
    VIEW = 'view'
    ORDER_CLICK = 'order_click'
    MANUAL_PURCHASE = 'manual_purchase'

    EVENT_TYPE_CHOICES = [
        (VIEW, 'View'),
        (ORDER_CLICK, 'Order Click'),
        (MANUAL_PURCHASE, 'Manual Purchase'),
    ]

    event_type = models.CharField(max_length=20, choices=EVENT_TYPE_CHOICES)
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='analytics_events'
    )
    vendor = models.ForeignKey(Vendor, on_delete=models.CASCADE, related_name='analytics_events')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Analytics Event"
        verbose_name_plural = "Analytics Events"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['vendor', 'event_type'], name='analytics_vendor_type_idx'),
        ]

    def __str__(self):
        return f"{self.event_type} - {self.product_id} @ {self.created_at:%Y-%m-%d %H:%M}"
