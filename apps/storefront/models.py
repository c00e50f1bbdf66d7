"""
Storefront App Models
Customer-side data: server wishlist and purchase requests
"""

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


# ==========================================
# WISHLIST
# ==========================================

class WishlistItem(models.Model):
    """
    A product saved by a signed-in user.
    Anonymous visitors keep theirs in a cookie instead (see wishlist.py).
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='wishlist_items'
    )
    product = models.ForeignKey(
        'vendors.Product',
        on_delete=models.CASCADE,
        related_name='wishlisted_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'storefront_wishlist_items'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_wishlist_item'),
        ]

    def __str__(self):
        return f"{self.user.email} ♥ {self.product.name}"


# ==========================================
# PURCHASE REQUESTS
# ==========================================

class Purchase(models.Model):
    """
    Purchase request captured from the product page.
    No payment is taken; the vendor follows up with the customer.
    """

    PAYMENT_CASH_ON_DELIVERY = 'cash_on_delivery'
    PAYMENT_BANK_TRANSFER = 'bank_transfer'
    PAYMENT_MOBILE_MONEY = 'mobile_money'

    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_CASH_ON_DELIVERY, 'Cash on Delivery'),
        (PAYMENT_BANK_TRANSFER, 'Bank Transfer'),
        (PAYMENT_MOBILE_MONEY, 'Mobile Money'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_CONTACTED = 'contacted'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_CONTACTED, 'Contacted'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='purchases'
    )
    product = models.ForeignKey(
        'vendors.Product',
        on_delete=models.SET_NULL,
        null=True,
        related_name='purchases'
    )
    vendor = models.ForeignKey(
        'vendors.Vendor',
        on_delete=models.CASCADE,
        related_name='purchases'
    )

    # Customer contact
    customer_name = models.CharField(max_length=150)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20)
    delivery_address = models.TextField()

    payment_method = models.CharField(
        max_length=20,
        choices=PAYMENT_METHOD_CHOICES,
        default=PAYMENT_CASH_ON_DELIVERY
    )
    notes = models.TextField(blank=True)

    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(99)]
    )
    # Whole Naira, unit price x quantity at the time of the request
    total_price_naira = models.PositiveIntegerField()

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'storefront_purchases'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['vendor', 'status'], name='purchase_vendor_status_idx'),
        ]

    def __str__(self):
        return f"{self.customer_name} - {self.quantity} x {self.product.name if self.product else 'deleted product'}"
