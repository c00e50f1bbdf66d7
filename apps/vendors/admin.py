"""
Vendor App Django Admin
Provides admin interface for vendors, catalog data and analytics
"""

from django.contrib import admin
from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.db.models import Count, Q
from django.utils.html import format_html

from .models import (
    Category, Brand, Vendor, Product, ProductImage, AnalyticsEvent, VendorStatusError
)
from .services.utils import decrypt_phone, format_naira, mask_sensitive_info, truncate_text


# ==========================================
# INLINE ADMIN CLASSES
# ==========================================

class ProductImageInline(admin.TabularInline):
    """Manage product images inside Product admin"""
    model = ProductImage
    extra = 1
    fields = ['image', 'alt_text', 'sort_order']


# ==========================================
# VENDOR ADMIN
# ==========================================

STATUS_COLORS = {
    Vendor.STATUS_PENDING: '#d97706',
    Vendor.STATUS_APPROVED: '#16a34a',
    Vendor.STATUS_SUSPENDED: '#dc2626',
}


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = [
        'business_name', 'user_email', 'status_badge', 'email_verified',
        'whatsapp_masked', 'product_count', 'created_at'
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['business_name', 'user__email', 'user__full_name', 'slug']
    readonly_fields = [
        'slug', 'status', 'encrypted_whatsapp', 'approved_at',
        'reviewed_by', 'reviewed_at', 'created_at', 'updated_at'
    ]
    actions = ['approve_vendors', 'suspend_vendors', 'unsuspend_vendors']

    fieldsets = (
        ('Business', {
            'fields': ('user', 'business_name', 'slug', 'description', 'logo', 'banner')
        }),
        ('Contact', {
            'fields': ('whatsapp_number', 'encrypted_whatsapp')
        }),
        ('Social Links', {
            'fields': ('instagram_url', 'facebook_url', 'twitter_url', 'tiktok_url', 'website_url'),
            'classes': ('collapse',)
        }),
        ('Review', {
            'fields': ('status', 'approved_at', 'reviewed_by', 'reviewed_at')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user').annotate(
            _product_count=Count('products')
        )

    def user_email(self, obj):
        return obj.user.email
    user_email.short_description = 'Email'

    def email_verified(self, obj):
        return obj.user.email_verified
    email_verified.boolean = True
    email_verified.short_description = 'Email verified'

    def status_badge(self, obj):
        return format_html(
            '<span style="color: {}; font-weight: 600;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6b7280'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def whatsapp_masked(self, obj):
        """Masked number, read from the encrypted copy when it decrypts"""
        number = decrypt_phone(obj.encrypted_whatsapp) or obj.whatsapp_number
        return mask_sensitive_info(number)
    whatsapp_masked.short_description = 'WhatsApp'

    def product_count(self, obj):
        return obj._product_count
    product_count.short_description = 'Products'

    # Admin Actions
    def _apply_transition(self, request, queryset, method_name, verb):
        count = 0
        for vendor in queryset:
            try:
                getattr(vendor, method_name)(request.user)
                count += 1
            except (VendorStatusError, PermissionDenied) as e:
                self.message_user(request, f'{vendor.business_name}: {e}', messages.WARNING)
        self.message_user(request, f'{verb} {count} vendor(s)', messages.SUCCESS)

    def approve_vendors(self, request, queryset):
        """Approve selected pending vendors"""
        self._apply_transition(request, queryset, 'approve', '✓ Approved')
    approve_vendors.short_description = 'Approve selected vendors'

    def suspend_vendors(self, request, queryset):
        """Suspend selected approved vendors"""
        self._apply_transition(request, queryset, 'suspend', '⏸ Suspended')
    suspend_vendors.short_description = 'Suspend selected vendors'

    def unsuspend_vendors(self, request, queryset):
        """Reactivate selected suspended vendors"""
        self._apply_transition(request, queryset, 'unsuspend', '↺ Reactivated')
    unsuspend_vendors.short_description = 'Reactivate selected vendors'


# ==========================================
# CATEGORIES & BRANDS
# ==========================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'icon', 'slug', 'parent', 'sort_order', 'product_count']
    list_editable = ['sort_order']
    search_fields = ['name']
    prepopulated_fields = {'slug': ('name',)}

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_product_count=Count('products'))

    def product_count(self, obj):
        return obj._product_count
    product_count.short_description = 'Products'


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ['name', 'logo_preview', 'slug', 'public_product_count', 'created_at']
    search_fields = ['name', 'description']
    prepopulated_fields = {'slug': ('name',)}

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _public_count=Count(
                'products',
                filter=Q(products__status=Product.STATUS_ACTIVE, products__is_archived=False)
            )
        )

    def public_product_count(self, obj):
        return obj._public_count
    public_product_count.short_description = 'Live products'

    def logo_preview(self, obj):
        if obj.logo:
            return format_html('<img src="{}" width="40" height="40" style="object-fit: cover;" />', obj.logo.url)
        return '-'
    logo_preview.short_description = 'Logo'


# ==========================================
# PRODUCT ADMIN
# ==========================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        'name', 'vendor_name', 'category', 'price_display',
        'stock_quantity', 'status', 'is_archived', 'featured', 'manual_purchases', 'created_at'
    ]
    list_filter = ['status', 'is_archived', 'featured', 'category', 'created_at']
    list_editable = ['featured']
    search_fields = ['name', 'vendor__business_name', 'description']
    readonly_fields = ['slug', 'manual_purchases', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Info', {
            'fields': ('vendor', 'name', 'slug', 'short_description', 'description')
        }),
        ('Catalog', {
            'fields': ('category', 'brand')
        }),
        ('Pricing & Inventory', {
            'fields': ('price_naira', 'stock_quantity')
        }),
        ('Status', {
            'fields': ('status', 'is_archived', 'featured', 'manual_purchases')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    inlines = [ProductImageInline]

    def get_readonly_fields(self, request, obj=None):
        return self.readonly_fields + ['short_description']

    def vendor_name(self, obj):
        return obj.vendor.business_name
    vendor_name.short_description = 'Vendor'

    def price_display(self, obj):
        return format_naira(obj.price_naira)
    price_display.short_description = 'Price'

    def short_description(self, obj):
        return truncate_text(obj.description, 120)
    short_description.short_description = 'Summary'


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    list_display = ['event_type', 'product', 'vendor', 'created_at']
    list_filter = ['event_type', 'created_at']
    search_fields = ['product__name', 'vendor__business_name']
    readonly_fields = ['event_type', 'product', 'vendor', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
