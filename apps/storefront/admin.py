from django.contrib import admin

from apps.vendors.services.utils import format_naira
from .models import Purchase, WishlistItem


@admin.register(WishlistItem)
class WishlistItemAdmin(admin.ModelAdmin):
    list_display = ['user', 'product', 'created_at']
    search_fields = ['user__email', 'product__name']
    raw_id_fields = ['user', 'product']


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = [
        'customer_name', 'product', 'vendor', 'quantity',
        'total_display', 'payment_method', 'status', 'created_at'
    ]
    list_filter = ['status', 'payment_method', 'created_at']
    list_editable = ['status']
    search_fields = ['customer_name', 'customer_email', 'product__name', 'vendor__business_name']
    readonly_fields = ['user', 'product', 'vendor', 'total_price_naira', 'created_at']

    def total_display(self, obj):
        return format_naira(obj.total_price_naira)
    total_display.short_description = 'Total'
