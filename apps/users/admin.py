from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .forms import AdminUserCreationForm
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    model = CustomUser
    add_form = AdminUserCreationForm
    list_display = ('email', 'full_name', 'role', 'email_verified', 'vendor_status', 'is_active', 'date_joined')
    list_filter = ('role', 'email_verified', 'is_active')
    ordering = ('email',)
    search_fields = ('email', 'full_name', 'business_name', 'phone')
    readonly_fields = ('encrypted_phone', 'otp_sent_at', 'date_joined', 'last_login')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('full_name', 'role', 'phone', 'encrypted_phone', 'matric_number', 'avatar')}),
        ('Business', {'fields': ('business_name', 'brand_description', 'business_image')}),
        ('Verification', {'fields': ('email_verified', 'otp_code', 'otp_sent_at')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2', 'role', 'is_active', 'email_verified')}
        ),
    )

    def vendor_status(self, obj):
        vendor = getattr(obj, 'vendor', None) if obj.is_vendor else None
        return vendor.status if vendor else '-'
    vendor_status.short_description = 'Vendor status'
