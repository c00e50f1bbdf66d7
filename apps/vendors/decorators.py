"""
Vendor App Decorators
Access control decorators for vendor and admin views.

Every check reads from the database on each request; what the templates
show or disable is only a hint.
"""

from functools import wraps

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse

from apps.users.models import is_admin


# ==========================================
# VENDOR ACCESS DECORATORS
# ==========================================

def vendor_required(view_func):
    """
    Decorator to ensure user is a signed-in vendor with a verified email.
    Attaches the vendor record as ``request.vendor``, creating a pending
    one if the account predates it. Pending and suspended vendors pass.

    Usage:
        @vendor_required
        def dashboard(request):
            ...
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        from .models import Vendor

        if not request.user.is_authenticated:
            messages.warning(request, 'Please sign in to access the vendor dashboard.')
            return redirect(f'{reverse("users:vendor_auth")}?next={request.path}')

        if not request.user.is_vendor:
            messages.error(request, 'You must be a vendor to access this page.')
            return redirect('storefront:home')

        if not request.user.email_verified:
            messages.warning(request, 'Please verify your email before accessing the vendor dashboard.')
            request.session['verify_email'] = request.user.email
            return redirect('users:verify_otp')

        request.vendor = Vendor.get_or_create_for_user(request.user)
        return view_func(request, *args, **kwargs)

    return wrapper


def vendor_approved_required(view_func):
    """
    Decorator to ensure vendor is approved by admin and not suspended.
    Use on every view that changes the vendor's catalog or profile.

    Usage:
        @vendor_approved_required
        def product_add(request):
            ...
    """
    @vendor_required
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        vendor = request.vendor
        vendor.refresh_from_db(fields=['status'])

        if vendor.is_suspended:
            messages.error(
                request,
                'Your vendor account has been suspended. Please contact support.'
            )
            return redirect('vendors:dashboard')

        if not vendor.is_approved:
            messages.warning(
                request,
                'Your vendor account is pending admin approval. You will be notified once approved.'
            )
            return redirect('vendors:dashboard')

        return view_func(request, *args, **kwargs)

    return wrapper


def vendor_owns_product(view_func):
    """
    Decorator to ensure vendor owns the product they're trying to change.
    Expects 'product_id' in URL kwargs and a preceding vendor decorator.

    Usage:
        @vendor_approved_required
        @vendor_owns_product
        def product_delete(request, product_id):
            ...
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        from .models import Product

        product = Product.objects.filter(
            pk=kwargs.get('product_id'),
            vendor=request.vendor,
        ).first()

        if product is None:
            messages.error(request, 'Product not found.')
            return redirect('vendors:dashboard')

        request.product = product
        return view_func(request, *args, **kwargs)

    return wrapper


# ==========================================
# ADMIN ACCESS DECORATORS
# ==========================================

def admin_required(view_func):
    """
    Decorator for views that only marketplace admins should access

    Usage:
        @admin_required
        def admin_dashboard(request):
            ...
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            messages.warning(request, 'Please sign in to access this page.')
            return redirect(f'{reverse("users:admin_auth")}?next={request.path}')

        if not is_admin(request.user):
            messages.error(request, 'You do not have admin access.')
            return redirect('storefront:home')

        return view_func(request, *args, **kwargs)

    return wrapper


# ==========================================
# UTILITY FUNCTIONS
# ==========================================

def is_vendor_suspended(user):
    """
    True when ``user`` is a vendor whose account is currently suspended.

    Reads the status straight from the database.
    """
    from .models import Vendor

    if not user or not user.is_authenticated or not user.is_vendor:
        return False
    return Vendor.objects.filter(user=user, status=Vendor.STATUS_SUSPENDED).exists()
