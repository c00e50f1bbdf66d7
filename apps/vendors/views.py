"""
Vendor App Views
Vendor dashboard with catalog actions, and the admin dashboard for
vendor approval
"""

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from .decorators import (
    vendor_required,
    vendor_approved_required,
    vendor_owns_product,
    admin_required,
)
from .forms import ProductForm, StockUpdateForm, LogoUploadForm, SocialLinksForm
from .models import Category, Product, ProductImage, Vendor, VendorStatusError
from .services.analytics import vendor_event_counts, platform_metrics
from .services.brands import get_or_create_brand_from_business_name

logger = logging.getLogger(__name__)

User = get_user_model()


# ==========================================
# VENDOR DASHBOARD
# ==========================================

@vendor_required
def dashboard(request):
    """
    Vendor dashboard: approval banner, products, analytics and forms.
    Pending and suspended vendors can look but not change anything.
    """
    vendor = request.vendor

    if vendor.is_pending:
        messages.warning(
            request,
            'Your vendor account is pending approval. You can view your dashboard, '
            'but you can\'t add or change products until an admin approves you.'
        )
    elif vendor.is_suspended:
        messages.error(
            request,
            'Your vendor account has been suspended. Please contact support.'
        )

    products = (
        vendor.products.select_related('category', 'brand')
        .prefetch_related('images')
        .order_by('-created_at')
    )

    context = {
        'vendor': vendor,
        'can_manage': vendor.is_approved,
        'products': products,
        'categories': Category.objects.all(),
        'analytics': vendor_event_counts(vendor),
        'product_form': ProductForm(),
        'social_form': SocialLinksForm(instance=vendor),
        'logo_form': LogoUploadForm(),
        'profile_complete': bool(
            request.user.business_name and request.user.phone and request.user.brand_description
        ),
    }
    return render(request, 'vendors/dashboard.html', context)


# ==========================================
# PRODUCT ACTIONS
# ==========================================

@require_POST
@vendor_approved_required
def product_add(request):
    """
    Create a product under the vendor's business brand
    """
    vendor = request.vendor
    form = ProductForm(request.POST, request.FILES)

    if not form.is_valid():
        for field, errors in form.errors.items():
            for error in errors:
                messages.error(request, f'{field}: {error}' if field != '__all__' else error)
        return redirect('vendors:dashboard')

    try:
        with transaction.atomic():
            product = form.save(commit=False)
            product.vendor = vendor
            product.brand = get_or_create_brand_from_business_name(
                vendor.business_name, request.user.business_image.name or None
            )
            product.status = Product.STATUS_ACTIVE if product.stock_quantity > 0 else Product.STATUS_OUT_OF_STOCK
            product.save()

            image = form.cleaned_data.get('image')
            if image:
                ProductImage.objects.create(product=product, image=image, alt_text=product.name)
    except Exception:
        logger.exception('Failed to add product for vendor %s', vendor.pk)
        messages.error(request, 'Could not add the product. Please try again.')
        return redirect('vendors:dashboard')

    logger.info('Vendor %s added product %s', vendor.pk, product.pk)
    messages.success(request, f'Product "{product.name}" added successfully!')
    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
@vendor_owns_product
def product_mark_sold(request, product_id):
    """Record a sale made outside the platform"""
    product = request.product
    product.mark_as_sold()
    messages.success(request, f'Marked a sale of "{product.name}" ({product.manual_purchases} total).')
    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
@vendor_owns_product
def product_update_stock(request, product_id):
    """Set the stock quantity; status follows it"""
    product = request.product
    form = StockUpdateForm(request.POST)

    if not form.is_valid():
        messages.error(request, form.errors['stock_quantity'][0])
        return redirect('vendors:dashboard')

    try:
        product.update_stock_quantity(form.cleaned_data['stock_quantity'])
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return redirect('vendors:dashboard')

    messages.success(request, f'Stock for "{product.name}" updated to {product.stock_quantity}.')
    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
@vendor_owns_product
def product_toggle_stock(request, product_id):
    """Mark sold out, or back in stock"""
    product = request.product

    if product.status == Product.STATUS_ACTIVE:
        product.mark_sold_out()
        messages.success(request, f'"{product.name}" marked as sold out.')
    else:
        product.mark_in_stock()
        messages.success(request, f'"{product.name}" is back in stock.')

    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
@vendor_owns_product
def product_toggle_archive(request, product_id):
    product = request.product
    archived = product.toggle_archived()
    messages.success(
        request,
        f'"{product.name}" {"archived" if archived else "restored"}.'
    )
    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
@vendor_owns_product
def product_delete(request, product_id):
    """
    Permanently delete product and its images
    """
    product = request.product
    name = product.name
    product.delete()

    logger.info('Vendor %s deleted product %s', request.vendor.pk, product_id)
    messages.success(request, f'Product "{name}" deleted')
    return redirect('vendors:dashboard')


# ==========================================
# BRANDING & SOCIAL LINKS
# ==========================================

@require_POST
@vendor_approved_required
def logo_upload(request):
    """
    Upload a brand logo: stored on the profile, the vendor and the brand
    """
    vendor = request.vendor
    form = LogoUploadForm(request.POST, request.FILES)

    if not form.is_valid():
        messages.error(request, form.errors['logo'][0])
        return redirect('vendors:dashboard')

    logo = form.cleaned_data['logo']
    try:
        with transaction.atomic():
            user = request.user
            user.business_image = logo
            user.save(update_fields=['business_image'])

            vendor.logo = user.business_image.name
            vendor.save(update_fields=['logo', 'updated_at'])

            get_or_create_brand_from_business_name(vendor.business_name, user.business_image.name)
    except Exception:
        logger.exception('Logo upload failed for vendor %s', vendor.pk)
        messages.error(request, 'Could not upload your logo. Please try again.')
        return redirect('vendors:dashboard')

    messages.success(request, 'Brand logo updated.')
    return redirect('vendors:dashboard')


@require_POST
@vendor_approved_required
def social_links_update(request):
    form = SocialLinksForm(request.POST, instance=request.vendor)

    if form.is_valid():
        form.save()
        messages.success(request, 'Social links updated.')
    else:
        for field, errors in form.errors.items():
            messages.error(request, f'{form.fields[field].label}: {errors[0]}')

    return redirect('vendors:dashboard')


# ==========================================
# ADMIN DASHBOARD
# ==========================================

@admin_required
def admin_dashboard(request):
    """
    Platform metrics and the vendor approval queue
    """
    vendor_users = (
        User.objects.filter(role=User.ROLE_VENDOR)
        .select_related('vendor')
        .order_by('-date_joined')
    )

    vendor_rows = []
    for user in vendor_users:
        vendor = getattr(user, 'vendor', None)
        vendor_rows.append({
            'user': user,
            'vendor': vendor,
            'status': vendor.status if vendor else Vendor.STATUS_PENDING,
        })

    return render(request, 'vendors/admin_dashboard.html', {
        'metrics': platform_metrics(),
        'vendor_rows': vendor_rows,
    })


VENDOR_ACTIONS = {
    'approve': ('approve', 'Vendor has been approved and can now list products.'),
    'suspend': ('suspend', 'Vendor has been suspended and cannot list new products.'),
    'unsuspend': ('unsuspend', 'Vendor has been reactivated and can now list products again.'),
}


@require_POST
@admin_required
def admin_vendor_action(request, user_id, action):
    """
    Approve, suspend or unsuspend a vendor
    """
    if action not in VENDOR_ACTIONS:
        messages.error(request, 'Unknown vendor action.')
        return redirect('vendors:admin_dashboard')

    vendor_user = get_object_or_404(User, pk=user_id, role=User.ROLE_VENDOR)
    vendor = Vendor.get_or_create_for_user(vendor_user)
    method_name, success_message = VENDOR_ACTIONS[action]

    try:
        getattr(vendor, method_name)(request.user)
    except (VendorStatusError, PermissionDenied) as e:
        messages.error(request, str(e))
    except Exception:
        logger.exception('Vendor %s action failed for %s', action, vendor.pk)
        messages.error(request, 'Something went wrong. Please try again.')
    else:
        messages.success(request, success_message)

    return redirect('vendors:admin_dashboard')
