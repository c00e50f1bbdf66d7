"""
Storefront App Views
Public catalog, WhatsApp ordering, wishlist and purchase requests
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from apps.vendors.models import AnalyticsEvent, Brand, Category, Product
from apps.vendors.services.analytics import record_event
from apps.vendors.services.whatsapp import build_order_link
from .forms import ProductFilterForm, PurchaseForm
from .models import WishlistItem
from .services import brands_with_counts, filter_products, homepage_products, related_products
from .wishlist import LocalWishlist, merge_into_account

logger = logging.getLogger(__name__)


def _public_product(slug):
    return get_object_or_404(
        Product.objects.public().select_related('vendor', 'category', 'brand'),
        slug=slug
    )


def _wishlisted_ids(request):
    """Ids in the visitor's wishlist: server rows if signed in, else the cookie"""
    if request.user.is_authenticated:
        return set(request.user.wishlist_items.values_list('product_id', flat=True))
    return set(LocalWishlist(request))


# ==========================================
# CATALOG
# ==========================================

def home(request):
    return render(request, 'storefront/home.html', {
        'products': homepage_products(),
        'categories': Category.objects.all(),
        'wishlisted_ids': _wishlisted_ids(request),
    })


def products(request):
    """
    All public products with search, category, brand, price and sort filters
    """
    form = ProductFilterForm(request.GET or None)

    # Invalid fields are shown with their errors; the valid ones still filter
    if form.is_bound:
        form.is_valid()
        product_list = filter_products(**form.filter_kwargs())
    else:
        product_list = filter_products()

    return render(request, 'storefront/products.html', {
        'form': form,
        'products': product_list,
        'wishlisted_ids': _wishlisted_ids(request),
    })


def product_detail(request, slug):
    product = _public_product(slug)
    record_event(AnalyticsEvent.VIEW, product)

    return render(request, 'storefront/product_detail.html', {
        'product': product,
        'images': product.images.all(),
        'related_products': related_products(product),
        'purchase_form': PurchaseForm(initial={
            'customer_name': getattr(request.user, 'full_name', ''),
            'customer_email': getattr(request.user, 'email', ''),
        }),
        'is_wishlisted': product.pk in _wishlisted_ids(request),
    })


@require_POST
def product_order(request, slug):
    """
    Hand the customer off to WhatsApp with a pre-filled order message
    """
    product = _public_product(slug)
    record_event(AnalyticsEvent.ORDER_CLICK, product)

    link = build_order_link(product, request.build_absolute_uri(product.get_absolute_url()))
    if link is None:
        logger.warning('Vendor %s has no usable WhatsApp number', product.vendor_id)
        messages.error(
            request,
            'This vendor has not set up a WhatsApp number yet. Please try again later.'
        )
        return redirect('storefront:product_detail', slug=product.slug)

    return redirect(link)


@require_POST
@login_required
def product_purchase(request, slug):
    """
    Record a purchase request. The vendor contacts the customer to complete it.
    """
    product = _public_product(slug)
    form = PurchaseForm(request.POST)

    if not form.is_valid():
        for field, errors in form.errors.items():
            messages.error(request, errors[0])
        return redirect('storefront:product_detail', slug=product.slug)

    purchase = form.save(commit=False)
    purchase.user = request.user
    purchase.product = product
    purchase.vendor = product.vendor
    purchase.total_price_naira = product.price_naira * purchase.quantity

    try:
        purchase.save()
    except Exception:
        logger.exception('Failed to save purchase request for product %s', product.pk)
        messages.error(request, 'Could not submit your request. Please try again.')
        return redirect('storefront:product_detail', slug=product.slug)

    logger.info('Purchase request %s for product %s', purchase.pk, product.pk)
    messages.success(
        request,
        f'Purchase request submitted! Your interest in {product.name} has been recorded. '
        'The vendor will contact you soon.'
    )
    return redirect('storefront:product_detail', slug=product.slug)


def category_detail(request, slug):
    category = get_object_or_404(Category, slug=slug)
    product_list = filter_products(Product.objects.public().filter(category=category))

    return render(request, 'storefront/category_detail.html', {
        'category': category,
        'products': product_list,
        'wishlisted_ids': _wishlisted_ids(request),
    })


def brands(request):
    """
    Brand directory with search and first-letter filter
    """
    search = request.GET.get('search', '').strip()
    letter = request.GET.get('letter', '').strip()[:1].upper()

    return render(request, 'storefront/brands.html', {
        'brands': brands_with_counts(search=search, letter=letter),
        'search': search,
        'selected_letter': letter,
        'alphabet': 'ABCDEFGHIJKLMNOPQRSTUVWXYZ',
    })


def brand_detail(request, slug):
    brand = get_object_or_404(Brand, slug=slug)
    product_list = filter_products(Product.objects.public().filter(brand=brand))

    return render(request, 'storefront/brand_detail.html', {
        'brand': brand,
        'products': product_list,
        'wishlisted_ids': _wishlisted_ids(request),
    })


# ==========================================
# WISHLIST
# ==========================================

def wishlist(request):
    """
    Server wishlist for signed-in users; the cookie wishlist otherwise.
    Products that are no longer public are dropped from the cookie.
    """
    if request.user.is_authenticated:
        items = (
            request.user.wishlist_items
            .filter(product__status=Product.STATUS_ACTIVE, product__is_archived=False)
            .select_related('product', 'product__vendor')
            .prefetch_related('product__images')
        )
        local = LocalWishlist(request)
        return render(request, 'storefront/wishlist.html', {
            'products': [item.product for item in items],
            'local_count': len(local),
        })

    local = LocalWishlist(request)
    public = Product.objects.public().filter(pk__in=local.ids).prefetch_related('images')
    by_id = {product.pk: product for product in public}
    local.keep_only(by_id.keys())

    response = render(request, 'storefront/wishlist.html', {
        'products': [by_id[product_id] for product_id in local.ids],
        'local_count': 0,
    })
    return local.save(response)


@require_POST
def wishlist_toggle(request, product_id):
    product = get_object_or_404(Product.objects.public(), pk=product_id)
    next_url = request.POST.get('next')
    if not next_url or not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        next_url = product.get_absolute_url()

    if request.user.is_authenticated:
        deleted, _ = WishlistItem.objects.filter(user=request.user, product=product).delete()
        if deleted:
            messages.info(request, f'Removed "{product.name}" from your wishlist.')
        else:
            WishlistItem.objects.get_or_create(user=request.user, product=product)
            messages.success(request, f'Added "{product.name}" to your wishlist.')
        return redirect(next_url)

    local = LocalWishlist(request)
    if local.toggle(product.pk):
        messages.success(request, f'Added "{product.name}" to your wishlist.')
    else:
        messages.info(request, f'Removed "{product.name}" from your wishlist.')
    return local.save(redirect(next_url))


@require_POST
@login_required
def wishlist_merge(request):
    """
    Copy the wishlist saved on this browser into the account
    """
    local = LocalWishlist(request)
    added = merge_into_account(request.user, local)

    if added:
        messages.success(request, f'Added {added} saved item(s) to your wishlist.')
    else:
        messages.info(request, 'No new items to add to your wishlist.')
    return local.save(redirect('storefront:wishlist'))
