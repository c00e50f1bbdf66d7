"""
Storefront catalog queries
"""

from django.conf import settings
from django.db.models import Count, Q

from apps.vendors.models import Brand, Product


SORT_ORDERING = {
    'newest': ['-created_at', '-id'],
    'name': ['name'],
    'price_low': ['price_naira'],
    'price_high': ['-price_naira'],
}
DEFAULT_SORT = 'newest'


def filter_products(queryset=None, *, search=None, category=None, brand=None,
                    min_price=None, max_price=None, sort=DEFAULT_SORT, limit=None):
    """
    Compose the catalog filters. Every filter given is ANDed.

    Args:
        queryset: Starting queryset (defaults to public products)
        search: Case-insensitive substring of the product name
        category: Category id
        brand: Brand id
        min_price: Inclusive lower bound in Naira
        max_price: Inclusive upper bound in Naira
        sort: 'newest', 'name', 'price_low' or 'price_high'
        limit: Maximum rows (defaults to PRODUCT_PAGE_SIZE)

    Returns:
        Sliced queryset of products
    """
    if queryset is None:
        queryset = Product.objects.public()

    if search:
        queryset = queryset.filter(name__icontains=search.strip())
    if category:
        queryset = queryset.filter(category_id=category)
    if brand:
        queryset = queryset.filter(brand_id=brand)
    if min_price is not None:
        queryset = queryset.filter(price_naira__gte=min_price)
    if max_price is not None:
        queryset = queryset.filter(price_naira__lte=max_price)

    ordering = SORT_ORDERING.get(sort or DEFAULT_SORT, SORT_ORDERING[DEFAULT_SORT])
    queryset = queryset.select_related('vendor', 'category', 'brand').prefetch_related('images')

    if limit is None:
        limit = settings.PRODUCT_PAGE_SIZE
    return queryset.order_by(*ordering)[:limit]


def homepage_products():
    """Featured products, or the newest ones when nothing is featured"""
    limit = settings.FEATURED_PRODUCTS_LIMIT
    featured = list(
        Product.objects.public().featured()
        .select_related('vendor', 'brand').prefetch_related('images')
        .order_by('-created_at', '-id')[:limit]
    )
    if featured:
        return featured
    return list(filter_products(limit=limit))


def related_products(product):
    if not product.category_id:
        return []
    return list(
        Product.objects.public()
        .filter(category_id=product.category_id)
        .exclude(pk=product.pk)
        .select_related('brand').prefetch_related('images')
        .order_by('-created_at', '-id')[:settings.RELATED_PRODUCTS_LIMIT]
    )


def brands_with_counts(search=None, letter=None):
    """
    Brands ordered by name with their live product counts.
    `search` matches name or description; `letter` matches the first letter.
    """
    brands = Brand.objects.annotate(
        product_count=Count(
            'products',
            filter=Q(products__status=Product.STATUS_ACTIVE, products__is_archived=False)
        )
    ).order_by('name')

    if search:
        brands = brands.filter(Q(name__icontains=search) | Q(description__icontains=search))
    if letter:
        brands = brands.filter(name__istartswith=letter[:1])
    return brands
