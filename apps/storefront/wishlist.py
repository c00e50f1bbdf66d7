"""
Anonymous wishlist kept in the browser.

The product ids live in a JSON array in a cookie; the server never stores
them. Signing in leaves the cookie alone unless the visitor merges it.
"""

import json
import logging

from django.conf import settings
from django.db import IntegrityError, transaction

logger = logging.getLogger(__name__)


class LocalWishlist:
    """
    Cookie-backed set of product ids, kept in insertion order.

    Usage:
        wishlist = LocalWishlist(request)
        wishlist.toggle(product.id)
        wishlist.save(response)
    """

    def __init__(self, request):
        self.cookie_name = settings.WISHLIST_COOKIE_NAME
        self.ids = self.parse(request.COOKIES.get(self.cookie_name))
        self.changed = False

    @staticmethod
    def parse(raw):
        """Decode the cookie value; anything malformed reads as empty"""
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return []
        if not isinstance(data, list):
            return []

        ids = []
        for item in data:
            # bool is an int subclass
            if isinstance(item, bool):
                continue
            try:
                product_id = int(item)
            except (TypeError, ValueError):
                continue
            if product_id > 0 and product_id not in ids:
                ids.append(product_id)
        return ids

    def __contains__(self, product_id):
        return int(product_id) in self.ids

    def __len__(self):
        return len(self.ids)

    def __iter__(self):
        return iter(self.ids)

    def toggle(self, product_id):
        """
        Add the product if absent, remove it if present.

        Returns:
            True if the product is now in the wishlist
        """
        product_id = int(product_id)
        self.changed = True
        if product_id in self.ids:
            self.ids.remove(product_id)
            return False
        self.ids.append(product_id)
        return True

    def keep_only(self, valid_ids):
        """Drop ids that are not in `valid_ids`"""
        valid_ids = set(valid_ids)
        kept = [product_id for product_id in self.ids if product_id in valid_ids]
        if kept != self.ids:
            self.ids = kept
            self.changed = True

    def clear(self):
        self.ids = []
        self.changed = True

    def save(self, response):
        """Write the cookie if anything changed"""
        if not self.changed:
            return response
        if self.ids:
            response.set_cookie(
                self.cookie_name,
                json.dumps(self.ids),
                max_age=settings.WISHLIST_COOKIE_MAX_AGE,
                samesite='Lax',
            )
        else:
            response.delete_cookie(self.cookie_name, samesite='Lax')
        return response


def merge_into_account(user, wishlist):
    """
    Copy the cookie wishlist into the user's server wishlist and clear it.
    Only public products are copied; ones already saved are skipped.

    Returns:
        Number of new wishlist rows
    """
    from apps.vendors.models import Product
    from .models import WishlistItem

    if not wishlist.ids:
        return 0

    product_ids = Product.objects.public().filter(pk__in=wishlist.ids).values_list('pk', flat=True)
    existing = set(
        WishlistItem.objects.filter(user=user, product_id__in=product_ids).values_list('product_id', flat=True)
    )

    added = 0
    with transaction.atomic():
        for product_id in product_ids:
            if product_id in existing:
                continue
            try:
                with transaction.atomic():
                    WishlistItem.objects.create(user=user, product_id=product_id)
                added += 1
            except IntegrityError:
                # Saved from another tab in the meantime
                continue

    wishlist.clear()
    logger.info('Merged %s local wishlist item(s) into account %s', added, user.pk)
    return added
