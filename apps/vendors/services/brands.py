"""
Brand lookups tied to vendor business names
"""

import logging

from django.db import IntegrityError, transaction
from django.utils.text import slugify

from .utils import generate_unique_slug

logger = logging.getLogger(__name__)


def get_or_create_brand_from_business_name(business_name, logo=None):
    """
    Return the brand named after a vendor's business, creating it if needed.

    Matching is case-insensitive on the name. When ``logo`` is given the
    brand's logo is replaced with it.

    Raises:
        ValueError: if business_name is blank
    """
    from apps.vendors.models import Brand

    name = (business_name or '').strip()
    if not name:
        raise ValueError('A business name is required to resolve a brand.')

    brand = Brand.objects.filter(name__iexact=name).first()
    if brand is None:
        try:
            with transaction.atomic():
                brand = Brand.objects.create(
                    name=name,
                    slug=generate_unique_slug(Brand, slugify(name)),
                )
            logger.info('Created brand %s', name)
        except IntegrityError:
            brand = Brand.objects.get(name__iexact=name)

    if logo:
        brand.logo = logo
        brand.save(update_fields=['logo', 'updated_at'])

    return brand
