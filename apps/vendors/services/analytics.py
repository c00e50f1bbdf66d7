"""
Analytics Service
Append-only engagement events and the counts shown on dashboards
"""

import logging
from typing import Dict

from django.db import transaction
from django.db.models import Count

logger = logging.getLogger(__name__)


def record_event(event_type: str, product, vendor=None) -> bool:
    """
    Record an analytics event without ever failing the caller

    Args:
        event_type: One of the AnalyticsEvent.EVENT_TYPE_CHOICES keys
        product: Product the event refers to
        vendor: Owning vendor (defaults to product.vendor)

    Returns:
        True if the event was stored
    """
    from apps.vendors.models import AnalyticsEvent

    try:
        with transaction.atomic():
            AnalyticsEvent.objects.create(
                event_type=event_type,
                product=product,
                vendor_id=vendor.pk if vendor is not None else product.vendor_id,
            )
        return True
    except Exception:
        logger.exception('Failed to record %s event for product %s', event_type, getattr(product, 'pk', None))
        return False


def _empty_counts() -> Dict[str, int]:
    from apps.vendors.models import AnalyticsEvent
    return {event_type: 0 for event_type, _label in AnalyticsEvent.EVENT_TYPE_CHOICES}


def count_events(queryset) -> Dict[str, int]:
    """Count events per type, including zero counts for unseen types."""
    counts = _empty_counts()
    for row in queryset.values('event_type').annotate(total=Count('id')):
        counts[row['event_type']] = row['total']
    return counts


def vendor_event_counts(vendor) -> Dict[str, int]:
    """Views, order clicks and manual purchases for one vendor."""
    return count_events(vendor.analytics_events.all())


def platform_metrics() -> Dict[str, int]:
    """
    Platform-wide totals for the admin dashboard
    """
    from django.contrib.auth import get_user_model
    from apps.vendors.models import AnalyticsEvent, Product

    User = get_user_model()
    events = count_events(AnalyticsEvent.objects.all())

    return {
        'total_users': User.objects.filter(role=User.ROLE_CUSTOMER).count(),
        'total_vendors': User.objects.filter(role=User.ROLE_VENDOR).count(),
        'total_products': Product.objects.count(),
        'total_views': events['view'],
        'total_order_clicks': events['order_click'],
        'total_purchases': events['manual_purchase'],
    }
