from django import template

from apps.vendors.services.utils import format_naira

register = template.Library()


@register.filter
def naira(value):
    """Whole-Naira price with thousands separators, e.g. ₦15,000"""
    if value in (None, ''):
        return ''
    try:
        return format_naira(value)
    except (TypeError, ValueError):
        return value
