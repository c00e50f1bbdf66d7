"""
WhatsApp Hand-off
Builds wa.me deep links that open a pre-filled order message to the vendor
"""

import re
from typing import Optional
from urllib.parse import quote

from .utils import format_naira

WHATSAPP_BASE_URL = 'https://wa.me'
NIGERIA_COUNTRY_CODE = '234'


def normalize_whatsapp_number(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a Nigerian phone number to international digits

    '08031234567'    -> '2348031234567'
    '+2348031234567' -> '2348031234567'
    ''/None          -> None

    Numbers that already start with 234, or that do not start with 0,
    are passed through after stripping non-digits.
    """
    if not raw:
        return None

    digits = re.sub(r'\D+', '', str(raw))
    if not digits:
        return None

    if digits.startswith(NIGERIA_COUNTRY_CODE):
        return digits
    if digits.startswith('0'):
        return NIGERIA_COUNTRY_CODE + digits[1:]
    return digits


def build_order_message(product, product_url: str) -> str:
    """
    Compose the order enquiry sent to the vendor

    Args:
        product: Product instance (category/brand may be None)
        product_url: Absolute URL of the product page

    Returns:
        Message text
    """
    extra = ''
    if product.category_id:
        extra += f'\nCategory: {product.category.name}'
    if product.brand_id:
        extra += f'\nBrand: {product.brand.name}'
    if product.description:
        extra += f'\nDescription: {product.description}'

    return (
        "Hello! I'm interested in ordering this product from Run Marketplace:\n"
        "\n"
        f"📱 Product: {product.name}\n"
        f"💰 Price: {format_naira(product.price_naira)}{extra}\n"
        "\n"
        f"🔗 Product Link: {product_url}\n"
        "\n"
        "Is this product available for purchase?"
    )


def build_whatsapp_url(number: str, message: str) -> str:
    """Return the wa.me deep link for ``number`` with ``message`` pre-filled."""
    return f'{WHATSAPP_BASE_URL}/{number}?text={quote(message)}'


def build_order_link(product, product_url: str) -> Optional[str]:
    """
    Deep link for ordering ``product``, or None when the vendor has no
    usable WhatsApp number
    """
    number = normalize_whatsapp_number(product.vendor.whatsapp_number)
    if not number:
        return None
    return build_whatsapp_url(number, build_order_message(product, product_url))
