"""Tests for phone normalization, price formatting and the WhatsApp hand-off."""

from __future__ import annotations

from urllib.parse import unquote

import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from apps.vendors.models import AnalyticsEvent, Brand
from apps.vendors.services.utils import format_naira
from apps.vendors.services.whatsapp import (
    build_order_link,
    build_order_message,
    build_whatsapp_url,
    normalize_whatsapp_number,
)


class TestNormalizeWhatsappNumber:
    """Tests for normalize_whatsapp_number."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("08031234567", "2348031234567"),
            ("+234 803 123 4567", "2348031234567"),
            ("2348031234567", "2348031234567"),
            ("0803-123-4567", "2348031234567"),
            ("447700900123", "447700900123"),
        ],
    )
    def test_normalizes_numbers(self, raw, expected) -> None:
        assert normalize_whatsapp_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "no digits"])
    def test_empty_input_gives_none(self, raw) -> None:
        assert normalize_whatsapp_number(raw) is None

    def test_only_leading_zero_is_replaced(self) -> None:
        assert normalize_whatsapp_number("0000") == "234000"


class TestFormatNaira:
    """Tests for format_naira."""

    def test_thousands_separator(self) -> None:
        assert format_naira(15000) == "₦15,000"

    def test_small_and_large_amounts(self) -> None:
        assert format_naira(1) == "₦1"
        assert format_naira(1250000) == "₦1,250,000"

    def test_none_is_zero(self) -> None:
        assert format_naira(None) == "₦0"


@pytest.mark.django_db
class TestOrderMessage:
    """Tests for build_order_message and build_whatsapp_url."""

    def test_message_contains_product_details(self, product) -> None:
        message = build_order_message(product, "https://runmarketplace.ng/product/wireless-earbuds/")

        assert message.startswith("Hello! I'm interested in ordering this product from Run Marketplace:")
        assert "📱 Product: Wireless Earbuds" in message
        assert "💰 Price: ₦15,000" in message
        assert "Category: Electronics" in message
        assert "🔗 Product Link: https://runmarketplace.ng/product/wireless-earbuds/" in message
        assert message.endswith("Is this product available for purchase?")

    def test_optional_lines_are_left_out(self, make_product) -> None:
        product = make_product(name="Plain Tee", price_naira=5000, category=None)
        message = build_order_message(product, "https://example.com/p/")

        assert "Category:" not in message
        assert "Brand:" not in message
        assert "Description:" not in message

    def test_brand_and_description_lines(self, make_product) -> None:
        brand = Brand.objects.create(name="Chioma Styles")
        product = make_product(name="Ankara Dress", brand=brand, description="Size 12, cotton")
        message = build_order_message(product, "https://example.com/p/")

        assert "Brand: Chioma Styles" in message
        assert "Description: Size 12, cotton" in message

    def test_whatsapp_url_quotes_message(self) -> None:
        url = build_whatsapp_url("2348031234567", "Hi there & hello")
        assert url == "https://wa.me/2348031234567?text=Hi%20there%20%26%20hello"

    def test_order_link_is_none_without_number(self, product) -> None:
        product.vendor.whatsapp_number = ""
        assert build_order_link(product, "https://example.com/p/") is None


@pytest.mark.django_db
class TestProductOrderView:
    """Tests for the order-on-WhatsApp endpoint."""

    def test_redirects_to_whatsapp_and_records_click(self, client, product) -> None:
        response = client.post(reverse("storefront:product_order", args=[product.slug]))

        assert response.status_code == 302
        assert response["Location"].startswith("https://wa.me/2348031234567?text=")
        assert "₦15,000" in unquote(response["Location"])
        assert AnalyticsEvent.objects.filter(
            event_type=AnalyticsEvent.ORDER_CLICK, product=product
        ).count() == 1

    def test_missing_number_stays_on_product_page(self, client, product) -> None:
        vendor = product.vendor
        vendor.whatsapp_number = ""
        vendor.save()

        response = client.post(reverse("storefront:product_order", args=[product.slug]))

        assert response.status_code == 302
        assert response["Location"] == product.get_absolute_url()
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any("WhatsApp number" in m for m in messages)

    def test_analytics_failure_does_not_block_order(self, client, product, monkeypatch) -> None:
        def broken_create(*args, **kwargs):
            raise RuntimeError("analytics down")

        monkeypatch.setattr(AnalyticsEvent.objects, "create", broken_create)

        response = client.post(reverse("storefront:product_order", args=[product.slug]))

        assert response.status_code == 302
        assert response["Location"].startswith("https://wa.me/")

    def test_get_is_not_allowed(self, client, product) -> None:
        response = client.get(reverse("storefront:product_order", args=[product.slug]))
        assert response.status_code == 405
