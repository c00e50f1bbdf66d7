"""Tests for purchase requests."""

from __future__ import annotations

import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from apps.storefront.forms import PurchaseForm
from apps.storefront.models import Purchase


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.fixture
def purchase_data():
    return {
        "customer_name": "Ada Obi",
        "customer_email": "ada@example.com",
        "customer_phone": "08012345678",
        "delivery_address": "Block C, Female Hostel, Redeemer's University",
        "payment_method": Purchase.PAYMENT_CASH_ON_DELIVERY,
        "notes": "",
        "quantity": "2",
    }


def purchase_url(product):
    return reverse("storefront:product_purchase", args=[product.slug])


@pytest.mark.django_db
class TestPurchaseForm:
    """Field validation for PurchaseForm."""

    @pytest.mark.parametrize("quantity, message", [
        ("0", "Quantity must be at least 1."),
        ("100", "Quantity cannot be more than 99."),
    ])
    def test_quantity_bounds(self, purchase_data, quantity, message) -> None:
        form = PurchaseForm({**purchase_data, "quantity": quantity})

        assert not form.is_valid()
        assert message in form.errors["quantity"]

    def test_blank_name_is_rejected(self, purchase_data) -> None:
        form = PurchaseForm({**purchase_data, "customer_name": "   "})
        assert not form.is_valid()
        assert "customer_name" in form.errors

    def test_unknown_payment_method(self, purchase_data) -> None:
        assert not PurchaseForm({**purchase_data, "payment_method": "crypto"}).is_valid()


@pytest.mark.django_db
class TestPurchaseView:
    """The purchase request endpoint."""

    def test_requires_sign_in(self, client, product, purchase_data) -> None:
        response = client.post(purchase_url(product), purchase_data)

        assert response["Location"].startswith(reverse("users:auth"))
        assert not Purchase.objects.exists()

    def test_records_request_with_server_total(self, client, customer, product, purchase_data) -> None:
        client.force_login(customer)

        response = client.post(purchase_url(product), {**purchase_data, "total_price_naira": "1"})

        purchase = Purchase.objects.get()
        assert response["Location"] == product.get_absolute_url()
        assert purchase.total_price_naira == 30000
        assert purchase.quantity == 2
        assert purchase.user == customer
        assert purchase.vendor == product.vendor
        assert purchase.status == Purchase.STATUS_PENDING
        assert (
            "Purchase request submitted! Your interest in Wireless Earbuds has been recorded. "
            "The vendor will contact you soon."
        ) in messages_of(response)

    def test_invalid_quantity_is_not_saved(self, client, customer, product, purchase_data) -> None:
        client.force_login(customer)

        response = client.post(purchase_url(product), {**purchase_data, "quantity": "0"})

        assert not Purchase.objects.exists()
        assert "Quantity must be at least 1." in messages_of(response)

    def test_hidden_product_is_not_found(self, client, customer, product, purchase_data) -> None:
        product.toggle_archived()
        client.force_login(customer)

        response = client.post(purchase_url(product), purchase_data)

        assert response.status_code == 404

    def test_get_is_not_allowed(self, client, customer, product) -> None:
        client.force_login(customer)
        assert client.get(purchase_url(product)).status_code == 405

    def test_purchase_survives_product_deletion(self, client, customer, product, purchase_data) -> None:
        client.force_login(customer)
        client.post(purchase_url(product), purchase_data)

        product.delete()

        purchase = Purchase.objects.get()
        assert purchase.product is None
        assert purchase.total_price_naira == 30000
