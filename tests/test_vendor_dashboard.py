"""Tests for the vendor dashboard and its catalog actions."""

from __future__ import annotations

import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from apps.vendors.models import AnalyticsEvent, Brand, Product, ProductImage, Vendor

DASHBOARD = "/vendor-dashboard/"


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


def product_url(name, product):
    return reverse(f"vendors:{name}", args=[product.pk])


@pytest.fixture
def product_data(category):
    return {
        "name": "Ankara Tote",
        "description": "Hand-sewn tote bag",
        "price_naira": "12500",
        "category": category.pk,
        "stock_quantity": "3",
    }


@pytest.mark.django_db
class TestDashboardAccess:
    """Who can open the vendor dashboard."""

    def test_anonymous_goes_to_vendor_sign_in(self, client) -> None:
        response = client.get(reverse("vendors:dashboard"))

        assert response.status_code == 302
        assert response["Location"] == f"{reverse('users:vendor_auth')}?next={DASHBOARD}"

    def test_customer_is_sent_home(self, client, customer) -> None:
        client.force_login(customer)

        response = client.get(reverse("vendors:dashboard"))

        assert response["Location"] == reverse("storefront:home")

    def test_unverified_vendor_must_verify(self, client, make_vendor) -> None:
        vendor = make_vendor("fresh@example.com", "Fresh Finds", email_verified=False)
        client.force_login(vendor.user)

        response = client.get(reverse("vendors:dashboard"))

        assert response["Location"] == reverse("users:verify_otp")
        assert client.session["verify_email"] == "fresh@example.com"

    def test_pending_vendor_can_look(self, client, pending_vendor) -> None:
        client.force_login(pending_vendor.user)

        response = client.get(reverse("vendors:dashboard"))

        assert response.status_code == 200
        assert response.context["can_manage"] is False
        assert any("pending approval" in message for message in messages_of(response))

    def test_approved_vendor_can_manage(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        response = client.get(reverse("vendors:dashboard"))

        assert response.context["can_manage"] is True
        assert list(response.context["products"]) == [product]

    def test_analytics_counts(self, client, approved_vendor, product) -> None:
        product.mark_as_sold()
        client.get(product.get_absolute_url())
        client.force_login(approved_vendor.user)

        analytics = client.get(reverse("vendors:dashboard")).context["analytics"]

        assert analytics[AnalyticsEvent.VIEW] == 1
        assert analytics[AnalyticsEvent.ORDER_CLICK] == 0
        assert analytics[AnalyticsEvent.MANUAL_PURCHASE] == 1

    def test_missing_vendor_record_is_created_pending(self, client, make_user) -> None:
        user = make_user("late@example.com", role="vendor", business_name="Late Shop")
        Vendor.objects.filter(user=user).delete()
        client.force_login(user)

        response = client.get(reverse("vendors:dashboard"))

        assert response.status_code == 200
        assert Vendor.objects.get(user=user).status == Vendor.STATUS_PENDING


@pytest.mark.django_db
class TestAddProduct:
    """Adding products from the dashboard."""

    def test_approved_vendor_adds_product(self, client, approved_vendor, product_data) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(reverse("vendors:product_add"), product_data)

        assert response["Location"] == reverse("vendors:dashboard")
        product = Product.objects.get(name="Ankara Tote")
        assert product.vendor == approved_vendor
        assert product.brand.name == "Chioma Styles"
        assert product.status == Product.STATUS_ACTIVE
        assert product.stock_quantity == 3
        assert product.is_public

    def test_zero_stock_starts_out_of_stock(self, client, approved_vendor, product_data) -> None:
        client.force_login(approved_vendor.user)

        client.post(reverse("vendors:product_add"), {**product_data, "stock_quantity": "0"})

        assert Product.objects.get(name="Ankara Tote").status == Product.STATUS_OUT_OF_STOCK

    def test_brand_is_reused(self, client, approved_vendor, product_data) -> None:
        Brand.objects.create(name="CHIOMA STYLES")
        client.force_login(approved_vendor.user)

        client.post(reverse("vendors:product_add"), product_data)
        client.post(reverse("vendors:product_add"), {**product_data, "name": "Ankara Purse"})

        assert Brand.objects.count() == 1

    def test_first_image_is_saved(self, client, approved_vendor, product_data, png_upload) -> None:
        client.force_login(approved_vendor.user)

        client.post(reverse("vendors:product_add"), {**product_data, "image": png_upload("tote.png")})

        image = ProductImage.objects.get(product__name="Ankara Tote")
        assert image.alt_text == "Ankara Tote"

    def test_invalid_product_is_rejected(self, client, approved_vendor, product_data) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(reverse("vendors:product_add"), {**product_data, "category": ""})

        assert not Product.objects.exists()
        assert messages_of(response)

    def test_pending_vendor_cannot_add(self, client, pending_vendor, product_data) -> None:
        client.force_login(pending_vendor.user)

        response = client.post(reverse("vendors:product_add"), product_data)

        assert response["Location"] == reverse("vendors:dashboard")
        assert not Product.objects.exists()
        assert (
            "Your vendor account is pending admin approval. You will be notified once approved."
            in messages_of(response)
        )

    def test_suspended_vendor_cannot_add(self, client, suspended_vendor, product_data) -> None:
        client.force_login(suspended_vendor.user)

        response = client.post(reverse("vendors:product_add"), product_data)

        assert not Product.objects.exists()
        assert "Your vendor account has been suspended. Please contact support." in messages_of(response)

    def test_suspension_applies_to_open_session(
        self, client, approved_vendor, marketplace_admin, product_data
    ) -> None:
        client.force_login(approved_vendor.user)
        approved_vendor.suspend(marketplace_admin)

        client.post(reverse("vendors:product_add"), product_data)

        assert not Product.objects.exists()

    def test_get_is_not_allowed(self, client, approved_vendor) -> None:
        client.force_login(approved_vendor.user)
        assert client.get(reverse("vendors:product_add")).status_code == 405


@pytest.mark.django_db
class TestProductActions:
    """Stock, sale, archive and delete actions."""

    def test_update_stock(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        client.post(product_url("product_update_stock", product), {"stock_quantity": "0"})

        product.refresh_from_db()
        assert product.status == Product.STATUS_OUT_OF_STOCK

    def test_negative_stock_is_refused(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(product_url("product_update_stock", product), {"stock_quantity": "-4"})

        product.refresh_from_db()
        assert product.stock_quantity == 1
        assert "Stock quantity cannot be negative." in messages_of(response)

    def test_mark_sold(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        client.post(product_url("product_mark_sold", product))

        product.refresh_from_db()
        assert product.manual_purchases == 1

    def test_toggle_stock(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)
        url = product_url("product_toggle_stock", product)

        client.post(url)
        product.refresh_from_db()
        assert product.status == Product.STATUS_OUT_OF_STOCK

        client.post(url)
        product.refresh_from_db()
        assert product.status == Product.STATUS_ACTIVE

    def test_toggle_archive(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        client.post(product_url("product_toggle_archive", product))

        product.refresh_from_db()
        assert product.is_archived is True
        assert client.get(product.get_absolute_url()).status_code == 404

    def test_delete(self, client, approved_vendor, product) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(product_url("product_delete", product))

        assert not Product.objects.filter(pk=product.pk).exists()
        assert 'Product "Wireless Earbuds" deleted' in messages_of(response)

    def test_other_vendors_product_is_not_found(self, client, make_vendor, product) -> None:
        rival = make_vendor("rival@example.com", "Rival Store", status=Vendor.STATUS_APPROVED)
        client.force_login(rival.user)

        response = client.post(product_url("product_delete", product))

        assert Product.objects.filter(pk=product.pk).exists()
        assert "Product not found." in messages_of(response)

    def test_suspended_vendor_cannot_change_products(
        self, client, approved_vendor, marketplace_admin, product
    ) -> None:
        approved_vendor.suspend(marketplace_admin)
        client.force_login(approved_vendor.user)

        client.post(product_url("product_toggle_archive", product))

        product.refresh_from_db()
        assert product.is_archived is False


@pytest.mark.django_db
class TestBranding:
    """Logo upload and social links."""

    def test_logo_upload_updates_vendor_and_brand(self, client, approved_vendor, png_upload) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(reverse("vendors:logo_upload"), {"logo": png_upload()})

        approved_vendor.refresh_from_db()
        brand = Brand.objects.get(name="Chioma Styles")
        assert "Brand logo updated." in messages_of(response)
        assert approved_vendor.logo
        assert brand.logo.name == approved_vendor.logo.name

    def test_logo_must_be_an_image(self, client, approved_vendor) -> None:
        client.force_login(approved_vendor.user)
        upload = SimpleUploadedFile("logo.png", b"not an image", content_type="image/png")

        client.post(reverse("vendors:logo_upload"), {"logo": upload})

        approved_vendor.refresh_from_db()
        assert not approved_vendor.logo

    def test_social_links_saved(self, client, approved_vendor) -> None:
        client.force_login(approved_vendor.user)

        client.post(reverse("vendors:social_links_update"), {
            "instagram_url": "https://instagram.com/chiomastyles",
            "website_url": "https://chiomastyles.ng",
        })

        approved_vendor.refresh_from_db()
        assert approved_vendor.instagram_url == "https://instagram.com/chiomastyles"
        assert approved_vendor.website_url == "https://chiomastyles.ng"

    def test_invalid_social_link_rejected(self, client, approved_vendor) -> None:
        client.force_login(approved_vendor.user)

        response = client.post(reverse("vendors:social_links_update"), {"instagram_url": "not a url"})

        approved_vendor.refresh_from_db()
        assert approved_vendor.instagram_url == ""
        assert messages_of(response)

    def test_pending_vendor_cannot_upload_logo(self, client, pending_vendor, png_upload) -> None:
        client.force_login(pending_vendor.user)

        client.post(reverse("vendors:logo_upload"), {"logo": png_upload()})

        pending_vendor.refresh_from_db()
        assert not pending_vendor.logo
