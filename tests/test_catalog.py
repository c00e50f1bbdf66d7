"""Tests for catalog filtering and the public storefront pages."""

from __future__ import annotations

import pytest
from django.urls import reverse

from apps.storefront.forms import ProductFilterForm
from apps.storefront.services import (
    brands_with_counts,
    filter_products,
    homepage_products,
    related_products,
)
from apps.vendors.models import AnalyticsEvent, Brand, Product


@pytest.fixture
def catalog(make_product, category, other_category):
    """A small catalog: three electronics and one accessory."""
    return {
        "earbuds": make_product(name="Wireless Earbuds", price_naira=15000),
        "charger": make_product(name="Fast Charger", price_naira=4000),
        "speaker": make_product(name="Bluetooth Speaker", price_naira=25000),
        "bag": make_product(name="Leather Bag", price_naira=18000, category=other_category),
    }


def names(products):
    return [product.name for product in products]


@pytest.mark.django_db
class TestFilterProducts:
    """Tests for filter_products."""

    def test_default_is_newest_first(self, catalog) -> None:
        assert names(filter_products()) == [
            "Leather Bag", "Bluetooth Speaker", "Fast Charger", "Wireless Earbuds",
        ]

    def test_search_is_case_insensitive_substring(self, catalog) -> None:
        assert names(filter_products(search="EAR")) == ["Wireless Earbuds"]

    def test_category_filter(self, catalog, other_category) -> None:
        assert names(filter_products(category=other_category.pk)) == ["Leather Bag"]

    def test_brand_filter(self, catalog) -> None:
        brand = Brand.objects.create(name="SoundCo")
        speaker = catalog["speaker"]
        speaker.brand = brand
        speaker.save()

        assert names(filter_products(brand=brand.pk)) == ["Bluetooth Speaker"]

    def test_price_range_is_inclusive(self, catalog) -> None:
        result = filter_products(min_price=4000, max_price=18000, sort="price_low")
        assert names(result) == ["Fast Charger", "Wireless Earbuds", "Leather Bag"]

    def test_filters_combine(self, catalog, category) -> None:
        result = filter_products(category=category.pk, min_price=10000, sort="price_high")
        assert names(result) == ["Bluetooth Speaker", "Wireless Earbuds"]

    def test_sort_by_name(self, catalog) -> None:
        assert names(filter_products(sort="name")) == [
            "Bluetooth Speaker", "Fast Charger", "Leather Bag", "Wireless Earbuds",
        ]

    def test_unknown_sort_falls_back_to_newest(self, catalog) -> None:
        assert names(filter_products(sort="random"))[0] == "Leather Bag"

    def test_result_is_capped(self, make_product, settings) -> None:
        settings.PRODUCT_PAGE_SIZE = 3
        for index in range(5):
            make_product(name=f"Item {index}")

        assert len(filter_products()) == 3

    def test_hidden_products_never_listed(self, catalog) -> None:
        catalog["charger"].toggle_archived()
        catalog["speaker"].mark_sold_out()

        assert names(filter_products()) == ["Leather Bag", "Wireless Earbuds"]


@pytest.mark.django_db
class TestProductFilterForm:
    """Tests for ProductFilterForm."""

    def test_filter_kwargs(self, category) -> None:
        form = ProductFilterForm({"search": "phone", "category": category.pk, "sort": "price_low"})

        assert form.is_valid()
        assert form.filter_kwargs() == {
            "search": "phone",
            "category": category.pk,
            "brand": None,
            "min_price": None,
            "max_price": None,
            "sort": "price_low",
        }

    def test_min_above_max_is_invalid(self) -> None:
        form = ProductFilterForm({"search": "bag", "min_price": 500, "max_price": 100})

        assert not form.is_valid()
        kwargs = form.filter_kwargs()
        assert (kwargs["search"], kwargs["min_price"], kwargs["max_price"]) == ("bag", None, None)

    def test_negative_price_is_invalid(self) -> None:
        assert not ProductFilterForm({"min_price": -1}).is_valid()


@pytest.mark.django_db
class TestListings:
    """Homepage, related products and brand counts."""

    def test_homepage_prefers_featured(self, make_product) -> None:
        make_product(name="Regular")
        make_product(name="Star", featured=True)

        assert names(homepage_products()) == ["Star"]

    def test_homepage_falls_back_to_newest(self, make_product, settings) -> None:
        settings.FEATURED_PRODUCTS_LIMIT = 2
        for index in range(3):
            make_product(name=f"Item {index}")

        assert names(homepage_products()) == ["Item 2", "Item 1"]

    def test_related_products_same_category(self, catalog) -> None:
        related = related_products(catalog["earbuds"])

        assert "Wireless Earbuds" not in names(related)
        assert "Leather Bag" not in names(related)
        assert set(names(related)) == {"Fast Charger", "Bluetooth Speaker"}

    def test_related_products_limit(self, make_product, settings) -> None:
        settings.RELATED_PRODUCTS_LIMIT = 2
        products = [make_product(name=f"Item {index}") for index in range(4)]

        assert len(related_products(products[0])) == 2

    def test_brand_counts_only_public_products(self, make_product) -> None:
        brand = Brand.objects.create(name="Kente Co")
        make_product(name="Scarf", brand=brand)
        hidden = make_product(name="Shawl", brand=brand)
        hidden.toggle_archived()

        assert brands_with_counts().get(pk=brand.pk).product_count == 1

    def test_brand_search_and_letter(self, db) -> None:
        Brand.objects.create(name="Apex", description="Phones and tablets")
        Brand.objects.create(name="Bolt", description="Chargers")
        Brand.objects.create(name="Adire House", description="Fabric")

        assert names(brands_with_counts(letter="a")) == ["Adire House", "Apex"]
        assert names(brands_with_counts(search="chargers")) == ["Bolt"]
        assert names(brands_with_counts(search="phones", letter="B")) == []


@pytest.mark.django_db
class TestStorefrontPages:
    """Public page views."""

    def test_home(self, client, catalog) -> None:
        response = client.get(reverse("storefront:home"))

        assert response.status_code == 200
        assert len(response.context["products"]) == 4
        assert "₦15,000" in response.content.decode()

    def test_products_search_param(self, client, catalog) -> None:
        response = client.get(reverse("storefront:products"), {"search": "charger"})

        assert response.status_code == 200
        assert names(response.context["products"]) == ["Fast Charger"]

    def test_products_invalid_field_keeps_valid_filters(self, client, catalog) -> None:
        response = client.get(reverse("storefront:products"), {"search": "charger", "min_price": "abc"})

        assert response.status_code == 200
        assert names(response.context["products"]) == ["Fast Charger"]
        assert "min_price" in response.context["form"].errors

    def test_products_inverted_price_range_is_reported(self, client, catalog) -> None:
        response = client.get(
            reverse("storefront:products"),
            {"search": "ar", "min_price": "20000", "max_price": "1000"},
        )

        assert set(names(response.context["products"])) == {
            "Wireless Earbuds", "Fast Charger",
        }
        assert "Minimum price cannot be more than maximum price." in response.content.decode()

    def test_products_overlong_search_is_reported(self, client, catalog) -> None:
        response = client.get(reverse("storefront:products"), {"search": "x" * 101, "sort": "price_low"})

        assert names(response.context["products"])[0] == "Fast Charger"
        assert "search" in response.context["form"].errors

    def test_product_detail_records_view(self, client, product) -> None:
        response = client.get(product.get_absolute_url())

        assert response.status_code == 200
        assert AnalyticsEvent.objects.filter(event_type=AnalyticsEvent.VIEW, product=product).count() == 1

    def test_archived_product_is_not_found(self, client, product) -> None:
        product.toggle_archived()
        response = client.get(product.get_absolute_url())
        assert response.status_code == 404

    def test_category_page(self, client, catalog, other_category) -> None:
        response = client.get(other_category.get_absolute_url())

        assert response.status_code == 200
        assert names(response.context["products"]) == ["Leather Bag"]

    def test_brand_pages(self, client, make_product) -> None:
        brand = Brand.objects.create(name="Bolt")
        make_product(name="Power Bank", brand=brand)

        listing = client.get(reverse("storefront:brands"), {"letter": "b"})
        detail = client.get(brand.get_absolute_url())

        assert listing.status_code == 200
        assert listing.context["selected_letter"] == "B"
        assert names(listing.context["brands"]) == ["Bolt"]
        assert names(detail.context["products"]) == ["Power Bank"]

    def test_unknown_page_is_404(self, client, db) -> None:
        response = client.get("/no-such-page/")
        assert response.status_code == 404

    def test_empty_catalog(self, client, db) -> None:
        response = client.get(reverse("storefront:products"))
        assert list(response.context["products"]) == []

    def test_inactive_product_excluded(self, client, make_product) -> None:
        make_product(name="Draft", status=Product.STATUS_INACTIVE)
        response = client.get(reverse("storefront:products"))
        assert list(response.context["products"]) == []
