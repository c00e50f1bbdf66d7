"""Shared pytest fixtures for Run Marketplace tests.

Provides users for each role, vendors in each approval state, catalog
data and an in-memory image upload helper.
"""

from __future__ import annotations

import io

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.vendors.models import Brand, Category, Product, Vendor

PASSWORD = "secret-pass-123"


@pytest.fixture(autouse=True)
def test_settings(settings, tmp_path):
    """Fast hashing, in-memory mail and a throwaway media directory."""
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.USE_MOCK_NOTIFICATIONS = False
    settings.WISHLIST_MERGE_ON_LOGIN = False
    return settings


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def make_user(db):
    """Factory for users of any role. Emails are verified unless told otherwise."""
    User = get_user_model()

    def _make_user(email, role=User.ROLE_CUSTOMER, email_verified=True, **extra):
        extra.setdefault("full_name", email.split("@")[0].title())
        return User.objects.create_user(
            email=email,
            password=PASSWORD,
            role=role,
            email_verified=email_verified,
            **extra,
        )

    return _make_user


@pytest.fixture
def customer(make_user):
    return make_user("ada@example.com", full_name="Ada Obi")


@pytest.fixture
def marketplace_admin(db):
    User = get_user_model()
    return User.objects.create_superuser(email="admin@example.com", password=PASSWORD)


@pytest.fixture
def make_vendor(make_user, marketplace_admin):
    """
    Factory for vendor accounts in a given approval state.
    The Vendor row is created by the post_save signal and then moved
    through the state machine.
    """
    User = get_user_model()

    def _make_vendor(email, business_name, status=Vendor.STATUS_PENDING,
                     phone="08031234567", email_verified=True):
        user = make_user(
            email,
            role=User.ROLE_VENDOR,
            email_verified=email_verified,
            business_name=business_name,
            phone=phone,
        )
        vendor = user.vendor
        if status in (Vendor.STATUS_APPROVED, Vendor.STATUS_SUSPENDED):
            vendor.approve(marketplace_admin)
        if status == Vendor.STATUS_SUSPENDED:
            vendor.suspend(marketplace_admin)
        return vendor

    return _make_vendor


@pytest.fixture
def pending_vendor(make_vendor):
    return make_vendor("pending@example.com", "Pending Threads")


@pytest.fixture
def approved_vendor(make_vendor):
    return make_vendor("chioma@example.com", "Chioma Styles", status=Vendor.STATUS_APPROVED)


@pytest.fixture
def suspended_vendor(make_vendor):
    return make_vendor("tunde@example.com", "Tunde Gadgets", status=Vendor.STATUS_SUSPENDED)


@pytest.fixture
def category(db):
    return Category.objects.create(name="Electronics", icon="📱")


@pytest.fixture
def other_category(db):
    return Category.objects.create(name="Accessories", icon="👜")


@pytest.fixture
def brand(db):
    return Brand.objects.create(name="Chioma Styles")


@pytest.fixture
def make_product(approved_vendor, category):
    """Factory for products owned by the approved vendor by default."""

    def _make_product(name="Wireless Earbuds", price_naira=15000, **extra):
        extra.setdefault("vendor", approved_vendor)
        extra.setdefault("category", category)
        return Product.objects.create(name=name, price_naira=price_naira, **extra)

    return _make_product


@pytest.fixture
def product(make_product):
    return make_product()


@pytest.fixture
def png_upload():
    """Factory for a small valid PNG upload."""

    def _png_upload(name="logo.png"):
        buffer = io.BytesIO()
        Image.new("RGB", (8, 8), "red").save(buffer, format="PNG")
        return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")

    return _png_upload
