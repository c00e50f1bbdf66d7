"""
Vendor App Utility Functions
Helper functions for encryption, formatting, slugs and file handling
"""

import base64
import hashlib
import logging
import os
import re
import secrets
from datetime import datetime
from typing import Optional, Tuple

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.utils.text import slugify
from PIL import Image

logger = logging.getLogger(__name__)


# ==========================================
# ENCRYPTION & SECURITY
# ==========================================

def _get_fernet() -> Fernet:
    key = getattr(settings, 'PHONE_ENCRYPTION_KEY', '')
    if not key:
        digest = hashlib.sha256(settings.SECRET_KEY.encode('utf-8')).digest()
        key = base64.urlsafe_b64encode(digest)
    if isinstance(key, str):
        key = key.encode('utf-8')
    return Fernet(key)


def encrypt_phone(phone_text: str) -> str:
    """
    Encrypt a phone number for storage at rest

    Args:
        phone_text: Phone number as entered

    Returns:
        Fernet token as text, or '' for empty input
    """
    if not phone_text:
        return ''
    return _get_fernet().encrypt(phone_text.encode('utf-8')).decode('utf-8')


def decrypt_phone(token: str) -> Optional[str]:
    """
    Decrypt a value produced by encrypt_phone

    Returns:
        The phone number, or None if the token is empty or was not
        produced with the current key
    """
    if not token:
        return None
    try:
        return _get_fernet().decrypt(token.encode('utf-8')).decode('utf-8')
    except InvalidToken:
        logger.warning('Could not decrypt phone token')
        return None


def mask_sensitive_info(text: str, visible_chars: int = 4) -> str:
    """
    Mask all but the last few characters (e.g. '*******4567')
    """
    if not text:
        return ''
    if len(text) <= visible_chars:
        return text
    return '*' * (len(text) - visible_chars) + text[-visible_chars:]


# ==========================================
# SLUGS
# ==========================================

def vendor_slug_from_business_name(business_name: str, user_id) -> str:
    """
    Build a vendor slug from the business name

    Lowercases the name and collapses every run of characters outside
    a-z/0-9 into a single hyphen. Falls back to 'vendor-<id prefix>' when
    nothing usable is left.
    """
    slug = re.sub(r'[^a-z0-9]+', '-', (business_name or '').lower()).strip('-')
    if slug:
        return slug
    return f'vendor-{str(user_id)[:8]}'


def generate_unique_slug(model_class, value: str, exclude_pk=None, max_length: int = 240) -> str:
    """
    Slugify ``value`` and append -2, -3, ... until no other row of
    ``model_class`` uses it.
    """
    base = slugify(value)[:max_length].strip('-') or 'item'
    queryset = model_class._default_manager.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)

    slug = base
    counter = 2
    while queryset.filter(slug=slug).exists():
        slug = f'{base}-{counter}'
        counter += 1
    return slug


# ==========================================
# FILE HANDLING
# ==========================================

ALLOWED_IMAGE_TYPES = ['image/jpeg', 'image/jpg', 'image/png', 'image/webp']


def validate_image_file(file: UploadedFile, max_size_mb: int = 5) -> Tuple[bool, str]:
    """
    Validate uploaded image file

    Args:
        file: Uploaded file
        max_size_mb: Maximum file size in MB

    Returns:
        Tuple of (is_valid: bool, error_message: str)
    """
    max_size_bytes = max_size_mb * 1024 * 1024
    if file.size > max_size_bytes:
        return False, f'File size must be less than {max_size_mb}MB'

    content_type = getattr(file, 'content_type', None)
    if content_type and content_type not in ALLOWED_IMAGE_TYPES:
        return False, 'Only JPG, PNG and WEBP images are allowed'

    try:
        img = Image.open(file)
        img.verify()
    except Exception:
        return False, 'Invalid image file'
    finally:
        file.seek(0)

    return True, ''


def generate_unique_filename(original_filename: str, prefix: str = '') -> str:
    """
    Generate unique filename to avoid collisions

    Args:
        original_filename: Original filename
        prefix: Optional prefix

    Returns:
        Unique filename
    """
    name, ext = os.path.splitext(original_filename)
    name = slugify(name)[:40] or 'file'

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    random_str = secrets.token_hex(4)

    if prefix:
        return f"{prefix}_{name}_{timestamp}_{random_str}{ext.lower()}"

    return f"{name}_{timestamp}_{random_str}{ext.lower()}"


# ==========================================
# MONEY
# ==========================================

def format_naira(amount) -> str:
    """
    Format a whole-Naira amount for display

    Args:
        amount: Integer amount in Naira

    Returns:
        Formatted string (e.g., '₦15,000')
    """
    if amount is None:
        amount = 0
    return f"₦{int(amount):,}"


# ==========================================
# TEXT
# ==========================================

def truncate_text(text: str, max_length: int = 100, suffix: str = '...') -> str:
    """
    Truncate text to max length, appending suffix when cut
    """
    if not text or len(text) <= max_length:
        return text or ''
    return text[:max_length - len(suffix)].rstrip() + suffix
