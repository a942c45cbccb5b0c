# activities/sanitizers.py
"""
Input sanitization and validation for Huddle activities.

All user-generated activity content should pass through these functions
before being stored or rendered.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

import bleach


# Allowed HTML tags for activity descriptions
ALLOWED_TAGS = [
    'p', 'br', 'strong', 'em', 'u', 'a', 'ul', 'ol', 'li', 'blockquote',
]

ALLOWED_ATTRIBUTES = {
    'a': ['href', 'title'],
}

MIN_CAPACITY = 2
MAX_CAPACITY = 1000
MAX_AGE = 120
MAX_IMAGES = 10


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_html(html: Optional[str], max_length: Optional[int] = None) -> str:
    """Sanitize HTML content, removing dangerous elements."""
    if html is None:
        return ""

    clean = bleach.clean(
        html.strip(),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip=True,
    )

    if max_length and len(clean) > max_length:
        clean = clean[:max_length]

    return clean


def sanitize_title(title: Optional[str], max_length: int = 255) -> str:
    """
    Sanitize activity names, categories and locations.

    - No HTML
    - Single line (no newlines)
    """
    text = sanitize_text(title, max_length=max_length)
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r'[\r\n]+', ' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def sanitize_description(description: Optional[str]) -> str:
    """Activity descriptions: max 5000 characters, HTML sanitized."""
    return sanitize_html(description, max_length=5000)


# ─────────────────────────────────────────────────────────────
# Numeric Validators
# ─────────────────────────────────────────────────────────────

class ValidationError(Exception):
    """Raised when validation fails."""
    pass


def validate_capacity(value, min_value: int = MIN_CAPACITY, max_value: int = MAX_CAPACITY) -> Optional[int]:
    """
    Validate the participant limit of an activity.

    - None means unlimited
    - Otherwise an integer between min_value and max_value
      (the creator always occupies one slot)
    """
    if value is None or value == '':
        return None

    try:
        capacity = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Max participants must be a valid integer")

    if capacity < min_value:
        raise ValidationError(f"Max participants must be at least {min_value}")

    if capacity > max_value:
        raise ValidationError(f"Max participants cannot exceed {max_value}")

    return capacity


def validate_age(value, field_name: str = "Age") -> Optional[int]:
    if value is None or value == '':
        return None

    try:
        age = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a valid integer")

    if age < 0 or age > MAX_AGE:
        raise ValidationError(f"{field_name} must be between 0 and {MAX_AGE}")

    return age


def validate_age_range(min_age: Optional[int], max_age: Optional[int]) -> None:
    if min_age is not None and max_age is not None and min_age > max_age:
        raise ValidationError("Minimum age cannot be greater than maximum age")


def validate_entry_fee(value, max_value: Decimal = Decimal('99999999.99')) -> Optional[Decimal]:
    """
    Validate the entry fee.

    - None / empty means free
    - Must be non-negative
    - Rounded to 2 decimal places
    """
    if value is None:
        return None

    try:
        if isinstance(value, str):
            value = value.strip()
            if value == '':
                return None
        fee = Decimal(str(value))
    except (TypeError, ValueError, InvalidOperation):
        raise ValidationError("Entry fee must be a valid number")

    if fee < 0:
        raise ValidationError("Entry fee cannot be negative")

    if fee > max_value:
        raise ValidationError(f"Entry fee cannot exceed {max_value}")

    return fee.quantize(Decimal('0.01'))


def validate_url(url: Optional[str]) -> str:
    """
    Validate and sanitize a single URL.
    """
    url = sanitize_text(url, max_length=2048)
    if not url:
        raise ValidationError("URL is required")

    # Basic URL pattern
    pattern = r'^https?://[^\s<>"{}|\\^`\[\]]+$'
    if not re.match(pattern, url):
        raise ValidationError("Invalid URL format")

    return url


def validate_image_urls(urls, max_count: int = MAX_IMAGES) -> list:
    """
    Validate the image URLs attached to an activity.

    - None means no images
    - Each entry must be an http(s) URL
    - Duplicates are dropped, order is kept
    """
    if urls is None:
        return []

    if len(urls) > max_count:
        raise ValidationError(f"At most {max_count} images are allowed")

    cleaned = []
    for url in urls:
        url = validate_url(url)
        if url not in cleaned:
            cleaned.append(url)
    return cleaned
