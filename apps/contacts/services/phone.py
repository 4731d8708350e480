"""WhatsApp number normalization."""

import re

from django.conf import settings

_NON_DIGITS = re.compile(r'\D')


def normalize_whatsapp(raw):
    """
    Reduce a phone number to international digits.

    ``0812...`` -> ``62812...``, ``812...`` -> ``62812...``, ``62...`` is kept
    and anything else is returned as the bare digits. Empty input gives None.
    """
    if raw is None:
        return None
    digits = _NON_DIGITS.sub('', str(raw))
    if not digits:
        return None

    country = settings.POS['PHONE_COUNTRY_CODE']
    if digits.startswith('0'):
        return country + digits[1:]
    if digits.startswith('8'):
        return country + digits
    return digits
