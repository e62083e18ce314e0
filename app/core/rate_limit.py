"""Request rate limiting for public write endpoints, keyed by client address."""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

limiter = Limiter(key_func=get_remote_address)

CONTACT_FORM_LIMIT = f"{settings.contact_rate_limit_attempts}/{settings.contact_rate_limit_window} seconds"
