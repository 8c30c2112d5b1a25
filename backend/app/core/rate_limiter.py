"""Rate limiting configuration for the application."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client IP
limiter = Limiter(key_func=get_remote_address)
