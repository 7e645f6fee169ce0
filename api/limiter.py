"""Request rate limiting."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from config import config

RATE_LIMIT = f"{config.rate_limit.requests_per_minute}/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[RATE_LIMIT],
)
