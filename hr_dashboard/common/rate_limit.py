"""Rate limiting configuration using slowapi.

Provides a module-level Limiter instance imported by the proxy router for
per-endpoint limits on forwarded writes, and wired into the app in main.py.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
