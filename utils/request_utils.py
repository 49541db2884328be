"""
Helpers for reading client details off the current request
"""
from flask import request

UNKNOWN = 'unknown'


def get_client_ip():
    """Return the best-effort client IP.

    Prefers the first entry of X-Forwarded-For (the originating client when
    behind a proxy), then the direct connection address.
    """
    forwarded = request.headers.get('X-Forwarded-For', '')
    first = forwarded.split(',')[0].strip()
    if first:
        return first
    return request.remote_addr or UNKNOWN


def get_user_agent():
    return request.headers.get('User-Agent') or UNKNOWN
