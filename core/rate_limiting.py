"""
Redis-based rate limiting for public storefront endpoints.
Implements a fixed window counter keyed by device (or client IP).
"""
import logging
from functools import wraps

import redis
from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)

_redis_client = None
_redis_checked = False


def get_redis_client():
    """
    Return a shared Redis client, or None when rate limiting is disabled
    or Redis cannot be reached.
    """
    global _redis_client, _redis_checked
    if not getattr(settings, 'RATE_LIMIT_ENABLED', True):
        return None
    if _redis_checked:
        return _redis_client

    _redis_checked = True
    try:
        client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5
        )
        client.ping()
        _redis_client = client
    except (redis.ConnectionError, redis.TimeoutError) as e:
        logger.warning(f"Redis connection failed: {e}. Rate limiting will be disabled.")
        _redis_client = None
    return _redis_client


def get_client_ip(request):
    """Extract client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR', 'unknown')
    return ip


def get_client_key(request):
    """Prefer the anonymous device id header, fall back to the client IP."""
    device_id = request.META.get('HTTP_X_DEVICE_ID', '').strip()
    if device_id:
        return f"device:{device_id}"
    return f"ip:{get_client_ip(request)}"


def _limit_exceeded(max_requests, window_seconds, ttl):
    body = {
        'error': 'Rate limit exceeded',
        'detail': f'Maximum {max_requests} requests per {window_seconds} seconds allowed.',
        'retry_after': ttl
    }
    headers = {
        'X-RateLimit-Limit': str(max_requests),
        'X-RateLimit-Remaining': '0',
        'X-RateLimit-Reset': str(ttl),
        'Retry-After': str(ttl)
    }
    return body, headers


def _hit(client, key, window_seconds):
    current_count = client.incr(key)
    if current_count == 1:
        client.expire(key, window_seconds)
    return current_count, client.ttl(key)


def rate_limit(max_requests: int = 20, window_seconds: int = 60):
    """
    Redis-based rate limiting decorator for DRF view methods.

    Usage:
        @rate_limit(20, 60)  # 20 requests per minute
        def post(self, request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(self, request, *args, **kwargs):
            client = get_redis_client()
            if client is None:
                return view_func(self, request, *args, **kwargs)

            try:
                key = f"rate_limit:{view_func.__name__}:{get_client_key(request)}"
                current_count, ttl = _hit(client, key, window_seconds)

                if current_count > max_requests:
                    body, headers = _limit_exceeded(max_requests, window_seconds, ttl)
                    return Response(
                        body, status=status.HTTP_429_TOO_MANY_REQUESTS, headers=headers
                    )

                response = view_func(self, request, *args, **kwargs)
                response['X-RateLimit-Limit'] = str(max_requests)
                response['X-RateLimit-Remaining'] = str(max(0, max_requests - current_count))
                response['X-RateLimit-Reset'] = str(ttl)
                return response

            except redis.RedisError as e:
                logger.error(f"Redis error in rate limiting: {e}")
                # Fail open
                return view_func(self, request, *args, **kwargs)

        return wrapper
    return decorator


class RateLimitMixin:
    """
    Mixin class for class-based views to add rate limiting.

    Usage:
        class OrderSubmitView(RateLimitMixin, APIView):
            rate_limit_max_requests = 10
            rate_limit_window_seconds = 60
    """
    rate_limit_max_requests = 20
    rate_limit_window_seconds = 60

    def dispatch(self, request, *args, **kwargs):
        client = get_redis_client()
        if client is None:
            return super().dispatch(request, *args, **kwargs)

        try:
            key = f"rate_limit:{self.__class__.__name__}:{get_client_key(request)}"
            current_count, ttl = _hit(client, key, self.rate_limit_window_seconds)

            if current_count > self.rate_limit_max_requests:
                body, headers = _limit_exceeded(
                    self.rate_limit_max_requests, self.rate_limit_window_seconds, ttl
                )
                # Returned before DRF negotiates a renderer
                response = JsonResponse(body, status=status.HTTP_429_TOO_MANY_REQUESTS)
                for name, value in headers.items():
                    response[name] = value
                return response

            response = super().dispatch(request, *args, **kwargs)
            response['X-RateLimit-Limit'] = str(self.rate_limit_max_requests)
            response['X-RateLimit-Remaining'] = str(max(0, self.rate_limit_max_requests - current_count))
            response['X-RateLimit-Reset'] = str(ttl)
            return response

        except redis.RedisError as e:
            logger.error(f"Redis error in rate limiting: {e}")
            return super().dispatch(request, *args, **kwargs)
