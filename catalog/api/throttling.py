"""
API throttling classes for the alternative URL endpoints.
"""

from rest_framework.throttling import UserRateThrottle


class AltUrlGenerateThrottle(UserRateThrottle):
    """
    Throttle for generation endpoints.

    Rate: 30 requests per hour per user.
    Applied to: /api/v1/alt-urls/generate/
    """

    rate = '30/hour'
    scope = 'alt_url_generate'
