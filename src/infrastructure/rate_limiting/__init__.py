"""
Rate Limiting Infrastructure Module

Exports:
    - SlidingWindowRateLimiter: Per-client rolling-window budgets
    - RateLimitStatus: Remaining budget after a counted request
"""

from .sliding_window import RateLimitStatus, SlidingWindowRateLimiter

__all__ = ["SlidingWindowRateLimiter", "RateLimitStatus"]
