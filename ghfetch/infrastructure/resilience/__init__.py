"""Request pacing.

Contains the rate limiter that keeps live calls within the configured
per-minute budget.
"""
