"""HTTP client module for reqview.

Provides :class:`Fetcher`, a blocking single-request client backed by
:class:`httpx.Client` that validates its inputs, applies the configured
timeout and returns a classified result instead of raising on network or
body failures.

Example::

    from reqview.client import Fetcher

    with Fetcher(config) as fetcher:
        result = fetcher.fetch("GET", "https://api.github.com")
"""

from reqview.client.fetcher import Exchange, Fetcher, validate_method, validate_url

__all__ = ["Exchange", "Fetcher", "validate_method", "validate_url"]
