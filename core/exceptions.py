"""Exceptions raised by the proxy core."""


class ProxyError(Exception):
    """Base class for proxy failures."""


class UpstreamResponseError(ProxyError):
    """The upstream answered with a success status but an unusable body."""
