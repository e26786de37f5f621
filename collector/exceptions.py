"""
Exceptions for station validation and upstream retrieval.
"""


class WeatherProxyError(Exception):
    """Base exception for weather proxy errors."""

    pass


class InvalidStationCode(WeatherProxyError, ValueError):
    """Station identifier is not 3-4 uppercase alphanumerics."""

    def __init__(self, value):
        super().__init__(f"Invalid station: {value!r}")
        self.value = value


class UpstreamTransportFailure(WeatherProxyError):
    """DNS, connection or timeout error talking to the upstream text server."""

    def __init__(self, url: str, reason: str = ""):
        super().__init__(f"Transport failure for {url}: {reason}" if reason else f"Transport failure for {url}")
        self.url = url
        self.reason = reason


class UpstreamHttpFailure(WeatherProxyError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "", url: str = ""):
        super().__init__(f"HTTP {status_code} {reason}".strip())
        self.status_code = status_code
        self.reason = reason
        self.url = url
