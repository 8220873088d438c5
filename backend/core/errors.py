"""
core/errors.py ── domain exceptions
Routes map these onto HTTP status codes; anything else becomes a generic 500.
"""
from __future__ import annotations


class RailQRError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RailQRError):
    status_code = 400


class NotFoundError(RailQRError):
    status_code = 404


class InstallationNotFoundError(NotFoundError):
    def __init__(self, uid: str):
        super().__init__(f"No installation found for UID: {uid}")
        self.uid = uid


class ReportNotFoundError(NotFoundError):
    def __init__(self, report_id: int):
        super().__init__("Report not found")
        self.report_id = report_id


class UpstreamFetchError(RailQRError):
    """Remote image could not be retrieved (status code or transport cause)."""
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        upstream_status: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.upstream_status = upstream_status
        self.cause = cause


class InvalidUrlError(UpstreamFetchError):
    def __init__(self, url: str):
        super().__init__(f"Invalid URL: {url}", url=url)


class TooManyRedirectsError(UpstreamFetchError):
    def __init__(self, url: str, hops: int):
        super().__init__(f"Too many redirects ({hops}) while fetching {url}", url=url)
        self.hops = hops


class SummaryProviderError(RailQRError):
    status_code = 502


class InternalError(RailQRError):
    status_code = 500
