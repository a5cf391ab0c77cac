# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""CORS request analysis: classifies a request against a policy.

Follows the Fetch standard's CORS processing model:

1. No ``Origin`` header, or an ``Origin`` equal to the request's own
   scheme/host/port → not a CORS request (:attr:`RequestType.OUT_OF_SCOPE`).
2. Origin not in the allow-list → :attr:`RequestType.ERR_ORIGIN_NOT_ALLOWED`.
3. ``OPTIONS`` with ``Access-Control-Request-Method`` → preflight: the
   requested method and every requested header must be allowed.
4. Anything else → actual request: the request method must be allowed.

Origins and methods compare case-sensitively; header names do not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from flycors.cors.config import CORSConfig
from flycors.cors.headers import (
    ACCESS_CONTROL_REQUEST_HEADERS,
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    build_headers,
)
from flycors.cors.ports import CORSRequest

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


class CORSError(Enum):
    """The three ways a cross-origin request can violate the policy."""

    ORIGIN_NOT_ALLOWED = "origin_not_allowed"
    METHOD_NOT_SUPPORTED = "method_not_supported"
    HEADERS_NOT_SUPPORTED = "headers_not_supported"


class RequestType(Enum):
    OUT_OF_SCOPE = "out_of_scope"
    PREFLIGHT = "preflight"
    ACTUAL = "actual"
    ERR_ORIGIN_NOT_ALLOWED = "err_origin_not_allowed"
    ERR_METHOD_NOT_SUPPORTED = "err_method_not_supported"
    ERR_HEADERS_NOT_SUPPORTED = "err_headers_not_supported"


_ERRORS: dict[RequestType, CORSError] = {
    RequestType.ERR_ORIGIN_NOT_ALLOWED: CORSError.ORIGIN_NOT_ALLOWED,
    RequestType.ERR_METHOD_NOT_SUPPORTED: CORSError.METHOD_NOT_SUPPORTED,
    RequestType.ERR_HEADERS_NOT_SUPPORTED: CORSError.HEADERS_NOT_SUPPORTED,
}


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analysing one request.

    ``headers`` holds the CORS response headers for :attr:`RequestType.PREFLIGHT`
    and :attr:`RequestType.ACTUAL`; it is empty for every other type.
    """

    request_type: RequestType
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.request_type in _ERRORS

    @property
    def error(self) -> CORSError | None:
        return _ERRORS.get(self.request_type)


@dataclass(frozen=True)
class ResolvedPolicy:
    """A :class:`CORSConfig` with its method provider evaluated for one request."""

    allows_any_origin: bool
    allowed_origins: tuple[str, ...]
    methods: tuple[str, ...]
    allowed_headers: tuple[str, ...]
    allowed_header_names: frozenset[str]
    exposed_headers: tuple[str, ...]
    allow_credentials: bool
    max_age: int


def _normalize_origin(scheme: str | None, host: str | None, port: int | None) -> tuple[str, str, int | None] | None:
    if not scheme or not host:
        return None
    scheme = scheme.lower()
    return scheme, host.lower(), port if port is not None else _DEFAULT_PORTS.get(scheme)


def parse_origin(origin: str) -> tuple[str, str, int | None] | None:
    """Split an ``Origin`` value into (scheme, host, port), or ``None`` if opaque."""
    try:
        parts = urlsplit(origin)
        port = parts.port
    except ValueError:
        return None
    return _normalize_origin(parts.scheme, parts.hostname, port)


def request_origin(request: CORSRequest) -> tuple[str, str, int | None] | None:
    """The (scheme, host, port) the request itself was addressed to."""
    url = request.url
    return _normalize_origin(url.scheme, url.hostname, url.port)


def parse_header_list(value: str | None) -> list[str]:
    """Split a comma-separated header list, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class CORSAnalyzer:
    """Classifies requests against a :class:`CORSConfig`.

    Holds no per-request state, so one analyzer may serve concurrent
    requests.  Analysis is deterministic: the same request analysed twice
    against the same policy yields equal results.
    """

    def __init__(self, config: CORSConfig) -> None:
        self._config = config

    @property
    def config(self) -> CORSConfig:
        return self._config

    def resolve(self, request: CORSRequest) -> ResolvedPolicy:
        """Evaluate the policy for *request*; calls the method provider once."""
        cfg = self._config
        return ResolvedPolicy(
            allows_any_origin=cfg.allows_any_origin,
            allowed_origins=cfg.allowed_origins,
            methods=cfg.methods.resolve(request),
            allowed_headers=cfg.allowed_headers,
            allowed_header_names=cfg.allowed_header_names,
            exposed_headers=cfg.exposed_headers,
            allow_credentials=cfg.allow_credentials,
            max_age=cfg.max_age,
        )

    def is_same_origin(self, request: CORSRequest, origin: str) -> bool:
        own = request_origin(request)
        return own is not None and parse_origin(origin) == own

    def is_origin_allowed(self, origin: str) -> bool:
        return self._config.allows_any_origin or origin in self._config.allowed_origins

    def analyze(self, request: CORSRequest) -> AnalysisResult:
        """Classify *request* and compute the CORS headers it should receive."""
        origin = request.headers.get(ORIGIN)
        if origin is None or self.is_same_origin(request, origin):
            self._log("cors_request_out_of_scope", origin=origin)
            return AnalysisResult(RequestType.OUT_OF_SCOPE)

        if not self.is_origin_allowed(origin):
            self._log("cors_origin_not_allowed", origin=origin, allowed=list(self._config.allowed_origins))
            return AnalysisResult(RequestType.ERR_ORIGIN_NOT_ALLOWED)

        policy = self.resolve(request)
        requested_method = request.headers.get(ACCESS_CONTROL_REQUEST_METHOD)

        if request.method == "OPTIONS" and requested_method is not None:
            return self._analyze_preflight(request, policy, origin, requested_method)

        if request.method not in policy.methods:
            self._log("cors_method_not_supported", method=request.method, allowed=list(policy.methods))
            return AnalysisResult(RequestType.ERR_METHOD_NOT_SUPPORTED)

        self._log("cors_actual_request", origin=origin, method=request.method)
        return AnalysisResult(RequestType.ACTUAL, build_headers(policy, origin, preflight=False))

    def _analyze_preflight(
        self, request: CORSRequest, policy: ResolvedPolicy, origin: str, requested_method: str
    ) -> AnalysisResult:
        if requested_method not in policy.methods:
            self._log("cors_method_not_supported", method=requested_method, allowed=list(policy.methods))
            return AnalysisResult(RequestType.ERR_METHOD_NOT_SUPPORTED)

        requested_headers = parse_header_list(request.headers.get(ACCESS_CONTROL_REQUEST_HEADERS))
        rejected = [h for h in requested_headers if h.lower() not in policy.allowed_header_names]
        if rejected:
            self._log("cors_headers_not_supported", headers=rejected, allowed=list(policy.allowed_headers))
            return AnalysisResult(RequestType.ERR_HEADERS_NOT_SUPPORTED)

        self._log("cors_preflight_request", origin=origin, method=requested_method, headers=requested_headers)
        return AnalysisResult(RequestType.PREFLIGHT, build_headers(policy, origin, preflight=True))

    def _log(self, event: str, **kwargs: Any) -> None:
        logger = self._config.logger
        if logger is not None:
            logger.debug(event, **kwargs)
