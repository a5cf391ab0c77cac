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
"""CORS filter: answers preflights, decorates actual requests, rejects violations."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping
from typing import Any, cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from flycors.cors.analyzer import CORSAnalyzer, CORSError, RequestType
from flycors.cors.config import CORSConfig
from flycors.cors.headers import ORIGIN, VARY, merge_vary
from flycors.cors.ports import CORSErrorHandler
from flycors.ordering import HIGHEST_PRECEDENCE, order
from flycors.web.filters import OncePerRequestFilter
from flycors.web.ports.filter import CallNext

logger = structlog.get_logger("flycors.cors")

REJECTED_STATUS = 401


def clone_response(template: Response, status_code: int) -> Response:
    """Copy *template* with a new status; the template is left untouched.

    Streaming templates have no buffered body to copy, so their clone keeps
    the headers and carries an empty body.
    """
    body = getattr(template, "body", None)
    clone = Response(content=body if body is not None else b"", status_code=status_code)
    # Content-Length depends on the new status (none for 204/304), keep the clone's own.
    length = [(k, v) for k, v in clone.raw_headers if k == b"content-length"]
    clone.raw_headers[:] = [(k, v) for k, v in template.raw_headers if k != b"content-length"] + length
    return clone


def apply_headers(response: Response, headers: Mapping[str, Any]) -> Response:
    """Set CORS headers on *response*, merging ``Vary`` with any existing value."""
    for name, value in headers.items():
        if name == VARY:
            response.headers[VARY] = merge_vary(response.headers.get(VARY), str(value))
        else:
            response.headers[name] = str(value)
    return response


@order(HIGHEST_PRECEDENCE + 50)
class CORSFilter(OncePerRequestFilter):
    """Applies a :class:`CORSConfig` to every request that reaches it.

    * not a CORS request → passed through untouched;
    * valid preflight → answered here with 200, the application is never called;
    * valid actual request → passed through, CORS headers added to the response;
    * violation → 401, built by the configured error handler or from the
      default response.
    """

    def __init__(
        self,
        config: CORSConfig | None = None,
        url_patterns: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        self._config = config or CORSConfig()
        self._analyzer = CORSAnalyzer(self._config)
        self._default_response: Response = (
            self._config.default_response if self._config.default_response is not None else Response()
        )
        self.set_patterns(url_patterns, exclude_patterns)

    @property
    def config(self) -> CORSConfig:
        return self._config

    @property
    def analyzer(self) -> CORSAnalyzer:
        return self._analyzer

    @property
    def logger(self) -> Any:
        """The diagnostic sink handed to the analyzer, if any."""
        return self._config.logger

    @property
    def error_handler(self) -> CORSErrorHandler | None:
        return self._config.error_handler

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        return await self.process(request, call_next)

    async def process(self, request: Request, call_next: CallNext) -> Response:
        """Classify *request* and produce the response for its CORS type."""
        result = self._analyzer.analyze(request)

        if result.error is not None:
            logger.warning(
                "cors_request_rejected",
                error=result.error.value,
                method=request.method,
                path=request.url.path,
                origin=request.headers.get(ORIGIN),
            )
            return await self.error(result.error)

        if result.request_type is RequestType.PREFLIGHT:
            response = clone_response(self._default_response, status_code=200)
            return apply_headers(response, result.headers)

        if result.request_type is RequestType.OUT_OF_SCOPE:
            return cast(Response, await call_next(request))

        response = cast(Response, await call_next(request))
        return apply_headers(response, result.headers)

    async def error(self, error: CORSError) -> Response:
        """Build the 401 response for a rejected request.

        The error handler's response is used when it returns one; its
        status is replaced with 401.  Any other return value falls back to
        the default response.
        """
        handler = self._config.error_handler
        if handler is not None:
            handled = handler(error)
            if inspect.isawaitable(handled):
                handled = await handled
            if isinstance(handled, Response):
                if getattr(handled, "body", None) is None:
                    # A streaming response is single-use and belongs to this request.
                    handled.status_code = REJECTED_STATUS
                    return handled
                return clone_response(handled, status_code=REJECTED_STATUS)
            logger.debug("cors_error_handler_ignored", error=error.value, result_type=type(handled).__name__)
        return clone_response(self._default_response, status_code=REJECTED_STATUS)
