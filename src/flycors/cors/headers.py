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
"""CORS response header names and the header builder."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flycors.cors.analyzer import ResolvedPolicy

ORIGIN = "Origin"
VARY = "Vary"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"
ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"

LIST_SEPARATOR = ","


def join_values(values: Iterable[Any]) -> str:
    """Join header list values, coercing each to ``str``."""
    return LIST_SEPARATOR.join(str(v) for v in values)


def build_headers(policy: ResolvedPolicy, origin: str, *, preflight: bool) -> dict[str, str]:
    """Compute the CORS response headers for an accepted request.

    Only called once the origin, method and headers have passed analysis.
    The returned dict is ordered and every value is a ``str``.
    """
    headers: dict[str, str] = {}

    # Browsers refuse "*" together with credentials, so echo the origin then.
    if policy.allows_any_origin and not policy.allow_credentials:
        headers[ACCESS_CONTROL_ALLOW_ORIGIN] = "*"
    else:
        headers[ACCESS_CONTROL_ALLOW_ORIGIN] = origin
        headers[VARY] = ORIGIN

    if policy.allow_credentials:
        headers[ACCESS_CONTROL_ALLOW_CREDENTIALS] = "true"

    if preflight:
        headers[ACCESS_CONTROL_ALLOW_METHODS] = join_values(policy.methods)
        if policy.allowed_headers:
            headers[ACCESS_CONTROL_ALLOW_HEADERS] = join_values(policy.allowed_headers)
        if policy.max_age > 0:
            headers[ACCESS_CONTROL_MAX_AGE] = str(policy.max_age)
    elif policy.exposed_headers:
        headers[ACCESS_CONTROL_EXPOSE_HEADERS] = join_values(policy.exposed_headers)

    return headers


def merge_vary(existing: str | None, value: str) -> str:
    """Add *value* to a ``Vary`` header value unless it is already listed."""
    if not existing:
        return value
    current = [item.strip() for item in existing.split(",") if item.strip()]
    if "*" in current or any(item.lower() == value.lower() for item in current):
        return existing
    return ", ".join([*current, value])
