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
"""Tests for the CORS header builder."""

from __future__ import annotations

from flycors.cors.analyzer import ResolvedPolicy
from flycors.cors.headers import build_headers, join_values, merge_vary


def _policy(**overrides) -> ResolvedPolicy:
    values = dict(
        allows_any_origin=True,
        allowed_origins=("*",),
        methods=("GET", "PUT"),
        allowed_headers=(),
        allowed_header_names=frozenset(),
        exposed_headers=(),
        allow_credentials=False,
        max_age=0,
    )
    values.update(overrides)
    return ResolvedPolicy(**values)


class TestAllowOrigin:
    def test_wildcard_without_credentials(self):
        headers = build_headers(_policy(), "http://a.com", preflight=False)
        assert headers == {"Access-Control-Allow-Origin": "*"}

    def test_wildcard_with_credentials_echoes(self):
        headers = build_headers(_policy(allow_credentials=True), "http://a.com", preflight=False)
        assert headers["Access-Control-Allow-Origin"] == "http://a.com"
        assert headers["Vary"] == "Origin"
        assert headers["Access-Control-Allow-Credentials"] == "true"

    def test_explicit_origin_echoes(self):
        policy = _policy(allows_any_origin=False, allowed_origins=("http://a.com",))
        headers = build_headers(policy, "http://a.com", preflight=False)
        assert headers["Access-Control-Allow-Origin"] == "http://a.com"
        assert headers["Vary"] == "Origin"
        assert "Access-Control-Allow-Credentials" not in headers


class TestPreflightHeaders:
    def test_preflight_only_headers(self):
        policy = _policy(
            allowed_headers=("Authorization", "If-Match"),
            exposed_headers=("Etag",),
            max_age=600,
        )
        headers = build_headers(policy, "http://a.com", preflight=True)
        assert headers["Access-Control-Allow-Methods"] == "GET,PUT"
        assert headers["Access-Control-Allow-Headers"] == "Authorization,If-Match"
        assert headers["Access-Control-Max-Age"] == "600"
        assert "Access-Control-Expose-Headers" not in headers

    def test_actual_only_headers(self):
        policy = _policy(allowed_headers=("Authorization",), exposed_headers=("Authorization", "Etag"), max_age=600)
        headers = build_headers(policy, "http://a.com", preflight=False)
        assert headers["Access-Control-Expose-Headers"] == "Authorization,Etag"
        assert "Access-Control-Allow-Methods" not in headers
        assert "Access-Control-Max-Age" not in headers

    def test_all_values_are_strings(self):
        headers = build_headers(_policy(max_age=86400, allow_credentials=True), "http://a.com", preflight=True)
        assert all(isinstance(v, str) for v in headers.values())


class TestHelpers:
    def test_join_values_coerces(self):
        assert join_values(["a", 1, 2.5]) == "a,1,2.5"

    def test_merge_vary_empty(self):
        assert merge_vary(None, "Origin") == "Origin"

    def test_merge_vary_appends(self):
        assert merge_vary("Accept-Encoding", "Origin") == "Accept-Encoding, Origin"

    def test_merge_vary_no_duplicate(self):
        assert merge_vary("origin, Accept", "Origin") == "origin, Accept"

    def test_merge_vary_star(self):
        assert merge_vary("*", "Origin") == "*"
