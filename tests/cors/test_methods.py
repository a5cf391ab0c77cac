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
"""Tests for method providers."""

from __future__ import annotations

import pytest

from flycors.cors.methods import (
    DEFAULT_METHODS,
    DynamicMethods,
    MethodProvider,
    StaticMethods,
    as_method_provider,
)
from flycors.kernel.exceptions import CORSConfigurationError


class TestStaticMethods:
    def test_default_methods(self):
        assert StaticMethods().resolve(None) == DEFAULT_METHODS

    def test_resolve_ignores_request(self):
        provider = StaticMethods(["GET", "POST"])
        assert provider.resolve(object()) == ("GET", "POST")

    def test_single_string(self):
        assert StaticMethods("GET").methods == ("GET",)

    def test_rejects_empty_method(self):
        with pytest.raises(CORSConfigurationError):
            StaticMethods(["GET", ""])

    def test_equality(self):
        assert StaticMethods(["GET"]) == StaticMethods(("GET",))
        assert StaticMethods(["GET"]) != StaticMethods(["POST"])

    def test_conforms_to_protocol(self):
        assert isinstance(StaticMethods(), MethodProvider)


class TestDynamicMethods:
    def test_resolver_receives_request(self):
        seen = []

        def resolver(request):
            seen.append(request)
            return ["GET"]

        request = object()
        assert DynamicMethods(resolver).resolve(request) == ("GET",)
        assert seen == [request]

    def test_resolver_string_result(self):
        assert DynamicMethods(lambda request: "DELETE").resolve(None) == ("DELETE",)

    def test_resolver_none_allows_nothing(self):
        assert DynamicMethods(lambda request: None).resolve(None) == ()

    def test_resolver_bad_result_allows_nothing(self):
        assert DynamicMethods(lambda request: [None]).resolve(None) == ()
        assert DynamicMethods(lambda request: 42).resolve(None) == ()

    def test_requires_callable(self):
        with pytest.raises(CORSConfigurationError):
            DynamicMethods("GET")  # type: ignore[arg-type]

    def test_conforms_to_protocol(self):
        assert isinstance(DynamicMethods(lambda request: []), MethodProvider)


class TestAsMethodProvider:
    def test_none_gives_defaults(self):
        assert as_method_provider(None) == StaticMethods()

    def test_list(self):
        assert as_method_provider(["PUT"]) == StaticMethods(["PUT"])

    def test_callable(self):
        assert isinstance(as_method_provider(lambda request: ["GET"]), DynamicMethods)

    def test_existing_provider_returned(self):
        provider = StaticMethods(["GET"])
        assert as_method_provider(provider) is provider

    def test_custom_provider(self):
        class PerTenant:
            def resolve(self, request):
                return ("GET",)

        provider = PerTenant()
        assert as_method_provider(provider) is provider

    def test_invalid_value(self):
        with pytest.raises(CORSConfigurationError):
            as_method_provider(3.14)  # type: ignore[arg-type]
