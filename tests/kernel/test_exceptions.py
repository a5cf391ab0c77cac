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
"""Tests for the flycors exception hierarchy."""

from __future__ import annotations

from flycors.kernel.exceptions import (
    ConfigurationException,
    CORSConfigurationError,
    FlyCorsException,
)


class TestFlyCorsException:
    def test_code_and_context(self):
        exc = FlyCorsException("boom", code="X_1", context={"k": "v"})
        assert str(exc) == "boom"
        assert exc.code == "X_1"
        assert exc.context == {"k": "v"}

    def test_context_defaults_to_empty(self):
        assert FlyCorsException("boom").context == {}


class TestCORSConfigurationError:
    def test_hierarchy(self):
        exc = CORSConfigurationError("cache", "must not be negative")
        assert isinstance(exc, ConfigurationException)
        assert isinstance(exc, FlyCorsException)

    def test_message_names_option(self):
        exc = CORSConfigurationError("cache", "must not be negative")
        assert str(exc) == "Invalid CORS option 'cache': must not be negative"
        assert exc.option == "cache"
        assert exc.code == "CORS_CONFIG"
        assert exc.context == {"option": "cache"}
