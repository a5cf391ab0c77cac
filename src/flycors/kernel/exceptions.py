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
"""Exception hierarchy for flycors.

CORS violations (disallowed origin, method or header) are *not* exceptions:
they are analysis results turned into 401 responses by the CORS filter.
Exceptions are reserved for programming and configuration mistakes that
should fail fast at startup.
"""

from __future__ import annotations


class FlyCorsException(Exception):
    """Base exception for all flycors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(FlyCorsException):
    """Invalid or unresolvable configuration."""


class CORSConfigurationError(ConfigurationException):
    """A CORS policy option failed validation."""

    def __init__(self, option: str, message: str) -> None:
        super().__init__(
            f"Invalid CORS option '{option}': {message}",
            code="CORS_CONFIG",
            context={"option": option},
        )
        self.option = option
