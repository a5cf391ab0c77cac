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
"""Shared fixtures for CORS engine tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request


def make_request(
    method: str = "GET",
    path: str = "/api",
    headers: dict[str, str] | None = None,
    scheme: str = "https",
    host: str = "example.com",
    port: int = 443,
) -> Request:
    """Build a Starlette request addressed to ``scheme://host:port/path``."""
    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "scheme": scheme,
        "server": (host, port),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
    }
    return Request(scope)


class RecordingLogger:
    """structlog-style sink that records (event, kwargs) pairs."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def debug(self, event: str, **kwargs: Any) -> None:
        self.events.append((event, kwargs))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
