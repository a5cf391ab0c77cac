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
"""Collaborator protocols for the CORS policy engine.

Uses generic ``Any`` types for Request/Response so that vendor-specific
types (e.g. Starlette) remain confined to the adapter layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flycors.cors.analyzer import CORSError


@runtime_checkable
class CORSRequest(Protocol):
    """What the analyzer reads from an incoming request.

    Starlette's ``Request`` satisfies this: ``url`` exposes ``scheme``,
    ``hostname`` and ``port``; ``headers.get()`` is case-insensitive.
    """

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> Any: ...

    @property
    def headers(self) -> Any: ...


class CORSErrorHandler(Protocol):
    """Builds a custom response for a rejected request.

    Returning anything other than a response (``None`` included) selects
    the default 401 response.  The status is forced to 401 either way.
    May be a plain function or a coroutine function.
    """

    def __call__(self, error: CORSError) -> Any: ...
