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
"""Allowed-method providers.

The set of methods a CORS policy permits is either fixed or computed from
the request (e.g. different verbs per route).  Both cases sit behind the
:class:`MethodProvider` protocol, resolved exactly once per request.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

import structlog

from flycors.kernel.exceptions import CORSConfigurationError

logger = structlog.get_logger("flycors.cors")

DEFAULT_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")

MethodResolver = Callable[[Any], Iterable[str] | str]


@runtime_checkable
class MethodProvider(Protocol):
    """Supplies the allowed HTTP methods for a request."""

    def resolve(self, request: Any) -> tuple[str, ...]: ...


def _as_tuple(methods: Iterable[str] | str, option: str = "methods") -> tuple[str, ...]:
    if isinstance(methods, str):
        methods = (methods,)
    result = tuple(methods)
    for method in result:
        if not isinstance(method, str) or not method:
            raise CORSConfigurationError(option, f"methods must be non-empty strings, got {method!r}")
    return result


class StaticMethods:
    """A fixed list of methods, matched case-sensitively as configured."""

    __slots__ = ("_methods",)

    def __init__(self, methods: Iterable[str] | str = DEFAULT_METHODS) -> None:
        self._methods = _as_tuple(methods)

    @property
    def methods(self) -> tuple[str, ...]:
        return self._methods

    def resolve(self, request: Any) -> tuple[str, ...]:
        return self._methods

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StaticMethods) and other._methods == self._methods

    def __hash__(self) -> int:
        return hash(self._methods)

    def __repr__(self) -> str:
        return f"StaticMethods({list(self._methods)!r})"


class DynamicMethods:
    """Methods computed per request by a user-supplied resolver.

    The resolver must be free of side effects: it can be called
    concurrently, once for every in-flight request.
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: MethodResolver) -> None:
        if not callable(resolver):
            raise CORSConfigurationError("methods", "resolver must be callable")
        self._resolver = resolver

    @property
    def resolver(self) -> MethodResolver:
        return self._resolver

    def resolve(self, request: Any) -> tuple[str, ...]:
        """Call the resolver; a missing or malformed result allows no methods."""
        methods = self._resolver(request)
        if methods is None:
            return ()
        try:
            return _as_tuple(methods)
        except (CORSConfigurationError, TypeError):
            logger.warning("cors_methods_resolver_invalid", result=repr(methods))
            return ()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DynamicMethods) and other._resolver is self._resolver

    def __hash__(self) -> int:
        return hash(self._resolver)

    def __repr__(self) -> str:
        return f"DynamicMethods({self._resolver!r})"


def as_method_provider(value: MethodProvider | MethodResolver | Iterable[str] | str | None) -> MethodProvider:
    """Convert a loose ``methods`` option into a :class:`MethodProvider`.

    Accepts an existing provider, a list (or single string) of verbs, or a
    callable taking the request.  ``None`` yields the default verbs.
    """
    if value is None:
        return StaticMethods()
    if isinstance(value, (StaticMethods, DynamicMethods)):
        return value
    if isinstance(value, (str, list, tuple, set, frozenset)):
        return StaticMethods(value)
    if isinstance(value, MethodProvider):
        return value
    if callable(value):
        return DynamicMethods(value)
    raise CORSConfigurationError("methods", f"expected a list of methods or a callable, got {type(value).__name__}")
