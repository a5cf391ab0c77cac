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
"""CORS policy configuration.

Three ways to build a :class:`CORSConfig`:

* directly, with typed keyword arguments;
* from a loose option mapping (``origin``, ``methods``, ``headers.allow``,
  ``headers.expose``, ``credentials``, ``cache``, ``error``, ``logger``)
  via :meth:`CORSConfig.from_options`; unknown keys are ignored;
* from the ``flycors.cors`` section of a :class:`~flycors.core.config.Config`
  bound to :class:`CORSProperties`.

:class:`CORSConfigBuilder` offers the same options as fluent setters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from flycors.core.config import Config, config_properties
from flycors.cors.methods import DEFAULT_METHODS, MethodProvider, StaticMethods, as_method_provider
from flycors.cors.ports import CORSErrorHandler
from flycors.kernel.exceptions import CORSConfigurationError, ConfigurationException

WILDCARD = "*"


def _as_str_tuple(value: Iterable[str] | str, option: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = (value,)
    result = tuple(value)
    for item in result:
        if not isinstance(item, str):
            raise CORSConfigurationError(option, f"expected strings, got {item!r}")
    return result


def _split_list(value: Any) -> Any:
    # Environment overrides arrive as one comma-separated string.
    if isinstance(value, str) and "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _configuration_error(exc: ValidationError) -> CORSConfigurationError:
    first = exc.errors()[0]
    option = ".".join(str(part) for part in first["loc"]) or "options"
    return CORSConfigurationError(option, first["msg"])


@dataclass(frozen=True)
class CORSConfig:
    """Immutable CORS policy.

    Safe to share between concurrent requests: per-request values (the
    allowed methods of a :class:`~flycors.cors.methods.DynamicMethods`
    provider) are computed by the analyzer and never stored here.

    Attributes:
        allowed_origins: Exact origins (``scheme://host[:port]``) or ``"*"``.
        methods: Provider of the allowed, case-sensitive HTTP methods.
        allowed_headers: Request headers a preflight may ask for,
            matched case-insensitively.
        exposed_headers: Response headers exposed to the browser on
            actual requests.
        allow_credentials: Emit ``Access-Control-Allow-Credentials: true``.
        max_age: Preflight cache lifetime in seconds; 0 = no header.
        error_handler: Optional callback building the rejection response.
        logger: Optional structlog-style sink for analysis diagnostics.
        default_response: Response template for preflights and rejections.
    """

    allowed_origins: tuple[str, ...] = (WILDCARD,)
    methods: MethodProvider = field(default_factory=StaticMethods)
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 0
    error_handler: CORSErrorHandler | None = field(default=None, compare=False)
    logger: Any = field(default=None, compare=False, repr=False)
    default_response: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        # Normalise loose inputs; frozen, so go through object.__setattr__.
        origins = _as_str_tuple(self.allowed_origins, "origin")
        if not origins:
            raise CORSConfigurationError("origin", "at least one origin (or '*') is required")
        object.__setattr__(self, "allowed_origins", origins)
        object.__setattr__(self, "methods", as_method_provider(self.methods))
        object.__setattr__(self, "allowed_headers", _as_str_tuple(self.allowed_headers, "headers.allow"))
        object.__setattr__(self, "exposed_headers", _as_str_tuple(self.exposed_headers, "headers.expose"))
        object.__setattr__(self, "allow_credentials", bool(self.allow_credentials))

        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int):
            raise CORSConfigurationError("cache", f"expected an integer number of seconds, got {self.max_age!r}")
        if self.max_age < 0:
            raise CORSConfigurationError("cache", "must not be negative")
        if self.error_handler is not None and not callable(self.error_handler):
            raise CORSConfigurationError("error", "error handler must be callable")

    @property
    def allows_any_origin(self) -> bool:
        return WILDCARD in self.allowed_origins

    @property
    def allowed_header_names(self) -> frozenset[str]:
        """Allowed request headers, lower-cased for comparison."""
        return frozenset(h.lower() for h in self.allowed_headers)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], default_response: Any = None) -> CORSConfig:
        """Build a policy from a loosely-typed option mapping.

        Raises:
            CORSConfigurationError: If an option has an invalid value.
        """
        try:
            props = CORSProperties.model_validate(dict(options))
        except ValidationError as exc:
            raise _configuration_error(exc) from exc
        return cls.from_properties(props, default_response=default_response)

    @classmethod
    def from_properties(
        cls,
        props: CORSProperties,
        *,
        error_handler: CORSErrorHandler | None = None,
        logger: Any = None,
        default_response: Any = None,
    ) -> CORSConfig:
        """Build a policy from bound :class:`CORSProperties`.

        Collaborators passed as keyword arguments win over those set on
        *props*.
        """
        return cls(
            allowed_origins=_as_str_tuple(props.origin, "origin"),
            methods=as_method_provider(props.methods),
            allowed_headers=tuple(props.headers.allow),
            exposed_headers=tuple(props.headers.expose),
            allow_credentials=props.credentials,
            max_age=props.cache,
            error_handler=error_handler if error_handler is not None else props.error,
            logger=logger if logger is not None else props.logger,
            default_response=default_response,
        )


class CORSHeaderProperties(BaseModel):
    """``headers.*`` options."""

    model_config = ConfigDict(extra="ignore")

    allow: list[str] = Field(default_factory=list)
    expose: list[str] = Field(default_factory=list)


@config_properties(prefix="flycors.cors")
class CORSProperties(BaseModel):
    """CORS options as found in configuration files and option mappings.

    ``headers.allow`` / ``headers.expose`` may be given either as dotted
    keys or as a nested ``headers`` mapping.  Unknown keys are ignored so
    newer option names do not break older deployments.
    """

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    enabled: bool = False
    origin: str | list[str] = WILDCARD
    methods: Any = Field(default_factory=lambda: list(DEFAULT_METHODS))
    headers: CORSHeaderProperties = Field(default_factory=CORSHeaderProperties)
    credentials: bool = False
    cache: int = Field(default=0, ge=0)
    error: Callable[..., Any] | None = None
    logger: Any = None

    @model_validator(mode="before")
    @classmethod
    def fold_dotted_header_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        headers = dict(data.get("headers") or {})
        for key in ("allow", "expose"):
            dotted = f"headers.{key}"
            if dotted in data:
                headers[key] = data.pop(dotted)
        data["headers"] = headers
        return data

    @field_validator("origin", mode="before")
    @classmethod
    def split_origin_list(cls, value: Any) -> Any:
        return _split_list(value)

    @field_validator("methods")
    @classmethod
    def check_methods(cls, value: Any) -> MethodProvider:
        return as_method_provider(_split_list(value))


def bind_properties(config: Config) -> CORSProperties:
    """Bind the ``flycors.cors`` section of *config* to :class:`CORSProperties`.

    Raises:
        CORSConfigurationError: If an option has an invalid value; the
            message names the option.
    """
    try:
        return config.bind(CORSProperties)
    except ConfigurationException as exc:
        if isinstance(exc.__cause__, ValidationError):
            raise _configuration_error(exc.__cause__) from exc.__cause__
        raise


class CORSConfigBuilder:
    """Fluent builder with one named setter per option.

    Usage::

        config = (
            CORSConfigBuilder()
            .origin(["https://app.example.com"])
            .methods(["GET", "POST"])
            .headers_allow(["Authorization"])
            .credentials(True)
            .cache(600)
            .build()
        )
    """

    def __init__(self) -> None:
        self._options: dict[str, Any] = {}
        self._default_response: Any = None

    def origin(self, origin: str | Iterable[str]) -> CORSConfigBuilder:
        self._options["origin"] = origin if isinstance(origin, str) else list(origin)
        return self

    def methods(self, methods: Iterable[str] | Callable[[Any], Iterable[str]] | MethodProvider) -> CORSConfigBuilder:
        self._options["methods"] = methods
        return self

    def headers_allow(self, headers: Iterable[str]) -> CORSConfigBuilder:
        self._options["headers.allow"] = list(headers)
        return self

    def headers_expose(self, headers: Iterable[str]) -> CORSConfigBuilder:
        self._options["headers.expose"] = list(headers)
        return self

    def credentials(self, credentials: Any) -> CORSConfigBuilder:
        self._options["credentials"] = bool(credentials)
        return self

    def cache(self, seconds: int) -> CORSConfigBuilder:
        self._options["cache"] = seconds
        return self

    def error(self, handler: CORSErrorHandler | None) -> CORSConfigBuilder:
        self._options["error"] = handler
        return self

    def logger(self, logger: Any) -> CORSConfigBuilder:
        self._options["logger"] = logger
        return self

    def default_response(self, response: Any) -> CORSConfigBuilder:
        self._default_response = response
        return self

    def build(self) -> CORSConfig:
        """Validate the collected options and return the policy."""
        return CORSConfig.from_options(self._options, default_response=self._default_response)
