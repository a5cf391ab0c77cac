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
"""flycors application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flycors.core.config import Config
from flycors.cors.config import CORSConfig, bind_properties
from flycors.logging.structlog_adapter import StructlogAdapter
from flycors.ordering import sort_by_order
from flycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycors.web.adapters.starlette.filters import CORSFilter
from flycors.web.ports.filter import WebFilter


def cors_from_config(config: Config, **collaborators: Any) -> CORSConfig | None:
    """Build a :class:`CORSConfig` from the ``flycors.cors`` section.

    Returns ``None`` unless ``flycors.cors.enabled`` is true.
    *collaborators* (``error_handler``, ``logger``, ``default_response``)
    are passed to :meth:`CORSConfig.from_properties`.

    Raises:
        CORSConfigurationError: If the section holds an invalid option.
    """
    props = bind_properties(config)
    if not props.enabled:
        return None
    return CORSConfig.from_properties(props, **collaborators)


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CORSConfig | None = None,
    config: Config | None = None,
    filters: Sequence[WebFilter] = (),
    middleware: Sequence[Middleware] = (),
    debug: bool = False,
    lifespan: object | None = None,
) -> Starlette:
    """Create a Starlette application whose filter chain enforces a CORS policy.

    The policy is *cors* when given, otherwise the ``flycors.cors`` section
    of *config* (when enabled).  Without either the app has no CORS filter
    and cross-origin requests pass through untouched.

    User *filters* join the chain and are sorted with the CORS filter by
    ``@order``; *middleware* is appended after the filter chain.

    When *config* is given, logging is configured from its
    ``flycors.logging`` section first.
    """
    chain: list[WebFilter] = list(filters)

    if config is not None:
        StructlogAdapter().configure(config)
    if cors is None and config is not None:
        cors = cors_from_config(config)
    if cors is not None:
        chain.append(CORSFilter(cors))

    app = Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[
            Middleware(WebFilterChainMiddleware, filters=sort_by_order(chain)),
            *middleware,
        ],
        lifespan=lifespan,  # type: ignore[arg-type]
    )
    app.state.flycors_cors = cors
    return app
