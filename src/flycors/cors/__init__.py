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
"""flycors CORS policy engine: configuration, analysis and header building.

Framework-agnostic: the Starlette integration lives in
:mod:`flycors.web.adapters.starlette`.
"""

from flycors.cors.analyzer import (
    AnalysisResult,
    CORSAnalyzer,
    CORSError,
    RequestType,
    ResolvedPolicy,
)
from flycors.cors.config import CORSConfig, CORSConfigBuilder, CORSProperties, bind_properties
from flycors.cors.headers import build_headers
from flycors.cors.methods import DynamicMethods, MethodProvider, StaticMethods, as_method_provider
from flycors.cors.ports import CORSErrorHandler, CORSRequest

__all__ = [
    "AnalysisResult",
    "CORSAnalyzer",
    "CORSConfig",
    "CORSConfigBuilder",
    "CORSError",
    "CORSErrorHandler",
    "CORSProperties",
    "CORSRequest",
    "DynamicMethods",
    "MethodProvider",
    "RequestType",
    "ResolvedPolicy",
    "StaticMethods",
    "as_method_provider",
    "bind_properties",
    "build_headers",
]
