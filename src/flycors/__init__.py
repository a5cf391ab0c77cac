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
"""flycors: Cross-Origin Resource Sharing policy engine for ASGI applications."""

from flycors.core.config import Config
from flycors.cors import (
    AnalysisResult,
    CORSAnalyzer,
    CORSConfig,
    CORSConfigBuilder,
    CORSError,
    CORSProperties,
    DynamicMethods,
    RequestType,
    StaticMethods,
)
from flycors.kernel.exceptions import CORSConfigurationError, FlyCorsException
from flycors.web import CORSFilter, WebFilterChainMiddleware, create_app

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "CORSAnalyzer",
    "CORSConfig",
    "CORSConfigBuilder",
    "CORSConfigurationError",
    "CORSError",
    "CORSFilter",
    "CORSProperties",
    "Config",
    "DynamicMethods",
    "FlyCorsException",
    "RequestType",
    "StaticMethods",
    "WebFilterChainMiddleware",
    "create_app",
]
