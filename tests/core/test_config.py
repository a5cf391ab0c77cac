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
"""Tests for Config: dot-notation access, env overrides, placeholders, files, binding."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from flycors.core.config import Config, config_properties
from flycors.kernel.exceptions import ConfigurationException


@config_properties(prefix="app.server")
@dataclass
class ServerSettings:
    host: str = "localhost"
    port: int = 8000
    debug: bool = False


class TestConfigGet:
    def test_nested_lookup(self):
        config = Config({"flycors": {"cors": {"cache": 60}}})
        assert config.get("flycors.cors.cache") == 60

    def test_missing_returns_default(self):
        assert Config({}).get("flycors.cors.cache", 0) == 0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FLYCORS_CORS_ORIGIN", "https://env.example.com")
        config = Config({"flycors": {"cors": {"origin": "*"}}})
        assert config.get("flycors.cors.origin") == "https://env.example.com"

    def test_env_key_mapping(self):
        assert Config.env_key("flycors.cors.headers.allow") == "FLYCORS_CORS_HEADERS_ALLOW"
        assert Config.env_key("app.some-key") == "FLYCORS_APP_SOME_KEY"

    def test_get_section(self):
        config = Config({"flycors": {"cors": {"cache": 1}}})
        assert config.get_section("flycors.cors") == {"cache": 1}
        assert config.get_section("flycors.missing") == {}


class TestPlaceholders:
    def test_env_placeholder(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_ORIGIN", "https://app.example.com")
        config = Config({"flycors": {"cors": {"origin": "${FRONTEND_ORIGIN}"}}})
        assert config.get("flycors.cors.origin") == "https://app.example.com"

    def test_config_reference(self):
        config = Config({"app": {"url": "https://a.com"}, "flycors": {"cors": {"origin": "${app.url}"}}})
        assert config.get("flycors.cors.origin") == "https://a.com"

    def test_default_value(self):
        config = Config({"flycors": {"cors": {"origin": "${NOPE_NOT_SET:*}"}}})
        assert config.get("flycors.cors.origin") == "*"

    def test_unresolvable(self):
        config = Config({"flycors": {"cors": {"origin": "${NOPE_NOT_SET}"}}})
        with pytest.raises(ConfigurationException):
            config.get("flycors.cors.origin")


class TestFiles:
    def test_defaults_loaded(self, tmp_path):
        config = Config.from_file(tmp_path / "missing.yaml")
        assert config.get("flycors.cors.enabled") is False
        assert config.get("flycors.cors.methods") == ["GET", "POST", "PUT", "PATCH", "DELETE"]
        assert config.loaded_sources == ["flycors-defaults.yaml (defaults)"]

    def test_yaml_merged_over_defaults(self, tmp_path):
        path = tmp_path / "flycors.yaml"
        path.write_text("flycors:\n  cors:\n    enabled: true\n    cache: 300\n")
        config = Config.from_file(path)

        assert config.get("flycors.cors.enabled") is True
        assert config.get("flycors.cors.cache") == 300
        assert config.get("flycors.cors.origin") == "*"
        assert str(path) in config.loaded_sources

    def test_toml(self, tmp_path):
        path = tmp_path / "flycors.toml"
        path.write_text('[flycors.cors]\norigin = ["https://a.com"]\n')
        config = Config.from_file(path, load_defaults=False)
        assert config.get("flycors.cors.origin") == ["https://a.com"]


class TestBind:
    def test_bind_dataclass(self):
        config = Config({"app": {"server": {"port": "9000", "debug": "yes"}}})
        settings = config.bind(ServerSettings)
        assert settings.port == 9000
        assert settings.debug is True
        assert settings.host == "localhost"

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ConfigurationException):
            Config({}).bind(Plain)

    def test_bind_pydantic_validation_error(self):
        from flycors.cors.config import CORSProperties

        config = Config({"flycors": {"cors": {"cache": -1}}})
        with pytest.raises(ConfigurationException):
            config.bind(CORSProperties)
