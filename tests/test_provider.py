# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for provider registration."""

from unittest.mock import MagicMock

import pytest

from slack_provider.config import ConfigError, ProviderConfig
from slack_provider.provider import PROVIDER_SCHEMA, Provider
from slack_provider.user import UserResource


class TestRegistration:
    def test_registers_only_slack_user(self) -> None:
        provider = Provider()
        assert provider.resource_types == ["slack_user"]
        assert isinstance(provider.resource("slack_user"), UserResource)

    def test_user_group_not_registered(self) -> None:
        with pytest.raises(KeyError, match="slack_user_group"):
            Provider().resource("slack_user_group")

    def test_custom_resources(self) -> None:
        fake = MagicMock()
        provider = Provider(resources={"slack_fake": fake})
        assert provider.resource("slack_fake") is fake

    def test_token_schema(self) -> None:
        token = PROVIDER_SCHEMA.attributes["token"]
        assert token.required
        assert token.env_default == "SLACK_TOKEN"
        assert "client" in token.description


class TestConfigure:
    def test_token_from_block(self) -> None:
        config = Provider().configure({"token": "xoxp-block"})
        assert config == ProviderConfig(token="xoxp-block")

    def test_token_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLACK_TOKEN", "xoxp-env")
        assert Provider().configure({}).token == "xoxp-env"

    def test_block_wins_over_env(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLACK_TOKEN", "xoxp-env")
        assert Provider().configure({"token": "xoxp-block"}).token == (
            "xoxp-block"
        )

    def test_unresolved_env_tag_falls_back(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLACK_TOKEN", "xoxp-env")
        assert Provider().configure({"token": None}).token == "xoxp-env"

    def test_missing_token(self) -> None:
        with pytest.raises(ConfigError, match="'token' is required"):
            Provider().configure({})

    def test_blank_token(self) -> None:
        with pytest.raises(ConfigError, match="'token' is missing"):
            Provider().configure({"token": "   "})

    def test_unknown_setting(self) -> None:
        with pytest.raises(ConfigError, match="Unsupported argument"):
            Provider().configure({"token": "xoxp-1", "team": "T1"})

    def test_strips_whitespace(self) -> None:
        assert Provider().configure({"token": " xoxp-1\n"}).token == "xoxp-1"
