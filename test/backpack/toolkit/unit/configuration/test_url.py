# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

from typing import Generator as _Generator
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import pytest

import backpack.toolkit.configuration._url as url_module
from backpack.toolkit import UnbelievableException
from backpack.toolkit.configuration import UrlConfiguration
from backpack.toolkit.settings import ToolkitSettings, set_settings


class TestUrlConfiguration:
    @pytest.fixture
    def response(self) -> MagicMock:
        response = MagicMock()
        response.read.return_value = b"remote contents"
        response.headers.get_content_charset.return_value = None
        return response

    @pytest.fixture
    def mock_urlopen(self, response: MagicMock) -> _Generator[MagicMock, None, None]:
        with patch.object(url_module.urllib.request, "urlopen") as mock:
            mock.return_value.__enter__.return_value = response
            yield mock

    @pytest.mark.parametrize(
        "location",
        [
            "not a url",
            "example.com/path",
            "http://",
            "/just/a/path",
            "http://[::1",
        ],
    )
    def test_rejects_malformed_urls(self, location: str, caplog: pytest.LogCaptureFixture):
        # WHEN
        with pytest.raises(UnbelievableException):
            UrlConfiguration(location)

        # THEN
        assert f"Malformed URL {location!r}" in caplog.text

    def test_construction_does_not_fetch(self, mock_urlopen: MagicMock):
        # WHEN
        configuration = UrlConfiguration("https://example.com/config")

        # THEN
        assert configuration.location == "https://example.com/config"
        assert configuration.is_set()
        mock_urlopen.assert_not_called()

    def test_fetches_once_then_caches(self, mock_urlopen: MagicMock):
        # GIVEN
        configuration = UrlConfiguration("https://example.com/config", timeout=5)

        # WHEN
        first = configuration.get()
        second = configuration.read()

        # THEN
        assert first == second == "remote contents"
        mock_urlopen.assert_called_once_with("https://example.com/config", timeout=5)

    def test_timeout_defaults_to_settings(self, mock_urlopen: MagicMock):
        # GIVEN
        set_settings(ToolkitSettings(url_timeout=2.5))
        configuration = UrlConfiguration("https://example.com/config")

        # WHEN
        configuration.get()

        # THEN
        mock_urlopen.assert_called_once_with("https://example.com/config", timeout=2.5)

    def test_decodes_with_declared_charset(self, mock_urlopen: MagicMock, response: MagicMock):
        # GIVEN
        response.read.return_value = "café".encode("latin-1")
        response.headers.get_content_charset.return_value = "latin-1"

        # WHEN
        result = UrlConfiguration("https://example.com/config").get()

        # THEN
        assert result == "café"

    def test_wraps_fetch_errors(self, mock_urlopen: MagicMock, caplog: pytest.LogCaptureFixture):
        # GIVEN
        mock_urlopen.side_effect = URLError("unreachable")
        configuration = UrlConfiguration("https://example.com/config")

        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            configuration.get()

        # THEN
        assert isinstance(raised_err.value.__cause__, URLError)
        assert "Failed to fetch https://example.com/config: " in caplog.text

    def test_failed_fetch_is_retried_on_next_call(
        self, mock_urlopen: MagicMock, response: MagicMock
    ):
        # GIVEN
        mock_urlopen.side_effect = [URLError("unreachable"), mock_urlopen.return_value]
        configuration = UrlConfiguration("https://example.com/config")
        with pytest.raises(UnbelievableException):
            configuration.get()

        # WHEN
        result = configuration.get()

        # THEN
        assert result == "remote contents"
        assert mock_urlopen.call_count == 2
