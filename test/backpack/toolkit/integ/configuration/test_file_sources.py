# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import pathlib

import pytest

from backpack.toolkit.configuration import (
    DirectoryResourceLocator,
    FileConfiguration,
    PackageResourceLocator,
    ResourceConfiguration,
    SearchPathResourceLocator,
    configuration,
    system_properties,
)
from backpack.toolkit.exceptions import UnbelievableException
from backpack.toolkit.settings import ToolkitSettings, set_settings


class TestFileConfiguration:
    """
    Integration tests for file based configurations
    """

    def test_reads_file_contents(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "token"
        path.write_text("s3cr3t\nsecond line\n", encoding="utf-8")
        config = FileConfiguration(path)

        # THEN
        assert config.is_set()
        assert config.get() == "s3cr3t\nsecond line\n"
        assert config.read_lines() == ["s3cr3t", "second line"]

    def test_file_is_read_on_every_call(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "value"
        config = FileConfiguration(path)

        # THEN
        assert not config.is_set()
        assert config.get() is None

        # WHEN
        path.write_text("42", encoding="utf-8")

        # THEN
        assert config.is_set()
        assert config.as_integer() == 42

    def test_uses_encoding_from_settings(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "latin"
        path.write_bytes("ação".encode("latin-1"))
        set_settings(ToolkitSettings(encoding="latin-1"))

        # THEN
        assert FileConfiguration(path).get() == "ação"

    def test_undecodable_file(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "binary"
        path.write_bytes(b"\xff\xfe\xfa")

        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            FileConfiguration(path, encoding="utf-8").read()

        # THEN
        assert f"Failed to read contents of {path}" in str(raised_err.value)

    def test_unknown_encoding(self, tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture):
        # GIVEN
        path = tmp_path / "value"
        path.write_text("42", encoding="utf-8")

        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            FileConfiguration(path, encoding="bogus-cs").get()

        # THEN
        assert isinstance(raised_err.value.__cause__, LookupError)
        assert f"Failed to read contents of {path}" in caplog.text

    def test_configuration_pointing_to_file(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "password"
        path.write_text("hunter2", encoding="utf-8")
        system_properties["app.password.file"] = str(path)

        # WHEN
        result = configuration().system_property("app.password.file").read()

        # THEN
        assert result == "hunter2"


class TestFileChains:
    def test_first_existing_file_wins(self, tmp_path: pathlib.Path):
        # GIVEN
        (tmp_path / "user.conf").write_text("user", encoding="utf-8")
        chain = (
            configuration()
            .file(tmp_path / "local.conf")
            .file(tmp_path / "user.conf")
            .value("default")
        )

        # THEN
        assert chain.get() == "user"

        # WHEN
        (tmp_path / "local.conf").write_text("local", encoding="utf-8")

        # THEN
        assert chain.get() == "local"

    def test_falls_back_to_value(self, tmp_path: pathlib.Path):
        # GIVEN
        chain = configuration().file(tmp_path / "missing.conf").value("default")

        # THEN
        assert chain.get() == "default"


class TestResourceConfiguration:
    def test_directory_locator(self, tmp_path: pathlib.Path):
        # GIVEN
        (tmp_path / "conf").mkdir()
        (tmp_path / "conf" / "app.txt").write_text("bundled", encoding="utf-8")
        locator = DirectoryResourceLocator(tmp_path)

        # WHEN
        config = ResourceConfiguration("conf/app.txt", locator)

        # THEN
        assert config.is_set()
        assert config.get() == "bundled"
        assert not ResourceConfiguration("conf/other.txt", locator).is_set()

    def test_resource_is_cached(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "app.txt"
        path.write_text("first", encoding="utf-8")
        config = ResourceConfiguration("app.txt", DirectoryResourceLocator(tmp_path))
        assert config.get() == "first"

        # WHEN
        path.unlink()

        # THEN
        assert config.is_set()
        assert config.read() == "first"

    def test_search_path_locator(self, tmp_path: pathlib.Path):
        # GIVEN
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "app.txt").write_text("from b", encoding="utf-8")
        locator = SearchPathResourceLocator([str(tmp_path / "a"), str(tmp_path / "b")])

        # THEN
        assert configuration().resource("app.txt", locator).get() == "from b"

    def test_package_locator(self):
        # GIVEN
        locator = PackageResourceLocator("backpack.toolkit.settings")

        # WHEN
        config = ResourceConfiguration("_toolkit_settings.schema.json", locator)

        # THEN
        assert config.is_set()
        assert '"encoding"' in config.read()
        assert not locator.exists("missing.json")
