# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import json
import pathlib
from typing import List

import pytest

from backpack.toolkit.exceptions import UnbelievableException
from backpack.toolkit.preferences import FLAG, PreferenceSpec, UserPreferences

_TABLE = """\
- id: editor.autosave
  type: flag
  default: true
  description: Save files automatically
- id: editor.tab-size
  type: number
  default: 4
- id: editor.zoom
  type: decimal
  default: 1.25
- id: editor.theme
  type: text
  default: solarized
"""


class TestPreferenceTables:
    """
    Integration tests for registering preferences from table files
    """

    def test_yaml_file(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "preferences.yaml"
        path.write_text(_TABLE, encoding="utf-8")
        preferences = UserPreferences()

        # WHEN
        result = preferences.register_table(f"file://{path}")

        # THEN
        assert [preference.spec.id for preference in result] == [
            "editor.autosave",
            "editor.tab-size",
            "editor.zoom",
            "editor.theme",
        ]
        assert [preference.value for preference in result] == [True, 4, 1.25, "solarized"]
        assert result[0].spec.description == "Save files automatically"

    def test_json_path(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "preferences.json"
        path.write_text(
            json.dumps([{"id": "editor.autosave", "type": "flag", "default": "off"}]),
            encoding="utf-8",
        )
        preferences = UserPreferences()

        # WHEN
        preferences.register_table(path)

        # THEN
        assert preferences.is_disabled(PreferenceSpec("editor.autosave", FLAG, "on"))

    def test_table_preferences_are_shared_with_specs(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "preferences.yaml"
        path.write_text(_TABLE, encoding="utf-8")
        preferences = UserPreferences()
        preferences.register_table(f"file://{path}")
        autosave = PreferenceSpec("editor.autosave", FLAG, "false")
        changes: List[bool] = []
        preferences.watch(autosave, changes.append)

        # WHEN
        preferences.get(autosave).set("no")

        # THEN
        assert changes == [True, False]
        assert preferences.find("editor.autosave").value is False  # type: ignore

    def test_invalid_file(self, tmp_path: pathlib.Path):
        # GIVEN
        path = tmp_path / "preferences.yaml"
        path.write_text("- id: editor.autosave\n  type: flag\n", encoding="utf-8")

        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            UserPreferences().register_table(f"file://{path}")

        # THEN
        assert "Preferences table failed to validate: 'default' is a required property" == str(
            raised_err.value
        )
