# Copyright Backpack Cloud Contributors. All Rights Reserved.

from ._preference import Preference, PreferenceSpec
from ._preference_type import DECIMAL, FLAG, NUMBER, TEXT, PreferenceType
from ._user_preferences import UserPreferences

__all__ = [
    "DECIMAL",
    "FLAG",
    "NUMBER",
    "Preference",
    "PreferenceSpec",
    "PreferenceType",
    "TEXT",
    "UserPreferences",
]
