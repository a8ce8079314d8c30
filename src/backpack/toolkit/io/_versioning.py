# Copyright Backpack Cloud Contributors. All Rights Reserved.
import re

from typing import Any, NamedTuple

VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


class Version(NamedTuple):
    major: int
    minor: int
    patch: int = 0

    def __str__(self):
        return f"{self.major}.{self.minor}.{self.patch}"

    def _ordering_key(self, other: Any) -> tuple:
        if not isinstance(other, Version):
            raise TypeError(f"Cannot compare Version with {type(other).__name__}")
        return (other.major, other.minor, other.patch)

    def __lt__(self, other: Any) -> bool:
        return (self.major, self.minor, self.patch) < self._ordering_key(other)

    def __le__(self, other: Any) -> bool:
        return (self.major, self.minor, self.patch) <= self._ordering_key(other)

    def __gt__(self, other: Any) -> bool:
        return (self.major, self.minor, self.patch) > self._ordering_key(other)

    def __ge__(self, other: Any) -> bool:
        return (self.major, self.minor, self.patch) >= self._ordering_key(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return (self.major, self.minor, self.patch) == (other.major, other.minor, other.patch)

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch))

    def has_compatibility_with(self, other: "Version") -> bool:
        """
        Returns a boolean representing if the version of self has compatibility with other.

        This check is NOT commutative.
        """
        if not isinstance(other, Version):
            raise TypeError(f"Cannot check compatibility of Version with {type(other).__name__}")
        if self.major == other.major == 0:
            return self.minor == other.minor  # Pre-release versions treat minor as breaking
        return self.major == other.major and self.minor >= other.minor

    @classmethod
    def parse(cls, version_str: str) -> "Version":
        """
        Parses a version string of form Major.Minor or Major.Minor.Patch into a Version object.

        Raises ValueError if the version string is not valid.
        """
        match = VERSION_RE.match(version_str.strip()) if isinstance(version_str, str) else None
        if match is None:
            raise ValueError(
                f'Provided version "{version_str}" was not of form Major.Minor[.Patch]'
            )
        major, minor, patch = match.groups()
        return Version(int(major), int(minor), int(patch or 0))
