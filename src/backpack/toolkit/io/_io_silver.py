# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

from typing import Callable, Optional

from ._serial_bitter import SerialBitter

__all__ = ["IOSilver"]


class IOSilver:
    """
    Holds one SerialBitter per format, created when first used. Each of them gets this object as
    a dependency.
    """

    def __init__(
        self,
        json_factory: Callable[[], SerialBitter] | None = None,
        yaml_factory: Callable[[], SerialBitter] | None = None,
        xml_factory: Callable[[], SerialBitter] | None = None,
    ) -> None:
        self._json_factory = json_factory if json_factory is not None else SerialBitter.json
        self._yaml_factory = yaml_factory if yaml_factory is not None else SerialBitter.yaml
        self._xml_factory = xml_factory if xml_factory is not None else SerialBitter.xml
        self._json: Optional[SerialBitter] = None
        self._yaml: Optional[SerialBitter] = None
        self._xml: Optional[SerialBitter] = None

    def json(self) -> SerialBitter:
        if self._json is None:
            self._json = self._json_factory().add_dependency(IOSilver, self)
        return self._json

    def yaml(self) -> SerialBitter:
        if self._yaml is None:
            self._yaml = self._yaml_factory().add_dependency(IOSilver, self)
        return self._yaml

    def xml(self) -> SerialBitter:
        if self._xml is None:
            self._xml = self._xml_factory().add_dependency(IOSilver, self)
        return self._xml
