# Copyright Backpack Cloud Contributors. All Rights Reserved.

import dataclasses
from unittest.mock import MagicMock

from backpack.toolkit.io import IOSilver, JsonCodec, SerialBitter, XmlCodec, YamlCodec


@dataclasses.dataclass
class Component:
    name: str
    io: IOSilver


class TestIOSilver:
    def test_serializers_are_memoized(self):
        # GIVEN
        silver = IOSilver()

        # WHEN
        json_bitter = silver.json()
        yaml_bitter = silver.yaml()
        xml_bitter = silver.xml()

        # THEN
        assert silver.json() is json_bitter
        assert silver.yaml() is yaml_bitter
        assert silver.xml() is xml_bitter
        assert isinstance(json_bitter.codec, JsonCodec)
        assert isinstance(yaml_bitter.codec, YamlCodec)
        assert isinstance(xml_bitter.codec, XmlCodec)

    def test_serializers_get_silver_as_dependency(self):
        # GIVEN
        silver = IOSilver()

        # WHEN
        result = silver.yaml().deserialize("name: worker", Component)

        # THEN
        assert result.io is silver

    def test_xml_serializer_gets_silver_as_dependency(self):
        # GIVEN
        silver = IOSilver()

        # WHEN
        result = silver.xml().deserialize("<component><name>worker</name></component>", Component)

        # THEN
        assert result.name == "worker"
        assert result.io is silver

    def test_factories_are_called_once(self):
        # GIVEN
        json_factory = MagicMock(return_value=SerialBitter.json())
        silver = IOSilver(json_factory=json_factory)

        # WHEN
        silver.json()
        silver.json()

        # THEN
        json_factory.assert_called_once_with()
