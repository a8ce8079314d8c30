# Copyright Backpack Cloud Contributors. All Rights Reserved.

from ._codecs import Codec, JsonCodec, XmlCodec, YamlCodec
from ._io_silver import IOSilver
from ._mapping import ObjectMapper, TypeAdapter
from ._serial_bitter import Deserializer, SerialBitter, Serializer
from ._versioning import Version

__all__ = [
    "Codec",
    "Deserializer",
    "IOSilver",
    "JsonCodec",
    "ObjectMapper",
    "SerialBitter",
    "Serializer",
    "TypeAdapter",
    "Version",
    "XmlCodec",
    "YamlCodec",
]
