# Copyright Backpack Cloud Contributors. All Rights Reserved.

from .exceptions import UnbelievableException

__version__ = "0.1.0"

__all__ = ["UnbelievableException"]
