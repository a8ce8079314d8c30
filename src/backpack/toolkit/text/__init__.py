# Copyright Backpack Cloud Contributors. All Rights Reserved.

from ._input_value import InputValue

__all__ = ["InputValue"]
