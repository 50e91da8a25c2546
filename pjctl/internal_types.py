# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Type hints used throughout the pjctl package"""

from typing import (
    TYPE_CHECKING,
    Any,
    AsyncContextManager,
    AsyncIterator,
    Awaitable,
    Callable,
    Deque,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Self,
    Sequence,
    Tuple,
    Type,
    Union,
    cast,
  )

from types import TracebackType

JsonableDict = Dict[str, 'Jsonable']
JsonableList = List['Jsonable']

Jsonable = Union[JsonableDict, JsonableList, str, int, float, bool, None]
"""A type that can be serialized to JSON by json.dumps()"""
