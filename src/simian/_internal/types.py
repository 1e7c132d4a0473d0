"""Internal type annotations.

Notes
-----
:class:`StrPath` is based on `typeshed's`_.

.. _typeshed's: https://github.com/python/typeshed/blob/5ff32f3/stdlib/_typeshed/__init__.pyi#L176-L179
"""  # E501

from __future__ import annotations

import typing as t
from collections.abc import Callable

from typing_extensions import TypeAlias

if t.TYPE_CHECKING:
    from os import PathLike

StrPath: TypeAlias = "str | PathLike[str]"

#: Receives a batch of completed lines from one stream
LinesCallback: TypeAlias = Callable[[list[str]], None]

#: Receives the exit code once a run has finished
TerminationCallback: TypeAlias = Callable[[int], None]
