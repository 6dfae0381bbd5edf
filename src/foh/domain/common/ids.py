from __future__ import annotations

from typing import NewType

TableName = NewType("TableName", str)
EntryId = NewType("EntryId", str)
RowNumber = NewType("RowNumber", int)
