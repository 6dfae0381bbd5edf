from __future__ import annotations

from foh.application.dto.responses import InventoryItemResponse
from foh.application.ports.store import TabularStore
from foh.domain.common.cells import EMPTY
from foh.domain.records.entities import INVENTORY_HEADERS, INVENTORY_TABLE


class GetInventory:
    """Read-only view of the live seafood board; another process owns the table."""

    def __init__(self, store: TabularStore) -> None:
        self._store = store

    def execute(self) -> list[InventoryItemResponse]:
        table = self._store.find_table(INVENTORY_TABLE)
        if table is None or table.row_count() < 2:
            return []

        items: list[InventoryItemResponse] = []
        for values in table.read_all()[1:]:
            cells = list(values) + [EMPTY] * (len(INVENTORY_HEADERS) - len(values))
            if not cells[0]:
                continue
            items.append(
                InventoryItemResponse(
                    item=cells[0],
                    status=cells[1],
                    price=cells[2],
                    lastUpdated=cells[3],
                )
            )
        return items
