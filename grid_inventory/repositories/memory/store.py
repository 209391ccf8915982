"""Process-wide in-memory tables used when STORAGE_BACKEND=memory."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from grid_inventory.repositories.interfaces import EquipmentRow, EquipmentTypeRow


@dataclass
class InMemoryStore:
    # dicts keep insertion order, which is the listing order
    equipment: dict[str, EquipmentRow] = field(default_factory=dict)
    equipment_types: dict[str, EquipmentTypeRow] = field(default_factory=dict)

    def snapshot(self) -> tuple[dict[str, EquipmentRow], dict[str, EquipmentTypeRow]]:
        return copy.deepcopy(self.equipment), copy.deepcopy(self.equipment_types)

    def restore(
        self, state: tuple[dict[str, EquipmentRow], dict[str, EquipmentTypeRow]]
    ) -> None:
        self.equipment, self.equipment_types = state

    def clear(self) -> None:
        self.equipment.clear()
        self.equipment_types.clear()


_store = InMemoryStore()


def get_memory_store() -> InMemoryStore:
    return _store


def reset_memory_store() -> None:
    _store.clear()
