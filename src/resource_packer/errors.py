"""Error types raised by the packer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import DemandItem


class PackingError(Exception):
    """Base class for packing failures."""


class InvalidConfigurationError(PackingError, ValueError):
    """Bad weights, capacities or items. Raised before any placement."""


class UnplaceableItemError(PackingError):
    """An item can never fit a container built with the given capacities."""

    def __init__(
        self,
        item: "DemandItem",
        index: int,
        compute_capacity: int,
        storage_capacity: int,
        reason: str = "",
    ):
        self.item = item
        self.index = index
        self.compute_capacity = compute_capacity
        self.storage_capacity = storage_capacity
        self.reason = reason
        msg = (
            f"item #{index} {item.as_pair()} cannot be placed in a container "
            f"of capacity ({compute_capacity}, {storage_capacity})"
        )
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
