"""Base entity classes for HomeKeeper integration."""

from __future__ import annotations

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import HomeKeeperDataCoordinator


class HomeKeeperCoordinatorEntity(CoordinatorEntity[HomeKeeperDataCoordinator]):
    """Base entity class for HomeKeeper entities with typed coordinator access."""

    @property
    def coordinator(self) -> HomeKeeperDataCoordinator:
        """Return typed coordinator.

        Uses object.__getattribute__ to access the private _coordinator attribute
        set by the parent CoordinatorEntity class.
        """
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: HomeKeeperDataCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
