"""Household Manager - Members, module switches and the virtual clock.

Owns the roster stored under DATA_HOUSEHOLD and the time-travel offset under
DATA_CLOCK. Roster changes are broadcast with SIGNAL_SUFFIX_MEMBERS_CHANGED so
that the water model can re-derive its baseline rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
import uuid

from homeassistant.exceptions import HomeAssistantError

from .. import const
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import MemberData


class HouseholdManager(BaseManager):
    """Manages household members, enabled modules and the virtual clock."""

    async def async_setup(self) -> None:
        """Nothing to subscribe to; the roster is read on demand."""

    # -------------------------------------------------------------------------------------
    # Roster
    # -------------------------------------------------------------------------------------

    @property
    def members(self) -> list[MemberData]:
        """All household members, people and pets."""
        return self.coordinator.household_data[const.DATA_HOUSEHOLD_MEMBERS]

    @property
    def human_count(self) -> int:
        """Number of members who are people."""
        return sum(
            1
            for member in self.members
            if member.get(const.DATA_MEMBER_ROLE) != const.MEMBER_ROLE_PET
        )

    @property
    def pet_count(self) -> int:
        """Number of members who are pets."""
        return len(self.members) - self.human_count

    def add_member(
        self, name: str, role: str = const.MEMBER_ROLE_MEMBER, species: str | None = None
    ) -> str:
        """Add a person or pet and return its internal id.

        Adding the first pet switches the pet-care module on.
        """
        member_id = str(uuid.uuid4())
        member: MemberData = {
            const.DATA_MEMBER_ID: member_id,
            const.DATA_MEMBER_NAME: name,
            const.DATA_MEMBER_ROLE: role,
            const.DATA_MEMBER_SPECIES: (
                (species or const.PET_SPECIES_OTHER)
                if role == const.MEMBER_ROLE_PET
                else None
            ),
        }
        self.members.append(member)
        const.LOGGER.info("INFO: Added %s '%s' to household", role, name)

        if role == const.MEMBER_ROLE_PET and not self.coordinator.is_module_enabled(
            const.MODULE_PET
        ):
            self._write_module_flag(const.MODULE_PET, True)
            self.coordinator.async_schedule_entity_reload()

        self._roster_changed()
        return member_id

    def remove_member(self, member_id: str) -> None:
        """Remove a member. The last owner cannot be removed."""
        member = next(
            (m for m in self.members if m.get(const.DATA_MEMBER_ID) == member_id),
            None,
        )
        if member is None:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_NOT_FOUND,
                translation_placeholders={
                    "entity_type": const.LABEL_MEMBER,
                    "name": member_id,
                },
            )

        owners = [
            m
            for m in self.members
            if m.get(const.DATA_MEMBER_ROLE) == const.MEMBER_ROLE_OWNER
        ]
        is_owner = member.get(const.DATA_MEMBER_ROLE) == const.MEMBER_ROLE_OWNER
        if is_owner and len(owners) <= 1:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_LAST_OWNER,
            )

        self.members.remove(member)
        const.LOGGER.info(
            "INFO: Removed member '%s' from household",
            member.get(const.DATA_MEMBER_NAME),
        )
        self._roster_changed()

    def _roster_changed(self) -> None:
        """Persist the roster and notify other managers."""
        self.coordinator._persist_and_update()
        self.emit(
            const.SIGNAL_SUFFIX_MEMBERS_CHANGED,
            human_count=self.human_count,
            pet_count=self.pet_count,
        )

    # -------------------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------------------

    def _write_module_flag(self, module: str, enabled: bool) -> None:
        modules = self.coordinator.household_data.setdefault(
            const.DATA_HOUSEHOLD_MODULES, {}
        )
        modules[module] = enabled

    def set_module_enabled(self, module: str, enabled: bool) -> None:
        """Switch a module on or off and rebuild entities if it changed."""
        if self.coordinator.is_module_enabled(module) == enabled:
            const.LOGGER.debug(
                "DEBUG: Module '%s' already %s", module, "on" if enabled else "off"
            )
            return
        self._write_module_flag(module, enabled)
        const.LOGGER.info(
            "INFO: Module '%s' %s", module, "enabled" if enabled else "disabled"
        )
        self.coordinator._persist_and_update()
        self.coordinator.async_schedule_entity_reload()

    # -------------------------------------------------------------------------------------
    # Virtual Clock
    # -------------------------------------------------------------------------------------

    def _clock(self) -> dict[str, Any]:
        return self.coordinator._data.setdefault(
            const.DATA_CLOCK, {const.DATA_CLOCK_OFFSET_SECONDS: 0.0}
        )

    def time_travel(self, hours: float) -> None:
        """Shift the virtual clock forward (or back) by `hours`."""
        clock = self._clock()
        clock[const.DATA_CLOCK_OFFSET_SECONDS] = (
            float(clock.get(const.DATA_CLOCK_OFFSET_SECONDS, 0.0)) + hours * 3600.0
        )
        const.LOGGER.info(
            "INFO: Time travel by %s hours; virtual now is %s",
            hours,
            self.coordinator.now().isoformat(),
        )
        self.coordinator._persist_and_update()

    def reset_time_travel(self) -> None:
        """Return the virtual clock to real time."""
        self._clock()[const.DATA_CLOCK_OFFSET_SECONDS] = 0.0
        const.LOGGER.info("INFO: Time travel offset cleared")
        self.coordinator._persist_and_update()
