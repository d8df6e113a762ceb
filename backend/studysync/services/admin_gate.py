from __future__ import annotations

import logging
import secrets

from studysync.config import Settings
from studysync.services.errors import (
    AdminRequiredError,
    ConfirmationRequiredError,
    RecordNotFoundError,
)
from studysync.services.export_service import export_roster_csv
from studysync.services.roster_store import RosterStore

logger = logging.getLogger(__name__)


class RosterAdmin:
    """Destructive roster operations, handed out only while the gate is open."""

    def __init__(self, store: RosterStore, config: Settings):
        self.store = store
        self.config = config

    async def remove(self, identity: str) -> None:
        removed = await self.store.remove(identity)
        if not removed:
            raise RecordNotFoundError(f"No student with id {identity!r}")
        logger.info(f"Student removed: id={identity}, remaining={len(self.store)}")

    async def clear(self, *, confirm: bool) -> None:
        if not confirm:
            raise ConfirmationRequiredError("Reset must be explicitly confirmed")
        cleared = len(self.store)
        await self.store.clear()
        logger.info(f"Roster reset: cleared={cleared}")

    def export_csv(self) -> str:
        return export_roster_csv(
            self.store.snapshot(),
            tz_name=self.config.export_timezone,
            placeholder=self.config.export_missing_id_placeholder,
            quote_fields=self.config.export_quote_fields,
        )


class AdminGate:
    """
    UI mode flag for the administrator view.

    Opened by the shared passcode and closed by logout. It only decides which
    roster operations are offered; it does not protect the stored data.
    """

    def __init__(self, passcode: str):
        self._passcode = passcode
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def login(self, passcode: str) -> bool:
        if secrets.compare_digest(passcode.encode("utf-8"), self._passcode.encode("utf-8")):
            self._active = True
            logger.info("Admin access granted")
            return True
        logger.warning("Admin login rejected: invalid passcode")
        return False

    def logout(self) -> None:
        self._active = False

    def capabilities(self, store: RosterStore, config: Settings) -> RosterAdmin:
        if not self._active:
            raise AdminRequiredError("Admin access required")
        return RosterAdmin(store, config)
