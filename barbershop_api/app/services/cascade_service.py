"""
Referential integrity for appointments.

The JSON store has no foreign keys, so deleting a customer or a
service would leave appointments pointing at nothing.  Repositories
publish an ``EntityDeleted`` event after removing a record and the
``CascadeCoordinator`` removes every appointment referencing it.

The cascade runs synchronously inside the delete request.  If the
appointments write fails, the entity delete is not rolled back; a
``CascadeFailure`` is raised so the caller sees a server error.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from barbershop_api.app.core.errors import CascadeFailure, StorageFailure, ValidationError
from barbershop_api.app.core.store import RecordStore, get_store

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = {
    "customer": "customer_id",
    "service": "service_id",
}


@dataclass(frozen=True)
class EntityDeleted:
    """A customer or service was removed from its collection."""

    kind: str
    entity_id: str


class CascadeCoordinator:
    """Removes appointments whose customer or service has been deleted."""

    def __init__(self, store: Optional[RecordStore] = None) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store or get_store()

    def handle(self, event: EntityDeleted) -> int:
        """Apply the cascade for ``event`` and return the number of appointments removed."""
        if event.kind == "customer":
            return self.on_customer_deleted(event.entity_id)
        if event.kind == "service":
            return self.on_service_deleted(event.entity_id)
        raise ValidationError(f"Unknown entity kind '{event.kind}'")

    def on_customer_deleted(self, customer_id: str) -> int:
        return self._purge("customer", customer_id)

    def on_service_deleted(self, service_id: str) -> int:
        return self._purge("service", service_id)

    def _purge(self, kind: str, entity_id: str) -> int:
        field = REFERENCE_FIELDS[kind]
        wanted = str(entity_id)
        store = self.store
        try:
            with store.locked("appointments"):
                appointments = store.list("appointments")
                remaining = [a for a in appointments if str(a.get(field)) != wanted]
                removed = len(appointments) - len(remaining)
                if removed:
                    store.replace_all("appointments", remaining)
        except StorageFailure as exc:
            logger.error("Cascade after %s %s delete failed: %s", kind, entity_id, exc.message)
            raise CascadeFailure(
                f"{kind.capitalize()} {entity_id} was deleted but its appointments could not be "
                f"removed; dangling references may remain"
            ) from exc
        if removed:
            logger.info("Removed %s appointment(s) referencing %s %s", removed, kind, entity_id)
        return removed


cascade_coordinator = CascadeCoordinator()
