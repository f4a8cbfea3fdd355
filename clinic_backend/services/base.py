import json
import logging
import re
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateKey, NoFieldsProvided, NotFound, ValidationError

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 timestamp used for string timestamp columns."""
    return datetime.utcnow().isoformat(timespec="milliseconds") + "Z"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(orig).lower()


def violated_conflict(exc: IntegrityError, conflicts: Dict[str, Tuple[str, str]], default):
    """Pick the conflict whose column the unique-violation message names.

    SQLite reports ``table.column``; PostgreSQL names the index and then
    ``Key (column)=(value)``. The offending value is ignored.
    """
    text = str(getattr(exc, "orig", exc)).split(")=(")[0]
    for column, conflict in conflicts.items():
        if re.search(rf"[.(_]{re.escape(column)}\b", text):
            return conflict
    return default


def load_json(raw: Optional[str], default):
    if not raw:
        return default
    return json.loads(raw)


class BaseService:
    """Shared read-modify-write plumbing for the entity services."""

    model = None
    entity_name = "Resource"
    # Columns that must not be set to null through a patch
    required_fields: Iterable[str] = ()

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, entity_id):
        instance = self.db.get(self.model, entity_id)
        if instance is None:
            raise NotFound(f"{self.entity_name} not found")
        return instance

    def _require_changes(self, changes: dict) -> dict:
        if not changes:
            raise NoFieldsProvided()
        for field in self.required_fields:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")
        return changes

    def _commit(self, duplicate_message: str = "Resource already exists", field: Optional[str] = None,
                conflicts: Optional[Dict[str, Tuple[str, str]]] = None):
        """Commit, turning a unique-constraint rejection into DuplicateKey.

        ``conflicts`` maps a column name to the ``(message, field)`` reported
        when the store names that column in its error.
        """
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                message, field = violated_conflict(exc, conflicts or {}, (duplicate_message, field))
                logger.info(f"{self.entity_name} rejected by unique constraint: {message}")
                raise DuplicateKey(message, field=field) from exc
            raise

    def _delete(self, entity_id) -> None:
        instance = self._get_or_404(entity_id)
        self.db.delete(instance)
        self.db.commit()
