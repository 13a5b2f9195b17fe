from typing import Any, Iterable, Optional, Set
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from phishcheck.core.risk_scorer import Weights
from phishcheck.models import StateSlot

logger = logging.getLogger(__name__)

WEIGHTS_KEY = "weights"
ALLOW_LIST_KEY = "allowList"
DENY_LIST_KEY = "denyList"


class StateStore:
    """
    load()/save() contract for the three persisted slots

    Loads never fail: a missing row, a corrupt value or a database error
    falls back to the default weight table / an empty set.
    """

    def __init__(self, db: Session):
        self.db = db

    # ===== RAW SLOT ACCESS =====

    def _read(self, key: str) -> Optional[Any]:
        try:
            slot = self.db.query(StateSlot).filter(StateSlot.key == key).first()
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Could not read state slot {key!r}: {e}")
            self.db.rollback()
            return None
        return slot.value if slot else None

    def _write(self, key: str, value: Any):
        # Bulk update so a corrupt stored value never has to be decoded
        updated = (
            self.db.query(StateSlot)
            .filter(StateSlot.key == key)
            .update({StateSlot.value: value}, synchronize_session=False)
        )
        if not updated:
            self.db.add(StateSlot(key=key, value=value))
        self.db.commit()

    # ===== WEIGHTS =====

    def load_weights(self) -> Weights:
        raw = self._read(WEIGHTS_KEY)
        if raw is None:
            return Weights()
        try:
            return Weights.from_dict(raw)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Stored weights are corrupt, using defaults: {e}")
            return Weights()

    def save_weights(self, weights: Weights):
        self._write(WEIGHTS_KEY, weights.to_dict())

    # ===== DOMAIN LISTS =====

    def _load_set(self, key: str) -> Set[str]:
        raw = self._read(key)
        if raw is None:
            return set()
        if not isinstance(raw, list) or not all(isinstance(d, str) for d in raw):
            logger.warning(f"Stored {key} is corrupt, starting with an empty list")
            return set()
        return {d.strip().lower() for d in raw if d.strip()}

    def _save_set(self, key: str, domains: Iterable[str]):
        self._write(key, sorted(domains))

    def load_allow_list(self) -> Set[str]:
        return self._load_set(ALLOW_LIST_KEY)

    def save_allow_list(self, domains: Iterable[str]):
        self._save_set(ALLOW_LIST_KEY, domains)

    def load_deny_list(self) -> Set[str]:
        return self._load_set(DENY_LIST_KEY)

    def save_deny_list(self, domains: Iterable[str]):
        self._save_set(DENY_LIST_KEY, domains)
