import threading
from typing import Iterable, List, Optional
import logging

from phishcheck.config import settings
from phishcheck.core.detector import DetectorConfig
from phishcheck.core.list_resolver import ALLOW, DomainLists, ListMutation
from phishcheck.core.risk_scorer import Weights
from phishcheck.services.state_store import StateStore

logger = logging.getLogger(__name__)


class DetectorState:
    """
    Process-wide weights + allow/deny lists

    Every mutation goes through here and is written back to the store
    before returning. Analyses work on a snapshot, so a concurrent
    mutation never changes a report halfway through.
    """

    def __init__(self, config: DetectorConfig):
        self._config = config
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store: StateStore,
             precedence: Optional[str] = None,
             language: Optional[str] = None) -> "DetectorState":
        lists = DomainLists(
            allow=store.load_allow_list(),
            deny=store.load_deny_list(),
            precedence=precedence or settings.LIST_PRECEDENCE
        )
        config = DetectorConfig(
            weights=store.load_weights(),
            lists=lists,
            language=language or settings.LANGUAGE
        )
        logger.info(
            f"Loaded detector state: {len(lists.allow)} allowlisted, "
            f"{len(lists.deny)} denylisted domains"
        )
        return cls(config)

    def snapshot(self) -> DetectorConfig:
        with self._lock:
            return DetectorConfig(
                weights=Weights(**vars(self._config.weights)),
                lists=self._config.lists.copy(),
                language=self._config.language
            )

    # ===== WEIGHTS =====

    def set_weights(self, store: StateStore, weights: Weights) -> Weights:
        with self._lock:
            self._config.weights = weights
            store.save_weights(weights)
        return weights

    def reset_weights(self, store: StateStore) -> Weights:
        return self.set_weights(store, Weights())

    # ===== DOMAIN LISTS =====

    def _save_list(self, store: StateStore, list_name: str):
        lists = self._config.lists
        if list_name == ALLOW:
            store.save_allow_list(lists.allow)
        else:
            store.save_deny_list(lists.deny)

    def add_domain(self, store: StateStore, list_name: str, domain: str) -> ListMutation:
        return self.add_domains(store, list_name, [domain])[0]

    def add_domains(self, store: StateStore, list_name: str, domains: Iterable[str]) -> List[ListMutation]:
        # Check + insert + save under one lock keeps the lists disjoint
        with self._lock:
            results = self._config.lists.add_many(list_name, domains)
            if any(r.applied for r in results):
                self._save_list(store, list_name)
        return results

    def remove_domain(self, store: StateStore, list_name: str, domain: str) -> ListMutation:
        with self._lock:
            result = self._config.lists.remove(list_name, domain)
            if result.applied:
                self._save_list(store, list_name)
        return result


_state: Optional[DetectorState] = None
_state_lock = threading.Lock()


def get_state(store: StateStore) -> DetectorState:
    """Process-wide state, loaded from the store on first use"""
    global _state
    with _state_lock:
        if _state is None:
            _state = DetectorState.load(store)
        return _state


def reset_state():
    """Forget the cached state; the next get_state() reloads it"""
    global _state
    with _state_lock:
        _state = None
