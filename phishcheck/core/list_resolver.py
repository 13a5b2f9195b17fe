from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set
import logging

from phishcheck.core.signals import Signal, SignalKind, Severity

logger = logging.getLogger(__name__)

ALLOW = "allow"
DENY = "deny"
LIST_NAMES = (ALLOW, DENY)


def normalize_domain(domain: str) -> str:
    return (domain or "").strip().lower()


@dataclass
class ListVerdict:
    signals: List[Signal] = field(default_factory=list)
    category: Optional[str] = None


@dataclass
class ListMutation:
    applied: bool
    domain: str
    list_name: str
    reason: Optional[str] = None
    # True when the domain is already on the opposite list
    conflict: bool = False


class DomainLists:
    """
    Allow / deny sets of base domains

    A domain is never a member of both sets: insertion into one is
    refused while the domain sits in the other. When both sets still
    contain a domain (e.g. loaded from hand-edited storage), the
    ``precedence`` list decides the category.
    """

    def __init__(self,
                 allow: Optional[Iterable[str]] = None,
                 deny: Optional[Iterable[str]] = None,
                 precedence: str = DENY):
        if precedence not in LIST_NAMES:
            raise ValueError(f"Unknown list precedence: {precedence!r}")
        self.allow: Set[str] = {normalize_domain(d) for d in (allow or []) if normalize_domain(d)}
        self.deny: Set[str] = {normalize_domain(d) for d in (deny or []) if normalize_domain(d)}
        self.precedence = precedence

    def copy(self) -> "DomainLists":
        return DomainLists(self.allow, self.deny, self.precedence)

    def _sets(self, list_name: str):
        if list_name == ALLOW:
            return self.allow, self.deny
        if list_name == DENY:
            return self.deny, self.allow
        raise ValueError(f"Unknown list: {list_name!r}")

    def classify(self, base_domain: str) -> ListVerdict:
        bd = normalize_domain(base_domain)
        verdict = ListVerdict()
        in_allow = bd in self.allow
        in_deny = bd in self.deny

        if in_allow:
            verdict.signals.append(Signal(SignalKind.ALLOWLISTED, Severity.MILD))
        if in_deny:
            verdict.signals.append(Signal(SignalKind.DENYLISTED, Severity.MILD))

        if in_allow and in_deny:
            logger.warning(f"{bd} is on both lists, applying {self.precedence} precedence")
            verdict.category = 'malicious' if self.precedence == DENY else 'trusted'
        elif in_deny:
            verdict.category = 'malicious'
        elif in_allow:
            verdict.category = 'trusted'
        return verdict

    def add(self, list_name: str, domain: str) -> ListMutation:
        target, other = self._sets(list_name)
        bd = normalize_domain(domain)

        if not bd:
            return ListMutation(False, bd, list_name, "empty domain")
        if bd in other:
            other_name = DENY if list_name == ALLOW else ALLOW
            logger.info(f"Refused to add {bd} to {list_name} list: already on {other_name} list")
            return ListMutation(False, bd, list_name, f"already on {other_name} list", conflict=True)
        if bd in target:
            return ListMutation(False, bd, list_name, "already present")

        target.add(bd)
        return ListMutation(True, bd, list_name)

    def remove(self, list_name: str, domain: str) -> ListMutation:
        target, _ = self._sets(list_name)
        bd = normalize_domain(domain)
        if bd not in target:
            return ListMutation(False, bd, list_name, "not present")
        target.discard(bd)
        return ListMutation(True, bd, list_name)

    def add_many(self, list_name: str, domains: Iterable[str]) -> List[ListMutation]:
        return [self.add(list_name, d) for d in domains]

    def add_allow(self, domain: str) -> ListMutation:
        return self.add(ALLOW, domain)

    def add_deny(self, domain: str) -> ListMutation:
        return self.add(DENY, domain)

    def remove_allow(self, domain: str) -> ListMutation:
        return self.remove(ALLOW, domain)

    def remove_deny(self, domain: str) -> ListMutation:
        return self.remove(DENY, domain)
