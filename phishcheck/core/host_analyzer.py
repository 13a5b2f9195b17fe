import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit, SplitResult
import logging

from phishcheck.core.signals import Signal, SignalKind, Severity

logger = logging.getLogger(__name__)


# --- OPTIMIZATION: Sets for O(1) lookup ---
RISKY_TLDS = {
    # Free / budget ccTLDs with long abuse history
    'gq', 'tk', 'ml', 'cf',
    # File-extension confusion
    'zip', 'mov',
    # Cheap gTLDs common in phishing kits
    'click', 'xyz', 'top', 'quest', 'work', 'cam', 'rest', 'country',
    'fit', 'men', 'loan', 'review', 'date', 'party', 'kim', 'bar',
    'surf', 'accountants', 'bid', 'racing',
}

SHORTENERS = {
    'bit.ly', 't.co', 'tinyurl.com', 'goo.gl', 'ow.ly', 'is.gd',
    'buff.ly', 'rebrand.ly', 'cutt.ly', 'bl.ink', 'rb.gy', 's.id',
    'lnkd.in',
}

# Brand mapping for mismatch checks: brand mentioned in text -> legit domains
BRAND_DOMAINS: Dict[str, List[str]] = {
    'google': ['google.com', 'accounts.google.com', 'goo.gl'],
    'microsoft': ['microsoft.com', 'live.com', 'outlook.com', 'office.com'],
    'apple': ['apple.com', 'icloud.com'],
    'paypal': ['paypal.com'],
    'facebook': ['facebook.com', 'fb.com', 'meta.com'],
    'amazon': ['amazon.com'],
    # Thai retail banks
    'bank': [
        'scb.co.th', 'kbank.co.th', 'krungsri.com', 'bangkokbank.com',
        'ktb.co.th', 'uob.co.th'
    ],
}

SENSITIVE_PATTERN = re.compile(
    r'login|verify|secure|confirm|account|update|payment|invoice|token'
    r'|session|redirect|url=|id=|otp=',
    re.IGNORECASE
)

IPV4_PATTERN = re.compile(
    r'^(?:(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\.){3}'
    r'(?:25[0-5]|2[0-4]\d|[01]?\d\d?)$'
)

SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)

DEFAULT_PORTS = {'http': 80, 'https': 443}

NON_ASCII_PATTERN = re.compile(r'[^\x00-\x7F]')


def base_domain(host: str) -> str:
    """Last two labels of the host (no public-suffix list)"""
    parts = host.split('.')
    if len(parts) <= 2:
        return host.lower()
    return '.'.join(parts[-2:]).lower()


def tld_of(host: str) -> str:
    return host.split('.')[-1].lower()


def subdomain_depth(host: str) -> int:
    return len(host.split('.')) - 2


@dataclass
class ParsedURL:
    href: str
    host: str
    port: Optional[int]
    parts: SplitResult


@dataclass
class HostAnalysis:
    parsed: Optional[ParsedURL]
    signals: List[Signal] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.parsed is not None


def normalize_url(raw: str) -> Optional[ParsedURL]:
    """
    Parse a matched substring, defaulting the scheme to http

    Returns None when the authority is malformed: empty host, a port
    outside 0-65535, or a host that cannot be IDNA-encoded. The
    scheme's default port is dropped.
    """
    candidate = raw if SCHEME_PATTERN.match(raw) else f"http://{raw}"
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        port = parts.port
        if not host:
            return None
        host.encode('idna')
    except (ValueError, UnicodeError) as e:
        logger.debug(f"Rejected URL {raw!r}: {e}")
        return None

    if port == DEFAULT_PORTS.get(parts.scheme.lower()):
        port = None

    netloc = host if port is None else f"{host}:{port}"
    href = urlunsplit((
        parts.scheme.lower(),
        netloc,
        parts.path or '/',
        parts.query,
        parts.fragment
    ))
    return ParsedURL(href=href, host=host, port=port, parts=parts)


class HostAnalyzer:
    """
    Structural risk checks for a single URL

    Each check is an independent boolean test that appends at most one
    signal (brand mismatch: at most one per brand). Signal order only
    matters for display; scoring is additive.
    """

    def __init__(self,
                 risky_tlds: Optional[set] = None,
                 shorteners: Optional[set] = None,
                 brand_domains: Optional[Dict[str, List[str]]] = None):
        self.risky_tlds = risky_tlds if risky_tlds is not None else RISKY_TLDS
        self.shorteners = shorteners if shorteners is not None else SHORTENERS
        self.brand_domains = brand_domains if brand_domains is not None else BRAND_DOMAINS

    def analyze(self, raw: str, full_text: str) -> HostAnalysis:
        parsed = normalize_url(raw)
        if parsed is None:
            return HostAnalysis(parsed=None)
        return HostAnalysis(parsed=parsed, signals=self._url_signals(parsed, full_text))

    def _url_signals(self, parsed: ParsedURL, full_text: str) -> List[Signal]:
        host = parsed.host
        bd = base_domain(host)
        signals = []

        if '@' in host:
            signals.append(Signal(SignalKind.AT_SIGN, Severity.MILD))

        if parsed.port is not None:
            signals.append(Signal(SignalKind.EXPLICIT_PORT, Severity.MEDIUM, {'port': parsed.port}))

        if NON_ASCII_PATTERN.search(host):
            signals.append(Signal(SignalKind.NON_ASCII_HOST, Severity.SEVERE))

        if host.startswith('xn--'):
            signals.append(Signal(SignalKind.PUNYCODE_HOST, Severity.SEVERE))

        if IPV4_PATTERN.match(host):
            signals.append(Signal(SignalKind.IP_HOST, Severity.SEVERE))

        depth = subdomain_depth(host)
        if depth >= 3:
            signals.append(Signal(SignalKind.DEEP_SUBDOMAIN, Severity.SEVERE, {'levels': depth}))

        tld = tld_of(host)
        if tld in self.risky_tlds:
            signals.append(Signal(SignalKind.RISKY_TLD, Severity.MEDIUM, {'tld': tld}))

        if bd in self.shorteners:
            signals.append(Signal(SignalKind.SHORTENER, Severity.SEVERE))

        if SENSITIVE_PATTERN.search(parsed.href):
            signals.append(Signal(SignalKind.SENSITIVE_PATH, Severity.MEDIUM))

        if '-' in bd:
            signals.append(Signal(SignalKind.HYPHENATED_DOMAIN, Severity.SEVERE))

        signals.extend(self._brand_mismatches(host, bd, full_text))
        return signals

    def _brand_mismatches(self, host: str, bd: str, full_text: str) -> List[Signal]:
        """Brand named anywhere in the message but the link points elsewhere"""
        lc_text = (full_text or '').lower()
        mismatches = []
        for brand, official_domains in self.brand_domains.items():
            if brand not in lc_text:
                continue
            if bd not in {d.lower() for d in official_domains}:
                mismatches.append(Signal(
                    SignalKind.BRAND_MISMATCH,
                    Severity.SEVERE,
                    {'brand': brand, 'host': host}
                ))
        return mismatches

