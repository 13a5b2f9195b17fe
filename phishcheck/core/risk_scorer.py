import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Optional, Sequence

from phishcheck.core.signals import Signal, Severity, resolve_language


@dataclass
class Weights:
    """Points per signal: one for text findings, three for URL severities"""
    text: float = 5
    url_severe: float = 15
    url_medium: float = 10
    url_mild: float = 6

    def for_severity(self, severity: Severity) -> float:
        if severity == Severity.SEVERE:
            return self.url_severe
        if severity == Severity.MEDIUM:
            return self.url_medium
        if severity == Severity.TEXT:
            return self.text
        return self.url_mild

    def to_dict(self) -> Dict[str, float]:
        """Persisted / exported form (camelCase keys)"""
        return {
            'text': self.text,
            'urlSevere': self.url_severe,
            'urlMedium': self.url_medium,
            'urlMild': self.url_mild,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Weights":
        """
        Accepts camelCase or snake_case keys; missing keys keep defaults.
        Raises TypeError on non-numeric or non-finite values.
        """
        defaults = asdict(cls())
        values = {}
        for name, default in defaults.items():
            camel = ''.join(p if i == 0 else p.capitalize() for i, p in enumerate(name.split('_')))
            raw = data.get(camel, data.get(name, default))
            if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
                raise TypeError(f"Weight {camel!r} must be a number, got {raw!r}")
            values[name] = raw
        return cls(**values)


DEFAULT_WEIGHTS = Weights()


@dataclass
class RiskLabel:
    tier: str
    label: str
    hint: str


RISK_LABELS = {
    "en": {
        'high': ("High risk", "Do not click or enter personal data"),
        'medium': ("Medium risk", "Verify the sender and domain"),
        'low': ("Low risk", "Still exercise caution and check the source"),
    },
    "th": {
        'high': ("เสี่ยงสูง", "อย่าคลิกหรือกรอกข้อมูลส่วนตัว"),
        'medium': ("เสี่ยงปานกลาง", "ตรวจสอบผู้ส่งและโดเมนให้แน่ใจ"),
        'low': ("เสี่ยงต่ำ", "ยังควรระวังและตรวจสอบแหล่งที่มา"),
    },
}


class RiskScorer:
    def __init__(self, malicious_threshold: int = 70, suspicious_threshold: int = 40):
        # Verdict thresholds, shared by per-URL categories and overall tiers
        self.thresholds = {
            'malicious': malicious_threshold,
            'suspicious': suspicious_threshold
        }

    def score(self,
              text_signals: Sequence[Signal],
              url_signal_lists: Iterable[Sequence[Signal]],
              weights: Weights) -> int:
        """
        Additive score clamped to [0, 100]

        Text findings count ``weights.text`` each; URL findings count the
        weight of their severity bucket.
        """
        raw = len(text_signals) * weights.text
        for signals in url_signal_lists:
            for signal in signals:
                raw += weights.for_severity(signal.severity)
        # Half-up rounding; round() would send 2.5 to 2
        return max(0, min(100, math.floor(raw + 0.5)))

    def categorize(self, url_score: int, override: Optional[str] = None) -> str:
        """Per-URL category; an allow/deny override always wins"""
        if override:
            return override
        if url_score >= self.thresholds['malicious']:
            return 'malicious'
        elif url_score >= self.thresholds['suspicious']:
            return 'risky'
        return 'ok'

    def label(self, score: int, language: str = "en") -> RiskLabel:
        return label_risk(score, language, self.thresholds)


def label_risk(score: int,
               language: str = "en",
               thresholds: Optional[Dict[str, int]] = None) -> RiskLabel:
    thresholds = thresholds or {'malicious': 70, 'suspicious': 40}
    if score >= thresholds['malicious']:
        tier = 'high'
    elif score >= thresholds['suspicious']:
        tier = 'medium'
    else:
        tier = 'low'
    label, hint = RISK_LABELS[resolve_language(language)][tier]
    return RiskLabel(tier=tier, label=label, hint=hint)

