"""
Phishing detection pipeline

text -> {URL extractor, text analyzer} -> host analyzer (per URL)
     -> list resolver (per URL) -> scorer (per URL and overall) -> risk label

Everything here is a pure function of the input text and a DetectorConfig;
records are rebuilt on every call.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from phishcheck.core.host_analyzer import HostAnalyzer, base_domain, tld_of
from phishcheck.core.list_resolver import DomainLists
from phishcheck.core.risk_scorer import RiskScorer, RiskLabel, Weights
from phishcheck.core.signals import Signal, DEFAULT_LANGUAGE, invalid_url_message
from phishcheck.core.text_analyzer import TextAnalyzer
from phishcheck.core.url_extractor import URLExtractor

logger = logging.getLogger(__name__)

CATEGORIES = ('trusted', 'malicious', 'risky', 'ok')


@dataclass
class DetectorConfig:
    weights: Weights = field(default_factory=Weights)
    lists: DomainLists = field(default_factory=DomainLists)
    language: str = DEFAULT_LANGUAGE


@dataclass
class UrlRecord:
    raw: str
    ok: bool
    url: Optional[str] = None
    host: Optional[str] = None
    base_domain: Optional[str] = None
    tld: Optional[str] = None
    signals: List[Signal] = field(default_factory=list)
    score: int = 0
    category: str = 'ok'

    def flags(self, language: str = DEFAULT_LANGUAGE) -> List[str]:
        return [s.message(language) for s in self.signals]

    def error(self, language: str = DEFAULT_LANGUAGE) -> Optional[str]:
        return None if self.ok else invalid_url_message(language)

    def to_dict(self, language: str = DEFAULT_LANGUAGE) -> Dict[str, Any]:
        return {
            'raw': self.raw,
            'ok': self.ok,
            'url': self.url,
            'host': self.host,
            'base_domain': self.base_domain,
            'tld': self.tld,
            'flags': self.flags(language),
            'signals': [s.to_dict(language) for s in self.signals],
            'error': self.error(language),
            'score': self.score,
            'category': self.category,
        }

    def export_row(self, language: str = DEFAULT_LANGUAGE) -> Dict[str, Any]:
        """Row layout shared by the CSV and JSON reports"""
        return {
            'url': self.url or self.raw,
            'host': self.host or '',
            'base_domain': self.base_domain or '',
            'tld': self.tld or '',
            'flags': ' | '.join(self.flags(language)),
            'score': self.score,
        }


@dataclass
class AnalysisReport:
    score: int
    risk: RiskLabel
    text_signals: List[Signal]
    urls: List[UrlRecord]

    def text_findings(self, language: str = DEFAULT_LANGUAGE) -> List[str]:
        return [s.message(language) for s in self.text_signals]

    def filter_urls(self, category: Optional[str] = None) -> List[UrlRecord]:
        if not category or category == 'all':
            return list(self.urls)
        return [u for u in self.urls if u.category == category]

    def to_dict(self, language: str = DEFAULT_LANGUAGE, category: Optional[str] = None) -> Dict[str, Any]:
        return {
            'score': self.score,
            'risk': {
                'tier': self.risk.tier,
                'label': self.risk.label,
                'hint': self.risk.hint,
            },
            'text_findings': self.text_findings(language),
            'text_signals': [s.to_dict(language) for s in self.text_signals],
            'urls': [u.to_dict(language) for u in self.filter_urls(category)],
        }


class PhishingDetector:
    def __init__(self,
                 extractor: Optional[URLExtractor] = None,
                 host_analyzer: Optional[HostAnalyzer] = None,
                 text_analyzer: Optional[TextAnalyzer] = None,
                 scorer: Optional[RiskScorer] = None):
        self.extractor = extractor or URLExtractor()
        self.host_analyzer = host_analyzer or HostAnalyzer()
        self.text_analyzer = text_analyzer or TextAnalyzer()
        self.scorer = scorer or RiskScorer()

    def analyze_url(self, raw: str, text: str, config: DetectorConfig) -> UrlRecord:
        analysis = self.host_analyzer.analyze(raw, text)
        if not analysis.ok:
            logger.debug(f"Invalid URL kept as record: {raw!r}")
            return UrlRecord(raw=raw, ok=False)

        host = analysis.parsed.host
        bd = base_domain(host)
        signals = list(analysis.signals)

        verdict = config.lists.classify(bd)
        signals.extend(verdict.signals)

        url_score = self.scorer.score([], [signals], config.weights)
        category = self.scorer.categorize(url_score, verdict.category)

        logger.debug(f"{raw} -> score={url_score} category={category} signals={len(signals)}")
        return UrlRecord(
            raw=raw,
            ok=True,
            url=analysis.parsed.href,
            host=host,
            base_domain=bd,
            tld=tld_of(host),
            signals=signals,
            score=url_score,
            category=category,
        )

    def analyze(self, text: str, config: Optional[DetectorConfig] = None) -> AnalysisReport:
        config = config or DetectorConfig()
        text = text or ''

        text_signals = self.text_analyzer.analyze(text)
        records = [self.analyze_url(raw, text, config) for raw in self.extractor.extract(text)]

        total = self.scorer.score(text_signals, [r.signals for r in records], config.weights)
        risk = self.scorer.label(total, config.language)

        logger.info(
            f"Analyzed {len(text)} chars: {len(records)} URLs, "
            f"{len(text_signals)} text signals, score={total} ({risk.tier})"
        )
        return AnalysisReport(score=total, risk=risk, text_signals=text_signals, urls=records)
