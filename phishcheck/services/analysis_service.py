import time
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
import logging

from phishcheck.config import settings
from phishcheck.core.detector import AnalysisReport, PhishingDetector
from phishcheck.core.list_resolver import ListMutation
from phishcheck.core.risk_scorer import RiskScorer
from phishcheck.services.report_service import build_csv_report, build_json_report
from phishcheck.services.state_service import DetectorState, get_state
from phishcheck.services.state_store import StateStore

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(self, db: Session, state: Optional[DetectorState] = None):
        self.db = db
        self.store = StateStore(db)
        self.state = state or get_state(self.store)
        self.detector = PhishingDetector(scorer=RiskScorer(
            malicious_threshold=settings.MALICIOUS_THRESHOLD,
            suspicious_threshold=settings.SUSPICIOUS_THRESHOLD
        ))

    def analyze_text(self, text: str, category: Optional[str] = None) -> Dict:
        """Complete analysis pipeline for one message"""
        start_time = time.time()
        config = self.state.snapshot()

        report = self.detector.analyze(text, config)

        processing_time = time.time() - start_time
        logger.info(f"✓ Analysis complete in {processing_time:.3f}s - Risk: {report.risk.tier} ({report.score})")

        result = report.to_dict(config.language, category)
        result['url_count'] = len(report.urls)
        result['weights'] = config.weights.to_dict()
        result['processing_time'] = processing_time
        return result

    def extract_urls(self, text: str) -> List[str]:
        return self.detector.extractor.extract(text)

    def run(self, text: str) -> AnalysisReport:
        return self.detector.analyze(text, self.state.snapshot())

    def json_report(self, text: str) -> Dict:
        config = self.state.snapshot()
        report = self.detector.analyze(text, config)
        return build_json_report(report, config, text)

    def csv_report(self, text: str) -> str:
        config = self.state.snapshot()
        report = self.detector.analyze(text, config)
        return build_csv_report(report, config.language)

    def add_domains_from_analysis(self, text: str, list_name: str) -> List[ListMutation]:
        """Put every base domain of the current analysis on one list"""
        report = self.run(text)
        domains = []
        for record in report.urls:
            if record.base_domain and record.base_domain not in domains:
                domains.append(record.base_domain)
        return self.state.add_domains(self.store, list_name, domains)
