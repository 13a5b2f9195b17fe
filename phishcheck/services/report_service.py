import csv
import io
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from phishcheck.config import settings
from phishcheck.core.detector import AnalysisReport, DetectorConfig

CSV_FIELDS = ["url", "host", "base_domain", "tld", "flags", "score"]


def build_json_report(report: AnalysisReport,
                      config: DetectorConfig,
                      text: str,
                      created_at: Optional[datetime] = None,
                      snippet_length: Optional[int] = None) -> Dict[str, Any]:
    """Whole-report export: summary, findings, URL rows, input snippet, lists"""
    created_at = created_at or datetime.now(timezone.utc)
    snippet_length = snippet_length if snippet_length is not None else settings.SNIPPET_LENGTH
    language = config.language

    return {
        "created_at": created_at.isoformat(),
        "summary": {
            "score": report.score,
            "risk": report.risk.label,
            "weights": config.weights.to_dict(),
        },
        "text_findings": report.text_findings(language),
        "urls": [u.export_row(language) for u in report.urls],
        "snippet": (text or "")[:snippet_length],
        "whitelist": sorted(config.lists.allow),
        "blacklist": sorted(config.lists.deny),
    }


def build_csv_report(report: AnalysisReport, language: str = "en") -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for record in report.urls:
        writer.writerow(record.export_row(language))
    return buffer.getvalue()


def report_filename(ext: str, day: Optional[date] = None) -> str:
    day = day or datetime.now(timezone.utc).date()
    return f"phishing-report-{day.isoformat()}.{ext}"
