import csv
import io
from datetime import date, datetime, timezone

from phishcheck.core.detector import DetectorConfig, PhishingDetector
from phishcheck.core.list_resolver import DomainLists
from phishcheck.services.report_service import (
    CSV_FIELDS, build_csv_report, build_json_report, report_filename
)

TEXT = "Urgent: login at 192.168.1.1/login or best-deals.com, invalid example.com:99999"


def _analyze(config=None):
    config = config or DetectorConfig(lists=DomainLists(allow=["example.org"], deny=["best-deals.com", "a.com"]))
    return PhishingDetector().analyze(TEXT, config), config


def test_csv_has_one_row_per_url():
    report, config = _analyze()
    content = build_csv_report(report, config.language)

    lines = content.splitlines()
    assert lines[0] == "url,host,base_domain,tld,flags,score"

    rows = list(csv.DictReader(io.StringIO(content)))
    assert [r["url"] for r in rows] == [
        "http://192.168.1.1/login",
        "http://best-deals.com/",
        "example.com:99999",
    ]
    assert rows[0]["flags"] == "IP address used as host | Sensitive path/parameter (login/verify/...)"
    assert rows[0]["score"] == "25"
    assert rows[2]["host"] == ""
    assert rows[2]["score"] == "0"


def test_csv_for_text_without_urls_is_header_only():
    report = PhishingDetector().analyze("nothing here")
    assert build_csv_report(report) == ",".join(CSV_FIELDS) + "\n"


def test_json_report_layout():
    report, config = _analyze()
    created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    data = build_json_report(report, config, TEXT, created_at=created)

    assert data["created_at"] == "2026-01-02T03:04:05+00:00"
    assert data["summary"] == {
        "score": report.score,
        "risk": report.risk.label,
        "weights": {"text": 5, "urlSevere": 15, "urlMedium": 10, "urlMild": 6},
    }
    assert data["text_findings"] == ['Urgency/persuasion keyword found: "urgent"']
    assert len(data["urls"]) == 3
    assert set(data["urls"][0]) == set(CSV_FIELDS)
    assert data["snippet"] == TEXT
    assert data["whitelist"] == ["example.org"]
    assert data["blacklist"] == ["a.com", "best-deals.com"]


def test_json_snippet_is_truncated():
    report, config = _analyze()
    long_text = TEXT + " " + ("x" * 10000)
    data = build_json_report(report, config, long_text, snippet_length=50)
    assert data["snippet"] == long_text[:50]


def test_report_filename():
    assert report_filename("csv", date(2026, 1, 2)) == "phishing-report-2026-01-02.csv"
    assert report_filename("json").startswith("phishing-report-")
