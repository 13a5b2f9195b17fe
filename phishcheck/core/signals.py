"""
Structured risk signals.

Every finding carries an explicit severity tag at emission time, so scoring
never has to look at the rendered message. The human-readable text is a pure
projection of ``kind`` + ``detail`` through the message catalog below.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Severity(str, Enum):
    SEVERE = "severe"
    MEDIUM = "medium"
    MILD = "mild"
    TEXT = "text"


class SignalKind(str, Enum):
    # URL / host checks
    AT_SIGN = "at_sign"
    EXPLICIT_PORT = "explicit_port"
    NON_ASCII_HOST = "non_ascii_host"
    PUNYCODE_HOST = "punycode_host"
    IP_HOST = "ip_host"
    DEEP_SUBDOMAIN = "deep_subdomain"
    RISKY_TLD = "risky_tld"
    SHORTENER = "shortener"
    SENSITIVE_PATH = "sensitive_path"
    HYPHENATED_DOMAIN = "hyphenated_domain"
    BRAND_MISMATCH = "brand_mismatch"

    # Allow / deny lists
    ALLOWLISTED = "allowlisted"
    DENYLISTED = "denylisted"

    # Text checks
    URGENCY_KEYWORD = "urgency_keyword"
    SUSPICIOUS_KEYWORD = "suspicious_keyword"
    JAVASCRIPT_SCHEME = "javascript_scheme"
    DATA_HTML = "data_html"
    ZERO_WIDTH_CHAR = "zero_width_char"


DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[SignalKind, str]] = {
    "en": {
        SignalKind.AT_SIGN: "Unusual '@' in domain",
        SignalKind.EXPLICIT_PORT: "Explicit port in use ({port})",
        SignalKind.NON_ASCII_HOST: "Domain contains Unicode characters (possible homograph)",
        SignalKind.PUNYCODE_HOST: "Domain is Punycode (xn--)",
        SignalKind.IP_HOST: "IP address used as host",
        SignalKind.DEEP_SUBDOMAIN: "Abnormally deep subdomain ({levels} levels)",
        SignalKind.RISKY_TLD: "Risky TLD: .{tld}",
        SignalKind.SHORTENER: "Link shortener hides real destination",
        SignalKind.SENSITIVE_PATH: "Sensitive path/parameter (login/verify/...)",
        SignalKind.HYPHENATED_DOMAIN: "Hyphenated domain may imitate a brand",
        SignalKind.BRAND_MISMATCH: "Text mentions brand '{brand}' but domain is {host}",
        SignalKind.ALLOWLISTED: "Domain is allowlisted",
        SignalKind.DENYLISTED: "Domain is denylisted",
        SignalKind.URGENCY_KEYWORD: "Urgency/persuasion keyword found: \"{keyword}\"",
        SignalKind.SUSPICIOUS_KEYWORD: "Suspicious keyword found: \"{keyword}\"",
        SignalKind.JAVASCRIPT_SCHEME: "Link uses javascript: scheme (possible XSS)",
        SignalKind.DATA_HTML: "Embedded data: URL carrying HTML (possible HTML smuggling)",
        SignalKind.ZERO_WIDTH_CHAR: "Zero-width characters detected (hidden text)",
    },
    "th": {
        SignalKind.AT_SIGN: "โดเมนมี '@' ผิดปกติ",
        SignalKind.EXPLICIT_PORT: "ใช้พอร์ตที่ระบุ ({port})",
        SignalKind.NON_ASCII_HOST: "โดเมนมีตัว Unicode อาจเป็น homograph",
        SignalKind.PUNYCODE_HOST: "โดเมนเป็น Punycode (xn--)",
        SignalKind.IP_HOST: "ใช้ IP แทนโดเมน",
        SignalKind.DEEP_SUBDOMAIN: "ซับโดเมนยาวผิดปกติ ({levels} ชั้น)",
        SignalKind.RISKY_TLD: "TLD เสี่ยง: .{tld}",
        SignalKind.SHORTENER: "ลิงก์ย่อ (shortener) ซ่อนที่หมายจริง",
        SignalKind.SENSITIVE_PATH: "พาธ/พารามิเตอร์อ่อนไหว (login/verify/...)",
        SignalKind.HYPHENATED_DOMAIN: "โดเมนมีขีดกลาง อาจเลียนแบบแบรนด์",
        SignalKind.BRAND_MISMATCH: "อ้างถึงแบรนด์ \"{brand}\" แต่โดเมนคือ {host}",
        SignalKind.ALLOWLISTED: "อยู่ในรายการอนุญาต (Whitelist)",
        SignalKind.DENYLISTED: "อยู่ในบัญชีดำ (Blacklist)",
        SignalKind.URGENCY_KEYWORD: "พบคำเร่งเร้า/ชวนเชื่อ: \"{keyword}\"",
        SignalKind.SUSPICIOUS_KEYWORD: "พบคำต้องสงสัย: \"{keyword}\"",
        SignalKind.JAVASCRIPT_SCHEME: "ลิงก์ใช้ javascript: scheme (อาจโจมตี XSS)",
        SignalKind.DATA_HTML: "อาจมี data: URL ฝัง HTML",
        SignalKind.ZERO_WIDTH_CHAR: "ตรวจพบ Zero-width char (ซ่อนตัวอักษร)",
    },
}

INVALID_URL_MESSAGES = {
    "en": "Invalid URL",
    "th": "URL ไม่ถูกต้อง",
}


def resolve_language(language: str) -> str:
    return language if language in MESSAGES else DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Signal:
    kind: SignalKind
    severity: Severity
    detail: Dict[str, Any] = field(default_factory=dict)

    def message(self, language: str = DEFAULT_LANGUAGE) -> str:
        template = MESSAGES[resolve_language(language)][self.kind]
        return template.format(**self.detail)

    def to_dict(self, language: str = DEFAULT_LANGUAGE) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "detail": dict(self.detail),
            "message": self.message(language),
        }


def invalid_url_message(language: str = DEFAULT_LANGUAGE) -> str:
    return INVALID_URL_MESSAGES[resolve_language(language)]
