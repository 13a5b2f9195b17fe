import re
from typing import List, Optional
import logging

from phishcheck.core.signals import Signal, SignalKind, Severity

logger = logging.getLogger(__name__)


# ===== URGENCY / SOCIAL ENGINEERING (English) =====
URGENCY_KEYWORDS = [
    'urgent', 'immediately', 'limited time', 'verify your account',
    'reset your password', 'security alert', 'suspended', 'unusual activity',
    'confirm your identity', 'unlock', 'otp', 'gift card', 'invoice',
    'payment failed', 'click the link', 'download attachment',
]

# ===== SUSPICIOUS TERMS (Thai) =====
THAI_KEYWORDS = [
    'ด่วน',               # urgent
    'รีเซ็ตรหัสผ่าน',       # reset password
    'ตรวจสอบบัญชี',        # check account
    'บัญชีถูกระงับ',        # account suspended
    'กิจกรรมที่น่าสงสัย',     # suspicious activity
    'ยืนยันตัวตน',          # confirm identity
    'ของขวัญ',             # gift
    'บัตรของขวัญ',          # gift card
    'ชำระเงิน',             # payment
    'โอนเงิน',             # money transfer
    'กดลิงก์',             # click the link
]

JAVASCRIPT_PATTERN = re.compile(r'javascript:', re.IGNORECASE)
DATA_HTML_PATTERN = re.compile(r'data:\s*text/html', re.IGNORECASE)
ZERO_WIDTH_PATTERN = re.compile('[\u200b\u200c\u200d\ufeff]')


class TextAnalyzer:
    """
    Lexical risk checks over the whole message

    Plain substring/regex tests, no tokenization or stemming. Keywords
    from both languages are reported independently.
    """

    def __init__(self,
                 urgency_keywords: Optional[List[str]] = None,
                 thai_keywords: Optional[List[str]] = None):
        self.urgency_keywords = urgency_keywords if urgency_keywords is not None else URGENCY_KEYWORDS
        self.thai_keywords = thai_keywords if thai_keywords is not None else THAI_KEYWORDS

    def analyze(self, text: str) -> List[Signal]:
        if not text:
            return []

        lc = text.lower()
        signals = []

        for keyword in self.urgency_keywords:
            if keyword in lc:
                signals.append(Signal(SignalKind.URGENCY_KEYWORD, Severity.TEXT, {'keyword': keyword}))

        for keyword in self.thai_keywords:
            if keyword in lc:
                signals.append(Signal(SignalKind.SUSPICIOUS_KEYWORD, Severity.TEXT, {'keyword': keyword}))

        if JAVASCRIPT_PATTERN.search(lc):
            signals.append(Signal(SignalKind.JAVASCRIPT_SCHEME, Severity.TEXT))

        if DATA_HTML_PATTERN.search(lc):
            signals.append(Signal(SignalKind.DATA_HTML, Severity.TEXT))

        # Zero-width check runs on the raw text
        if ZERO_WIDTH_PATTERN.search(text):
            signals.append(Signal(SignalKind.ZERO_WIDTH_CHAR, Severity.TEXT))

        logger.debug(f"Text analysis produced {len(signals)} signals")
        return signals
