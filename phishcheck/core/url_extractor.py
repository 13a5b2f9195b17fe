import re
from typing import List
import logging

logger = logging.getLogger(__name__)


class URLExtractor:
    """
    Permissive URL extractor for pasted messages

    Matches links with or without a scheme:
    - optional http:// or https://
    - a dotted-quad IPv4 host, or one or more "label." segments
      (word characters and hyphens) ending in a label of at least
      2 characters
    - optional :port (2-5 digits)
    - optional path drawn from word chars and #%&@./=?+-

    Not a strict URL grammar: trailing punctuation inside the path
    character set is kept, and malformed hosts are left for the
    host analyzer to reject.
    """

    def __init__(self):
        # IPv4 hosts need their own branch: a last octet like ".1" is
        # shorter than the 2-character final label of the domain branch.
        # The lookbehinds only let a match start at the head of a dotted
        # word run, keeping the scan linear on long tokens.
        self.url_pattern = re.compile(
            r'(?<![\w-])(?<![\w-]\.)'
            r'(?:https?://)?'
            r'(?:(?:\d{1,3}\.){3}\d{1,3}(?![\w-]|\.[\w-])'
            r'|(?:[\w-]+\.)+[\w-]{2,})'
            r'(?::[0-9]{2,5})?'
            r'(?:/[\w#%&@./=?+\-]*)?',
            re.IGNORECASE
        )

    def extract(self, text: str) -> List[str]:
        """
        Extract distinct URL-like substrings in first-occurrence order

        Args:
            text: Raw message text

        Returns:
            Deduplicated list of matched substrings (empty when none)
        """
        if not text:
            return []

        seen = set()
        urls = []
        for match in self.url_pattern.finditer(text):
            candidate = match.group(0)
            if candidate not in seen:
                seen.add(candidate)
                urls.append(candidate)

        logger.debug(f"Extracted {len(urls)} distinct URL candidates")
        return urls


_default_extractor = URLExtractor()


def extract_urls(text: str) -> List[str]:
    return _default_extractor.extract(text)
