import os
import re
from email import policy
from email.parser import BytesParser
from typing import Optional
import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = {'.txt', '.eml', '.html', '.htm', '.log'}
URL_ATTRIBUTES = ('href', 'src', 'action', 'formaction', 'data', 'background')


class UnsupportedUpload(ValueError):
    pass


def extract_text_from_html(html: str) -> str:
    """
    Extract text from HTML content with URL preservation

    Visible text is kept as-is; every link-bearing attribute value is
    appended after it so the URL extractor and text checks still see it.
    """
    soup = BeautifulSoup(html, 'lxml')

    targets = []
    for tag in soup.find_all(True):
        for attr in URL_ATTRIBUTES:
            value = tag.get(attr)
            if value and value not in targets:
                targets.append(value)

    text = soup.get_text(separator=' ')
    text = re.sub(r'[ \t\r\f\v]+', ' ', text)
    text = re.sub(r'\n\s*\n+', '\n\n', text).strip()
    return '\n\n'.join(p for p in (text, '\n'.join(targets)) if p)


def extract_text_from_email(raw_email: bytes) -> str:
    """Subject plus every text/plain and text/html body part"""
    msg = BytesParser(policy=policy.default).parsebytes(raw_email)

    parts = []
    subject = msg.get('subject', '')
    if subject:
        parts.append(str(subject))

    for part in msg.walk():
        if part.is_multipart() or part.get_content_disposition() == 'attachment':
            continue
        content_type = part.get_content_type()
        try:
            if content_type == "text/plain":
                parts.append(part.get_content())
            elif content_type == "text/html":
                parts.append(extract_text_from_html(part.get_content()))
        except (LookupError, UnicodeError) as e:
            logger.warning(f"Error extracting {content_type} part: {e}")

    return '\n\n'.join(p.strip() for p in parts if p and p.strip())


def decode_upload(filename: Optional[str], data: bytes) -> str:
    """
    Turn an uploaded file into analyzable text

    .eml goes through the email parser. Everything else, HTML included, is
    decoded as UTF-8 with replacement characters and analyzed as raw text,
    so markup attributes (form actions, iframe sources) stay visible.
    """
    ext = os.path.splitext(filename or '')[1].lower()
    if ext and ext not in ACCEPTED_EXTENSIONS:
        raise UnsupportedUpload(f"Unsupported file type: {ext}")

    if ext == '.eml':
        return extract_text_from_email(data)

    return data.decode('utf-8', errors='replace')


def combine_inputs(*parts: Optional[str]) -> str:
    """Pasted text and uploaded files, separated by a blank line"""
    return '\n\n'.join(p for p in parts if p)
