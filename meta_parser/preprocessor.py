"""
Preprocessor module: turns raw document bytes into text ready for extraction.

- Detects the declared charset from raw bytes and decodes with it
- Collapses line breaks so multi-line tags match single-line patterns

Design principle: NEVER FAIL on bad input. Undecodable bytes are replaced,
unknown charsets fall back to UTF-8.

Pipeline position: Stage 1 of 2 (Preprocessor → Extractor).
Input:  raw bytes (from disk) or an already-decoded HTML string
Output: flattened HTML string
"""

import re
from typing import Optional

from .logger import get_module_logger

logger = get_module_logger("preprocessor")

# \r\n must be tried before the lone \r and \n so it becomes one space, not two
NEWLINE_PATTERN = re.compile(r'\r?\n|\r')


class Preprocessor:
    """Charset detection, decoding and line-break normalization."""

    # WHATWG encoding spec: browsers silently remap these charsets.
    # https://encoding.spec.whatwg.org/#names-and-labels
    # Decoding the way a browser does keeps titles and descriptions identical
    # to what the user sees on the page.
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'iso88591': 'windows-1252',
        'latin-1': 'windows-1252',
        'latin1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
        'iso-8859-9': 'windows-1254',
        'iso-8859-11': 'windows-874',
    }

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes) -> str:
        """
        Detect charset from raw HTML bytes by scanning the first 2048 bytes
        for <meta charset=...> or <meta http-equiv="Content-Type" content="...; charset=...">.

        Applies WHATWG browser charset mapping (e.g. iso-8859-1 → windows-1252).

        Returns the browser-equivalent charset or 'utf-8' when none is declared
        or the declared name is not a codec Python knows.
        """
        # Charset declarations must appear within the first 1024 bytes; scan 2048
        head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

        charset = None

        # Modern form: <meta charset="...">
        m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
        if m:
            charset = m.group(1).strip().lower()

        # Legacy: <meta http-equiv="Content-Type" content="...; charset=...">
        if not charset:
            m = re.search(
                r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)',
                head_str, re.IGNORECASE
            )
            if m:
                charset = m.group(1).strip().lower()

        if not charset:
            return 'utf-8'

        charset = Preprocessor.WHATWG_CHARSET_MAP.get(charset, charset)
        if not Preprocessor.is_text_charset(charset):
            logger.warning(f"Unknown charset '{charset}', decoding as utf-8")
            return 'utf-8'
        return charset

    @staticmethod
    def is_text_charset(charset: str) -> bool:
        """
        True if bytes can be decoded with charset.

        codecs.lookup() also knows bytes-to-bytes codecs such as base64 or
        zlib; bytes.decode() rejects those with LookupError.
        """
        try:
            b''.decode(charset)
        except LookupError:
            return False
        return True

    def decode(self, raw_bytes: bytes, declared_charset: Optional[str] = None) -> tuple[str, str]:
        """
        Decode raw document bytes.

        Args:
            raw_bytes: Document bytes as read from disk
            declared_charset: Charset to use instead of detecting one;
                              falls back to utf-8 if it cannot decode text

        Returns:
            Tuple of (decoded HTML, charset used)
        """
        charset = declared_charset or self.detect_charset_from_bytes(raw_bytes)
        if not self.is_text_charset(charset):
            logger.warning(f"Cannot decode with '{charset}', decoding as utf-8")
            charset = 'utf-8'
        html = raw_bytes.decode(charset, errors='replace')
        logger.debug(f"Decoded {len(raw_bytes)} bytes as {charset}")
        return html, charset

    @staticmethod
    def flatten(html: str) -> str:
        """Replace every line-break sequence (\\r\\n, \\r, \\n) with a single space."""
        return NEWLINE_PATTERN.sub(' ', html)
