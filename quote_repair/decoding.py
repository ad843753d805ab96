"""
Decoding of uploaded bytes to text.

Rules:
- Detect encoding best-effort via charset-normalizer.
- If detection is uncertain, still attempt decode using best guess.
- UTF-8 input starting with a BOM is decoded with utf-8-sig so the BOM does
  not end up in front of the first key / header cell.
- If decode fails, fall back to UTF-8, then to UTF-8 with replacement
  characters so the pipeline can continue deterministically.
"""

from __future__ import annotations

import logging
from typing import Tuple

from charset_normalizer import from_bytes

logger = logging.getLogger("quote_repair.decoding")

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_upload(raw: bytes) -> Tuple[str, str]:
    """Returns the decoded text and the codec actually used."""
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        logger.debug("Decoding with %s failed, falling back to utf-8", decode_used)

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), "utf-8"
