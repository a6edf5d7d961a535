"""Encoding detection utilities"""

from pathlib import Path

import chardet


CHARDET_MIN_CONFIDENCE = 0.7


def detect_encoding(file_path: Path) -> str:
    """
    Detect the encoding of a pasted or exported table file

    Args:
        file_path: Path to file

    Returns:
        Detected encoding string
    """
    with open(file_path, 'rb') as f:
        raw = f.read()

    # Spreadsheet exports often carry a BOM
    if raw.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'
    if raw.startswith((b'\xff\xfe', b'\xfe\xff')):
        return 'utf-16'

    result = chardet.detect(raw[:8192])
    guess = result['encoding']
    if guess and result['confidence'] > CHARDET_MIN_CONFIDENCE and _decodes(raw, guess):
        # A UTF-8 table with a single accent is easily taken for Latin-1
        if not guess.lower().startswith('utf') and _decodes(raw, 'utf-8'):
            return 'utf-8'
        return guess

    # Fallback: try common encodings
    for encoding in ['utf-8', 'cp1252', 'latin-1']:
        if _decodes(raw, encoding):
            return encoding

    return 'latin-1'


def read_text(file_path: Path) -> str:
    """Read a text table with its detected encoding"""
    return Path(file_path).read_text(encoding=detect_encoding(Path(file_path)))


def _decodes(raw: bytes, encoding: str) -> bool:
    try:
        raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return False
    return True
