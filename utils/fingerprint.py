"""
Content fingerprinting for report deduplication.
"""
import hashlib


def fingerprint_text(text: str) -> str:
    """
    Hash submitted text for dedup lookups.

    MD5 is used as a content key only, never for security. The exact string
    is hashed (no trimming or normalization), so only bit-identical
    submissions share a fingerprint.

    Args:
        text: Submitted feedback text

    Returns:
        32-character hex digest
    """
    return hashlib.md5(text.encode('utf-8')).hexdigest()
