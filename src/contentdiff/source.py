#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/source.py
"""Source documents handed to a document compiler.

A :class:`Source` pairs a name (its identity in diagnostics) with its text.
Files are read as bytes and decoded as UTF-8 when possible, falling back to
chardet detection and finally Latin-1.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import chardet

from contentdiff.exceptions import SourceFileError

logger = logging.getLogger(__name__)

CHARDET_SAMPLE_SIZE = 8192
CHARDET_CONFIDENCE_THRESHOLD = 0.7


def decode_source_bytes(data: bytes) -> str:
    """Decode source bytes with encoding detection.

    Parameters
    ----------
    data : bytes
        Raw file contents

    Returns
    -------
    str
        Decoded text with a leading BOM removed

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("source is not valid UTF-8, running chardet")

    detection = chardet.detect(data[:CHARDET_SAMPLE_SIZE])
    encoding = detection.get("encoding") if detection else None
    confidence = (detection.get("confidence") or 0.0) if detection else 0.0
    if encoding and confidence >= CHARDET_CONFIDENCE_THRESHOLD:
        try:
            logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("failed to decode with detected encoding %s: %s", encoding, e)

    return data.decode("latin-1")


@dataclass(frozen=True)
class Source:
    """A named source document.

    Parameters
    ----------
    name : str
        Identity of the source, used in diagnostic locations
    text : str
        Source text

    """

    name: str
    text: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Source:
        """Read a source file from disk.

        Raises
        ------
        SourceFileError
            If the file does not exist or cannot be read

        """
        path = Path(path)
        if not path.is_file():
            raise SourceFileError(f"Source file not found: {path}", file_path=str(path))
        try:
            data = path.read_bytes()
        except OSError as e:
            raise SourceFileError(f"Cannot read source file {path}: {e}", file_path=str(path), original_error=e) from e
        return cls(name=str(path), text=decode_source_bytes(data))

    @property
    def cache_key(self) -> str:
        """SHA-256 of the source name and text, so equal texts under different names stay apart."""
        return hashlib.sha256(f"{self.name}\0{self.text}".encode("utf-8")).hexdigest()


__all__ = [
    "Source",
    "decode_source_bytes",
]
