"""
Decoding of the raw Docs.json payload.

The game writes Docs.json as UTF-16 with a byte order mark; hand-edited or
re-exported copies are usually UTF-8. Bytes are tried against each
configured encoding in order until one decodes cleanly.
"""

import codecs
import logging
from typing import Sequence, Union

from ..errors import DecodeError
from ..settings import DEFAULT_ENCODINGS

logger = logging.getLogger(__name__)

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)

RawInput = Union[bytes, bytearray, memoryview, str]


def _decode_strict(data: bytes, encoding: str) -> str:
    """Decode with one encoding, raising UnicodeDecodeError on failure.

    UTF-16 decoding of arbitrary even-length bytes rarely fails outright, so
    a UTF-16 attempt requires a byte order mark.
    """
    codec_name = codecs.lookup(encoding).name
    if codec_name.startswith("utf-16") and not data.startswith(_UTF16_BOMS):
        raise UnicodeDecodeError(
            encoding, data, 0, min(2, len(data)), "missing UTF-16 byte order mark"
        )
    text = data.decode(encoding)
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def decode_docs(data: RawInput, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> str:
    """Turn raw input into a single JSON text payload.

    Args:
        data: Raw bytes of the dump, or already decoded text
        encodings: Encodings to try in order (default: UTF-16, then UTF-8)

    Returns:
        Decoded text

    Raises:
        DecodeError: If no encoding can decode the bytes
    """
    if isinstance(data, str):
        return data

    raw = bytes(data)
    last_error = ""
    for encoding in encodings:
        try:
            text = _decode_strict(raw, encoding)
        except UnicodeDecodeError as e:
            logger.debug(f"Input is not {encoding}: {e.reason}")
            last_error = f"{encoding}: {e.reason}"
            continue
        except LookupError as e:
            last_error = str(e)
            continue
        logger.debug(f"Decoded {len(raw)} bytes as {encoding}")
        return text

    raise DecodeError(encodings, last_error)
