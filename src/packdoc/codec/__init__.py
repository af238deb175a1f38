"""Binary codec for packdoc documents.

The encoder and decoder live in ``packdoc.codec.encoder`` and
``packdoc.codec.decoder``; they are re-exported from the top-level package.
"""

from .bytepack import BytePacker, ByteUnpacker
from .tags import TERMINATOR, DataType

__all__ = [
    "BytePacker",
    "ByteUnpacker",
    "DataType",
    "TERMINATOR",
]
