"""Positional access to SLP chunks and decoding of their numeric fields."""

from typing import Sequence

from slp_parser.errors import ParseFailure, SLPParseError

TOKEN_ID_SIZE = 32

# Numeric fields are unsigned big-endian integers of exactly these widths
NUMBER_SIZES = (1, 2, 4, 8)


class ChunkCursor:
    """Walks a chunk list by increasing index.

    The cursor starts on chunk 0. Every SLP message layout has a fixed or
    lower-bounded chunk count, so stepping past the last chunk is a format
    error rather than end of data.
    """

    def __init__(self, chunks: Sequence[bytes]):
        self.chunks = chunks
        self.index = 0

    @property
    def current(self) -> bytes:
        return self.chunks[self.index]

    def has_next(self) -> bool:
        return self.index + 1 < len(self.chunks)

    def advance(self) -> bytes:
        """Move to the next chunk and return it.

        Raises:
            SLPParseError: If no chunk remains
        """
        if not self.has_next():
            raise SLPParseError(ParseFailure.PARSING_ENDED_EARLY)
        self.index += 1
        return self.current


def buffer_to_number(chunk: bytes) -> int:
    """Decode a 1, 2, 4 or 8 byte chunk as an unsigned big-endian integer.

    Raises:
        SLPParseError: For any other chunk length
    """
    if len(chunk) not in NUMBER_SIZES:
        raise SLPParseError(ParseFailure.NUMBER_EXTRACTION)
    return int.from_bytes(chunk, "big")


def check_token_id(chunk: bytes) -> bytes:
    """Return chunk if it is a 32 byte token ID.

    Raises:
        SLPParseError: If chunk is not 32 bytes
    """
    if len(chunk) != TOKEN_ID_SIZE:
        raise SLPParseError(ParseFailure.TOKEN_ID_SIZE)
    return chunk
