"""OP_RETURN script tokenizing for SLP messages.

An SLP output script is OP_RETURN followed only by data pushes:
- 0x01-0x4b: direct push (the opcode is the length)
- OP_PUSHDATA1: 1 byte length
- OP_PUSHDATA2: 2 byte length, little-endian
- OP_PUSHDATA4: 4 byte length, little-endian

Any other opcode ends the pushdata run.
"""

from typing import Optional

from slp_parser.errors import ParseFailure, SLPParseError

# Bitcoin script opcodes
OP_0 = 0x00
OP_RETURN = 0x6A
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_PUSHDATA4 = 0x4E

MIN_SCRIPT_SIZE = 10
LOKAD_ID = b"SLP\x00"

# Width of the explicit length field following each PUSHDATAn opcode
_LENGTH_FIELD_SIZES = {
    OP_PUSHDATA1: 1,
    OP_PUSHDATA2: 2,
    OP_PUSHDATA4: 4,
}


class ScriptReader:
    """Byte offset into a single script being tokenized."""

    def __init__(self, script: bytes):
        self.script = script
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.script) - self.pos

    def at_end(self) -> bool:
        return self.pos == len(self.script)

    def read(self, size: int) -> bytes:
        data = self.script[self.pos:self.pos + size]
        self.pos += size
        return data

    def next_push_length(self) -> Optional[int]:
        """Consume one push opcode and its length field.

        Returns:
            Declared push length, or None when the next byte does not start
            a readable push. In that case nothing is consumed.
        """
        if self.at_end():
            return None

        opcode = self.script[self.pos]

        if OP_0 < opcode < OP_PUSHDATA1:
            # Direct push that overruns the script ends extraction
            if self.pos + 1 + opcode > len(self.script):
                return None
            self.pos += 1
            return opcode

        field_size = _LENGTH_FIELD_SIZES.get(opcode)
        if field_size is None:
            return None
        if self.pos + 1 + field_size > len(self.script):
            return None

        self.pos += 1
        return int.from_bytes(self.read(field_size), "little")


def _check_lokad_id(chunk: bytes) -> None:
    if len(chunk) != 4:
        raise SLPParseError(ParseFailure.LOKAD_ID_WRONG_SIZE)
    if chunk != LOKAD_ID:
        raise SLPParseError(ParseFailure.MAGIC_MISMATCH)


def extract_chunks(script: bytes) -> list[bytes]:
    """Split an SLP OP_RETURN script into its pushed data chunks.

    The first chunk is checked against the SLP lokad ID as soon as it is
    read.

    Args:
        script: Output script bytes

    Returns:
        Pushed data, one bytes object per push, in script order

    Raises:
        SLPParseError: If the script is not an OP_RETURN made of pushes
            carrying the SLP lokad ID
    """
    script = bytes(script)

    if len(script) == 0:
        raise SLPParseError(ParseFailure.SCRIPT_EMPTY)

    if script[0] != OP_RETURN:
        raise SLPParseError(ParseFailure.NOT_OP_RETURN)

    if len(script) < MIN_SCRIPT_SIZE:
        raise SLPParseError(ParseFailure.SCRIPT_TOO_SMALL)

    reader = ScriptReader(script)
    reader.read(1)  # OP_RETURN

    chunks: list[bytes] = []
    length = reader.next_push_length()
    while length is not None:
        if length > reader.remaining:
            raise SLPParseError(ParseFailure.PUSHDATA_EXTRACTION)

        chunks.append(reader.read(length))
        if len(chunks) == 1:
            _check_lokad_id(chunks[0])

        length = reader.next_push_length()

    if not reader.at_end():
        raise SLPParseError(ParseFailure.TRAILING_DATA)

    if not chunks:
        raise SLPParseError(ParseFailure.CHUNKS_EMPTY)

    return chunks
