"""Tests for OP_RETURN script tokenizing."""

import pytest
from slp_parser.errors import ParseFailure, SLPParseError
from slp_parser.primitives import (
    OP_0,
    OP_PUSHDATA1,
    OP_PUSHDATA2,
    OP_PUSHDATA4,
    OP_RETURN,
    ScriptReader,
    extract_chunks,
)

from slp_scripts import LOKAD, build_script, genesis_chunks


def assert_fails(script, reason):
    with pytest.raises(SLPParseError) as exc_info:
        extract_chunks(script)
    assert exc_info.value.reason == reason


class TestScriptShape:
    """Test checks made before any chunk is read."""

    def test_empty_script(self):
        """Reject an empty script."""
        assert_fails(b"", ParseFailure.SCRIPT_EMPTY)

    def test_not_op_return(self):
        """Reject a script that does not start with OP_RETURN."""
        script = build_script(genesis_chunks())
        assert_fails(bytes([0x76]) + script[1:], ParseFailure.NOT_OP_RETURN)

    def test_short_non_op_return_reports_opcode_first(self):
        """The opcode check runs before the size check."""
        assert_fails(bytes([0x76, 0x01, 0x00]), ParseFailure.NOT_OP_RETURN)

    @pytest.mark.parametrize("size", [1, 5, 9])
    def test_script_too_small(self, size):
        """Reject OP_RETURN scripts shorter than 10 bytes."""
        script = bytes([OP_RETURN]) + b"\x04" * (size - 1)
        assert_fails(script, ParseFailure.SCRIPT_TOO_SMALL)

    def test_error_message_is_cause(self):
        """SLPParseError is a ValueError carrying the cause text."""
        with pytest.raises(ValueError, match="scriptpubkey not op_return"):
            extract_chunks(b"\x00" * 12)


class TestChunkExtraction:
    """Test splitting a script into pushed chunks."""

    def test_direct_pushes(self):
        """Direct pushes yield their data in script order."""
        chunks = genesis_chunks()
        assert extract_chunks(build_script(chunks)) == chunks

    def test_empty_push_via_pushdata1(self):
        """OP_PUSHDATA1 with a zero length yields an empty chunk."""
        script = bytes([OP_RETURN, 4]) + LOKAD + bytes([OP_PUSHDATA1, 0, 1, 0x01])
        assert extract_chunks(script) == [LOKAD, b"", b"\x01"]

    def test_pushdata1(self):
        """OP_PUSHDATA1 reads a 1 byte length."""
        data = b"x" * 100
        script = bytes([OP_RETURN, 4]) + LOKAD + bytes([OP_PUSHDATA1, 100]) + data
        assert extract_chunks(script) == [LOKAD, data]

    def test_pushdata2_little_endian(self):
        """OP_PUSHDATA2 reads a 2 byte little-endian length."""
        data = b"y" * 300
        script = (
            bytes([OP_RETURN, 4]) + LOKAD
            + bytes([OP_PUSHDATA2]) + (300).to_bytes(2, "little") + data
        )
        assert extract_chunks(script) == [LOKAD, data]

    def test_pushdata4_little_endian(self):
        """OP_PUSHDATA4 reads a 4 byte little-endian length."""
        script = (
            bytes([OP_RETURN, OP_PUSHDATA4]) + (4).to_bytes(4, "little") + LOKAD
            + bytes([2]) + b"\x00\x01"
        )
        assert extract_chunks(script) == [LOKAD, b"\x00\x01"]

    def test_lokad_id_via_pushdata1(self):
        """The lokad ID may be pushed with any push form."""
        script = bytes([OP_RETURN, OP_PUSHDATA1, 4]) + LOKAD + bytes([1, 0x01, 1, 0x02])
        assert extract_chunks(script) == [LOKAD, b"\x01", b"\x02"]

    def test_input_buffer_is_copied(self):
        """Chunks do not change when the caller reuses its buffer."""
        buffer = bytearray(build_script(genesis_chunks()))
        chunks = extract_chunks(buffer)

        buffer[:] = b"\x00" * len(buffer)

        assert chunks == genesis_chunks()
        assert all(isinstance(chunk, bytes) for chunk in chunks)


class TestLokadId:
    """Test validation of the first chunk."""

    def test_wrong_magic(self):
        """Reject a 4 byte first chunk that is not SLP\\x00."""
        script = build_script([b"SLP\x01", b"\x01", b"GENESIS"])
        assert_fails(script, ParseFailure.MAGIC_MISMATCH)

    def test_lowercase_magic(self):
        """The lokad ID is case-sensitive."""
        script = build_script([b"slp\x00", b"\x01", b"GENESIS"])
        assert_fails(script, ParseFailure.MAGIC_MISMATCH)

    @pytest.mark.parametrize("lokad", [b"SLP", b"SLP\x00\x00", b""])
    def test_wrong_size(self, lokad):
        """Reject a first chunk that is not 4 bytes."""
        script = build_script([lokad, b"\x01", b"GENESIS"])
        assert_fails(script, ParseFailure.LOKAD_ID_WRONG_SIZE)

    def test_magic_checked_before_trailing_data(self):
        """A bad lokad ID fails as soon as the first chunk is read."""
        script = build_script([b"BTCD"]) + bytes([0x76] * 6)
        assert_fails(script, ParseFailure.MAGIC_MISMATCH)

    def test_later_chunks_not_checked(self):
        """Only chunk 0 is compared against the lokad ID."""
        chunks = [LOKAD, b"ABCD", b"EFGH"]
        assert extract_chunks(build_script(chunks)) == chunks


class TestMalformedPushes:
    """Test handling of malformed push sequences."""

    def test_trailing_opcode(self):
        """Reject a non-push opcode after the pushes."""
        script = build_script(genesis_chunks()) + bytes([0x76])
        assert_fails(script, ParseFailure.TRAILING_DATA)

    def test_op_0_ends_extraction(self):
        """OP_0 is not accepted as a push."""
        script = build_script([LOKAD, b"\x01"]) + bytes([OP_0]) + build_script([b"SEND"])[1:]
        assert_fails(script, ParseFailure.TRAILING_DATA)

    def test_direct_push_overrun_is_trailing_data(self):
        """An overrunning direct push stops extraction, then fails as trailing data."""
        script = build_script([LOKAD, b"\x01"]) + bytes([0x20]) + b"abc"
        assert_fails(script, ParseFailure.TRAILING_DATA)

    def test_pushdata1_overrun(self):
        """OP_PUSHDATA1 declaring more bytes than remain fails extraction."""
        script = build_script([LOKAD, b"\x01"]) + bytes([OP_PUSHDATA1, 100]) + b"abc"
        assert_fails(script, ParseFailure.PUSHDATA_EXTRACTION)

    def test_pushdata2_overrun(self):
        """OP_PUSHDATA2 declaring more bytes than remain fails extraction."""
        script = (
            build_script([LOKAD, b"\x01"])
            + bytes([OP_PUSHDATA2]) + (1000).to_bytes(2, "little") + b"0123456789"
        )
        assert_fails(script, ParseFailure.PUSHDATA_EXTRACTION)

    def test_pushdata4_overrun(self):
        """A huge OP_PUSHDATA4 length fails cleanly."""
        script = build_script([LOKAD, b"\x01"]) + bytes([OP_PUSHDATA4]) + b"\xff" * 4
        assert_fails(script, ParseFailure.PUSHDATA_EXTRACTION)

    @pytest.mark.parametrize("opcode,field", [
        (OP_PUSHDATA1, b""),
        (OP_PUSHDATA2, b"\x05"),
        (OP_PUSHDATA4, b"\x05\x00"),
    ])
    def test_truncated_length_field(self, opcode, field):
        """A length field that cannot be read stops extraction."""
        script = build_script([LOKAD, b"\x01", b"\x02"]) + bytes([opcode]) + field
        assert_fails(script, ParseFailure.TRAILING_DATA)

    def test_no_pushes(self):
        """An OP_RETURN followed by non-push bytes has trailing data."""
        script = bytes([OP_RETURN]) + bytes([0x76] * 10)
        assert_fails(script, ParseFailure.TRAILING_DATA)


class TestScriptReader:
    """Test the per-call script cursor."""

    def test_read_advances(self):
        reader = ScriptReader(b"abcdef")
        assert reader.read(2) == b"ab"
        assert reader.pos == 2
        assert reader.remaining == 4

    def test_unreadable_push_consumes_nothing(self):
        """A rejected push leaves the cursor on its opcode."""
        reader = ScriptReader(bytes([OP_PUSHDATA2, 0x01]))
        assert reader.next_push_length() is None
        assert reader.pos == 0

    def test_at_end(self):
        reader = ScriptReader(b"")
        assert reader.at_end()
        assert reader.next_push_length() is None
