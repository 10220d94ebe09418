"""SLP OP_RETURN message decoding.

Message layout (one pushdata chunk per field):
- Chunk 0: Lokad ID "SLP\\x00"
- Chunk 1: Token type (1 or 2 bytes)
- Chunk 2: Transaction type ("GENESIS", "MINT" or "SEND")
- Chunk 3+: Transaction type specific fields
"""

from typing import Union

from slp_parser.chunks import ChunkCursor, buffer_to_number, check_token_id
from slp_parser.errors import ParseFailure, SLPParseError
from slp_parser.messages import (
    Genesis,
    Mint,
    ParseResult,
    Send,
    TokenType,
    TransactionType,
)
from slp_parser.primitives import extract_chunks

GENESIS_CHUNK_COUNT = 10
MINT_CHUNK_COUNT = 6
SEND_MIN_CHUNK_COUNT = 4

MAX_DECIMALS = 9
MAX_SEND_OUTPUTS = 19
QTY_SIZE = 8


def _read_token_type(cursor: ChunkCursor) -> TokenType:
    chunk = cursor.advance()
    if len(chunk) not in (1, 2):
        raise SLPParseError(ParseFailure.TOKEN_TYPE_LENGTH)

    try:
        return TokenType(buffer_to_number(chunk))
    except ValueError:
        raise SLPParseError(ParseFailure.TOKEN_TYPE_INVALID) from None


def _read_transaction_type(cursor: ChunkCursor) -> TransactionType:
    chunk = cursor.advance()
    try:
        return TransactionType(chunk.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise SLPParseError(ParseFailure.TRANSACTION_TYPE_INVALID) from None


def _read_mint_baton_vout(cursor: ChunkCursor) -> int:
    """Read an optional mint baton output index; 0 means no baton."""
    chunk = cursor.advance()
    if len(chunk) >= 2:
        raise SLPParseError(ParseFailure.MINT_BATON_VOUT_LENGTH)
    if not chunk:
        return 0

    vout = buffer_to_number(chunk)
    if vout < 2:
        raise SLPParseError(ParseFailure.MINT_BATON_VOUT_TOO_SMALL)
    return vout


def _read_qty(cursor: ChunkCursor, length_failure: ParseFailure) -> int:
    chunk = cursor.advance()
    if len(chunk) != QTY_SIZE:
        raise SLPParseError(length_failure)
    return buffer_to_number(chunk)


def parse_genesis(cursor: ChunkCursor, token_type: TokenType) -> Genesis:
    """Decode the fields of a GENESIS message.

    Args:
        cursor: Cursor positioned on the transaction type chunk
        token_type: Token type from the message header

    Returns:
        Decoded Genesis fields

    Raises:
        SLPParseError: If any field is invalid, including the NFT1 child
            constraints
    """
    if len(cursor.chunks) != GENESIS_CHUNK_COUNT:
        raise SLPParseError(ParseFailure.WRONG_CHUNK_COUNT)

    ticker = cursor.advance()
    name = cursor.advance()
    document_uri = cursor.advance()

    document_hash = cursor.advance()
    if len(document_hash) not in (0, 32):
        raise SLPParseError(ParseFailure.DOCUMENT_HASH_SIZE)

    decimals_chunk = cursor.advance()
    if len(decimals_chunk) != 1:
        raise SLPParseError(ParseFailure.DECIMALS_LENGTH)
    decimals = buffer_to_number(decimals_chunk)
    if decimals > MAX_DECIMALS:
        raise SLPParseError(ParseFailure.DECIMALS_OUT_OF_RANGE)

    mint_baton_vout = _read_mint_baton_vout(cursor)
    qty = _read_qty(cursor, ParseFailure.INITIAL_QTY_LENGTH)

    if token_type == TokenType.NFT_CHILD:
        if decimals != 0:
            raise SLPParseError(ParseFailure.NFT_CHILD_DECIMALS)
        if mint_baton_vout != 0:
            raise SLPParseError(ParseFailure.NFT_CHILD_MINT_BATON)
        if qty != 1:
            raise SLPParseError(ParseFailure.NFT_CHILD_QTY)

    return Genesis(
        ticker=ticker,
        name=name,
        document_uri=document_uri,
        document_hash=document_hash,
        decimals=decimals,
        mint_baton_vout=mint_baton_vout,
        qty=qty,
    )


def parse_mint(cursor: ChunkCursor, token_type: TokenType) -> Mint:
    """Decode the fields of a MINT message."""
    if token_type == TokenType.NFT_CHILD:
        raise SLPParseError(ParseFailure.NFT_CHILD_MINT)

    if len(cursor.chunks) != MINT_CHUNK_COUNT:
        raise SLPParseError(ParseFailure.WRONG_CHUNK_COUNT)

    token_id = check_token_id(cursor.advance())
    mint_baton_vout = _read_mint_baton_vout(cursor)
    qty = _read_qty(cursor, ParseFailure.ADDITIONAL_QTY_LENGTH)

    return Mint(token_id=token_id, mint_baton_vout=mint_baton_vout, qty=qty)


def parse_send(cursor: ChunkCursor, token_type: TokenType) -> Send:
    """Decode the fields of a SEND message.

    Every chunk after the token ID is an 8 byte output amount.
    """
    if len(cursor.chunks) < SEND_MIN_CHUNK_COUNT:
        raise SLPParseError(ParseFailure.WRONG_CHUNK_COUNT)

    token_id = check_token_id(cursor.advance())

    amounts = []
    while cursor.has_next():
        chunk = cursor.advance()
        if len(chunk) != QTY_SIZE:
            raise SLPParseError(ParseFailure.AMOUNT_LENGTH)
        amounts.append(buffer_to_number(chunk))

    if not amounts:
        raise SLPParseError(ParseFailure.AMOUNTS_EMPTY)
    if len(amounts) > MAX_SEND_OUTPUTS:
        raise SLPParseError(ParseFailure.AMOUNTS_TOO_MANY)

    return Send(token_id=token_id, amounts=tuple(amounts))


_DECODERS = {
    TransactionType.GENESIS: parse_genesis,
    TransactionType.MINT: parse_mint,
    TransactionType.SEND: parse_send,
}


def parse_slp(script: Union[bytes, bytearray, memoryview]) -> ParseResult:
    """Decode an SLP message from a transaction output script.

    Args:
        script: Output script (scriptPubKey) bytes. The input is copied, so
            the caller may reuse the buffer afterwards.

    Returns:
        ParseResult with the token type, transaction type and decoded message

    Raises:
        SLPParseError: If the script is not a valid SLP message
    """
    chunks = extract_chunks(bytes(script))
    cursor = ChunkCursor(chunks)

    token_type = _read_token_type(cursor)
    transaction_type = _read_transaction_type(cursor)

    decoder = _DECODERS.get(transaction_type)
    if decoder is None:
        raise SLPParseError(ParseFailure.IMPOSSIBLE_RESULT)

    return ParseResult(
        token_type=token_type,
        transaction_type=transaction_type,
        data=decoder(cursor, token_type),
    )
