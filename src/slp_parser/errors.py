"""SLP parse failures.

Every check in the decoder maps to one ParseFailure member whose value is
the human-readable cause reported to callers.
"""

from enum import Enum


class ParseFailure(Enum):
    """Reasons an output script is rejected as an SLP message."""

    # Script tokenizer
    SCRIPT_EMPTY = "scriptpubkey cannot be empty"
    NOT_OP_RETURN = "scriptpubkey not op_return"
    SCRIPT_TOO_SMALL = "scriptpubkey too small"
    PUSHDATA_EXTRACTION = "pushdata data extraction failed"
    LOKAD_ID_WRONG_SIZE = "lokad id wrong size"
    MAGIC_MISMATCH = "SLP not in first chunk"
    TRAILING_DATA = "trailing data"
    CHUNKS_EMPTY = "chunks empty"

    # Chunk decoding
    PARSING_ENDED_EARLY = "parsing ended early"
    NUMBER_EXTRACTION = "extraction of number from buffer failed"

    # Header
    TOKEN_TYPE_LENGTH = "token_type string length must be 1 or 2"
    TOKEN_TYPE_INVALID = "token_type not token-type1, nft1-group, or nft1-child"
    TRANSACTION_TYPE_INVALID = "transaction_type not GENESIS, MINT, or SEND"
    WRONG_CHUNK_COUNT = "wrong number of chunks"

    # GENESIS
    DOCUMENT_HASH_SIZE = "documentHash must be size 0 or 32"
    DECIMALS_LENGTH = "decimals string length must be 1"
    DECIMALS_OUT_OF_RANGE = "decimals bigger than 9"
    INITIAL_QTY_LENGTH = "initialQty must be provided as an 8-byte buffer"
    NFT_CHILD_DECIMALS = "NFT1 child token must have divisibility set to 0 decimal places"
    NFT_CHILD_MINT_BATON = "NFT1 child token must not have a minting baton"
    NFT_CHILD_QTY = "NFT1 child token must have quantity of 1"

    # GENESIS and MINT
    MINT_BATON_VOUT_LENGTH = "mint_baton_vout string length must be 0 or 1"
    MINT_BATON_VOUT_TOO_SMALL = "mint_baton_vout must be at least 2"

    # MINT
    NFT_CHILD_MINT = "NFT1 Child cannot have MINT transaction type."
    ADDITIONAL_QTY_LENGTH = "additional_qty must be provided as an 8-byte buffer"

    # MINT and SEND
    TOKEN_ID_SIZE = "tokenID invalid size"

    # SEND
    AMOUNT_LENGTH = "amount string size not 8 bytes"
    AMOUNTS_EMPTY = "token_amounts size is 0"
    AMOUNTS_TOO_MANY = "token_amounts size is greater than 19"

    # Dispatch
    IMPOSSIBLE_RESULT = "impossible parsing result"


class SLPParseError(ValueError):
    """Raised when a script is not a valid SLP message."""

    def __init__(self, reason: ParseFailure):
        super().__init__(reason.value)
        self.reason = reason

