"""Decoded SLP message structures.

An SLP message is exactly one of:
- Genesis: Create a new token
- Mint: Issue additional supply of an existing token
- Send: Move tokens to the transaction's outputs

Reference: https://github.com/simpleledger/slp-specifications
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union


class TokenType(IntEnum):
    """SLP token type codes."""

    FUNGIBLE = 0x01     # Token Type 1
    NFT_CHILD = 0x41    # NFT1 child
    NFT_GROUP = 0x81    # NFT1 group


class TransactionType(str, Enum):
    """SLP transaction types."""

    GENESIS = "GENESIS"
    MINT = "MINT"
    SEND = "SEND"


def _utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Genesis:
    """GENESIS message: token creation."""

    ticker: bytes
    name: bytes
    document_uri: bytes
    document_hash: bytes
    decimals: int
    mint_baton_vout: int  # 0 when there is no minting baton
    qty: int

    @property
    def ticker_utf8(self) -> str:
        return _utf8(self.ticker)

    @property
    def name_utf8(self) -> str:
        return _utf8(self.name)

    @property
    def document_uri_utf8(self) -> str:
        return _utf8(self.document_uri)

    @property
    def document_hash_hex(self) -> str:
        return self.document_hash.hex()

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return {
            "ticker": self.ticker_utf8,
            "name": self.name_utf8,
            "document_uri": self.document_uri_utf8,
            "document_hash": self.document_hash_hex,
            "decimals": self.decimals,
            "mint_baton_vout": self.mint_baton_vout,
            "qty": self.qty,
        }


@dataclass(frozen=True)
class Mint:
    """MINT message: additional token issuance."""

    token_id: bytes
    mint_baton_vout: int  # 0 when the baton is destroyed
    qty: int

    @property
    def token_id_hex(self) -> str:
        return self.token_id.hex()

    def to_dict(self) -> dict:
        return {
            "token_id": self.token_id_hex,
            "mint_baton_vout": self.mint_baton_vout,
            "qty": self.qty,
        }


@dataclass(frozen=True)
class Send:
    """SEND message: token transfer.

    amounts[i] is the quantity sent to output i + 1.
    """

    token_id: bytes
    amounts: tuple[int, ...]

    @property
    def token_id_hex(self) -> str:
        return self.token_id.hex()

    def to_dict(self) -> dict:
        return {
            "token_id": self.token_id_hex,
            "amounts": list(self.amounts),
        }


SLPMessage = Union[Genesis, Mint, Send]

MESSAGE_CLASSES = {
    TransactionType.GENESIS: Genesis,
    TransactionType.MINT: Mint,
    TransactionType.SEND: Send,
}


@dataclass(frozen=True)
class ParseResult:
    """A validated SLP message and its header fields."""

    token_type: TokenType
    transaction_type: TransactionType
    data: SLPMessage

    def __post_init__(self):
        object.__setattr__(self, "token_type", TokenType(self.token_type))
        object.__setattr__(
            self, "transaction_type", TransactionType(self.transaction_type)
        )

        expected = MESSAGE_CLASSES[self.transaction_type]
        if type(self.data) is not expected:
            raise ValueError(
                f"{self.transaction_type.value} result cannot carry "
                f"{type(self.data).__name__} data"
            )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return {
            "token_type": int(self.token_type),
            "token_type_name": self.token_type.name,
            "transaction_type": self.transaction_type.value,
            "data": self.data.to_dict(),
        }
