"""SLP token OP_RETURN parser and MCP server."""

__version__ = "0.1.0"

# Server entry points
from slp_parser.server import create_server, main

# Configuration
from slp_parser.config import Config, load_config

# Errors
from slp_parser.errors import ParseFailure, SLPParseError

# Message types
from slp_parser.messages import (
    Genesis,
    Mint,
    ParseResult,
    Send,
    SLPMessage,
    TokenType,
    TransactionType,
)

# Decoding
from slp_parser.chunks import buffer_to_number
from slp_parser.parser import parse_slp
from slp_parser.primitives import extract_chunks

__all__ = [
    # Version
    "__version__",
    # Server
    "create_server",
    "main",
    # Config
    "Config",
    "load_config",
    # Errors
    "ParseFailure",
    "SLPParseError",
    # Messages
    "Genesis",
    "Mint",
    "ParseResult",
    "Send",
    "SLPMessage",
    "TokenType",
    "TransactionType",
    # Decoding
    "buffer_to_number",
    "parse_slp",
    "extract_chunks",
]
