"""MCP server for decoding SLP token OP_RETURN outputs.

This server exposes the SLP decoder to MCP clients: single and batch
script parsing, raw pushdata chunking, and token type lookup.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from slp_parser.config import Config, find_config
from slp_parser.errors import SLPParseError
from slp_parser.messages import TokenType
from slp_parser.parser import parse_slp
from slp_parser.primitives import extract_chunks

_LOGGER = logging.getLogger(__name__)


def _script_from_hex(script_hex: str, config: Config) -> bytes:
    script = bytes.fromhex(script_hex)
    if len(script) > config.max_script_size:
        _LOGGER.warning(
            "Rejecting %d byte script (limit %d)", len(script), config.max_script_size
        )
        raise ValueError(
            f"Script too large: {len(script)} bytes (maximum {config.max_script_size})"
        )
    return script


def _parse_to_dict(script: bytes) -> dict:
    try:
        result = parse_slp(script)
    except SLPParseError as e:
        return {
            "valid": False,
            "error": str(e),
            "reason": e.reason.name,
        }

    return {"valid": True, **result.to_dict()}


def create_server(config: Optional[Config] = None) -> FastMCP:
    """Create and configure the MCP server with all tools.

    Args:
        config: Optional configuration. If not provided, uses defaults.

    Returns:
        Configured FastMCP server instance.
    """
    if config is None:
        config = Config()

    mcp = FastMCP(config.server_name)

    # Store config on server for access by tools
    mcp._config = config

    @mcp.tool()
    def parse_slp_script(script_hex: str) -> dict:
        """Decode an SLP message from an output script.

        Args:
            script_hex: Output script (scriptPubKey) as hex string

        Returns:
            Dictionary with 'valid'. Valid messages add token_type,
            transaction_type and the decoded 'data'; invalid ones add
            'error' (cause) and 'reason' (failure name).
        """
        _LOGGER.debug("parse_slp_script: %s", script_hex)
        script = _script_from_hex(script_hex, config)
        return _parse_to_dict(script)

    @mcp.tool()
    def parse_slp_outputs(scripts_hex: list[str]) -> dict:
        """Decode SLP messages from several output scripts.

        Args:
            scripts_hex: Output scripts as hex strings, in output order

        Returns:
            Dictionary with one result per script in 'results' (same shape
            as parse_slp_script, plus 'index') and 'valid_count'.
        """
        _LOGGER.debug("parse_slp_outputs: %d scripts", len(scripts_hex))
        if len(scripts_hex) > config.max_batch_size:
            raise ValueError(
                f"Too many scripts: {len(scripts_hex)} (maximum {config.max_batch_size})"
            )

        results = []
        for index, script_hex in enumerate(scripts_hex):
            script = _script_from_hex(script_hex, config)
            results.append({"index": index, **_parse_to_dict(script)})

        return {
            "count": len(results),
            "valid_count": sum(1 for r in results if r["valid"]),
            "results": results,
        }

    @mcp.tool()
    def extract_pushdata_chunks(script_hex: str) -> dict:
        """Split an SLP OP_RETURN script into its pushdata chunks.

        Only checks the script shape and lokad ID, not the message fields.

        Args:
            script_hex: Output script as hex string

        Returns:
            Dictionary with 'chunks' as hex strings, or 'error' if the
            script cannot be tokenized.
        """
        _LOGGER.debug("extract_pushdata_chunks: %s", script_hex)
        script = _script_from_hex(script_hex, config)

        try:
            chunks = extract_chunks(script)
        except SLPParseError as e:
            return {"error": str(e), "reason": e.reason.name}

        return {
            "count": len(chunks),
            "chunks": [chunk.hex() for chunk in chunks],
        }

    @mcp.tool()
    def describe_token_type(token_type: int) -> dict:
        """Look up an SLP token type code.

        Args:
            token_type: Token type code (e.g. 1, 65, 129)

        Returns:
            Dictionary with 'known', and for known types the 'name' and
            whether MINT transactions are allowed.
        """
        _LOGGER.debug("describe_token_type: %s", token_type)
        try:
            known = TokenType(token_type)
        except ValueError:
            return {"token_type": token_type, "known": False}

        return {
            "token_type": int(known),
            "known": True,
            "name": known.name,
            "mint_allowed": known != TokenType.NFT_CHILD,
        }

    return mcp


def main():
    """Entry point for the MCP server."""
    config = find_config()

    # stdout carries the stdio transport
    logging.basicConfig(level=config.log_level)

    server = create_server(config)
    server.run()


if __name__ == "__main__":
    main()
