"""Synthetic stand-ins for ledger artefacts.

Nothing here talks to a chain. The values only have the shape of an
address, a block number or a transaction hash so that clients written
against a ledger-backed service can render them.
"""

import secrets

BLOCK_PREFIX = "#18,547,"


def synthetic_address() -> str:
    """Random 20-byte address, e.g. ``0x3f...``."""
    return "0x" + secrets.token_hex(20)


def synthetic_block_number() -> str:
    return f"{BLOCK_PREFIX}{800 + secrets.randbelow(1000)}"


def synthetic_transaction_hash() -> str:
    """Random 32-byte transaction hash."""
    return "0x" + secrets.token_hex(32)
