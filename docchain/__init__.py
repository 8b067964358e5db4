"""
DocChain - document hash registry and verification service

Hash a file, register metadata against the hash, and re-verify it later.
Ledger fields (addresses, block numbers, transaction hashes) are synthetic.
"""

__version__ = "0.1.0"
__author__ = "DocChain Team"

from docchain.config import Config, get_config
from docchain.hashing import hash_bytes, hash_file, hash_text, is_well_formed_hash
from docchain.ledger import RecordStore, VerificationService

__all__ = [
    "Config",
    "get_config",
    "hash_bytes",
    "hash_file",
    "hash_text",
    "is_well_formed_hash",
    "RecordStore",
    "VerificationService",
]
