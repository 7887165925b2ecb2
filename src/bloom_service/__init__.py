"""Bloom filters backed by a local bit array or a shared Redis bitmap."""

from .config import Settings, get_settings, load_settings
from .core.errors import (
    AppError,
    BitMissingError,
    ErrorCode,
    InvalidFilterParamsError,
    ScriptExecutionError,
    UnexpectedScriptResultError,
)
from .db.redis import RedisScriptClient, close_pool, create_pool
from .factory import create_bloom_filter, create_script_client
from .filters import (
    BloomFilter,
    InMemoryBloomFilter,
    LocalBloomFilter,
    RedisBloomFilter,
)
from .hash_chain import hash_chain
from .hashing import Encryptor, Murmur3Encryptor
from .params import FilterParams

__all__ = [
    "AppError",
    "BitMissingError",
    "BloomFilter",
    "Encryptor",
    "ErrorCode",
    "FilterParams",
    "InMemoryBloomFilter",
    "InvalidFilterParamsError",
    "LocalBloomFilter",
    "Murmur3Encryptor",
    "RedisBloomFilter",
    "RedisScriptClient",
    "ScriptExecutionError",
    "Settings",
    "UnexpectedScriptResultError",
    "close_pool",
    "create_bloom_filter",
    "create_pool",
    "create_script_client",
    "get_settings",
    "hash_chain",
    "load_settings",
]
