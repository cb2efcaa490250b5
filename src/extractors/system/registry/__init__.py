"""
Registry artifact decoding.

Features:
- Typed value decoding (REG_SZ, REG_EXPAND_SZ, REG_DWORD, REG_MULTI_SZ, REG_QWORD)
- RecentDocs and UserAssist binary record decoders
- Office MRU normalization
- Offline hive access through regipy
"""

from .mru import normalize_mru_entries
from .source import RegipyHiveSource, RegistrySource
from .user_assist import (
    LegacyUserAssistRecord,
    ModernUserAssistRecord,
    UserAssistRecord,
    decode_user_assist_record,
    transform_key_name,
)
from .values import DecodedValue, RawValue, ValueKind, decode_recent_docs_blob, decode_value

__all__ = [
    "DecodedValue",
    "LegacyUserAssistRecord",
    "ModernUserAssistRecord",
    "RawValue",
    "RegipyHiveSource",
    "RegistrySource",
    "UserAssistRecord",
    "ValueKind",
    "decode_recent_docs_blob",
    "decode_user_assist_record",
    "decode_value",
    "normalize_mru_entries",
    "transform_key_name",
]
