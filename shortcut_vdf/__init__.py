"""Steam shortcuts.vdf 二进制格式解码库.

提供了把 shortcuts.vdf 反序列化 (loads) 为 Registry 的解码器,
以及对应的序列化 (dumps) 和 Pydantic 适配器.
"""

from .adapter import RegistryAdapter
from .api import BatchResult, dump, dumps, load, loads, loads_many
from .config import VdfConfig
from .const import TYPE_END, TYPE_INT32, TYPE_OBJECT, TYPE_STRING
from .decoder import DataReader, RegistryDecoder, parse_registry
from .diagnostics import DecodeEvent, DiagnosticCollector, DiagnosticSink
from .exceptions import (
    DecodeErrorKind,
    VdfDecodeError,
    VdfEncodeError,
    VdfError,
    VdfMalformedHeaderError,
    VdfTruncatedError,
    VdfTypeError,
    VdfUnexpectedRootKeyError,
    VdfUnknownPropertyTypeError,
    VdfValueError,
)
from .options import VdfOption
from .struct import Entry, Registry

__version__ = "0.1.0"

__all__ = [
    "TYPE_END",
    "TYPE_INT32",
    "TYPE_OBJECT",
    "TYPE_STRING",
    "BatchResult",
    "DataReader",
    "DecodeErrorKind",
    "DecodeEvent",
    "DiagnosticCollector",
    "DiagnosticSink",
    "Entry",
    "Registry",
    "RegistryAdapter",
    "RegistryDecoder",
    "VdfConfig",
    "VdfDecodeError",
    "VdfEncodeError",
    "VdfError",
    "VdfMalformedHeaderError",
    "VdfOption",
    "VdfTruncatedError",
    "VdfTypeError",
    "VdfUnexpectedRootKeyError",
    "VdfUnknownPropertyTypeError",
    "VdfValueError",
    "__version__",
    "dump",
    "dumps",
    "load",
    "loads",
    "loads_many",
    "parse_registry",
]
