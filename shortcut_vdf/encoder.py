"""shortcuts.vdf 编码器实现.

该模块提供用于缓冲管理的`DataWriter`和
把条目映射序列化为二进制 VDF 的`RegistryEncoder`.
"""

import struct
from collections.abc import Mapping
from typing import Any

from .const import (
    NUL,
    ROOT_KEY,
    TYPE_END,
    TYPE_INT32,
    TYPE_OBJECT,
    TYPE_STRING,
    UINT32_MAX,
)
from .exceptions import VdfEncodeError, VdfTypeError, VdfValueError
from .log import logger

_PACK_I_LE = struct.Struct("<I").pack


class DataWriter:
    """二进制 VDF 数据的写入器."""

    __slots__ = ("_buffer",)

    _buffer: bytearray

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_u8(self, value: int) -> None:
        self._buffer.append(value)

    def write_u32(self, value: int) -> None:
        self._buffer.extend(_PACK_I_LE(value))

    def write_cstring(self, value: str) -> None:
        """写入 UTF-8 字符串及其 NUL 终止符."""
        raw = value.encode("utf-8")
        if NUL in raw:
            raise VdfValueError(f"String must not contain NUL bytes: {value!r}")
        self._buffer.extend(raw)
        self._buffer.append(NUL)

    def get_bytes(self) -> bytes:
        """获取已写入的全部数据."""
        return bytes(self._buffer)


class RegistryEncoder:
    """把 `{index: {name: value}}` 映射编码为 shortcuts.vdf.

    值的映射规则:
        - `str` -> 字符串属性 (0x01)
        - `int` -> uint32 属性 (0x02), 必须在 [0, 2**32) 内
        - `Mapping` -> 嵌套对象 (0x00), 递归编码
    """

    def __init__(self, writer: DataWriter | None = None):
        self._writer = writer if writer is not None else DataWriter()

    def encode(self, registry: Mapping[str, Mapping[str, Any]]) -> bytes:
        """编码整个集合并返回字节."""
        w = self._writer
        w.write_u8(TYPE_OBJECT)
        w.write_cstring(ROOT_KEY)
        if not registry:
            # 解码器要求根键之后是 0x00, 空集合也写出这个标签
            w.write_u8(TYPE_OBJECT)

        for index, entry in registry.items():
            if not isinstance(index, str):
                raise VdfTypeError(
                    f"Entry index must be str, got {type(index).__name__}"
                )
            if not index:
                raise VdfValueError("Entry index must not be empty")
            if not isinstance(entry, Mapping):
                raise VdfTypeError(
                    f"Entry {index!r} must be a mapping, got {type(entry).__name__}"
                )
            w.write_u8(TYPE_OBJECT)
            w.write_cstring(index)
            self._encode_object(entry, [index])

        # 集合结束, 根对象结束
        w.write_u8(TYPE_END)
        w.write_u8(TYPE_END)
        data = w.get_bytes()
        logger.debug("[RegistryEncoder] 编码 %d 个条目, %d 字节", len(registry), len(data))
        return data

    def _encode_object(self, obj: Mapping[str, Any], loc: list[str]) -> None:
        w = self._writer
        for name, value in obj.items():
            if not isinstance(name, str):
                raise VdfTypeError(
                    f"Property name must be str, got {type(name).__name__} "
                    f"(at {'.'.join(loc)})"
                )
            path = [*loc, name]
            if isinstance(value, bool):
                raise VdfTypeError(
                    f"bool is not a VDF type, use int (at {'.'.join(path)})"
                )
            if isinstance(value, str):
                w.write_u8(TYPE_STRING)
                w.write_cstring(name)
                w.write_cstring(value)
            elif isinstance(value, int):
                if not 0 <= value <= UINT32_MAX:
                    raise VdfValueError(
                        f"Integer {value} out of uint32 range (at {'.'.join(path)})"
                    )
                w.write_u8(TYPE_INT32)
                w.write_cstring(name)
                w.write_u32(value)
            elif isinstance(value, Mapping):
                w.write_u8(TYPE_OBJECT)
                w.write_cstring(name)
                self._encode_object(value, path)
            else:
                raise VdfTypeError(
                    f"Unsupported value type {type(value).__name__} "
                    f"(at {'.'.join(path)})"
                )
        w.write_u8(TYPE_END)


def encode_registry(registry: Mapping[str, Mapping[str, Any]]) -> bytes:
    """把条目映射编码为 shortcuts.vdf 字节.

    Raises:
        VdfEncodeError: 数据无法编码.
    """
    try:
        return RegistryEncoder().encode(registry)
    except VdfEncodeError as e:
        logger.error("[RegistryEncoder] 编码错误: %s", e)
        raise
