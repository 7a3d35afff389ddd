"""shortcuts.vdf 解码器实现.

该模块提供用于游标读取的`DataReader`和
把二进制 VDF 解析为`Registry`的`RegistryDecoder`.
"""

import struct

from .config import VdfConfig
from .const import (
    NUL,
    ROOT_KEY,
    TYPE_END,
    TYPE_INT32,
    TYPE_OBJECT,
    TYPE_STRING,
    type_name,
)
from .diagnostics import DecodeEvent, DiagnosticSink, EventKind
from .exceptions import (
    VdfDecodeError,
    VdfMalformedHeaderError,
    VdfTruncatedError,
    VdfUnexpectedRootKeyError,
    VdfUnknownPropertyTypeError,
)
from .log import get_hexdump, logger
from .options import VdfOption
from .struct import Entry, Registry

_STRUCT_I_LE = struct.Struct("<I")


class DataReader:
    """二进制 VDF 数据的游标读取器.

    所有越界检查都集中在这里: 位置永远不会超过数据长度,
    固定长度读取失败时游标保持不变.
    """

    __slots__ = ("_data", "_pos", "length")

    _data: bytes
    _pos: int
    length: int

    def __init__(self, data: bytes | bytearray | memoryview):
        """初始化DataReader.

        Args:
            data: 要读取的二进制数据.
        """
        self._data = bytes(data)
        self._pos = 0
        self.length = len(self._data)

    @property
    def pos(self) -> int:
        """当前读取位置."""
        return self._pos

    @property
    def buffer(self) -> bytes:
        """底层的只读数据."""
        return self._data

    @property
    def eof(self) -> bool:
        """检查是否到达流末尾."""
        return self._pos >= self.length

    def read_u8(self) -> int:
        """读取无符号8位整数."""
        if self._pos >= self.length:
            raise VdfTruncatedError("Not enough data to read u8", pos=self._pos)
        val = self._data[self._pos]
        self._pos += 1
        return val

    def peek_u8(self) -> int:
        """查看下一个无符号8位整数而不移动指针."""
        if self._pos >= self.length:
            raise VdfTruncatedError("Not enough data to peek u8", pos=self._pos)
        return self._data[self._pos]

    def read_u32(self) -> int:
        """读取小端无符号4字节整数."""
        if self._pos + 4 > self.length:
            raise VdfTruncatedError(
                f"Not enough data to read u32 ({self.length - self._pos} bytes left)",
                pos=self._pos,
            )
        val = _STRUCT_I_LE.unpack_from(self._data, self._pos)[0]
        self._pos += 4
        return val

    def rewind(self, length: int = 1) -> None:
        """把指针退回指定数量的字节."""
        if not 0 <= length <= self._pos:
            raise VdfDecodeError(
                f"Cannot rewind {length} bytes from position {self._pos}",
                pos=self._pos,
            )
        self._pos -= length

    def skip(self, length: int) -> None:
        """跳过指定数量的字节."""
        if length < 0:
            raise VdfDecodeError(f"Cannot skip negative bytes: {length}", pos=self._pos)
        new_pos = self._pos + length
        if new_pos > self.length:
            raise VdfTruncatedError("Not enough data to skip", pos=self._pos)
        self._pos = new_pos

    def _terminator(self) -> int:
        end = self._data.find(NUL, self._pos)
        return self.length if end < 0 else end

    def read_cstring(self) -> str:
        """读取以 NUL 结尾的字符串.

        终止符会被消费但不包含在结果中. 没有终止符时返回已读取的内容
        而不是报错, 调用方可以通过 `eof` 区分这种情况.
        非法的 UTF-8 序列会被替换为 U+FFFD.
        """
        start = self._pos
        end = self._terminator()
        self._pos = min(end + 1, self.length)
        return self._data[start:end].decode("utf-8", errors="replace")

    def skip_cstring(self) -> None:
        """跳过以 NUL 结尾的字符串而不解码."""
        self._pos = min(self._terminator() + 1, self.length)


class RegistryDecoder:
    """shortcuts.vdf 的递归下降解码器.

    数据格式没有长度前缀, 结构完全由标签字节和终止符决定:

        00 "shortcuts"                 根对象
          00 "<index>"                 条目 (对象标签 + 索引字符串)
            01 "<name>" "<value>"      字符串属性
            02 "<name>" <u32 LE>       整数属性
            00 "<name>" ... 08         嵌套对象 (跳过)
          08                           条目结束
        08                             集合结束
        08                             根对象结束

    头部之后的 00 实际上是第一个条目的对象标签. 后续条目的 00
    被读作空索引, 检查字节退回后重新作为索引读取.

    任何标签错位都会让后续读取全部失去同步, 所以除了空索引和
    干净的结束标记之外, 所有异常情况都会中止整个解析.
    """

    __slots__ = ("_config", "_loc", "_reader", "_sink")

    _reader: DataReader
    _config: VdfConfig
    _sink: DiagnosticSink | None
    _loc: list[str]

    def __init__(self, reader: DataReader, config: VdfConfig | None = None):
        self._reader = reader
        self._config = config if config is not None else VdfConfig()
        self._sink = self._config.sink
        self._loc = []

    def decode(self, suppress_log: bool = False) -> Registry:
        """把整个缓冲区解码为 Registry.

        Raises:
            VdfDecodeError: 数据格式错误, 不返回部分结果.
        """
        if not suppress_log:
            logger.debug("[RegistryDecoder] 开始解码 %d 字节", self._reader.length)

        try:
            self._read_header()
            registry = self._read_entries()
        except VdfDecodeError as e:
            if e.pos is None:
                e.pos = self._reader.pos
            if not e.loc:
                e.loc = list(self._loc)
            if not suppress_log:
                logger.error("[RegistryDecoder] 解码错误: %s", e)
                logger.debug("%s", get_hexdump(self._reader.buffer, e.pos))
            raise

        if not suppress_log:
            logger.debug("[RegistryDecoder] 成功解码 %d 个条目", len(registry))
        return registry

    def _emit(
        self,
        kind: EventKind,
        pos: int,
        message: str = "",
        loc: list[str] | None = None,
    ) -> None:
        if self._sink is None:
            return
        self._sink(
            DecodeEvent(kind, pos, message, tuple(self._loc if loc is None else loc))
        )

    def _next_tag(self, peek: bool = False) -> int | None:
        """读取 (或查看) 下一个标签字节.

        宽松模式下在数据末尾返回 None, 否则抛出 VdfTruncatedError.
        """
        if self._reader.eof and self._config.lenient_eof:
            return None
        return self._reader.peek_u8() if peek else self._reader.read_u8()

    def _read_header(self) -> None:
        reader = self._reader

        tag = reader.read_u8()
        if tag != TYPE_OBJECT:
            raise VdfMalformedHeaderError(
                f"Expected object tag 0x00 at start, "
                f"got 0x{tag:02X} ({type_name(tag)})",
                pos=0,
            )

        key_pos = reader.pos
        if reader.buffer.find(NUL, key_pos) < 0:
            raise VdfTruncatedError("Input ended inside the root key", pos=key_pos)
        key = reader.read_cstring()
        if key.lower() != ROOT_KEY:
            raise VdfUnexpectedRootKeyError(
                f"Expected root key {ROOT_KEY!r}, got {key!r}", pos=key_pos
            )

        tag_pos = reader.pos
        tag = reader.read_u8()
        if tag != TYPE_OBJECT:
            raise VdfMalformedHeaderError(
                f"Expected object tag 0x00 after root key, "
                f"got 0x{tag:02X} ({type_name(tag)})",
                pos=tag_pos,
            )
        self._emit("root", key_pos, key)

    def _read_entries(self) -> Registry:
        reader = self._reader
        registry = Registry()

        while True:
            self._loc = []
            tag = self._next_tag(peek=True)
            if tag is None:
                logger.debug("[RegistryDecoder] 集合未以 0x08 结束, 宽松模式下视为结束")
                break
            if tag == TYPE_END:
                self._emit("end", reader.pos)
                reader.read_u8()
                break

            index_pos = reader.pos
            index = reader.read_cstring()
            if not index:
                self._emit("empty_index", index_pos, "empty entry index")
                check_pos = reader.pos
                check = self._next_tag()
                if check is None:
                    break
                if check == TYPE_END:
                    self._emit("end", check_pos)
                    break
                # Steam 写入的条目以 00 开头: 00 "<index>" 00 ...
                # 被检查的字节退回, 作为下一个索引的开头重新读取
                logger.warning(
                    "[RegistryDecoder] 空索引后出现意外字节 0x%02X (位置 %d), 重新读取",
                    check,
                    check_pos,
                )
                reader.rewind()
                continue

            self._loc = [index]
            entry, exhausted = self._read_entry(index_pos)
            if index in registry:
                logger.debug("[RegistryDecoder] 条目索引 %r 重复, 覆盖旧值", index)
            registry[index] = entry
            if exhausted:
                break

        return registry

    def _read_entry(self, index_pos: int) -> tuple[Entry, bool]:
        """读取一个条目的属性循环.

        Returns:
            (条目, 是否在宽松模式下遇到数据末尾).
        """
        reader = self._reader
        entry = Entry()
        index = self._loc[0]
        self._emit("entry_begin", index_pos)

        while True:
            self._loc = [index]
            tag_pos = reader.pos
            tag = self._next_tag()
            if tag is None:
                return entry, True
            if tag == TYPE_END:
                self._emit("entry_end", tag_pos)
                return entry, False

            if tag == TYPE_OBJECT:
                name = reader.read_cstring()
                self._loc = [index, name]
                self._emit("nested_skip", tag_pos, f"skipping nested object {name!r}")
                self._skip_object()
                continue

            if tag == TYPE_STRING:
                name = reader.read_cstring()
                self._loc = [index, name]
                value = reader.read_cstring()
            elif tag == TYPE_INT32:
                name = reader.read_cstring()
                self._loc = [index, name]
                value = str(reader.read_u32())
            else:
                raise VdfUnknownPropertyTypeError(
                    f"Unknown property type 0x{tag:02X} ({type_name(tag)})",
                    pos=tag_pos,
                )

            entry[name] = value
            self._emit("property", tag_pos, f"{type_name(tag)} {value!r}")

    def _skip_object(self) -> None:
        """消费一个嵌套对象 (包括其中更深的对象) 而不保留内容.

        调用方已经读取了开启对象的 0x00 标签和名称, 所以深度从 1 开始.
        """
        reader = self._reader
        # 没有诊断接收器时不解码名称
        decode_names = self._sink is not None
        depth = 1

        while depth > 0:
            if reader.eof:
                raise VdfTruncatedError(
                    f"Input ended inside a nested object (depth {depth})",
                    pos=reader.pos,
                )
            tag_pos = reader.pos
            tag = reader.read_u8()

            if tag == TYPE_END:
                depth -= 1
            elif tag == TYPE_OBJECT:
                depth += 1
                if decode_names:
                    name = reader.read_cstring()
                    self._emit(
                        "nested_skip",
                        tag_pos,
                        f"skipping nested object {name!r} (depth {depth})",
                        [*self._loc, name],
                    )
                else:
                    reader.skip_cstring()
            elif tag == TYPE_STRING:
                reader.skip_cstring()
                reader.skip_cstring()
            elif tag == TYPE_INT32:
                reader.skip_cstring()
                reader.skip(4)
            else:
                raise VdfUnknownPropertyTypeError(
                    f"Unknown property type 0x{tag:02X} ({type_name(tag)}) "
                    "inside nested object",
                    pos=tag_pos,
                )


def parse_registry(
    data: bytes | bytearray | memoryview,
    option: VdfOption | int = VdfOption.NONE,
    sink: DiagnosticSink | None = None,
) -> Registry:
    """把 shortcuts.vdf 的完整内容解码为 Registry.

    Args:
        data: 文件的全部字节.
        option: 解码选项.
        sink: 可选的诊断接收器.

    Returns:
        Registry: 条目索引 -> Entry.

    Raises:
        VdfDecodeError: 解码失败.
    """
    config = VdfConfig.from_params(option=option, sink=sink)
    return RegistryDecoder(DataReader(data), config).decode()
