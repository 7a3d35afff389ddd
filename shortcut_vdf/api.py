"""shortcut_vdf API模块.

提供用于 shortcuts.vdf 编解码的高级接口 `loads`, `load`, `dumps`, `dump`
以及批量解码 `loads_many`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO, Any

from .decoder import parse_registry
from .diagnostics import DiagnosticSink
from .encoder import encode_registry
from .exceptions import VdfDecodeError
from .log import logger
from .options import VdfOption
from .struct import Registry


def loads(
    data: bytes | bytearray | memoryview,
    option: VdfOption = VdfOption.NONE,
    *,
    sink: DiagnosticSink | None = None,
) -> Registry:
    """反序列化 shortcuts.vdf 字节为 Registry.

    Args:
        data: 文件的全部内容 (bytes, bytearray 或 memoryview).
        option: 解码选项 (如 `VdfOption.LENIENT_EOF`).
        sink: 诊断接收器, 每个结构性事件都会以 `DecodeEvent` 调用它.
            接收器只观察, 不影响解码结果.

    Returns:
        Registry: 条目索引 -> Entry. 整数属性以十进制字符串表示.

    Raises:
        VdfTruncatedError: 固定长度字段之前数据已结束.
        VdfMalformedHeaderError: 必需的标签字节不匹配.
        VdfUnexpectedRootKeyError: 顶层键不是 `shortcuts`.
        VdfUnknownPropertyTypeError: 未知的属性标签.

    Examples:
        >>> registry = loads(path.read_bytes())
        >>> registry["0"]["AppName"]
        'Test Game'
    """
    return parse_registry(data, option=option, sink=sink)


def load(
    fp: IO[bytes],
    option: VdfOption = VdfOption.NONE,
    *,
    sink: DiagnosticSink | None = None,
) -> Registry:
    """从文件读取并反序列化 shortcuts.vdf.

    封装了 `read()` 和 `loads()`.

    Args:
        fp: 打开的二进制文件对象.
        option: 解码选项.
        sink: 诊断接收器.

    Returns:
        解析后的 Registry.
    """
    return loads(fp.read(), option=option, sink=sink)


def dumps(registry: Mapping[str, Mapping[str, Any]]) -> bytes:
    """序列化条目映射为 shortcuts.vdf 字节.

    Args:
        registry: `{index: {name: value}}`. 值可以是 `str`, `int` (uint32)
            或表示嵌套对象的 `Mapping`.

    Returns:
        bytes: 序列化后的二进制数据.

    Raises:
        VdfTypeError: 键或值的类型不受支持.
        VdfValueError: 整数越界或字符串包含 NUL.
    """
    return encode_registry(registry)


def dump(registry: Mapping[str, Mapping[str, Any]], fp: IO[bytes]) -> None:
    """序列化条目映射并写入文件.

    Args:
        registry: 要序列化的条目映射.
        fp: 文件类对象, 必须实现 `write(bytes)` 方法.
    """
    fp.write(dumps(registry))


@dataclass
class BatchResult:
    """`loads_many` 的结果.

    Attributes:
        registries: 成功解码的缓冲区, 按名称索引.
        errors: 解码失败的缓冲区及其错误.
    """

    registries: dict[str, Registry] = field(default_factory=dict)
    errors: dict[str, VdfDecodeError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """是否全部解码成功."""
        return not self.errors

    def entries(self) -> list[tuple[str, str, dict[str, str]]]:
        """展开为 (缓冲区名称, 条目索引, 条目) 列表."""
        return [
            (name, index, dict(entry))
            for name, registry in self.registries.items()
            for index, entry in registry.items()
        ]


def loads_many(
    buffers: Mapping[str, bytes | bytearray | memoryview],
    option: VdfOption = VdfOption.NONE,
    *,
    sink: DiagnosticSink | None = None,
) -> BatchResult:
    """独立解码多个缓冲区 (例如多个用户的 shortcuts.vdf).

    单个缓冲区解码失败只会被记录, 不会影响其他缓冲区.

    Args:
        buffers: 名称 (通常是文件路径) -> 文件内容.
        option: 解码选项.
        sink: 诊断接收器, 所有缓冲区共用.

    Returns:
        BatchResult: 成功的 Registry 与失败的错误.
    """
    result = BatchResult()
    for name, data in buffers.items():
        try:
            result.registries[name] = loads(data, option=option, sink=sink)
        except VdfDecodeError as e:
            logger.warning("[loads_many] 解码 %s 失败: %s", name, e)
            result.errors[name] = e
    logger.debug(
        "[loads_many] 成功 %d 个, 失败 %d 个",
        len(result.registries),
        len(result.errors),
    )
    return result
