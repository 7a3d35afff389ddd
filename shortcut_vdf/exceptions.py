"""shortcut_vdf 特定的异常类.

该模块为 shortcut_vdf 库定义了异常层次结构.
"""

from enum import Enum


class DecodeErrorKind(str, Enum):
    """解码错误的种类 (扁平枚举)."""

    TRUNCATED = "truncated"
    MALFORMED_HEADER = "malformed_header"
    UNEXPECTED_ROOT_KEY = "unexpected_root_key"
    UNKNOWN_PROPERTY_TYPE = "unknown_property_type"


class VdfError(Exception):
    """所有 shortcut_vdf 异常的基类."""

    pass


class VdfEncodeError(VdfError):
    """序列化失败时抛出.

    Case:
        - 索引或属性名不是 `str`.
        - 整数超出 uint32 范围.
        - 字符串中包含 NUL 字节.
    """

    pass


class VdfDecodeError(VdfError):
    """反序列化失败时抛出.

    解码是全有或全无的: 抛出此异常时不会返回任何部分结果.
    """

    kind: DecodeErrorKind

    def __init__(
        self,
        msg: str,
        loc: list[str] | None = None,
        pos: int | None = None,
    ) -> None:
        """初始化解码错误.

        Args:
            msg: 错误描述信息.
            loc: 错误发生的位置路径 (条目索引, 属性名).
            pos: 错误发生时游标的偏移量.
        """
        super().__init__(msg)
        self.loc = loc or []
        self.pos = pos

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.loc:
            # 格式化为 dotted path
            loc_str = ".".join(str(x) for x in self.loc)
            return f"{base_msg} (at {loc_str})"
        return base_msg


class VdfTruncatedError(VdfDecodeError):
    """必需的固定长度字段 (标签字节, 4 字节整数) 之前数据已结束."""

    kind = DecodeErrorKind.TRUNCATED


class VdfMalformedHeaderError(VdfDecodeError):
    """必需的标签字节与期望值不符."""

    kind = DecodeErrorKind.MALFORMED_HEADER


class VdfUnexpectedRootKeyError(VdfDecodeError):
    """顶层键存在但不是 `shortcuts`."""

    kind = DecodeErrorKind.UNEXPECTED_ROOT_KEY


class VdfUnknownPropertyTypeError(VdfDecodeError):
    """遇到 {0x00, 0x01, 0x02, 0x08} 之外的属性标签."""

    kind = DecodeErrorKind.UNKNOWN_PROPERTY_TYPE


class VdfTypeError(VdfEncodeError, TypeError):
    """类型不匹配时抛出."""

    pass


class VdfValueError(VdfEncodeError, ValueError):
    """值无效时抛出 (如超出范围)."""

    pass
