"""shortcuts.vdf 二进制格式常量.

该模块定义了二进制 VDF 中使用的类型标签和根键.
"""

# 类型标签
TYPE_OBJECT = 0x00
TYPE_STRING = 0x01
TYPE_INT32 = 0x02
TYPE_END = 0x08

# 字符串终止符
NUL = 0x00

# 顶层集合的键 (比较时不区分大小写)
ROOT_KEY = "shortcuts"

TYPE_NAMES = {
    TYPE_OBJECT: "Object",
    TYPE_STRING: "String",
    TYPE_INT32: "Int32",
    TYPE_END: "End",
}

UINT32_MAX = 0xFFFFFFFF


def type_name(tag: int) -> str:
    """返回标签字节的可读名称, 未知标签返回 "Unknown"."""
    return TYPE_NAMES.get(tag, "Unknown")
