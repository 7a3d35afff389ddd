"""shortcuts.vdf 解码的配置选项.

该模块定义了用于控制 `loads` 和 `parse_registry` 行为的选项标志.
"""

from enum import IntFlag


class VdfOption(IntFlag):
    """VDF 配置选项标志.

    可以使用位运算组合多个选项.
    """

    # 默认行为: 需要标签字节时遇到数据末尾视为截断
    NONE = 0x0000

    # 宽松模式: 条目循环/属性循环中遇到数据末尾时视为正常结束,
    # 保留正在解析的条目. 不影响文件头、整数载荷和嵌套对象跳过.
    LENIENT_EOF = 0x0001
