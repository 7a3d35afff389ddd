"""shortcut_vdf 日志记录器."""

import logging

from .const import type_name

logger = logging.getLogger("shortcut_vdf")


def get_hexdump(data: bytes | bytearray | memoryview, pos: int, window: int = 16) -> str:
    """获取出错位置周围数据的十六进制转储.

    出错位置的字节用方括号标出, 并附带它作为标签字节时的含义,
    例如 `00 73 [03] 61` 和 `位置 2 的字节 0x03 作为标签: Unknown`.
    位置超出数据末尾时只显示末尾的内容.
    """
    length = len(data)
    start = max(0, min(pos, length) - window)
    end = min(length, pos + max(window, 1))

    cells = []
    for i in range(start, end):
        cell = f"{data[i]:02x}"
        cells.append(f"[{cell}]" if i == pos else cell)

    if pos < length:
        tag = data[pos]
        note = f"位置 {pos} 的字节 0x{tag:02X} 作为标签: {type_name(tag)}"
    else:
        note = f"位置 {pos} 已超出数据末尾 (长度 {length})"

    return f"位置 {pos} 的上下文 (显示 {start}-{end}):\n{' '.join(cells)}\n{note}"
