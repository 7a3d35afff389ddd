"""测试 shortcut_vdf 日志模块."""

import logging

from shortcut_vdf.log import get_hexdump, logger


def test_logger_config() -> None:
    """验证 Logger 默认配置不包含 Handler 且名称正确."""
    assert logger.name == "shortcut_vdf"
    assert not logger.handlers
    assert logger.level == logging.NOTSET


def test_get_hexdump_marks_byte() -> None:
    """get_hexdump() 应标出出错位置的字节并给出标签名称."""
    data = b"\x01\x02\x03"
    dump = get_hexdump(data, pos=1, window=1)

    assert "01 [02]" in dump
    assert "0x02" in dump
    assert "Int32" in dump


def test_get_hexdump_unknown_tag() -> None:
    """无法识别的标签字节应标注为 Unknown."""
    dump = get_hexdump(b"\x00shortcuts\x00\x00\x030", pos=12, window=2)

    assert "00 00 [03] 30" in dump
    assert "Unknown" in dump


def test_get_hexdump_boundaries() -> None:
    """get_hexdump() 应正确处理数据起始和结束边界."""
    data = b"\xaa\xbb\xcc"

    dump_start = get_hexdump(data, pos=0, window=1)
    assert "[aa]" in dump_start

    dump_end = get_hexdump(data, pos=2, window=1)
    assert "bb [cc]" in dump_end


def test_get_hexdump_empty() -> None:
    """get_hexdump() 应能处理空字节输入而不报错."""
    dump = get_hexdump(b"", pos=0)

    assert "超出数据末尾" in dump


def test_get_hexdump_out_of_bounds_pos() -> None:
    """get_hexdump() 在位置越界时应显示数据末尾."""
    dump = get_hexdump(b"\x01\x02", pos=10, window=4)

    assert "01 02" in dump
    assert "[" not in dump.splitlines()[1]
    assert "长度 2" in dump
