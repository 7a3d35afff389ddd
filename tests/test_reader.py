"""测试 DataReader 游标读取器."""

import pytest

from shortcut_vdf import DataReader, VdfDecodeError, VdfTruncatedError


def test_read_u8_advances() -> None:
    """read_u8() 应返回一个字节并移动指针."""
    reader = DataReader(b"\x01\x02")

    assert reader.read_u8() == 0x01
    assert reader.pos == 1
    assert reader.read_u8() == 0x02
    assert reader.eof


def test_read_u8_at_end_raises() -> None:
    """没有剩余字节时 read_u8() 应抛出 VdfTruncatedError."""
    reader = DataReader(b"")

    with pytest.raises(VdfTruncatedError):
        reader.read_u8()
    assert reader.pos == 0


def test_peek_u8_does_not_advance() -> None:
    """peek_u8() 应返回下一个字节但不移动指针."""
    reader = DataReader(b"\x08")

    assert reader.peek_u8() == 0x08
    assert reader.pos == 0

    reader.read_u8()
    with pytest.raises(VdfTruncatedError):
        reader.peek_u8()


def test_read_u32_little_endian() -> None:
    """read_u32() 应按小端无符号整数读取 4 字节."""
    reader = DataReader(b"\x39\x30\x00\x00\xff\xff\xff\xff")

    assert reader.read_u32() == 12345
    assert reader.read_u32() == 0xFFFFFFFF
    assert reader.pos == 8


@pytest.mark.parametrize("data", [b"", b"\x01", b"\x01\x02", b"\x01\x02\x03"])
def test_read_u32_truncated_keeps_position(data: bytes) -> None:
    """不足 4 字节时 read_u32() 应报错且不移动指针."""
    reader = DataReader(data)

    with pytest.raises(VdfTruncatedError) as exc_info:
        reader.read_u32()

    assert reader.pos == 0
    assert exc_info.value.pos == 0


def test_read_cstring_consumes_terminator() -> None:
    """read_cstring() 应消费终止符但不包含在结果中."""
    reader = DataReader(b"AppName\x00rest")

    assert reader.read_cstring() == "AppName"
    assert reader.pos == 8


def test_read_cstring_empty() -> None:
    """紧跟终止符时 read_cstring() 应返回空字符串并前进一个字节."""
    reader = DataReader(b"\x00\x08")

    assert reader.read_cstring() == ""
    assert reader.pos == 1


def test_read_cstring_unterminated_returns_rest() -> None:
    """没有终止符时 read_cstring() 应返回剩余内容而不是报错."""
    reader = DataReader(b"partial")

    assert reader.read_cstring() == "partial"
    assert reader.eof
    assert reader.read_cstring() == ""


def test_read_cstring_invalid_utf8_is_replaced() -> None:
    """非法的 UTF-8 序列应替换为 U+FFFD."""
    reader = DataReader(b"\xffGame\xc3\x00")

    assert reader.read_cstring() == "�Game�"


def test_read_cstring_utf8() -> None:
    """多字节 UTF-8 字符应被正确解码."""
    reader = DataReader("游戏 ✓".encode() + b"\x00")

    assert reader.read_cstring() == "游戏 ✓"


def test_skip_cstring_matches_read_cstring() -> None:
    """skip_cstring() 的指针移动应与 read_cstring() 一致."""
    data = b"name\x00value\x00tail"
    a = DataReader(data)
    b = DataReader(data)

    a.read_cstring()
    b.skip_cstring()
    assert a.pos == b.pos == 5

    b.skip_cstring()
    b.skip_cstring()
    assert b.eof


def test_skip() -> None:
    """skip() 应正确移动指针且在越界时抛出错误."""
    reader = DataReader(b"\x01\x02\x03")

    reader.skip(2)
    assert reader.read_u8() == 0x03

    with pytest.raises(VdfTruncatedError):
        reader.skip(1)


def test_reader_accepts_bytearray_and_memoryview() -> None:
    """Reader 应接受 bytearray 和 memoryview."""
    assert DataReader(bytearray(b"a\x00")).read_cstring() == "a"
    assert DataReader(memoryview(b"b\x00")).read_cstring() == "b"


def test_rewind() -> None:
    """rewind() 应退回指针, 且不能退到数据开头之前."""
    reader = DataReader(b"\x00\x30\x00")

    reader.read_u8()
    reader.read_u8()
    reader.rewind()
    assert reader.pos == 1
    assert reader.read_cstring() == "0"

    with pytest.raises(VdfDecodeError):
        reader.rewind(reader.pos + 1)
    assert reader.pos == 3
