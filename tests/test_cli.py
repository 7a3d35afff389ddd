"""测试 shortcut_vdf 命令行工具."""

import json
import re
from pathlib import Path

import pytest
from click.testing import CliRunner

from shortcut_vdf import dumps

try:
    from shortcut_vdf.__main__ import cli
except ImportError:
    pytest.skip("click not installed", allow_module_level=True)


DATA = dumps(
    {
        "0": {"AppName": "Test Game", "appid": 12345, "tags": {"0": "favorite"}},
        "1": {"AppName": "Other", "Exe": "other.exe"},
    }
)


@pytest.fixture
def runner() -> CliRunner:
    """提供 Click CLI 测试运行器.

    Returns:
        CliRunner 实例.
    """
    return CliRunner()


def strip_ansi(text: str) -> str:
    """去除 ANSI 转义序列."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


def test_cli_help(runner: CliRunner) -> None:
    """--help 选项应显示帮助信息."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_cli_missing_input(runner: CliRunner) -> None:
    """未提供输入参数时应报错并提示用法."""
    result = runner.invoke(cli, [])

    assert result.exit_code != 0
    assert "必须指定" in result.output


def test_cli_mutual_exclusion(runner: CliRunner) -> None:
    """同时提供参数和文件时应报错."""
    with runner.isolated_filesystem():
        Path("test.vdf").write_bytes(DATA)

        result = runner.invoke(cli, ["00", "-f", "test.vdf"])

        assert result.exit_code != 0
        assert "不能同时指定" in result.output


def test_cli_decode_hex_string(runner: CliRunner) -> None:
    """应能正确解码命令行参数提供的十六进制字符串."""
    result = runner.invoke(cli, [DATA.hex()])

    assert result.exit_code == 0
    assert "Test Game" in result.output
    assert "12345" in result.output


def test_cli_decode_binary_file(runner: CliRunner, tmp_path: Path) -> None:
    """应能直接读取二进制 shortcuts.vdf."""
    path = tmp_path / "shortcuts.vdf"
    path.write_bytes(DATA)

    result = runner.invoke(cli, ["-f", str(path)])

    assert result.exit_code == 0
    assert "Other" in result.output


def test_cli_decode_hex_file(runner: CliRunner, tmp_path: Path) -> None:
    """应能读取带空格的十六进制文本文件."""
    path = tmp_path / "shortcuts.hex"
    path.write_text(DATA.hex(" "), encoding="utf-8")

    result = runner.invoke(cli, ["-f", str(path)])

    assert result.exit_code == 0
    assert "Test Game" in result.output


def test_cli_json_output_file(runner: CliRunner, tmp_path: Path) -> None:
    """--format json 应输出合法的 JSON 数据."""
    out = tmp_path / "out.json"

    result = runner.invoke(cli, [DATA.hex(), "--format", "json", "-o", str(out)])

    assert result.exit_code == 0
    assert f"结果已保存到: {out}" in result.output
    assert json.loads(out.read_text(encoding="utf-8")) == {
        "0": {"AppName": "Test Game", "appid": "12345"},
        "1": {"AppName": "Other", "Exe": "other.exe"},
    }


def test_cli_tree(runner: CliRunner) -> None:
    """树状输出应显示条目和属性."""
    result = runner.invoke(cli, [DATA.hex(), "--format", "tree"])

    assert result.exit_code == 0
    clean_output = strip_ansi(result.output)
    assert "[0] Entry (2)" in clean_output
    assert "AppName: Test Game" in clean_output
    assert "appid: 12345" in clean_output


def test_cli_invalid_hex(runner: CliRunner) -> None:
    """提供无效的十六进制字符串时应报错."""
    result = runner.invoke(cli, ["zz"])

    assert result.exit_code != 0
    assert "无效的十六进制格式" in result.output


def test_cli_decode_error(runner: CliRunner) -> None:
    """解码失败时应优雅退出并显示错误种类."""
    result = runner.invoke(cli, ["01"])

    assert result.exit_code != 0
    assert "解码失败" in result.output
    assert "malformed_header" in result.output


def test_cli_lenient(runner: CliRunner) -> None:
    """--lenient 应容忍缺失的结束标记."""
    truncated = DATA[:-2].hex()

    assert runner.invoke(cli, [truncated]).exit_code != 0

    result = runner.invoke(cli, [truncated, "--lenient"])
    assert result.exit_code == 0
    assert "Other" in result.output


def test_cli_verbose_events(runner: CliRunner) -> None:
    """-v 选项应输出诊断事件."""
    result = runner.invoke(cli, [DATA.hex(), "-v"])

    assert result.exit_code == 0
    assert "nested_skip" in result.output


def test_cli_verbose_traceback(runner: CliRunner) -> None:
    """-v 选项应在出错时显示详细堆栈信息."""
    result = runner.invoke(cli, ["01", "-v"])

    assert result.exit_code != 0
    assert "Traceback" in result.output
