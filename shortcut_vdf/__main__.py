"""shortcut_vdf 命令行工具."""

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from . import VdfOption, loads
from .diagnostics import DecodeEvent
from .exceptions import VdfDecodeError
from .struct import Registry

if TYPE_CHECKING:
    import click as click_module
    from rich.console import Console
    from rich.syntax import Syntax
    from rich.text import Text
    from rich.tree import Tree
else:
    try:
        import click as click_module
        from rich.console import Console
        from rich.syntax import Syntax
        from rich.text import Text
        from rich.tree import Tree
    except ImportError:
        click_module = None
        Console = None
        Syntax = None
        Text = None
        Tree = None

click = click_module


if not click:

    def main() -> None:
        """入口函数 (缺少 click)."""
        print("错误: 未检测到 'click' 模块,无法运行 CLI 工具。", file=sys.stderr)
        print(
            "\n该功能属于可选组件,请通过以下命令安装依赖:\n"
            "  pip install 'shortcut-vdf[cli]'",
            file=sys.stderr,
        )
        sys.exit(1)

else:

    def _read_hex_file(file_path: Path) -> bytes:
        """读取并解析十六进制文本文件.

        Raises:
            UnicodeDecodeError: 文件不是文本.
            ValueError: 如果文件内容不是有效的十六进制字符串.
        """
        hex_data = file_path.read_text(encoding="utf-8").strip()

        cleaned = "".join(hex_data.split())
        if not cleaned or not all(c in "0123456789abcdefABCDEF" for c in cleaned):
            raise ValueError("不是有效的十六进制字符串")

        return bytes.fromhex(cleaned)

    def _build_rich_tree(registry: Registry, title: str) -> "Tree":
        """构建 Rich 树: 集合 -> 条目 -> 属性."""
        root = Tree(Text(title, style="bold white"))

        for index, entry in registry.items():
            label = Text()
            label.append(f"[{index}] ", style="bold blue")
            label.append(f"Entry ({len(entry)})", style="bold yellow")
            branch = root.add(label)

            for name, value in entry.items():
                leaf = Text()
                leaf.append(f"{name}: ", style="cyan")
                # 整数属性已渲染为十进制字符串
                leaf.append(value, style="magenta" if value.isdigit() else "green")
                branch.add(leaf)

        return root

    def _echo_event(event: DecodeEvent) -> None:
        loc = ".".join(event.loc)
        suffix = f" {event.message}" if event.message else ""
        click.echo(f"[DEBUG] @{event.pos} {event.kind} {loc}{suffix}", err=True)

    def _decode_and_print(
        data: bytes,
        output_format: str,
        output_file: str | None,
        verbose: bool,
        option: VdfOption,
    ) -> None:
        """解码并输出结果."""
        if verbose:
            click.echo(f"[DEBUG] 数据大小: {len(data)} 字节", err=True)

        try:
            registry = loads(data, option=option, sink=_echo_event if verbose else None)
        except VdfDecodeError as e:
            if verbose:
                import traceback

                traceback.print_exc(file=sys.stderr)
            raise click.ClickException(f"解码失败 [{e.kind.value}]: {e}") from e

        result = registry.to_dict()

        if output_format == "tree":
            if not Console:
                raise click.ClickException("未安装 rich 库,无法使用 Tree 视图.")
            tree = _build_rich_tree(registry, f"shortcuts ({len(registry)})")
            if output_file:
                with open(output_file, "w", encoding="utf-8") as f:
                    Console(file=f).print(tree)
                click.echo(f"结果已保存到: {output_file}", err=True)
            else:
                Console().print(tree)
            return

        output_text: str | None = None

        if output_format == "json":
            output_text = json.dumps(result, indent=2, ensure_ascii=False)
        elif output_file or not Console:
            import pprint

            output_text = pprint.pformat(result, width=100)

        if output_file:
            assert output_text is not None
            Path(output_file).write_text(output_text, encoding="utf-8")
            click.echo(f"结果已保存到: {output_file}", err=True)

        elif Console:
            console = Console()
            if output_format == "json":
                assert output_text is not None
                console.print(
                    Syntax(output_text, "json", theme="monokai", word_wrap=True)
                )
            else:  # pretty
                console.print(result)

        else:
            assert output_text is not None
            click.echo(output_text)

    @click.command(help="shortcuts.vdf 解码命令行工具")
    @click.argument("encoded", required=False)
    @click.option(
        "-f",
        "--file",
        "file_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="从文件读取数据 (二进制 shortcuts.vdf 或十六进制文本)",
    )
    @click.option(
        "--format",
        "output_format",
        type=click.Choice(["pretty", "json", "tree"]),
        default="pretty",
        show_default=True,
        help="输出格式",
    )
    @click.option(
        "-o",
        "--output",
        "output_file",
        type=click.Path(dir_okay=False, writable=True),
        help="将输出保存到文件 (如不指定则输出到控制台)",
    )
    @click.option(
        "--lenient",
        is_flag=True,
        help="容忍缺失的结束标记 (数据被截断的文件)",
    )
    @click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="显示详细的解码过程信息",
    )
    def cli(
        encoded: str | None,
        file_path: Path | None,
        output_format: str,
        output_file: str | None,
        lenient: bool,
        verbose: bool,
    ) -> None:
        """shortcuts.vdf 解码命令行工具.

        Examples:
          # 解码 Steam 的 shortcuts.vdf
          shortcut-vdf -f userdata/12345/config/shortcuts.vdf

          # 直接解码十六进制数据
          shortcut-vdf "0073686f727463757473000008"

          # 以 JSON 格式输出结果
          shortcut-vdf -f shortcuts.vdf --format json
        """
        if encoded and file_path:
            raise click.UsageError("不能同时指定 ENCODED 数据和 --file 参数")
        if not encoded and not file_path:
            raise click.UsageError("必须指定 ENCODED 数据或 --file 参数")

        if file_path:
            try:
                data = _read_hex_file(file_path)
                if verbose:
                    click.echo("[DEBUG] 从文件读取十六进制数据 (文本模式)", err=True)
            except (UnicodeDecodeError, ValueError):
                data = file_path.read_bytes()
                if verbose:
                    click.echo("[DEBUG] 从文件读取二进制数据 (二进制模式)", err=True)
        else:
            assert encoded is not None
            try:
                data = bytes.fromhex(encoded)
            except ValueError as e:
                raise click.BadParameter(f"无效的十六进制格式 - {e}") from e

        option = VdfOption.LENIENT_EOF if lenient else VdfOption.NONE
        _decode_and_print(data, output_format, output_file, verbose, option)

    def main() -> None:
        """入口函数."""
        cli()


if __name__ == "__main__":
    main()
