"""json2tar 命令行工具."""

import contextlib
import sys
from typing import IO, TYPE_CHECKING, Any

from .api import convert
from .const import MAX_DEPTH
from .encoder import TarEntry
from .exceptions import Json2TarError
from .log import debug_logging
from .options import ConvertOption

if TYPE_CHECKING:
    import click as click_module
    from rich.console import Console
    from rich.text import Text
    from rich.tree import Tree
else:
    try:
        import click as click_module
        from rich.console import Console
        from rich.text import Text
        from rich.tree import Tree
    except ImportError:
        click_module = None
        Console = None
        Text = None
        Tree = None

click = click_module


if not click:

    def main() -> None:
        """入口函数 (缺少 click)."""
        print("错误: 未检测到 'click' 模块,无法运行 CLI 工具。", file=sys.stderr)
        print(
            "\n该功能属于可选组件,请通过以下命令安装依赖:\n"
            "  pip install 'json2tar[cli]'",
            file=sys.stderr,
        )
        sys.exit(1)

else:

    def _build_entry_tree(entries: list[TarEntry], title: str) -> Tree:
        """按路径段构建条目树.

        Args:
            entries: 按写出顺序排列的条目.
            title: 树根标签.

        Returns:
            Rich 树.
        """
        root = Tree(Text(title, style="bold white"))
        branches: dict[str, Any] = {}

        for entry in entries:
            parent_path, _, name = entry.path.rpartition("/")
            parent = branches.get(parent_path, root) if parent_path else root

            label = Text()
            if entry.kind == "directory":
                label.append(f"{name}/", style="bold blue")
                branches[entry.path] = parent.add(label)
            else:
                label.append(name, style="green")
                label.append(f" ({entry.size} B)", style="dim")
                parent.add(label)
        return root

    def _print_entry_tree(entries: list[TarEntry], title: str) -> None:
        """将条目树打印到 stderr (使用 Rich)."""
        if not Console:
            click.echo("错误: 未安装 rich 库,无法使用 Tree 视图.", err=True)
            return
        console = Console(stderr=True)
        console.print(_build_entry_tree(entries, title))

    @click.command(help="将 JSON 文档转换为 tar 归档")
    @click.argument("input_file", type=click.File("rb"), default="-")
    @click.option(
        "-o",
        "--output",
        "output_file",
        type=click.File("wb"),
        default="-",
        show_default=True,
        help="归档输出文件 (默认输出到 stdout)",
    )
    @click.option(
        "--decode-strings",
        is_flag=True,
        help="解码字符串值和字段名中的转义序列 (默认原样写出)",
    )
    @click.option(
        "--root-dir",
        is_flag=True,
        help="将所有条目放在显式的 root 目录下",
    )
    @click.option(
        "--eof-marker",
        is_flag=True,
        help="在归档末尾写入两个全零块",
    )
    @click.option(
        "--max-depth",
        type=click.IntRange(min=1),
        default=MAX_DEPTH,
        show_default=True,
        help="允许同时打开的容器数",
    )
    @click.option(
        "--list",
        "list_entries",
        is_flag=True,
        help="在 stderr 上以树状显示写出的条目 (需要 rich)",
    )
    @click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="显示详细的转换过程信息",
    )
    def cli(
        input_file: IO[bytes],
        output_file: IO[bytes],
        decode_strings: bool,
        root_dir: bool,
        eof_marker: bool,
        max_depth: int,
        list_entries: bool,
        verbose: bool,
    ) -> None:
        """将 JSON 文档转换为 tar 归档.

        Examples:
          # 从 stdin 读取, 写到 stdout
          echo '{"a": [1, "x"]}' | json2tar > out.tar

          # 指定输入和输出文件
          json2tar data.json -o data.tar

          # 放在 root 目录下并显示条目树
          json2tar data.json -o data.tar --root-dir --list
        """
        option = ConvertOption.NONE
        if decode_strings:
            option |= ConvertOption.DECODE_STRINGS
        if root_dir:
            option |= ConvertOption.ROOT_DIRECTORY
        if eof_marker:
            option |= ConvertOption.END_OF_ARCHIVE

        entries: list[TarEntry] = []
        on_entry = entries.append if list_entries or verbose else None

        log_context = debug_logging() if verbose else contextlib.nullcontext()
        try:
            with log_context:
                records = convert(
                    input_file,
                    output_file,
                    option=option,
                    max_depth=max_depth,
                    on_entry=on_entry,
                )
        except Json2TarError as e:
            if verbose:
                import traceback

                traceback.print_exc(file=sys.stderr)
            raise click.ClickException(str(e)) from e

        if verbose:
            click.echo(f"[DEBUG] 写出 {records} 条记录", err=True)
            for entry in entries:
                click.echo(f"[DEBUG] {entry.kind} {entry.path}", err=True)
        if list_entries:
            _print_entry_tree(entries, getattr(input_file, "name", "-"))

    def main() -> None:
        """入口函数."""
        cli()


if __name__ == "__main__":
    main()
