"""
texwrite CLI 命令行入口

提供三个命令：
- build: 将 YAML 大纲渲染为 .tex 文件
- preview: 在终端中预览渲染结果
- example: 生成示例文档
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from .config import DocumentConfig, load_config, load_outline
from .exceptions import TexwriteError
from .models import bloc, itemize, section, text
from .render import render_document, render_to_file


app = typer.Typer(
    name="texwrite",
    help="texwrite - 以节点树构建 LaTeX 文档",
    add_completion=False,
)

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command("build")
def build(
    outline_file: Path = typer.Argument(
        ...,
        help="YAML 大纲文件路径",
        exists=True,
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="输出的 .tex 文件路径（默认与大纲同名）",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env", "-e",
        help=".env 配置文件路径",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """
    将 YAML 大纲渲染为 LaTeX 文件

    示例:
        texwrite build report.yaml -o output/report.tex
    """
    _setup_logging(verbose)
    output_file = output_file or outline_file.with_suffix(".tex")

    try:
        config = load_config(env_file)
        outline = load_outline(outline_file, defaults=config.document)
        render_to_file(outline.content, output_file, outline.document, config.render)
    except (TexwriteError, OSError, ValidationError) as e:
        console.print(f"[red]错误: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(
        "[bold]渲染完成[/bold]\n"
        f"大纲文件: {outline_file}\n"
        f"顶层节点: {len(outline.content)}\n"
        f"输出文件: {output_file}",
        border_style="green",
    ))


@app.command("preview")
def preview(
    outline_file: Path = typer.Argument(
        ...,
        help="YAML 大纲文件路径",
        exists=True,
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env", "-e",
        help=".env 配置文件路径",
    ),
) -> None:
    """在终端中高亮显示渲染结果，不写入文件"""
    try:
        config = load_config(env_file)
        outline = load_outline(outline_file, defaults=config.document)
        latex = render_document(outline.content, outline.document, config.render)
    except (TexwriteError, OSError, ValidationError) as e:
        console.print(f"[red]错误: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(Syntax(latex, "latex", line_numbers=True))


@app.command("example")
def example(
    output_file: Path = typer.Option(
        Path("out.tex"),
        "--output", "-o",
        help="输出的 .tex 文件路径",
    ),
) -> None:
    """生成一个包含摘要和列表的示例文档"""
    abstract = bloc("abstract", text("This document is an example of use of texwrite"))

    countries = ["France", "UK", "Germany", "Italy"]
    examples = section(
        "Examples",
        text("Here is some countries in Europe"),
        itemize(*(text(country) for country in countries)),
    )

    config = DocumentConfig(title="Example of use of texwrite", author="texwrite")
    render_to_file([abstract, examples], output_file, config)
    console.print(f"[green]✓ 示例文档已保存到: {output_file}[/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
