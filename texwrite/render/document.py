"""
LaTeX 文档层

负责导言区（文档类、宏包、标题信息）和文档结尾，正文由 LatexRenderer 渲染
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..config import DocumentConfig, PackageSpec, RenderOptions
from ..models import Code, Equation, Graphic, Node, walk
from .latex import LatexRenderer
from .sink import OutputSink, StreamSink, StringSink

logger = logging.getLogger(__name__)


# 默认导言区模板
DEFAULT_HEADER_TEMPLATE = r"""\documentclass{% if class_options %}[{{ class_options | join(', ') }}]{% endif %}{ {{- document_class -}} }
{% for package in packages %}
\usepackage{% if package.options %}[{{ package.options | join(', ') }}]{% endif %}{ {{- package.name -}} }
{% endfor %}
{% if title %}
\title{ {{- title -}} }
{% endif %}
{% if author %}
\author{ {{- author -}} }
{% endif %}
{% if date is not none %}
\date{ {{- date -}} }
{% endif %}

\begin{document}
{% if title %}

\maketitle
{% endif %}

"""

FOOTER = r"\end{document}"

# 节点类型所需的宏包
NODE_PACKAGES: dict[type[Node], str] = {
    Graphic: "graphicx",
    Code: "listings",
    Equation: "amsmath",
}

_ENV_OPTIONS = {"trim_blocks": True, "lstrip_blocks": True, "keep_trailing_newline": True}


def _as_nodes(nodes: Node | Iterable[Node]) -> list[Node]:
    if isinstance(nodes, Node):
        return [nodes]
    return list(nodes)


def collect_packages(nodes: Node | Iterable[Node]) -> list[str]:
    """
    遍历内容树，返回渲染结果所需的宏包（按首次出现顺序）

    TextFromFile 的文件内容不会被读取，其中用到的宏包需要手动声明。
    """
    packages: list[str] = []
    for root in _as_nodes(nodes):
        for node in walk(root):
            package = NODE_PACKAGES.get(type(node))
            if package and package not in packages:
                packages.append(package)
    return packages


class LatexDocument:
    """
    LaTeX 文档

    在输出目标上依次写入导言区、正文节点和文档结尾。
    调用顺序由调用方决定，本类不检查 header/footer 是否成对出现。
    """

    def __init__(
        self,
        sink: OutputSink,
        config: DocumentConfig | None = None,
        options: RenderOptions | None = None,
        template_path: str | Path | None = None,
    ):
        """
        初始化文档

        Args:
            sink: 输出目标
            config: 文档配置
            options: 渲染选项
            template_path: 自定义导言区模板文件路径（jinja2）
        """
        self.sink = sink
        self.config = config or DocumentConfig()
        self.renderer = LatexRenderer(options)
        self._packages: dict[str, PackageSpec] = {}
        for package in self.config.packages:
            self.add_package(package.name, package.options)

        if template_path:
            template_dir = Path(template_path).parent
            template_name = Path(template_path).name
            env = Environment(loader=FileSystemLoader(str(template_dir)), **_ENV_OPTIONS)
            self.template = env.get_template(template_name)
        else:
            self.template = Environment(**_ENV_OPTIONS).from_string(DEFAULT_HEADER_TEMPLATE)

    @property
    def packages(self) -> list[PackageSpec]:
        return list(self._packages.values())

    def add_package(self, name: str, options: list[str] | None = None) -> None:
        """声明宏包，重复声明时保留第一次的选项"""
        if name not in self._packages:
            self._packages[name] = PackageSpec(name=name, options=options or [])

    def require_packages(self, nodes: Node | Iterable[Node]) -> None:
        """声明内容所需的宏包"""
        for name in collect_packages(nodes):
            self.add_package(name)

    def write_header(self, title: str | None = None, author: str | None = None) -> None:
        """
        写入导言区并开始正文

        Args:
            title: 标题，默认使用配置中的标题
            author: 作者，默认使用配置中的作者
        """
        header = self.template.render(
            document_class=self.config.document_class,
            class_options=self.config.class_options,
            packages=self.packages,
            title=title or self.config.title,
            author=author or self.config.author,
            date=self.config.date,
        )
        self.sink.write_fragment(header)

    def write(self, node: Node) -> None:
        """渲染节点；先渲染到内存，成功后再写入输出目标"""
        self.sink.write_fragment(self.renderer.render_to_string(node))

    def write_footer(self) -> None:
        self.sink.write_line(FOOTER)


def render_document(
    nodes: Node | Iterable[Node],
    config: DocumentConfig | None = None,
    options: RenderOptions | None = None,
    template_path: str | Path | None = None,
) -> str:
    """
    渲染完整的 LaTeX 文档

    Args:
        nodes: 正文节点（单个或多个）
        config: 文档配置
        options: 渲染选项
        template_path: 自定义导言区模板

    Returns:
        完整的 LaTeX 文档字符串
    """
    nodes = _as_nodes(nodes)
    sink = StringSink()
    document = LatexDocument(sink, config, options, template_path)
    if document.config.auto_packages:
        document.require_packages(nodes)

    document.write_header()
    for node in nodes:
        document.write(node)
    document.write_footer()
    return sink.getvalue()


def render_to_file(
    nodes: Node | Iterable[Node],
    output_path: str | Path,
    config: DocumentConfig | None = None,
    options: RenderOptions | None = None,
    template_path: str | Path | None = None,
) -> Path:
    """
    渲染完整文档并保存到文件；渲染失败时不会创建或改动输出文件

    Returns:
        输出文件路径
    """
    output_path = Path(output_path)
    options = options or RenderOptions()
    latex_content = render_document(nodes, config, options, template_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding=options.encoding) as f:
        f.write(latex_content)

    logger.info("已写入 %s", output_path)
    return output_path


@contextmanager
def open_document(
    output_path: str | Path,
    config: DocumentConfig | None = None,
    options: RenderOptions | None = None,
    template_path: str | Path | None = None,
) -> Iterator[LatexDocument]:
    """
    打开文件并返回 LatexDocument，退出时关闭文件

    与 render_to_file 不同，这里逐个节点写入，出错前已写入的内容会保留在文件中。
    """
    output_path = Path(output_path)
    options = options or RenderOptions()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding=options.encoding) as f:
        logger.debug("打开文档 %s", output_path)
        yield LatexDocument(StreamSink(f), config, options, template_path)
