#!/usr/bin/env python3
"""
TicTacToe Vision 主入口文件

提供命令行接口：查看系统信息、查看配置、对图像文件运行棋盘识别。
"""

import json
import sys
from typing import Optional, Tuple

import click
import cv2
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tictactoe_vision import __version__, __description__
from tictactoe_vision.src.board_cells_recognition.core.config import ConfigManager
from tictactoe_vision.src.board_cells_recognition.core.interfaces import (
    BoardRecognitionError,
    COL_BLUE,
    COL_RED,
)
from tictactoe_vision.src.board_cells_recognition.core.logger import configure_logging_from_config
from tictactoe_vision.src.board_cells_recognition.inference import FrameProcessor

console = Console()

STATE_STYLES = {COL_RED: "bold red", COL_BLUE: "bold blue"}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("TicTacToe Vision\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    console.print(Panel(
        banner_text,
        title="井字棋棋盘视觉系统",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    ))


def load_config(config: Optional[str]) -> ConfigManager:
    """加载配置，出错时给出提示并退出"""
    try:
        return ConfigManager(config)
    except BoardRecognitionError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="TicTacToe Vision")
def cli():
    """井字棋棋盘视觉系统 - 棋盘定位、格子分割与状态维护"""


@cli.command()
@click.option('--config', type=click.Path(), help='配置文件路径')
def info(config: Optional[str]):
    """显示系统信息"""
    print_banner()

    manager = load_config(config)
    status_text = Text()
    status_text.append("二值化阈值: ", style="white")
    status_text.append(f"{manager.get('preprocessing.threshold')}\n", style="green")
    status_text.append("排序策略: ", style="white")
    status_text.append(f"{manager.get('ordering.strategy')}\n", style="green")
    status_text.append("日志级别: ", style="white")
    status_text.append(f"{manager.get('logging.level')}", style="green")

    console.print(Panel(status_text, title="当前配置", border_style="yellow"))


@cli.command(name='show-config')
@click.option('--config', type=click.Path(), help='配置文件路径')
def show_config(config: Optional[str]):
    """以YAML格式输出完整配置"""
    manager = load_config(config)
    console.print(yaml.dump(manager.config, default_flow_style=False, allow_unicode=True))


@cli.command()
@click.argument('images', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(), help='配置文件路径')
@click.option('--strategy', type=click.Choice(['row_bucket', 'scan_order']),
              help='格子排序策略，覆盖配置文件')
@click.option('--json', 'as_json', is_flag=True, help='以JSON格式输出棋盘消息')
def process(images: Tuple[str, ...], config: Optional[str], strategy: Optional[str], as_json: bool):
    """按顺序把图像文件作为连续帧进行棋盘识别"""
    manager = load_config(config)
    if strategy:
        manager.set('ordering.strategy', strategy)

    configure_logging_from_config(manager.config)
    processor = FrameProcessor(manager.config)

    failures = 0
    for path in images:
        image = cv2.imread(path)
        if image is None:
            console.print(f"[red]无法读取图像: {path}[/red]")
            failures += 1
            continue

        result = processor.process_frame(image)
        if not result.success:
            failures += 1
            console.print(f"[yellow]{path}: 处理失败 - {result.error}[/yellow]")
            continue

        if as_json:
            console.print_json(json.dumps(processor.board.to_message().to_dict()))
        else:
            console.print(_cells_table(path, processor, result.processing_time))

    sys.exit(1 if failures else 0)


def _cells_table(title: str, processor: FrameProcessor, processing_time: float) -> Table:
    table = Table(title=f"{title} ({processing_time:.1f} ms)")
    table.add_column("格子", justify="right")
    table.add_column("质心")
    table.add_column("面积", justify="right")
    table.add_column("状态")

    for index, cell in enumerate(processor.board):
        style = STATE_STYLES.get(cell.state, "white")
        table.add_row(
            str(index),
            str(cell.centroid),
            f"{cell.area:.0f}",
            Text(cell.state, style=style),
        )

    return table


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
