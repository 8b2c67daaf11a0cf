"""
ri_exporter/cli/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..normalize import InstanceTypeKey, normalization_factor

# 전역 콘솔 인스턴스 (stderr: stdout은 출력 데이터용)
console = Console(stderr=True, highlight=True, soft_wrap=True)

# 상태 심볼
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def get_rich_handler() -> logging.Handler:
    """Rich 로그 핸들러 생성"""
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    return handler


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def has_known_factor(raw: str) -> bool:
    return normalization_factor(InstanceTypeKey.parse(raw)) is not None


def build_counts_table(title: str, counts: Mapping[str, int]) -> Table:
    """인스턴스 타입별 원시 수량 테이블

    정규화 계수가 없는 타입은 계수 칸에 "-"를 표시합니다.
    """
    table = Table(title=title, title_justify="left")
    table.add_column("Type")
    table.add_column("Size")
    table.add_column("Count", justify="right")
    table.add_column("Factor", justify="right")

    for raw, count in sorted(counts.items()):
        key = InstanceTypeKey.parse(raw)
        factor = normalization_factor(key)
        table.add_row(key.family, key.size, str(count), "-" if factor is None else f"{factor:g}")

    return table


def build_normalized_table(title: str, totals: Mapping[str, float]) -> Table:
    """패밀리별 정규화 합계 테이블"""
    table = Table(title=title, title_justify="left")
    table.add_column("Type")
    table.add_column("Normalized units", justify="right")

    for family, total in sorted(totals.items()):
        table.add_row(family, f"{total:g}")

    return table
