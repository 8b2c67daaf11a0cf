"""
ri_exporter/cli - Click CLI 및 Rich 콘솔 출력
"""

from .app import cli, main

__all__: list[str] = ["cli", "main"]
