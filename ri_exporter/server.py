"""
ri_exporter/server.py - 메트릭 HTTP 엔드포인트

prometheus_client 내장 HTTP 서버로 /metrics를 노출합니다.
scrape 요청마다 ScrapeCollector가 수집 주기를 실행합니다.

사용법:
    registry = build_registry(exporter)
    serve(":9900", registry)  # 블로킹
"""

from __future__ import annotations

import logging
import threading

from prometheus_client import CollectorRegistry, start_http_server

from .exceptions import ConfigError
from .exporter import Exporter
from .metrics import ScrapeCollector

logger = logging.getLogger(__name__)

ALL_INTERFACES = "0.0.0.0"


def parse_listen_address(address: str) -> tuple[str, int]:
    """리슨 주소 파싱 ("host:port" 또는 ":port")

    IPv6는 "[::1]:9900" 형식을 사용합니다.

    Returns:
        (host, port) 튜플. host가 비어 있으면 모든 인터페이스

    Raises:
        ConfigError: 형식이 잘못되었거나 포트가 범위를 벗어난 경우
    """
    host, sep, port_text = address.strip().rpartition(":")
    if not sep:
        raise ConfigError("metrics-address", f"'{address}' 는 host:port 형식이 아닙니다")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port = int(port_text)
    except ValueError as e:
        raise ConfigError("metrics-address", f"포트가 숫자가 아닙니다: '{port_text}'", cause=e) from e

    if not 0 < port < 65536:
        raise ConfigError("metrics-address", f"포트 범위 초과: {port}")

    return host or ALL_INTERFACES, port


def build_registry(exporter: Exporter) -> CollectorRegistry:
    """ScrapeCollector만 등록된 전용 레지스트리 생성"""
    registry = CollectorRegistry()
    registry.register(ScrapeCollector(exporter))
    return registry


def serve(address: str, registry: CollectorRegistry, stop_event: threading.Event | None = None) -> None:
    """메트릭 서버를 시작하고 종료될 때까지 블로킹

    Args:
        address: 리슨 주소 (예: ":9900")
        registry: 노출할 레지스트리
        stop_event: set되면 서버 종료 (None이면 KeyboardInterrupt까지 대기)
    """
    host, port = parse_listen_address(address)
    server, thread = start_http_server(port, addr=host, registry=registry)
    logger.info(f"Listening on {host}:{port}")

    stop_event = stop_event or threading.Event()
    try:
        while thread.is_alive() and not stop_event.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        logger.info("종료 요청 수신")
    finally:
        server.shutdown()
        server.server_close()
