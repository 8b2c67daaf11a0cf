"""
ri_exporter/cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    ri-exporter serve                   # /metrics 엔드포인트 실행 (기본 :9900)
    ri-exporter show                    # 1회 수집 후 결과 테이블 출력
    ri-exporter show --exposition       # Prometheus 텍스트 포맷으로 출력
    ri-exporter --version

    예시:
    ri-exporter serve --metrics-address 127.0.0.1:9900 --namespace cloud -r us-east-1
    ri-exporter show -p prod -r ap-northeast-2

모든 옵션은 환경변수로도 지정할 수 있습니다
(RI_EXPORTER_METRICS_ADDRESS, RI_EXPORTER_NAMESPACE, AWS_REGION, AWS_PROFILE).
"""

from __future__ import annotations

import click
from botocore.exceptions import ProfileNotFound
from prometheus_client import CollectorRegistry, generate_latest

from ..client import create_session
from ..config import (
    ENV_METRICS_ADDRESS,
    ENV_NAMESPACE,
    LogConfig,
    get_default_profile,
    get_default_region,
    get_version,
    settings,
)
from ..exceptions import ConfigError
from ..exporter import Exporter
from ..metrics import MetricPublisher
from .console import (
    build_counts_table,
    build_normalized_table,
    console,
    get_rich_handler,
    has_known_factor,
    print_error,
    print_success,
    print_warning,
)

region_option = click.option(
    "-r",
    "--region",
    default=get_default_region,
    show_default="AWS_REGION 또는 us-east-1",
    help="조회할 AWS 리전",
)
profile_option = click.option(
    "-p",
    "--profile",
    default=get_default_profile,
    help="AWS 프로파일 (없으면 기본 자격 증명 체인)",
)
namespace_option = click.option(
    "--namespace",
    envvar=ENV_NAMESPACE,
    default=settings.DEFAULT_NAMESPACE,
    show_default=True,
    help="Prometheus 메트릭 네임스페이스",
)


def _open_session(profile: str | None, region: str):
    """boto3 Session 생성 (없는 프로파일이면 에러 출력 후 종료)"""
    try:
        return create_session(profile, region)
    except ProfileNotFound as e:
        print_error(str(e))
        raise SystemExit(1) from e


@click.group()
@click.version_option(get_version(), "-V", "--version", prog_name="ri-exporter")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """EC2 Reserved Instance 정규화 메트릭 익스포터"""
    ctx.ensure_object(dict)
    log_config = LogConfig.from_env()
    if verbose:
        log_config.level = "DEBUG"
    ctx.obj["log_config"] = log_config


@cli.command()
@click.option(
    "--metrics-address",
    envvar=ENV_METRICS_ADDRESS,
    default=settings.DEFAULT_METRICS_ADDRESS,
    show_default=True,
    help="Prometheus 메트릭 요청을 받을 주소",
)
@namespace_option
@region_option
@profile_option
@click.pass_context
def serve(ctx: click.Context, metrics_address: str, namespace: str, region: str, profile: str | None) -> None:
    """/metrics 엔드포인트 실행 (scrape마다 EC2 조회)"""
    from ..server import build_registry, parse_listen_address, serve as run_server

    ctx.obj["log_config"].apply()

    try:
        parse_listen_address(metrics_address)
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    exporter = Exporter.from_session(_open_session(profile, region), region, MetricPublisher(namespace))
    run_server(metrics_address, build_registry(exporter))


@cli.command()
@namespace_option
@region_option
@profile_option
@click.option("--exposition", is_flag=True, help="Prometheus 텍스트 포맷으로 출력")
@click.pass_context
def show(ctx: click.Context, namespace: str, region: str, profile: str | None, exposition: bool) -> None:
    """1회 수집 후 원시/정규화 수량 출력"""
    ctx.obj["log_config"].apply(handler=get_rich_handler())

    publisher = MetricPublisher(namespace)
    exporter = Exporter.from_session(_open_session(profile, region), region, publisher)

    with console.status(f"EC2 인벤토리 조회 중 ({region})..."):
        result = exporter.run_cycle()

    if not result.success:
        print_error(f"수집 실패: {result.error}")
        raise SystemExit(1)

    if exposition:
        registry = CollectorRegistry()
        registry.register(publisher)
        click.echo(generate_latest(registry).decode("utf-8"), nl=False)
        return

    snapshot = result.snapshot
    console.print(build_counts_table("Running instances", snapshot.instances))
    console.print(build_counts_table("Active reserved instances", snapshot.reserved))
    console.print(build_normalized_table("Normalized instances", result.normalized_instances))
    console.print(build_normalized_table("Normalized reserved instances", result.normalized_reserved))

    unknown = sorted(raw for raw in {**snapshot.instances, **snapshot.reserved} if not has_known_factor(raw))
    if unknown:
        print_warning(f"정규화 계수가 없어 0으로 계산된 타입: {', '.join(unknown)}")

    print_success(f"{region}: 인스턴스 {snapshot.total_instances}개, 예약 {snapshot.total_reserved}개 ({result.duration:.2f}s)")


def main() -> None:
    """console_script 엔트리포인트"""
    cli(obj={})


if __name__ == "__main__":
    main()
