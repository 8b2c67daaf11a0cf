# ri_exporter/__init__.py
"""
ri_exporter - EC2 Reserved Instance 정규화 Prometheus 익스포터

running 인스턴스와 active Reserved Instance를 조회하고, 인스턴스 타입별 수량을
AWS 정규화 단위로 환산하여 Prometheus 게이지로 노출합니다.

아키텍처:
    ri_exporter/
    ├── normalize/      # 정규화 계수 테이블, 키 파싱, 정규화 알고리즘
    ├── inventory/      # EC2 인스턴스/예약 수량 수집 (boto3)
    ├── metrics/        # 게이지 상태 게시, scrape 컬렉터 (prometheus_client)
    ├── cli/            # Click CLI, Rich 콘솔
    ├── exporter.py     # 수집 주기 (fetch → normalize → publish)
    ├── server.py       # /metrics HTTP 엔드포인트
    ├── client.py       # retry 설정된 boto3 client
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from ri_exporter.normalize import normalize
    normalize({"c5.xlarge": 40, "c5.2xlarge": 50})  # {"c5": 280.0}
"""

from ri_exporter.config import get_version

__version__ = get_version()

__all__: list[str] = ["__version__"]
