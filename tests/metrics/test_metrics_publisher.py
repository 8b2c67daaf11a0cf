"""
tests/metrics/test_metrics_publisher.py - ri_exporter/metrics/publisher.py 테스트
"""

import threading

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from ri_exporter.exceptions import MalformedKeyError
from ri_exporter.metrics import GAUGE_HELP, MetricPublisher, PublishedState


@pytest.fixture
def publisher():
    return MetricPublisher(namespace="cloud")


@pytest.fixture
def registry(publisher):
    registry = CollectorRegistry()
    registry.register(publisher)
    return registry


def sample(registry, name, **labels):
    return registry.get_sample_value(name, labels)


class TestMetricNames:
    """메트릭 이름 테스트"""

    def test_metric_name(self, publisher):
        assert publisher.metric_name("instances") == "cloud_aws_compute_ec2_ri_instances"

    def test_custom_namespace(self):
        publisher = MetricPublisher(namespace="prod")
        assert publisher.metric_name("normalized_instances") == "prod_aws_compute_ec2_ri_normalized_instances"

    def test_empty_namespace(self):
        publisher = MetricPublisher(namespace="")
        assert publisher.metric_name("instances") == "aws_compute_ec2_ri_instances"

    def test_describe_has_four_families(self, publisher):
        names = [family.name for family in publisher.describe()]

        assert names == [
            "cloud_aws_compute_ec2_ri_instances",
            "cloud_aws_compute_ec2_ri_reserved_instances",
            "cloud_aws_compute_ec2_ri_normalized_instances",
            "cloud_aws_compute_ec2_ri_normalized_reserve_instances",
        ]

    def test_help_text(self, publisher, registry):
        publisher.publish({"c5.large": 1}, {}, {"c5": 1.0}, {})
        output = generate_latest(registry).decode()

        for help_text in GAUGE_HELP.values():
            assert help_text in output


class TestPublish:
    """publish 테스트"""

    def test_publish_all_families(self, publisher, registry):
        publisher.publish(
            {"c5.xlarge": 40, "m4.large": 100},
            {"c5.xlarge": 30},
            {"c5": 80.0, "m4": 100.0},
            {"c5": 60.0},
        )

        assert sample(registry, "cloud_aws_compute_ec2_ri_instances", type="c5", size="xlarge") == 40.0
        assert sample(registry, "cloud_aws_compute_ec2_ri_instances", type="m4", size="large") == 100.0
        assert sample(registry, "cloud_aws_compute_ec2_ri_reserved_instances", type="c5", size="xlarge") == 30.0
        assert sample(registry, "cloud_aws_compute_ec2_ri_normalized_instances", type="c5") == 80.0
        assert sample(registry, "cloud_aws_compute_ec2_ri_normalized_reserve_instances", type="c5") == 60.0

    def test_stale_labels_removed(self, publisher, registry):
        """N 주기에만 있던 label은 N+1 주기 이후 사라짐"""
        publisher.publish({"c5.xlarge": 1, "r4.large": 2}, {"r4.large": 2}, {"c5": 2.0, "r4": 2.0}, {"r4": 2.0})
        publisher.publish({"c5.xlarge": 5}, {}, {"c5": 10.0}, {})

        assert sample(registry, "cloud_aws_compute_ec2_ri_instances", type="c5", size="xlarge") == 5.0
        assert sample(registry, "cloud_aws_compute_ec2_ri_instances", type="r4", size="large") is None
        assert sample(registry, "cloud_aws_compute_ec2_ri_reserved_instances", type="r4", size="large") is None
        assert sample(registry, "cloud_aws_compute_ec2_ri_normalized_instances", type="r4") is None
        assert sample(registry, "cloud_aws_compute_ec2_ri_normalized_reserve_instances", type="r4") is None

        output = generate_latest(registry).decode()
        assert 'type="r4"' not in output

    def test_state_before_publish_has_no_samples(self, publisher):
        assert publisher.state == PublishedState()

    def test_state_is_read_only(self, publisher):
        state = publisher.publish({"c5.large": 1}, {}, {"c5": 1.0}, {})

        with pytest.raises(TypeError):
            state.normalized_instances["m4"] = 1.0  # type: ignore[index]

    def test_publish_copies_inputs(self, publisher):
        """게시 후 입력 맵 변경이 상태에 반영되지 않음"""
        normalized = {"c5": 1.0}
        publisher.publish({"c5.large": 1}, {}, normalized, {})
        normalized["c5"] = 99.0

        assert publisher.state.normalized_instances["c5"] == 1.0

    def test_malformed_raw_key_keeps_previous_state(self, publisher):
        publisher.publish({"c5.large": 1}, {}, {"c5": 1.0}, {})

        with pytest.raises(MalformedKeyError):
            publisher.publish({"c5": 1}, {}, {}, {})

        assert publisher.state.instances == {("c5", "large"): 1.0}

    def test_concurrent_publish_and_collect(self, publisher):
        """동시 게시 중에도 collect는 항상 완전한 상태만 관측"""
        errors = []
        stop = threading.Event()

        def writer():
            for i in range(200):
                publisher.publish({"c5.large": i, "m4.large": i}, {}, {"c5": float(i), "m4": float(i)}, {})
            stop.set()

        def reader():
            while not stop.is_set():
                families = {family.name: family for family in publisher.collect()}
                samples = families["cloud_aws_compute_ec2_ri_normalized_instances"].samples
                if samples and len(samples) != 2:
                    errors.append(len(samples))

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
