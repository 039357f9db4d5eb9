# tests/core/test_custom_metrics.py

from datetime import datetime, timedelta, timezone

from kubestats.core.custom_metrics import custom_metric_name, decode_custom_metric, newest_value
from kubestats.models.cadvisor import MetricSpec, MetricVal
from kubestats.models.metrics import MetricType, ValueType

T0 = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _val(seconds, value=0, float_value=0.0, label=""):
    return MetricVal(timestamp=T0 + timedelta(seconds=seconds), value=value, float_value=float_value, label=label)


def test_newest_integer_gauge_sample_wins():
    spec = MetricSpec(name="foo", type="gauge", format="int")

    decoded = decode_custom_metric(spec, [_val(1, value=5), _val(2, value=9)])

    assert decoded.metric_type == MetricType.GAUGE
    assert decoded.value_type == ValueType.INT64
    assert decoded.int_value == 9
    assert custom_metric_name(spec.name) == "custom/foo"


def test_order_of_samples_does_not_matter():
    spec = MetricSpec(name="foo", type="cumulative", format="int")

    decoded = decode_custom_metric(spec, [_val(2, value=9), _val(1, value=5)])

    assert decoded.metric_type == MetricType.CUMULATIVE
    assert decoded.int_value == 9


def test_ties_resolve_to_first_sample():
    first = _val(1, value=1, label="first")
    second = _val(1, value=2, label="second")

    assert newest_value([first, second]) is first


def test_float_format_is_narrowed_to_single_precision():
    spec = MetricSpec(name="ratio", type="gauge", format="float")

    decoded = decode_custom_metric(spec, [_val(1, float_value=0.1)])

    assert decoded.value_type == ValueType.FLOAT
    assert decoded.float_value != 0.1
    assert abs(decoded.float_value - 0.1) < 1e-7


def test_unknown_type_is_skipped():
    spec = MetricSpec(name="foo", type="histogram", format="int")

    assert decode_custom_metric(spec, [_val(1, value=5)]) is None


def test_unknown_format_is_skipped():
    spec = MetricSpec(name="foo", type="gauge", format="bytes")

    assert decode_custom_metric(spec, [_val(1, value=5)]) is None


def test_no_samples_is_skipped():
    spec = MetricSpec(name="foo", type="gauge", format="int")

    assert decode_custom_metric(spec, []) is None
