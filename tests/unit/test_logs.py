"""Tests for the logging helpers."""

import numpy as np

from videotaxi.common import Milliseconds, Range, Seconds
from videotaxi.common.logs import FloatPrecisionProcessor, _relative_time_processor


class TestFloatPrecisionProcessor:
  def test_rounds_nested_floats(self):
    processor = FloatPrecisionProcessor(digits=2)
    event_dict = {
      "latency": 0.123456,
      "ranges": [1.005001, {"to_ms": 2.71828}],
      "samples": np.array([0.1111, 0.2222]),
      "ok": True,
      "count": 3,
    }

    result = processor(None, "info", event_dict)

    assert result["latency"] == 0.12
    assert result["ranges"] == [1.01, {"to_ms": 2.72}]
    assert result["samples"] == [0.11, 0.22]
    assert result["ok"] is True
    assert result["count"] == 3

  def test_skips_excluded_fields(self):
    processor = FloatPrecisionProcessor(digits=1, not_fields=frozenset({"exact"}))

    result = processor(None, "info", {"exact": 0.123, "rounded": 0.123})

    assert result == {"exact": 0.123, "rounded": 0.1}


def test_relative_time_processor_adds_timestamp():
  result = _relative_time_processor(None, "info", {"event": "hello"})
  assert result["timestamp"].startswith("+")


def test_units_render_compactly():
  assert str(Seconds(2.0)) == "2.0s"
  assert str(Range(Milliseconds(0), Milliseconds(500))) == "0ms–500ms"
