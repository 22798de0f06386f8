"""
Tests for the shared compute helpers: scalar types, tolerance tiers and
timing.
"""

import numpy as np
import pytest

from pymatrix.core.compute import (
    DEFAULT_DTYPE,
    SUPPORTED_DTYPES,
    Timer,
    is_close,
    resolve_dtype,
    select_tolerance,
)
from pymatrix.core.compute.precision import result_dtype
from pymatrix.core.compute.tolerances import FP32, FP64
from pymatrix.core.exceptions import ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Precision
# ═══════════════════════════════════════════════════════════════════════


class TestResolveDtype:

    def test_none_gives_default(self):
        assert resolve_dtype(None) == DEFAULT_DTYPE == np.float64

    def test_supported_types(self):
        for dtype in SUPPORTED_DTYPES:
            assert resolve_dtype(dtype) == dtype

    def test_string_names(self):
        assert resolve_dtype('float32') == np.float32

    def test_integer_rejected(self):
        with pytest.raises(ValidationError):
            resolve_dtype(np.int32)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError):
            resolve_dtype("not a dtype")


class TestResultDtype:

    def test_all_float32(self):
        assert result_dtype(np.dtype(np.float32), np.dtype(np.float32)) == np.float32

    def test_mixed_promotes(self):
        assert result_dtype(np.dtype(np.float32), np.dtype(np.float64)) == np.float64


class TestIsClose:

    def test_scalars(self):
        assert is_close(1.0, 1.0 + 1e-15)
        assert not is_close(1.0, 1.001)

    def test_relative_to_second_argument(self):
        # |a - b| <= atol + rtol * |b|
        assert is_close(0.0, 1.0, rtol=1.0, atol=0.0)
        assert not is_close(1.0, 0.0, rtol=1.0, atol=0.0)

    def test_elementwise(self):
        result = is_close(np.array([1.0, 2.0]), np.array([1.0, 2.5]), atol=0.1)
        np.testing.assert_array_equal(result, [True, False])


# ═══════════════════════════════════════════════════════════════════════
# Tolerance tiers
# ═══════════════════════════════════════════════════════════════════════


class TestSelectTolerance:

    def test_float64_tier(self):
        assert select_tolerance(np.float64) is FP64

    def test_float32_tier(self):
        assert select_tolerance(np.float32) is FP32

    def test_float32_is_looser(self):
        assert FP32.rtol > FP64.rtol
        assert FP32.eigen_eps > FP64.eigen_eps


# ═══════════════════════════════════════════════════════════════════════
# Timing
# ═══════════════════════════════════════════════════════════════════════


class TestTimer:

    def test_sections_recorded(self):
        timer = Timer()
        timer.start()
        with timer.section('work'):
            sum(range(100))
        timer.stop()
        result = timer.result()
        assert result['total_seconds'] >= 0.0
        assert 'work' in result

    def test_repeated_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('loop'):
            pass
        first = timer._elapsed['loop']
        with timer.section('loop'):
            pass
        timer.stop()
        assert timer.result()['loop'] >= first
        assert timer.calls('loop') == 2
        assert timer.calls('never') == 0

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()
