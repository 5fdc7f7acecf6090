"""
Tests for arc-flash incident energy and PPE classification.
"""

import math
import re

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.arc_flash import (
    DEFAULT_WORKING_DISTANCE_MM,
    arc_flash,
    classify_ppe,
)


class TestIncidentEnergy:
    def test_low_voltage_panel(self):
        """480 V, 20 kA, 0.1 s at 455 mm."""
        res = arc_flash(0.48, 20.0, 0.1, 455.0)
        expected = 512000 * 0.48 * 20.0 * 0.1 / 455.0 ** 2
        assert res.result == pytest.approx(expected, rel=1e-9)
        assert res.unit == 'cal/cm²'
        assert res.values['boundary_mm'] == pytest.approx(640.0, rel=1e-9)
        assert res.values['ppe_level'] == 1

    def test_default_working_distance(self):
        """D = 0 (unset) falls back to 455 mm."""
        defaulted = arc_flash(0.48, 20.0, 0.1, 0.0)
        explicit = arc_flash(0.48, 20.0, 0.1, DEFAULT_WORKING_DISTANCE_MM)
        assert defaulted.result == explicit.result
        assert defaulted.values['working_distance_mm'] == 455.0

    def test_energy_falls_with_distance_squared(self):
        near = arc_flash(4.16, 25.0, 0.2, 300.0)
        far = arc_flash(4.16, 25.0, 0.2, 600.0)
        assert near.result / far.result == pytest.approx(4.0, rel=1e-9)

    def test_boundary_energy_is_threshold(self):
        """At D = Db the incident energy is exactly 1.2 cal/cm²."""
        res = arc_flash(4.16, 25.0, 0.2, 455.0)
        at_boundary = arc_flash(4.16, 25.0, 0.2, res.values['boundary_mm'])
        assert at_boundary.result == pytest.approx(1.2, rel=1e-9)

    def test_no_energy_no_boundary(self):
        res = arc_flash(0.48, 20.0, 0.0)
        assert res.result == 0.0
        assert res.values['boundary_mm'] == 0.0
        assert res.values['ppe_level'] == 0

    def test_negative_voltage_no_boundary(self):
        res = arc_flash(-0.48, 20.0, 0.1)
        assert res.result < 0
        assert res.values['boundary_mm'] == 0.0
        assert math.isfinite(res.result)

    def test_dangerous_band(self):
        res = arc_flash(13.8, 30.0, 1.0, 455.0)
        assert res.result > 40
        assert res.values['ppe_level'] == -1
        assert 'Dangerous, no safe PPE' in res.steps

    def test_overflow_reports_clamped_energy_everywhere(self):
        """An overflowing E reads 0 in the result, the PPE category and the steps."""
        res = arc_flash(1e200, 1e200, 1.0, 455.0)
        assert res.result == 0.0
        assert res.values['boundary_mm'] == 0.0
        assert res.values['ppe_level'] == 0
        assert 'E = 0 cal/cm²' in res.steps
        assert '= 0 mm' in res.steps
        assert 'PPE: Category 0 / no hazard' in res.steps
        assert re.search(r'\b(inf|nan)\b', res.steps) is None


class TestClassifyPPE:
    """Thresholds are strict '>' evaluated from the top down."""

    @pytest.mark.parametrize('energy, level, label', [
        (0.0, 0, 'Category 0 / no hazard'),
        (1.2, 0, 'Category 0 / no hazard'),
        (1.21, 1, 'Category 1'),
        (4.0, 1, 'Category 1'),
        (4.01, 2, 'Category 2'),
        (8.0, 2, 'Category 2'),
        (8.01, 3, 'Category 3'),
        (25.0, 3, 'Category 3'),
        (25.01, 4, 'Category 4'),
        (40.0, 4, 'Category 4'),
        (40.01, None, 'Dangerous, no safe PPE'),
    ])
    def test_thresholds(self, energy, level, label):
        assert classify_ppe(energy) == (level, label)

    def test_exactly_eight_is_category_two(self):
        level, _ = classify_ppe(8.0)
        assert level == 2

    def test_negative_energy_no_hazard(self):
        assert classify_ppe(-5.0) == (0, 'Category 0 / no hazard')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
