"""
Tests for FieldState transitions and input validation.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.errors import InvariantViolation, UnknownInput, ValidationFailure
from engine.tools import get_tool
from engine.validation import ErrorReason, FieldState, parse_number, validate


def _state(tool_id, **raw):
    tool = get_tool(tool_id)
    state = FieldState.initial(tool)
    for name, value in raw.items():
        state = state.with_value(name, value)
    return tool, state


class TestFieldState:
    def test_initial_seeds(self):
        tool, state = _state('unit_converter')
        assert state.raw['val'] == ''
        assert float(state.raw['from']) == 1e-12
        assert float(state.raw['to']) == 1e-12
        assert state.errors == {}

    def test_with_value_returns_new_state(self):
        tool, state = _state('ohm')
        updated = state.with_value('i', '2')
        assert updated.raw['i'] == '2'
        assert state.raw['i'] == ''

    def test_with_value_clears_stale_error(self):
        tool, state = _state('ohm')
        state = state.with_errors({'i': ErrorReason.REQUIRED, 'r': ErrorReason.INVALID_NUMBER})
        state = state.with_value('i', '3')
        assert state.errors == {'r': ErrorReason.INVALID_NUMBER}

    def test_partial_entry_held(self):
        tool, state = _state('ohm', i='-', r='3.')
        assert state.raw == {'i': '-', 'r': '3.'}

    def test_unknown_field(self):
        tool, state = _state('ohm')
        with pytest.raises(UnknownInput):
            state.with_value('q', '1')


class TestParseNumber:
    @pytest.mark.parametrize('raw, expected', [
        ('12', 12.0),
        ('-4.5', -4.5),
        ('3.', 3.0),
        ('.5', 0.5),
        ('1e-6', 1e-6),
        ('0', 0.0),
    ])
    def test_valid(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize('raw', ['abc', '-', '1.2.3', 'inf', '-inf', 'nan', '', '12V'])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_number(raw)


class TestValidate:
    def test_success_includes_every_field(self):
        tool, state = _state('unit_converter', val='1500', to='1.0')
        values = validate(tool, state)
        assert values == {'val': 1500.0, 'from': 1e-12, 'to': 1.0}

    def test_empty_required(self):
        tool, state = _state('ohm', i='2')
        with pytest.raises(ValidationFailure) as exc:
            validate(tool, state)
        assert exc.value.errors == {'r': ErrorReason.REQUIRED}

    def test_whitespace_is_empty(self):
        tool, state = _state('ohm', i='   ', r='5')
        with pytest.raises(ValidationFailure) as exc:
            validate(tool, state)
        assert exc.value.errors == {'i': ErrorReason.REQUIRED}

    def test_invalid_number(self):
        tool, state = _state('ohm', i='abc', r='5')
        with pytest.raises(ValidationFailure) as exc:
            validate(tool, state)
        assert exc.value.errors == {'i': ErrorReason.INVALID_NUMBER}

    def test_one_entry_per_failing_field(self):
        tool, state = _state('rlc_series', r='100', l='abc', c='', f='60')
        with pytest.raises(ValidationFailure) as exc:
            validate(tool, state)
        assert exc.value.errors == {
            'l': ErrorReason.INVALID_NUMBER,
            'c': ErrorReason.REQUIRED,
        }

    def test_surrounding_whitespace_accepted(self):
        tool, state = _state('ohm', i=' 2 ', r='5')
        assert validate(tool, state) == {'i': 2.0, 'r': 5.0}

    def test_zero_and_negative_accepted(self):
        """Physical plausibility is the formula's concern, not validation's."""
        tool, state = _state('reactance_c', f='-60', c='0')
        assert validate(tool, state) == {'f': -60.0, 'c': 0.0}

    def test_optional_empty_is_zero(self):
        tool, state = _state('arc_flash', v='0.48', i='20', t='0.1')
        values = validate(tool, state)
        assert values['d'] == 0.0

    def test_optional_still_checked_for_garbage(self):
        tool, state = _state('arc_flash', v='0.48', i='20', t='0.1', d='far')
        with pytest.raises(ValidationFailure) as exc:
            validate(tool, state)
        assert exc.value.errors == {'d': ErrorReason.INVALID_NUMBER}

    def test_broken_option_is_invariant_violation(self):
        tool, state = _state('unit_converter', val='1', **{'from': 'milli'})
        with pytest.raises(InvariantViolation):
            validate(tool, state)

    def test_error_messages(self):
        assert ErrorReason.REQUIRED.message == 'Value required'
        assert ErrorReason.INVALID_NUMBER.message == 'Invalid number'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
