"""
Tests for calculation sessions (one per open tool instance).

Validates:
1. Successful runs store and replace the result
2. Validation failures clear the result and never reach the formula
3. Edits do not clear the stored result
4. Idempotence of repeated runs
5. Instance independence and reset
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.errors import InvalidOption, ToolNotFound, UnknownInput
from engine.results import make_result
from engine.session import CalculationSession, create_instance
from engine.tools import InputSpec, ToolCategory, ToolDescriptor
from engine.validation import ErrorReason


def _recording_tool(calls):
    def compute(values):
        calls.append(dict(values))
        return make_result(values['x'] * 2, 'u', f"2 × {values['x']}")

    return ToolDescriptor(
        id='doubler', name='Doubler', description='Doubles x.',
        category=ToolCategory.BASIC, inputs=[InputSpec('x', 'X')], compute=compute,
    )


class TestRun:
    def test_success(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        outcome = session.run()

        assert outcome.ok
        assert outcome.result.result == pytest.approx(10.0)
        assert session.result is outcome.result
        assert session.errors == {}

    def test_failure_clears_result(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        session.run()

        session.set_field('r', '')
        outcome = session.run()

        assert not outcome.ok
        assert outcome.errors == {'r': ErrorReason.REQUIRED}
        assert session.result is None
        assert session.errors == {'r': ErrorReason.REQUIRED}

    def test_empty_after_valid_entry_is_required(self):
        session = create_instance('freq_period')
        session.set_field('t', '0.02')
        assert session.run().ok

        session.set_field('t', '  ')
        outcome = session.run()
        assert outcome.errors == {'t': ErrorReason.REQUIRED}

    def test_invalid_number_never_calls_formula(self):
        calls = []
        session = CalculationSession(_recording_tool(calls))
        session.set_field('x', 'abc')
        outcome = session.run()

        assert outcome.errors == {'x': ErrorReason.INVALID_NUMBER}
        assert calls == []

    def test_edit_keeps_stored_result(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        first = session.run().result

        session.set_field('r', '-')
        assert session.result is first

    def test_successful_run_replaces_result(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        session.run()
        session.set_field('r', '6')
        session.run()
        assert session.result.result == pytest.approx(12.0)

    def test_stale_errors_cleared_on_revalidation(self):
        session = create_instance('ohm')
        session.set_field('i', 'abc')
        session.run()
        assert session.errors == {'i': ErrorReason.INVALID_NUMBER, 'r': ErrorReason.REQUIRED}

        session.set_field('r', '5')
        assert session.errors == {'i': ErrorReason.INVALID_NUMBER}

        session.set_field('i', '2')
        assert session.run().ok
        assert session.errors == {}

    def test_idempotent(self):
        session = create_instance('rlc_parallel')
        for name, value in {'r': '100', 'l': '0.1', 'c': '1e-6', 'f': '60'}.items():
            session.set_field(name, value)
        first = session.run().result
        second = session.run().result

        assert first == second
        assert first.result == second.result
        assert first.steps == second.steps

    def test_option_fields_reach_formula(self):
        session = create_instance('unit_converter')
        session.set_field('val', '1500')
        session.set_field('from', '0.001')
        session.set_field('to', '1.0')
        outcome = session.run()
        assert outcome.result.result == pytest.approx(1.5, rel=1e-9)


class TestSetField:
    def test_unknown_field(self):
        session = create_instance('ohm')
        with pytest.raises(UnknownInput):
            session.set_field('voltage', '1')

    def test_option_outside_list(self):
        session = create_instance('transformer_load')
        with pytest.raises(InvalidOption):
            session.set_field('phases', '2')

    def test_option_inside_list(self):
        session = create_instance('transformer_load')
        session.set_field('phases', '3')
        assert session.fields['phases'] == '3'


class TestLifecycle:
    def test_unknown_tool(self):
        with pytest.raises(ToolNotFound):
            create_instance('nope')

    def test_instances_independent(self):
        a = create_instance('ohm')
        b = create_instance('ohm')
        a.set_field('i', '2')
        assert b.fields['i'] == ''

    def test_reset(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        session.run()
        session.reset()

        assert session.result is None
        assert session.fields == {'i': '', 'r': ''}
        assert session.errors == {}


class TestOutcomeDict:
    def test_ok_shape(self):
        session = create_instance('ohm')
        session.set_field('i', '2')
        session.set_field('r', '5')
        data = session.run().to_dict()
        assert data['ok'] is True
        assert data['result']['unit'] == 'V'
        assert data['result']['result'] == pytest.approx(10.0)

    def test_error_shape(self):
        data = create_instance('ohm').run().to_dict()
        assert data == {'ok': False, 'errors': {'i': 'required', 'r': 'required'}}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
