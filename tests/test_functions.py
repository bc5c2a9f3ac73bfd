from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    JSArityError,
    JSTypeError,
    JSUndefinedVariableError,
    run_capture,
    run_output_case,
)

SCENARIOS = [
    pytest.param(
        dedent(
            """\
            function add(a, b) { return a + b; }
            print(add(2, 3));
        """
        ),
        ["5"],
        None,
        id="named-function",
    ),
    pytest.param(
        dedent(
            """\
            print(twice(4));
            function twice(n) { return n * 2; }
        """
        ),
        None,
        JSUndefinedVariableError,
        id="declaration-is-not-hoisted",
    ),
    pytest.param(
        dedent(
            """\
            var sq = function (n) { return n * n; };
            print(sq(9));
        """
        ),
        ["81"],
        None,
        id="function-expression",
    ),
    pytest.param(
        dedent(
            """\
            function noop() { }
            print(noop());
        """
        ),
        ["undefined"],
        None,
        id="no-return-is-undefined",
    ),
    pytest.param(
        dedent(
            """\
            function bare() { return; }
            print(bare());
        """
        ),
        ["undefined"],
        None,
        id="bare-return",
    ),
    pytest.param(
        dedent(
            """\
            function even(n) {
                if (n == 0) { return 1; }
                return odd(n - 1);
            }
            function odd(n) {
                if (n == 0) { return 0; }
                return even(n - 1);
            }
            print(even(10), odd(7));
        """
        ),
        ["1 1"],
        None,
        id="mutual-recursion",
    ),
    pytest.param(
        dedent(
            """\
            function fact(n) {
                if (n <= 1) { return 1; }
                return n * fact(n - 1);
            }
            print(fact(20));
        """
        ),
        ["2432902008176640000"],
        None,
        id="recursion",
    ),
    pytest.param(
        dedent(
            """\
            function adder(a) {
                return function (b) { return a + b; };
            }
            var add5 = adder(5);
            print(add5(1), adder(10)(2));
        """
        ),
        ["6 12"],
        None,
        id="closure-captures-parameter",
    ),
    pytest.param(
        dedent(
            """\
            function f(a) { return a; }
            f(1, 2);
        """
        ),
        None,
        JSArityError,
        id="too-many-arguments",
    ),
    pytest.param(
        dedent(
            """\
            function f(a, b) { return a; }
            f(1);
        """
        ),
        None,
        JSArityError,
        id="too-few-arguments",
    ),
    pytest.param(
        dedent(
            """\
            var n = 3;
            n(1);
        """
        ),
        None,
        JSTypeError,
        id="call-non-function",
    ),
    pytest.param(
        dedent(
            """\
            function who() { return this; }
            print(who());
        """
        ),
        ["undefined"],
        None,
        id="plain-call-this-is-undefined",
    ),
    pytest.param(
        dedent(
            """\
            var f = function () { return 1; };
            print(f);
            print(print);
        """
        ),
        ["function lambda", "function print"],
        None,
        id="print-functions",
    ),
    pytest.param(
        dedent(
            """\
            function first() {
                return 1;
                print("unreachable");
            }
            print(first());
        """
        ),
        ["1"],
        None,
        id="return-stops-body",
    ),
]


@pytest.mark.parametrize("source, expected_lines, expected_exc", SCENARIOS)
def test_functions(source: str, expected_lines, expected_exc) -> None:
    run_output_case(source, expected_lines, expected_exc)


def test_arguments_evaluated_before_arity_error() -> None:
    source = dedent(
        """\
        function one(a) { return a; }
        one(print("first"), print("second"));
    """
    )
    lines, error = run_capture(source)

    assert lines == ["first", "second"]
    assert isinstance(error, JSArityError)
    assert "expects 1, got 2" in str(error)


def test_arity_error_reports_call_line() -> None:
    source = dedent(
        """\
        function f(a) {
            return a;
        }
        f();
    """
    )
    _, error = run_capture(source)

    assert isinstance(error, JSArityError)
    assert error.line == 4
