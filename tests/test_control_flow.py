from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import run_output_case, run_program

SCENARIOS = [
    pytest.param(
        'if (1) { print("yes"); } else { print("no"); }',
        ["yes"],
        None,
        id="if-one",
    ),
    pytest.param(
        'if (0) { print("yes"); } else { print("no"); }',
        ["no"],
        None,
        id="if-zero",
    ),
    pytest.param(
        'var u; if (u) { print("yes"); } else { print("no"); }',
        ["no"],
        None,
        id="if-undefined",
    ),
    pytest.param(
        'if (2) { print("yes"); } else { print("no"); } print("after");',
        ["after"],
        None,
        id="if-other-integer-runs-neither",
    ),
    pytest.param(
        'if ("1") { print("yes"); } else { print("no"); } print("after");',
        ["after"],
        None,
        id="if-string-runs-neither",
    ),
    pytest.param(
        'if ({}) { print("yes"); } else { print("no"); } print("after");',
        ["after"],
        None,
        id="if-object-runs-neither",
    ),
    pytest.param(
        'if (3 < 4) { print("less"); }',
        ["less"],
        None,
        id="if-without-else",
    ),
    pytest.param(
        "function f(x) { if (x) { return 1; } return 0; } print(f(1), f(0));",
        ["1 0"],
        None,
        id="return-from-branch",
    ),
    pytest.param(
        dedent(
            """\
            function grade(n) {
                if (n < 50) {
                    return "fail";
                } else if (n < 80) {
                    return "pass";
                } else {
                    return "merit";
                }
            }
            print(grade(10), grade(60), grade(95));
        """
        ),
        ["fail pass merit"],
        None,
        id="else-if-chain",
    ),
    pytest.param(
        dedent(
            """\
            print(1);
            return 0;
            print(2);
        """
        ),
        ["1"],
        None,
        id="top-level-return-ends-script",
    ),
    pytest.param(
        dedent(
            """\
            function find(n) {
                if (1) {
                    if (n == 3) {
                        return "three";
                    }
                    print("checked", n);
                }
                return "other";
            }
            print(find(3));
            print(find(4));
        """
        ),
        ["three", "checked 4", "other"],
        None,
        id="nested-return-skips-siblings",
    ),
    pytest.param(
        dedent(
            """\
            function loop(n) {
                if (n == 0) { return 0; }
                print(n);
                return loop(n - 1);
            }
            loop(3);
        """
        ),
        ["3", "2", "1"],
        None,
        id="recursion-as-iteration",
    ),
]


@pytest.mark.parametrize("source, expected_lines, expected_exc", SCENARIOS)
def test_control_flow(source: str, expected_lines, expected_exc) -> None:
    run_output_case(source, expected_lines, expected_exc)


def test_return_reads_updated_field() -> None:
    source = dedent(
        """\
        function outer() {
            var o = { v: 1 };
            o.v = 2;
            return o.v;
        }
        print(outer());
    """
    )

    assert run_program(source) == ["2"]


def test_branch_value_is_not_a_result() -> None:
    source = dedent(
        """\
        function f() {
            if (1) { 42; }
        }
        print(f());
    """
    )

    assert run_program(source) == ["undefined"]
