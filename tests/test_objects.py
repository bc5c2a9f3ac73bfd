from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import JSTypeError, run_output_case, run_program

SCENARIOS = [
    pytest.param(
        dedent(
            """\
            var p = { x: 1, y: "two" };
            print(p.x, p.y, p.z);
        """
        ),
        ["1 two undefined"],
        None,
        id="field-access",
    ),
    pytest.param(
        dedent(
            """\
            var p = { x: 1 };
            p.x = 5;
            p.fresh = 6;
            print(p.x, p.fresh);
        """
        ),
        ["5 6"],
        None,
        id="field-assignment",
    ),
    pytest.param(
        dedent(
            """\
            var p = { "quoted key": 1, b: { c: 2 } };
            p.b.c = 3;
            print(p.b.c);
        """
        ),
        ["3"],
        None,
        id="nested-objects",
    ),
    pytest.param(
        dedent(
            """\
            var counter = {
                n: 0,
                inc: function () {
                    this.n = this.n + 1;
                    return this.n;
                },
            };
            counter.inc();
            print(counter.inc(), counter.n);
        """
        ),
        ["2 2"],
        None,
        id="method-binds-this",
    ),
    pytest.param(
        dedent(
            """\
            var o = { get: function () { return this.n; } };
            var g = o.get;
            g();
        """
        ),
        None,
        JSTypeError,
        id="detached-method-loses-this",
    ),
    pytest.param(
        "var o = { n: 1 }; o.n();",
        None,
        JSTypeError,
        id="method-not-callable",
    ),
    pytest.param(
        "var o = {}; o.missing();",
        None,
        JSTypeError,
        id="method-missing",
    ),
    pytest.param(
        "var n = 1; print(n.x);",
        None,
        JSTypeError,
        id="field-of-integer",
    ),
    pytest.param(
        'var s = "str"; s.x = 1;',
        None,
        JSTypeError,
        id="assign-field-of-string",
    ),
    pytest.param(
        "var u; u.go();",
        None,
        JSTypeError,
        id="method-on-undefined",
    ),
    pytest.param(
        dedent(
            """\
            var a = {};
            var b = a;
            b.tag = 1;
            print(a.tag, a == b, a == {});
        """
        ),
        ["1 1 0"],
        None,
        id="objects-are-references",
    ),
    pytest.param(
        'print({ a: 1, b: "x" });',
        ['{a: 1, b: "x"}'],
        None,
        id="print-object",
    ),
    pytest.param(
        dedent(
            """\
            var self = {};
            self.self = self;
            print(self);
        """
        ),
        ["{self: {...}}"],
        None,
        id="print-cyclic-object",
    ),
    pytest.param(
        "print({});",
        ["{}"],
        None,
        id="print-empty-object",
    ),
    pytest.param(
        "print(globalThis);",
        ["[env]"],
        None,
        id="print-global-env",
    ),
    pytest.param(
        "print(globalThis.print == print);",
        ["1"],
        None,
        id="builtins-live-on-globalthis",
    ),
    pytest.param(
        dedent(
            """\
            var o = { f: function (a, b) { return a * b; } };
            print(o.f(6, 7));
        """
        ),
        ["42"],
        None,
        id="method-arguments",
    ),
]


@pytest.mark.parametrize("source, expected_lines, expected_exc", SCENARIOS)
def test_objects(source: str, expected_lines, expected_exc) -> None:
    run_output_case(source, expected_lines, expected_exc)


def test_field_values_evaluated_in_order() -> None:
    source = 'var o = { a: print("a"), b: print("b") }; print(o.a);'

    assert run_program(source) == ["a", "b", "undefined"]


def test_methods_share_object_state() -> None:
    source = dedent(
        """\
        function makeStack() {
            return {
                top: 0,
                push: function (v) {
                    this.top = { value: v, next: this.top };
                    return v;
                },
                peek: function () { return this.top.value; },
            };
        }
        var s = makeStack();
        s.push(1);
        s.push(2);
        print(s.peek());
    """
    )

    assert run_program(source) == ["2"]
