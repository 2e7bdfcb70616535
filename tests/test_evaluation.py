import math

import pytest

from cas import errors
from cas.evaluation.evaluator import evaluate, number
from cas.reader.parser import parse
from cas.types.definition import FunctionDef, ValueDef
from cas.types.expr import Call
from cas.types.number import Number
from cas.types.op import Op
from cas.types.symbol import Symbol, TRUE, FALSE

# -----------------------------------------------------
# Helpers
# -----------------------------------------------------


def run(env, *lines, max_depth=None):
    """Evaluate each line in turn and return the last result."""
    result = None
    for line in lines:
        result = evaluate(parse(line, env), env, max_depth)
    return result


def num(env, source, max_depth=None):
    return number(parse(source, env), env, max_depth).value


# -----------------------------------------------------
# Tests
# -----------------------------------------------------


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1+2*3", 7),
        ("2^3^2", 512),
        ("(2^3)^2", 64),
        ("10-4-3", 3),
        ("8/4/2", 1),
        ("3x", None),
        ("-3", -3),
        ("--3", 3),
        ("+4", 4),
        ("3!", 6),
        ("0!", 1),
        ("5!", 120),
        ("(2+1)!", 6),
        ("2.5!", 1.875),
        ("7 % 3", 1),
        ("-7 % 3", -1),
        ("2(3+4)", 14),
        ("(1+2)(3+4)", 21),
    ],
)
def test_arithmetic(env, source, expected):
    if expected is None:
        with pytest.raises(errors.CasUnboundSymbol):
            num(env, source)
    else:
        assert num(env, source) == expected


def test_ieee_results(env):
    assert num(env, "1/0") == math.inf
    assert num(env, "-1/0") == -math.inf
    assert math.isnan(num(env, "0/0"))
    assert math.isnan(num(env, "1 % 0"))
    assert num(env, "10^400") == math.inf
    assert math.isnan(num(env, "(-8)^(1/3)"))
    assert num(env, "200!") == math.inf


@pytest.mark.parametrize(
    "source,expected",
    [
        ("0^(-1)", math.inf),
        ("0^(-2)", math.inf),
        ("0^(-0.5)", math.inf),
        ("(-0)^(-1)", -math.inf),
        ("(-0)^(-2)", math.inf),
        ("(-10)^401", -math.inf),
        ("(-10)^400", math.inf),
        ("0.5^(-2000)", math.inf),
    ],
)
def test_power_poles_and_overflow(env, source, expected):
    assert num(env, source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1+1 = 2", TRUE),
        ("2 == 3", FALSE),
        ("1 != 2", TRUE),
        ("1 ~= 1", FALSE),
        ("1 < 2", TRUE),
        ("2 <= 1", FALSE),
        ("3 > 2", TRUE),
        ("3 >= 3", TRUE),
    ],
)
def test_comparisons(env, source, expected):
    assert run(env, source) == expected


def test_truth_values_are_numbers(env):
    assert num(env, "(1 < 2) + (2 < 1)") == 1
    assert num(env, "true") == 1
    assert num(env, "false") == 0


def test_constants(env):
    assert num(env, "pi") == math.pi
    assert num(env, "π") == math.pi
    assert num(env, "2π") == 2 * math.pi
    assert num(env, "τ") == math.tau
    assert num(env, "e^1") == math.e
    assert num(env, "inf") == math.inf
    assert math.isnan(num(env, "NaN"))


def test_atoms_evaluate_to_themselves(env):
    assert run(env, "42") == Number(42)
    assert run(env, "x") == Symbol("x")
    assert run(env, "+x") == Symbol("x")


# --- Definitions ---

def test_value_definition_returns_symbol(env):
    assert run(env, "x := 3") == Symbol("x")
    assert env.get(Symbol("x")) == ValueDef(Number(3))
    assert num(env, "x^2") == 9


def test_value_definition_is_lazy(env):
    run(env, "a := 2", "b := a*3", "a := 5")
    assert num(env, "b") == 15
    assert env.get(Symbol("b")) == ValueDef(Call(Op.MUL, (Symbol("a"), Number(3))))


def test_redefinition_overwrites(env):
    run(env, "x := 1", "x := 2")
    assert num(env, "x") == 2


def test_function_definition(env):
    assert run(env, "f(x) := x^2") == Symbol("f")
    assert env.get(Symbol("f")) == FunctionDef((Symbol("x"),), Call(Op.POW, (Symbol("x"), Number(2))))
    assert num(env, "f(3)") == 9
    assert num(env, "f 4") == 16
    assert num(env, "f(1+2)") == 9


def test_function_application_substitutes_once(env):
    run(env, "f(x) := x^2")
    assert run(env, "f(3)") == Call(Op.POW, (Number(3), Number(2)))


def test_free_variables_resolve_in_caller(env):
    run(env, "x := 10", "f(y) := x + y")
    assert run(env, "f(1)") == Call(Op.ADD, (Symbol("x"), Number(1)))
    assert num(env, "f(1)") == 11
    run(env, "x := 20")
    assert num(env, "f(1)") == 21


def test_parameters_shadow_without_leaking(env):
    run(env, "x := 100", "f(x) := x*2")
    assert num(env, "f(3)") == 6
    assert num(env, "x") == 100


def test_multi_parameter_function(env):
    run(env, "g(x, y) := x - y")
    assert num(env, "g(5, 2)") == 3
    with pytest.raises(errors.CasArityError, match="missing"):
        num(env, "g(1)")
    with pytest.raises(errors.CasArityError, match="too many"):
        num(env, "g(1, 2, 3)")


def test_function_redefinition_uses_call_syntax(env):
    run(env, "f(x) := x")
    assert run(env, "f(x) := x + 1") == Symbol("f")
    assert num(env, "f(1)") == 2


def test_function_used_before_definition(env):
    # `k` is lexed as a plain symbol here: h := k*2
    run(env, "h := k(2)", "k(x) := x + 1")
    assert num(env, "h") == 3


def test_function_calls_builtin(env):
    run(env, "hyp(a, b) := sqrt(a^2 + b^2)")
    assert num(env, "hyp(3, 4)") == 5


@pytest.mark.parametrize(
    "source",
    ["2 := 3", "f(2) := 3", "f(x, x) := x", "(a+b) := 1"],
)
def test_invalid_definition_target(env, source):
    with pytest.raises(errors.CasTypeError):
        run(env, source)


# --- Children ---

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(1,2,3)_0", 1),
        ("(1,2,3)_1", 2),
        ("(1,2,3)_2", 3),
        ("(1,2,3)_(1+1)", 3),
        ("(4,5)_0 + (4,5)_1", 9),
    ],
)
def test_child(env, source, expected):
    assert num(env, source) == expected


def test_child_of_bound_list(env):
    run(env, "v := (4,5,6)")
    assert num(env, "v_2") == 6
    assert run(env, "v_0") == Number(4)


def test_child_returns_unevaluated_element(env):
    assert run(env, "(x, y+1)_1") == Call(Op.ADD, (Symbol("y"), Number(1)))


@pytest.mark.parametrize("source", ["(1,2,3)_3", "(1,2,3)_(-1)", "(1,2,3)_1.5", "(1,2)_inf"])
def test_child_index_errors(env, source):
    with pytest.raises(errors.CasIndexError):
        run(env, source)


# --- Errors ---

def test_unbound_symbol(env):
    with pytest.raises(errors.CasUnboundSymbol, match="`z` is undefined"):
        num(env, "z+1")


def test_function_is_not_a_number(env):
    with pytest.raises(errors.CasTypeError, match="is a function"):
        number(Symbol("sum"), env)


@pytest.mark.parametrize(
    "source,name",
    [("sum(1)", "sum"), ("sum(1, 2)", "sum"), ("log(1)", "log"), ("sin(1, 2)", "sin")],
)
def test_builtin_arity_errors(env, source, name):
    with pytest.raises(errors.CasArityError) as exc:
        num(env, source)
    assert f"`{name}`" in str(exc.value)


def test_bare_list_is_not_evaluable(env):
    with pytest.raises(errors.CasArityError, match="`,`"):
        run(env, "(1,2)")


def test_errors_share_a_base_class(env):
    with pytest.raises(errors.CasError):
        num(env, "nope")


# --- Depth limit ---

def test_self_reference_hits_depth_limit(env):
    run(env, "x := x+1")
    with pytest.raises(errors.CasRecursionError):
        num(env, "x", max_depth=50)


def test_recursive_function_hits_depth_limit(env):
    run(env, "f(n) := n", "f(n) := n*f(n-1)")
    with pytest.raises(errors.CasRecursionError):
        num(env, "f(3)", max_depth=60)


def test_depth_limit_from_environment(env, monkeypatch):
    monkeypatch.setenv("CAS_MAX_DEPTH", "5")
    with pytest.raises(errors.CasRecursionError, match="depth of 5"):
        num(env, "1+(2+(3+(4+(5+6))))")
    monkeypatch.setenv("CAS_MAX_DEPTH", "100")
    assert num(env, "1+(2+(3+(4+(5+6))))") == 21


def test_call_helpers_on_tree(env):
    tree = parse("2*sqrt(16)", env)
    assert tree.number(env) == Number(8)
    assert tree.eval(env) == Number(8)


def test_atom_helpers(env):
    run(env, "x := 2+3")
    assert parse("3", env).number(env) == Number(3)
    assert parse("3", env).eval(env) == Number(3)
    assert parse("x", env).eval(env) == Symbol("x")
    assert parse("x", env).number(env) == Number(5)
    with pytest.raises(errors.CasUnboundSymbol):
        Symbol("z").number(env)


def test_repeated_parameters_are_named(env):
    with pytest.raises(errors.CasTypeError, match="repeated: x, y"):
        run(env, "f(y, x, y, x) := 1")
