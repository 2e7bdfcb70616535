import pytest
from hypothesis import given, strategies as st

from cas.errors import CasError, CasEndOfInput, CasLexError
from cas.reader.lexer import lex, Lexer, TokenStream
from cas.types.definition import FunctionDef
from cas.types.number import Number
from cas.types.op import Op, CallOp
from cas.types.symbol import Symbol


def tokens(source, env=None):
    return list(lex(source, env))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("3.2e-1+2^.1*2abc==", [Number(0.32), Op.ADD, Number(2), Op.POW, Number(0.1),
                                Op.MUL, Number(2), Symbol("abc"), Op.EQ]),
        ("(x,y)", [Op.OPEN, Symbol("x"), Op.LIST, Symbol("y"), Op.CLOSE]),
        ("[a; b]", [Op.OPEN, Symbol("a"), Op.LIST, Symbol("b"), Op.CLOSE]),
        ("{1}", [Op.OPEN, Number(1), Op.CLOSE]),
        ("x := 2", [Symbol("x"), Op.DEF, Number(2)]),
        ("6:3", [Number(6), Op.DIV, Number(3)]),
        ("n!", [Symbol("n"), Op.FACT]),
        ("a_1", [Symbol("a"), Op.CHILD, Number(1)]),
        ("7 % 2", [Number(7), Op.MOD, Number(2)]),
        (" \t\n 1 \n", [Number(1)]),
        ("", []),
    ],
)
def test_lexer_basic(source, expected):
    assert tokens(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("=", [Op.EQ]),
        ("==", [Op.EQ]),
        ("====", [Op.EQ, Op.EQ]),
        ("!=", [Op.NEQ]),
        ("~=", [Op.NEQ]),
        ("<", [Op.LESS]),
        ("<=", [Op.LESS_EQ]),
        (">", [Op.MORE]),
        (">=", [Op.MORE_EQ]),
        # Only the listed pairs are compound
        ("-=", [Op.SUB, Op.EQ]),
        ("+-", [Op.ADD, Op.SUB]),
        ("!!", [Op.FACT, Op.FACT]),
    ],
)
def test_compound_operators(source, expected):
    assert tokens(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("0.00012", 0.00012),
        (".1", 0.1),
        ("0000.56789", 0.56789),
        ("1234.56789", 1234.56789),
        ("5.", 5.0),
        ("2E3", 2000.0),
        ("1e+2", 100.0),
        ("0.12e2", 12.0),
    ],
)
def test_numbers(source, expected):
    assert tokens(source) == [Number(expected)]


def test_number_followed_by_symbol():
    assert tokens("0.12e2x") == [Number(12), Symbol("x")]
    assert tokens("3x") == [Number(3), Symbol("x")]
    assert tokens("x2") == [Symbol("x"), Number(2)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("test   ", [Symbol("test")]),
        ("te    St", [Symbol("te"), Symbol("St")]),
        ("αβ", [Symbol("α"), Symbol("β")]),
        ("xα", [Symbol("x"), Symbol("α")]),
        ("Ωx", [Symbol("Ω"), Symbol("x")]),
    ],
)
def test_symbols(source, expected):
    assert tokens(source) == expected


def test_callable_symbols_follow_environment(env, empty_env):
    assert tokens("sin x", env) == [CallOp(Symbol("sin")), Symbol("x")]
    assert tokens("sin x", empty_env) == [Symbol("sin"), Symbol("x")]
    assert tokens("sin x") == [Symbol("sin"), Symbol("x")]
    # Constants are values, not calls
    assert tokens("pi", env) == [Symbol("pi")]


def test_user_function_lexes_as_call(empty_env):
    assert tokens("f(2)", empty_env)[0] == Symbol("f")
    empty_env.define(Symbol("f"), FunctionDef((Symbol("x"),), Symbol("x")))
    assert tokens("f(2)", empty_env) == [CallOp(Symbol("f")), Op.OPEN, Number(2), Op.CLOSE]


@pytest.mark.parametrize(
    "source,position",
    [
        ("~", 0),
        ("1 + #", 4),
        ("α + $", 5),  # α takes two bytes
        ("a\rb", 1),
        (".", 0),
        ("2e", 0),
        ("x + 1e999", 4),
    ],
)
def test_lex_errors_carry_byte_position(source, position):
    with pytest.raises(CasLexError) as exc:
        tokens(source)
    assert exc.value.position == position
    assert f"at byte {position}" in str(exc.value)


def test_lexing_is_lazy():
    stream = lex("1 + #")
    assert next(stream) == Number(1)
    assert next(stream) is Op.ADD
    with pytest.raises(CasLexError):
        next(stream)


def test_token_stream_lookahead():
    stream = TokenStream(lex("1 2"))
    assert stream.peek() == Number(1)
    assert stream.peek() == Number(1)
    assert stream.advance() == Number(1)
    assert not stream.at_end()
    assert stream.advance() == Number(2)
    assert stream.at_end()
    assert stream.peek() is None
    with pytest.raises(CasEndOfInput):
        stream.advance()


def test_lexer_iterates_tokens(env):
    assert list(Lexer("cos 0", env)) == [CallOp(Symbol("cos")), Number(0)]


# -------------------------------
# Hypothesis tests
# -------------------------------
numeral_strat = st.one_of(
    st.from_regex(r"[0-9]{1,10}(\.[0-9]{0,10})?([eE][+-]?[0-9]{1,2})?", fullmatch=True),
    st.from_regex(r"\.[0-9]{1,10}", fullmatch=True),
)


@given(numeral_strat)
def test_numeral_lexes_to_its_float(source):
    assert tokens(source) == [Number(float(source))]


@given(st.text(max_size=30))
def test_lexer_no_crash(source):
    try:
        tokens(source)
    except CasLexError:
        pass
    except Exception as e:
        assert False, f"Lexer crashed on {source!r}: {e}"


@given(st.text(alphabet="0123456789.+-*/^%!=<>:,;_()[]{} xyzαβ", max_size=30))
def test_only_cas_errors_escape(source):
    try:
        tokens(source)
    except CasError:
        pass
