import pytest

from debruijn import App, Lam, ParseError, Var, parse, parse_de_bruijn, parse_strict

IDENTITY = Lam(Var(0))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("(λa a) λb b", App(IDENTITY, IDENTITY)),
        ("(λa λb b a)", Lam(Lam(App(Var(0), Var(1))))),
        ("((λa λb b a) λc c)", App(Lam(Lam(App(Var(0), Var(1)))), IDENTITY)),
        ("λa a", IDENTITY),
        ("λ a a", IDENTITY),
        ("λaa", IDENTITY),
        ("((λa a))", IDENTITY),
        (" \t(λa\n a)  λb   b \n", App(IDENTITY, IDENTITY)),
    ],
)
def test_parse(text, expected):
    assert parse(text) == expected


def test_application_is_left_associative():
    assert parse("λa a a a") == Lam(App(App(Var(0), Var(0)), Var(0)))
    assert parse("λa a (a a)") == Lam(App(Var(0), App(Var(0), Var(0))))


def test_lambda_body_extends_to_the_right():
    assert parse("λa λb a b") == Lam(Lam(App(Var(1), Var(0))))
    assert parse("λa a λb b a") == Lam(App(Var(0), Lam(App(Var(0), Var(1)))))


def test_innermost_binder_wins():
    assert parse("λa λa a") == Lam(Lam(Var(0)))
    assert parse("λa λb λa b") == Lam(Lam(Lam(Var(1))))
    assert parse("λa (λa a) a") == Lam(App(Lam(Var(0)), Var(0)))


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "λa b",
        "(λa a",
        "λa a b",
        "λ",
        "λa",
        "λA a",
        "λ1 a",
        "λ(a) a",
        "a",
        "()",
        "(λa a))",
        "λa a)",
        "λa (a",
        "λa a 1",
        "λa a B",
        "λa λb",
    ],
)
def test_parse_failure(text):
    assert parse(text) is None


def test_scope_does_not_leak_between_calls():
    assert parse("λa a") == IDENTITY
    assert parse("a") is None


@pytest.mark.parametrize(
    "text, position",
    [
        ("λa b", 3),
        ("(λa a", 0),
        ("λa a)", 4),
        ("", 0),
        ("λ 1", 2),
    ],
)
def test_parse_strict_reports_position(text, position):
    with pytest.raises(ParseError) as info:
        parse_strict(text)
    assert info.value.position == position


def test_parse_strict_message():
    with pytest.raises(ParseError, match="unbound variable 'b'"):
        parse_strict("λa b")


def test_custom_binder():
    assert parse("(\\a a) \\b b", binder="\\") == App(IDENTITY, IDENTITY)
    assert parse("λa a", binder="\\") is None


@pytest.mark.parametrize("binder", ["a", "1", "(", ")", " ", "", "λλ"])
def test_invalid_binder(binder):
    with pytest.raises(ValueError):
        parse("λa a", binder=binder)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("λ0", IDENTITY),
        ("λλ0 1", Lam(Lam(App(Var(0), Var(1))))),
        ("(λ0) (λ0)", App(IDENTITY, IDENTITY)),
        ("λ 0 (λ0 1)", Lam(App(Var(0), Lam(App(Var(0), Var(1)))))),
        ("λλλλλλλλλλλ10", Lam(Lam(Lam(Lam(Lam(Lam(Lam(Lam(Lam(Lam(Lam(Var(10))))))))))))),
    ],
)
def test_parse_de_bruijn(text, expected):
    assert parse_de_bruijn(text) == expected


@pytest.mark.parametrize("text", ["0", "λ1", "λa", "λ0)", "(λ0", ""])
def test_parse_de_bruijn_failure(text):
    with pytest.raises(ParseError):
        parse_de_bruijn(text)


def test_deep_nesting_is_a_parse_failure():
    text = "λa " * 2000 + "a"
    assert parse(text) is None
    with pytest.raises(ParseError, match="term nested too deeply"):
        parse_strict(text)
    with pytest.raises(ParseError, match="term nested too deeply"):
        parse_de_bruijn("λ" * 2000 + "0")


def test_long_application_chain_parses():
    term = parse(" ".join(["(λa a)"] * 3000))
    depth = 0
    while isinstance(term, App):
        term = term.func
        depth += 1
    assert depth == 2999
    assert term == IDENTITY
