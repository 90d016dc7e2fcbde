import pyparsing as pp
import pytest

from clavis.parser.lexer import FailureTracker, Lexer, NamedChoice, end, unescape


@pytest.mark.parametrize(
    "text,expected",
    (
        ("plain", "plain"),
        (r"a\nb", "a\nb"),
        (r"tab\there", "tab\there"),
        (r"\x41é", "Aé"),
        (r"\101", "A"),
        (r"\"quoted\"", '"quoted"'),
        (r"back\\slash", "back\\slash"),
        (r"\q", "q"),
    ),
)
def test_unescape(text, expected):
    actual = unescape(text)
    assert actual == expected


@pytest.mark.parametrize(
    "text,expected",
    (
        ('"echo hi"', "echo hi"),
        ("'echo hi'", "echo hi"),
        ('"it\'s"', "it's"),
        ("'say \"hi\"'", 'say "hi"'),
        ('"line\\none"', "line\none"),
        ('""', ""),
    ),
)
def test_string(text, expected):
    lexer = Lexer()
    actual = (lexer.string() + end()).parse_string(text)[0]
    assert actual == expected


@pytest.mark.parametrize("text", ('"never closed', "'never closed", '"ends in escape\\"'))
def test_unterminated_string_is_fatal(text):
    lexer = Lexer()
    with pytest.raises(pp.ParseSyntaxException) as excinfo:
        (lexer.string() | lexer.word()).parse_string(text)
    assert "unterminated string literal" in str(excinfo.value)


@pytest.mark.parametrize(
    "text",
    (
        "",
        "   \n\t  ",
        ";; a line comment",
        ";; one\n;; two\n",
        "#| block |#",
        "#| multi\nline\n|#  ;; and a line comment",
        "#| ;; not a line comment |#",
    ),
)
def test_separator_consumes_blanks_and_comments(text):
    lexer = Lexer()
    actual = (lexer.separator + end()).parse_with_tabs().parse_string(text)
    assert list(actual) == []


def test_unterminated_block_comment_is_fatal():
    lexer = Lexer()
    with pytest.raises(pp.ParseSyntaxException) as excinfo:
        (lexer.separator + end()).parse_string("  #| never closed")
    assert "unterminated block comment" in str(excinfo.value)


@pytest.mark.parametrize(
    "text,expected",
    (
        ("a", 1),
        ("apple", 2),
        ("a)", 1),
        ('apple"', 2),
        ("apple rest", 2),
    ),
)
def test_named_choice_prefers_longest_terminated_name(text, expected):
    actual = NamedChoice([("a", 1), ("apple", 2)]).parse_string(text)[0]
    assert actual == expected


@pytest.mark.parametrize("text", ("app", "ab", "apples", "b"))
def test_named_choice_needs_a_terminator(text):
    with pytest.raises(pp.ParseException):
        NamedChoice([("a", 1), ("apple", 2)]).parse_string(text)


@pytest.mark.parametrize(
    "text,matches",
    (
        ("tap-hold 200", True),
        ("tap-hold(", True),
        ("tap-hold", True),
        ("tap-hold-next", False),
        ("tap-holds", False),
    ),
)
def test_keyword_needs_a_boundary(text, matches):
    lexer = Lexer()
    assert lexer.keyword("tap-hold").matches(text, parse_all=False) is matches


def test_number():
    lexer = Lexer()
    actual = lexer.number().parse_string("250")[0]
    assert actual == 250


def test_boolean():
    lexer = Lexer()
    assert lexer.boolean().parse_string("true")[0] is True
    assert lexer.boolean().parse_string("false")[0] is False
    with pytest.raises(pp.ParseException):
        lexer.boolean().parse_string("yes")


def test_failure_tracker_keeps_furthest_labels():
    tracker = FailureTracker()
    tracker.record(3, "keycode")
    tracker.record(1, "string")
    tracker.record(3, "button expression")
    tracker.record(3, "keycode")
    assert tracker.furthest == 3
    assert tracker.expected == ["keycode", "button expression"]
    tracker.record(5, '")"')
    assert tracker.furthest == 5
    assert tracker.expected == ['")"']


def test_failure_tracker_isolated():
    tracker = FailureTracker()
    tracker.record(4, "keycode")
    tracker.note_unresolved(4, "frob")
    with tracker.isolated():
        tracker.record(10, "string")
        assert tracker.unresolved == {}
    assert tracker.furthest == 4
    assert tracker.expected == ["keycode"]
    assert tracker.unresolved == {4: "frob"}


def test_label_recorded_only_without_progress():
    lexer = Lexer()
    pair = lexer.label(lexer.symbol("(") + lexer.word(), "pair")
    with pytest.raises(pp.ParseException):
        pair.parse_string("x")
    assert (lexer.tracker.furthest, lexer.tracker.expected) == (0, ["pair"])

    lexer.tracker.reset()
    with pytest.raises(pp.ParseException):
        pair.parse_string("( ")
    assert (lexer.tracker.furthest, lexer.tracker.expected) == (2, ["word"])
