import sys

import pytest
from mal.errors import (
    NestingTooDeep,
    NoInput,
    ParseError,
    ReadError,
    TokenizeError,
    UnevenHashMap,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnhashableType,
    UnknownEscapeSequence,
)
from mal.printer import pr_str
from mal.reader import read_str
from mal.types import FALSE, NIL, TRUE, HashMap, Int, Keyword, List, String, Symbol, Vector


def test_read_expression():
    assert read_str('(+ 11 :a11y (* 36 4) "hello")') == List([
        Symbol("+"),
        Int(11),
        Keyword("a11y"),
        List([Symbol("*"), Int(36), Int(4)]),
        String("hello"),
    ])


def test_read_constants():
    assert read_str("(nil true false)") == List([NIL, TRUE, FALSE])


def test_read_vector():
    value = read_str("[1 [2] (3)]")
    assert value == Vector([Int(1), Vector([Int(2)]), List([Int(3)])])
    assert value != List([Int(1), Vector([Int(2)]), List([Int(3)])])


def test_read_empty_collections():
    assert read_str("()") == List([])
    assert read_str("[]") == Vector([])
    assert read_str("{}") == HashMap({})


def test_read_hash_map():
    value = read_str("{ :a 1 :b 2 }")
    assert value == HashMap({Keyword("b"): Int(2), Keyword("a"): Int(1)})


def test_hash_map_nested_values():
    value = read_str('{"k" [1 2] 3 {:x nil}}')
    assert value[String("k")] == Vector([Int(1), Int(2)])
    assert value[Int(3)] == HashMap({Keyword("x"): NIL})


def test_hash_map_duplicate_key_overwrites():
    assert read_str("{:a 1 :a 2}") == HashMap({Keyword("a"): Int(2)})


def test_hash_map_keys_are_distinct_by_kind():
    value = read_str('{a 1 :a 2 "a" 3}')
    assert len(value) == 3


def test_read_just_a_comment():
    with pytest.raises(NoInput):
        read_str("; this is a comment")


def test_read_empty():
    with pytest.raises(NoInput):
        read_str("   ,  ")


def test_unterminated_list():
    with pytest.raises(UnexpectedEndOfInput, match="unexpected end of input at position 4"):
        read_str("(1 2")


def test_unterminated_vector_and_map():
    with pytest.raises(UnexpectedEndOfInput):
        read_str("[1 (2)")
    with pytest.raises(UnexpectedEndOfInput):
        read_str("{:a 1")


def test_uneven_hash_map():
    with pytest.raises(UnevenHashMap, match="odd number of elements"):
        read_str("{ :a 1 :b }")


def test_unhashable_key():
    with pytest.raises(UnhashableType, match="unhashable type list at position 1") as exc:
        read_str("{(1) 2}")
    assert exc.value.value == List([Int(1)])


def test_unhashable_key_vector():
    with pytest.raises(UnhashableType, match="vector"):
        read_str("{:a 1 [x] 2}")


def test_stray_closer():
    with pytest.raises(UnexpectedToken, match="unexpected token: \\) at position 0"):
        read_str(")")


def test_mismatched_closer():
    with pytest.raises(UnexpectedToken):
        read_str("(1 ]")


def test_quote():
    assert read_str("'x") == List([Symbol("quote"), Symbol("x")])


@pytest.mark.parametrize(
    "src, name",
    [
        ("`x", "quasiquote"),
        ("~x", "unquote"),
        ("~@x", "splice-unquote"),
        ("@x", "deref"),
    ],
)
def test_reader_macros(src, name):
    assert read_str(src) == List([Symbol(name), Symbol("x")])


def test_reader_macro_wraps_collection():
    assert read_str("'(1 2)") == List([Symbol("quote"), List([Int(1), Int(2)])])


def test_nested_reader_macros():
    assert read_str("`(a ~b ~@c)") == List([
        Symbol("quasiquote"),
        List([
            Symbol("a"),
            List([Symbol("unquote"), Symbol("b")]),
            List([Symbol("splice-unquote"), Symbol("c")]),
        ]),
    ])


def test_with_meta_swaps_arguments():
    assert read_str("^{:a 1} x") == List([
        Symbol("with-meta"),
        Symbol("x"),
        HashMap({Keyword("a"): Int(1)}),
    ])


def test_reader_macro_without_form():
    with pytest.raises(UnexpectedEndOfInput):
        read_str("'")
    with pytest.raises(UnexpectedEndOfInput):
        read_str("^{:a 1}")


def test_only_first_form_is_read():
    assert read_str("1 2") == Int(1)


def test_tokenizer_errors_are_wrapped():
    with pytest.raises(TokenizeError) as exc:
        read_str(r'(str "\q")')
    assert isinstance(exc.value, ReadError)
    assert isinstance(exc.value.error, UnknownEscapeSequence)
    assert exc.value.__cause__ is exc.value.error
    assert exc.value.pos == 7


def test_unterminated_string_is_wrapped():
    with pytest.raises(TokenizeError) as exc:
        read_str('"abc')
    assert isinstance(exc.value.error, UnexpectedEndOfInput)
    assert isinstance(exc.value.error, ParseError)


def test_deep_nesting_is_a_read_error():
    depth = sys.getrecursionlimit()
    with pytest.raises(NestingTooDeep, match="nested too deeply at position") as exc:
        read_str("(" * depth + ")" * depth)
    assert isinstance(exc.value, ReadError)
    assert 0 <= exc.value.pos <= 2 * depth


def test_deep_reader_macro_chain_is_a_read_error():
    depth = sys.getrecursionlimit()
    with pytest.raises(NestingTooDeep):
        read_str("'" * depth + "x")


def test_moderate_nesting_reads():
    src = "(" * 50 + ")" * 50
    assert pr_str(read_str(src)) == src
