from __future__ import annotations

import io

import pytest

from envbind.binder import normalized_values
from envbind.dialects import NODEJS, PYTHON, DialectProfile
from envbind.errors import EnvSyntaxError
from envbind.raw import NAKED, Present
from envbind.scanner import DotenvScanner, scan_dotenv


def test_scan_simple_assignments_and_comments() -> None:
    text = "# leading comment\nA=1\n\n  B=two # trailing\n#C=3\n"
    raw = scan_dotenv(text, NODEJS)
    assert raw == {"A": Present("1"), "B": Present("two ")}


def test_scan_spaces_before_equal_sign() -> None:
    raw = scan_dotenv("NUMBER  = 123", NODEJS)
    assert raw["NUMBER"].text.strip() == "123"


def test_scan_reads_from_stream() -> None:
    raw = scan_dotenv(io.StringIO("A=1\nB=2\n"), PYTHON)
    assert normalized_values(raw) == {"A": "1", "B": "2"}


def test_scan_empty_value_is_present() -> None:
    raw = scan_dotenv("EMPTY=\nEOF_EMPTY=", NODEJS)
    assert raw == {"EMPTY": Present(""), "EOF_EMPTY": Present("")}


def test_scan_unquoted_backslashes_untouched() -> None:
    raw = scan_dotenv(r"STRING=not\nexpanded", NODEJS)
    assert raw["STRING"].text == r"not\nexpanded"


@pytest.mark.parametrize("quote", ['"', "'", "`"])
def test_scan_strips_supported_quotes(quote: str) -> None:
    raw = scan_dotenv(f"QUOTED={quote}I am quoted!{quote}", NODEJS)
    assert raw["QUOTED"] == Present("I am quoted!", quote=quote)
    assert raw["QUOTED"].literal == f"{quote}I am quoted!{quote}"


def test_scan_quoted_value_keeps_hash_and_newlines() -> None:
    raw = scan_dotenv('MULTI="first # not a comment\nsecond"\nNEXT=1', NODEJS)
    assert raw["MULTI"].text == "first # not a comment\nsecond"
    assert raw["NEXT"] == Present("1")


def test_scan_quote_inside_bareword_opens_quoted_value() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("MSG=it's", NODEJS)
    assert str(excinfo.value) == "line 1: syntax error (missing closing quote)"

    raw = scan_dotenv("MSG=prefix 'quoted' \nNEXT=1", PYTHON)
    assert raw["MSG"] == Present("quoted", quote="'")
    assert raw["NEXT"] == Present("1")


def test_scan_unsupported_quote_inside_bareword() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("OK=1\nCMD=echo `date`", PYTHON)
    assert str(excinfo.value) == "line 2: syntax error (unsupported quote)"


def test_scan_expands_escaped_newlines_for_double_quote_only() -> None:
    text = "\n".join(
        [
            r'DOUBLE="newline\nexpanded"',
            r'WINDOWS="newline\r\nexpanded"',
            r"SINGLE='newline \n not expanded'",
            r"BACKTICK=`newline \n not expanded`",
        ]
    )
    raw = scan_dotenv(text, NODEJS)
    assert raw["DOUBLE"].text == "newline\nexpanded"
    assert raw["WINDOWS"].text == "newline\nexpanded"
    assert raw["SINGLE"].text == r"newline \n not expanded"
    assert raw["BACKTICK"].text == r"newline \n not expanded"


def test_scan_custom_profile_without_expansion() -> None:
    profile = DialectProfile(name="plain", quote_chars=frozenset({'"'}))
    raw = scan_dotenv(r'S="line1\nline2"', profile)
    assert raw["S"].text == r"line1\nline2"


def test_scan_naked_variable_rejected_by_nodejs() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("NUMBER\nSTRING=foo", NODEJS)
    assert str(excinfo.value) == "line 1: syntax error (naked variable)"


def test_scan_naked_variable_reports_line_of_name() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("A=1\n\n# comment\nNAKED\nB=2", NODEJS)
    assert excinfo.value.line == 4
    assert excinfo.value.reason == "naked variable"


def test_scan_naked_variable_allowed_by_python() -> None:
    raw = scan_dotenv("NAKED\nTRAILING   \nAT_EOF", PYTHON)
    assert raw == {"NAKED": NAKED, "TRAILING": NAKED, "AT_EOF": NAKED}
    assert normalized_values(raw) == {"AT_EOF": None, "NAKED": None, "TRAILING": None}


def test_scan_naked_variable_with_crlf() -> None:
    raw = scan_dotenv("NAKED\r\nA=1\r\n", PYTHON)
    assert raw["NAKED"] is NAKED
    assert raw["A"].text == "1\r"


@pytest.mark.parametrize("profile", [NODEJS, PYTHON])
def test_scan_missing_equal_sign(profile: DialectProfile) -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("NUMBER 123", profile)
    assert str(excinfo.value) == "line 1: syntax error (invalid variable name)"


def test_scan_name_cannot_start_with_equal_sign() -> None:
    with pytest.raises(EnvSyntaxError, match="invalid variable name"):
        scan_dotenv("A=1\n=oops", NODEJS)


@pytest.mark.parametrize("quote", ['"', "'", "`"])
def test_scan_missing_closing_quote(quote: str) -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv(f"QUOTED={quote}I should be closed", NODEJS)
    assert str(excinfo.value) == "line 1: syntax error (missing closing quote)"


def test_scan_missing_closing_quote_reports_line_where_value_began() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv('A=1\nB="open\nstill open\n', NODEJS)
    assert excinfo.value.line == 2


def test_scan_unsupported_quote_fails_even_when_closed() -> None:
    with pytest.raises(EnvSyntaxError) as excinfo:
        scan_dotenv("BACKTICK=`backquotes not supported`", PYTHON)
    assert str(excinfo.value) == "line 1: syntax error (unsupported quote)"


def test_scan_later_assignment_wins() -> None:
    raw = scan_dotenv("A=1\nA=2", NODEJS)
    assert raw["A"] == Present("2")


def test_scanner_instance_is_reusable() -> None:
    scanner = DotenvScanner("nodejs")
    assert normalized_values(scanner.scan("A=1\n")) == {"A": "1"}
    assert normalized_values(scanner.scan("B=2\nC=3\n")) == {"B": "2", "C": "3"}
    assert scanner.line == 3
