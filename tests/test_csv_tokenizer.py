"""CSV tokenizer behavior on the quirks of published sheet exports."""
import pytest

from service_automation.errors import MalformedInput
from service_automation.services.csv_tokenizer import parse_csv, split_csv_line


def test_quoted_field_is_unquoted():
    rows = parse_csv('Manufacturer,Product Type,Warranty Status\nNeff,Oven,"In Warranty"')
    assert rows == [{"Manufacturer": "Neff", "Product Type": "Oven", "Warranty Status": "In Warranty"}]


def test_comma_inside_quotes_is_not_split():
    assert split_csv_line('a,"b, c",d') == ['a', 'b, c', 'd']


def test_fields_are_trimmed_and_quoted_headers_unwrapped():
    rows = parse_csv('"Name" , "Phone"\n  Alice  ,  "123"  ')
    assert rows == [{"Name": "Alice", "Phone": "123"}]


def test_doubled_quote_is_two_toggles():
    assert split_csv_line('"say ""hi""",x') == ['say hi', 'x']


def test_blank_lines_skipped():
    rows = parse_csv('A,B\n\n1,2\n   \n3,4\n')
    assert [row["A"] for row in rows] == ['1', '3']


def test_short_rows_padded_and_long_rows_truncated():
    rows = parse_csv('A,B,C\n1\n1,2,3,4,5')
    assert rows[0] == {"A": "1", "B": "", "C": ""}
    assert rows[1] == {"A": "1", "B": "2", "C": "3"}


def test_preserves_row_order():
    rows = parse_csv('A\nz\ny\nx')
    assert [row["A"] for row in rows] == ['z', 'y', 'x']


def test_crlf_line_endings():
    rows = parse_csv('A,B\r\n1,2\r\n')
    assert rows == [{"A": "1", "B": "2"}]


@pytest.mark.parametrize("text", ["", "\nA,B\n1,2", "   \n"])
def test_empty_header_is_malformed(text):
    with pytest.raises(MalformedInput):
        parse_csv(text)


def test_header_only_yields_no_rows():
    assert parse_csv('A,B,C') == []
