import io

import pytest

from pipexpy.printf import CONVERSIONS, format_printf, print_formatted


def test_plain_text_is_unchanged():
    assert format_printf("hello world\n") == "hello world\n"


def test_null_string_and_nil_pointer():
    assert format_printf("%s", None) == "(null)"
    assert format_printf("%p", None) == "(nil)"
    assert format_printf("%p", 0) == "(nil)"


def test_string_conversion_inserts_argument():
    assert format_printf("[%s]", "abc") == "[abc]"


def test_int_min_is_rendered():
    assert format_printf("%d", -2147483648) == "-2147483648"


@pytest.mark.parametrize("value", [0, 1, -1, 42, -9876, 2147483647, -2147483648])
@pytest.mark.parametrize("conv", ["d", "i"])
def test_signed_round_trip(conv, value):
    assert int(format_printf("%" + conv, value)) == value


def test_signed_wraps_to_32_bits():
    assert int(format_printf("%d", 2**31)) == -(2**31)


@pytest.mark.parametrize("value", [0, 7, 123456, 2**32 - 1])
def test_unsigned_round_trip(value):
    assert int(format_printf("%u", value)) == value


def test_unsigned_of_negative_wraps():
    assert int(format_printf("%u", -1)) == 2**32 - 1


@pytest.mark.parametrize("value", [0, 15, 255, 48879, 2**32 - 1])
def test_hex_round_trip_and_case(value):
    lower = format_printf("%x", value)
    upper = format_printf("%X", value)
    assert int(lower, 16) == value
    assert int(upper, 16) == value
    assert lower == lower.lower()
    assert upper == upper.upper()
    assert lower.upper() == upper


def test_pointer_has_prefix_and_round_trips():
    text = format_printf("%p", 0xDEADBEEF)
    assert text.startswith("0x")
    assert int(text[2:], 16) == 0xDEADBEEF


def test_char_from_int_and_str():
    assert format_printf("%c%c", ord("A"), "b") == "Ab"


def test_char_takes_low_byte():
    assert format_printf("%c", 256 + ord("z")) == "z"


def test_percent_literal_consumes_no_argument():
    assert format_printf("%%%d", 5) == "%5"


def test_unknown_conversion_prints_character():
    assert format_printf("Int (%z) : %d\n", 5) == "Int (z) : 5\n"


def test_trailing_percent_emits_nul():
    assert format_printf("ab%") == "ab\0"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_printf("%d %d", 1)


def test_wrong_type_raises():
    with pytest.raises(TypeError):
        format_printf("%d", "seven")


def test_extra_arguments_are_ignored():
    assert format_printf("%s", "x", "y") == "x"


def test_every_conversion_consumes_one_argument():
    fmt = " ".join("%" + c for c in CONVERSIONS)
    args = ["s", 1, "c", 1, 1, 1, 1, 1]
    assert format_printf(fmt, *args).count(" ") == len(CONVERSIONS) - 1


def test_print_formatted_writes_and_counts():
    out = io.StringIO()
    count = print_formatted("%s=%d%%", "n", -3, file=out)
    assert out.getvalue() == format_printf("%s=%d%%", "n", -3)
    assert count == len(out.getvalue())


def test_print_formatted_defaults_to_stdout(capsys):
    count = print_formatted("%s!", "hi")
    assert capsys.readouterr().out == "hi!"
    assert count == 3