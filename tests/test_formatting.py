import math

import pytest

from tinyrt.formatting import fctprintf, printf, snprintf, sprintf, vformat


@pytest.mark.parametrize(
    ("fmt", "args"),
    [
        ("%d", (42,)),
        ("%i", (-7,)),
        ("%5d", (42,)),
        ("%-5d|", (42,)),
        ("%05d", (-42,)),
        ("%+d", (5,)),
        ("% d", (5,)),
        ("%.3d", (7,)),
        ("%x", (255,)),
        ("%X", (48879,)),
        ("%#x", (255,)),
        ("%#X", (255,)),
        ("%o", (8,)),
        ("%u", (123,)),
        ("%s", ("hello",)),
        ("%10s|", ("hi",)),
        ("%-10s|", ("hi",)),
        ("%.2s", ("hello",)),
        ("%c", ("A",)),
        ("%5c", ("A",)),
        ("%f", (3.14159,)),
        ("%.2f", (1.5,)),
        ("%8.3f", (-2.25,)),
        ("%e", (12345.678,)),
        ("%E", (12345.678,)),
        ("%%", ()),
        ("a%db%sc", (1, "x")),
    ],
)
def test_agrees_with_standard_formatting(fmt, args):
    assert sprintf(fmt, *args) == fmt % args


@pytest.mark.parametrize(
    ("fmt", "value"),
    [("%ld", -(2**40)), ("%lld", 2**62), ("%lu", 2**63), ("%zu", 2**50)],
)
def test_long_lengths_keep_64_bits(fmt, value):
    assert sprintf(fmt, value) == str(value)


def test_unsigned_wraps_to_type_width():
    assert sprintf("%x", -1) == sprintf("%x", 0xFFFFFFFF)
    assert sprintf("%lx", -1) == sprintf("%lx", 2**64 - 1)
    assert sprintf("%hhu", 256) == sprintf("%u", 0)


def test_signed_short_and_char_wrap():
    assert sprintf("%hhd", 255) == sprintf("%d", -1)
    assert sprintf("%hd", 65535) == sprintf("%d", -1)
    assert sprintf("%d", 2**32 + 5) == sprintf("%d", 5)


def test_zero_with_zero_precision_prints_nothing():
    assert sprintf("%.0d", 0) == ""


def test_star_width_and_precision():
    assert sprintf("%*d", 5, 42) == sprintf("%5d", 42)
    assert sprintf("%*d", -5, 42) == sprintf("%-5d", 42)
    assert sprintf("%.*f", 2, 1.5) == sprintf("%.2f", 1.5)
    assert sprintf("%.*d", -3, 7) == sprintf("%.0d", 7)


def test_pointer_is_sixteen_upper_hex_digits():
    result = sprintf("%p", 0xABCDEF)
    assert len(result) == 16
    assert int(result, 16) == 0xABCDEF
    assert result == result.upper()


def test_binary_and_hash_prefix():
    assert int(sprintf("%b", 10), 2) == 10
    prefixed = sprintf("%#b", 10)
    assert prefixed.startswith("0b")
    assert int(prefixed[2:], 2) == 10


def test_large_fixed_switches_to_exponential():
    assert sprintf("%f", 1e10) == sprintf("%e", 1e10)


def test_exponential_three_digit_exponent():
    assert sprintf("%e", 1e200).endswith("e+200")


def test_g_small_value_uses_exponential():
    assert sprintf("%g", 1e-5) == "%e" % 1e-5


def test_g_in_range_uses_fixed():
    assert sprintf("%g", 0.5) == sprintf("%f", 0.5)


def test_special_float_values():
    assert sprintf("%f", math.nan) == "nan"
    assert sprintf("%5f", math.nan) == "nan".rjust(5)
    assert sprintf("%f", math.inf) == "inf"
    assert sprintf("%f", -math.inf) == "-inf"


def test_char_from_integer():
    assert sprintf("%c", 65) == sprintf("%c", "A")


def test_string_and_format_end_at_nul():
    assert sprintf("%s", "ab\0cd") == "ab"
    assert sprintf("ab\0cd") == "ab"


def test_unknown_specifier_prints_itself():
    assert sprintf("%q") == "q"


def test_trailing_percent_is_dropped():
    assert sprintf("abc%") == "abc"


def test_vformat_takes_a_sequence():
    assert vformat("%d-%s", [3, "x"]) == sprintf("%d-%s", 3, "x")


def test_surplus_arguments_are_ignored():
    assert sprintf("%d", 1, 2, 3) == sprintf("%d", 1)


def test_snprintf_truncates_and_reports_full_length():
    text, total = snprintf(5, "%s", "abcdefgh")
    assert text == "abcdefgh"[:4]
    assert total == len("abcdefgh")


def test_snprintf_fits():
    text, total = snprintf(100, "%d", 12345)
    assert text == sprintf("%d", 12345)
    assert total == len(text)


def test_snprintf_zero_count():
    assert snprintf(0, "%s", "abc") == ("", 3)


def test_snprintf_negative_count():
    with pytest.raises(ValueError):
        snprintf(-1, "x")


def test_printf_writes_to_stdout(capsys):
    count = printf("%d-%s\n", 3, "x")
    out = capsys.readouterr().out
    assert out == sprintf("%d-%s\n", 3, "x")
    assert count == len(out)


def test_printf_skips_nul_but_counts_it(capsys):
    count = printf("a%cb", 0)
    assert capsys.readouterr().out == "ab"
    assert count == 3


def test_fctprintf_passes_each_character():
    received = []
    count = fctprintf(received.append, "%s=%d", "k", 9)
    assert "".join(received) == sprintf("%s=%d", "k", 9)
    assert count == len(received)


@pytest.mark.parametrize(
    ("fmt", "args"),
    [
        ("%d", ()),
        ("%d", ("x",)),
        ("%s", (5,)),
        ("%f", ("x",)),
        ("%c", ("ab",)),
        ("%*d", (1.5, 3)),
    ],
)
def test_bad_arguments_raise(fmt, args):
    with pytest.raises(TypeError):
        sprintf(fmt, *args)