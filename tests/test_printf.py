import pytest

from cdsmodel.printf import fctprintf, snprintf, sprintf


def test_plain_text_passes_through():
    assert sprintf("hello, world") == "hello, world"


def test_percent_escape_and_unknown_specifier():
    assert sprintf("100%%") == "100%"
    assert sprintf("%q") == "q"


@pytest.mark.parametrize(
    "fmt, value",
    [
        ("%d", 42),
        ("%d", -42),
        ("%i", 7),
        ("%5d", 42),
        ("%-5d|", 42),
        ("%05d", 42),
        ("%05d", -42),
        ("%+d", 42),
        ("% d", 42),
        ("%.3d", 5),
        ("%x", 255),
        ("%X", 255),
        ("%o", 8),
        ("%#x", 255),
        ("%#X", 255),
        ("%#08x", 255),
        ("%#8x", 255),
    ],
)
def test_integers_match_standard_formatting(fmt, value):
    assert sprintf(fmt, value) == fmt % value


def test_unsigned_wraps_to_int_size():
    assert sprintf("%x", -1) == "%x" % (2**32 - 1)
    assert sprintf("%u", -1) == str(2**32 - 1)


def test_long_modifiers_use_64_bits():
    assert sprintf("%lu", -1) == str(2**64 - 1)
    assert sprintf("%llx", -1) == "%x" % (2**64 - 1)
    assert sprintf("%ld", -1) == "-1"
    assert sprintf("%zu", 2**40) == str(2**40)


def test_char_and_short_modifiers_truncate():
    assert sprintf("%hhd", 300) == "44"
    assert sprintf("%hu", 2**16 + 3) == "3"


def test_binary_specifier():
    assert sprintf("%b", 5) == format(5, "b")
    assert sprintf("%#b", 5) == format(5, "#b")


def test_star_width_and_precision():
    assert sprintf("%*d", 5, 42) == "%5d" % 42
    assert sprintf("%*d", -5, 42) == "%-5d" % 42
    assert sprintf("%.*s", 2, "hello") == "he"
    assert sprintf("%.*d", -1, 7) == "7"


@pytest.mark.parametrize(
    "fmt, value",
    [("%s", "abc"), ("%5s", "abc"), ("%-5s|", "abc"), ("%.2s", "hello"), ("%.0s", "hello")],
)
def test_strings_match_standard_formatting(fmt, value):
    assert sprintf(fmt, value) == fmt % value


def test_string_stops_at_nul_and_accepts_bytes():
    assert sprintf("%s", "ab\0cd") == "ab"
    assert sprintf("%s", b"xyz") == "xyz"


@pytest.mark.parametrize("fmt, value", [("%c", "x"), ("%3c", "x"), ("%-3c|", "x"), ("%c", 65)])
def test_chars_match_standard_formatting(fmt, value):
    assert sprintf(fmt, value) == fmt % value


@pytest.mark.parametrize(
    "fmt, value",
    [("%f", 3.25), ("%f", -2.75), ("%.2f", 0.5), ("%10.3f", 1.5), ("%-10.1f|", 2.25),
     ("%e", 1.5), ("%e", 250.0), ("%E", 1.5), ("%+.2f", 1.25)],
)
def test_floats_match_standard_formatting(fmt, value):
    assert sprintf(fmt, value) == fmt % value


def test_special_float_values():
    assert sprintf("%f", float("inf")) == "%f" % float("inf")
    assert sprintf("%f", float("-inf")) == "%f" % float("-inf")
    assert sprintf("%f", float("nan")) == "%f" % float("nan")


def test_large_fixed_switches_to_exponential():
    assert sprintf("%f", 1e10) == sprintf("%e", 1e10)


def test_adaptive_notation():
    assert sprintf("%g", 0.5) == sprintf("%.6f", 0.5)
    assert sprintf("%g", 1e7) == sprintf("%e", 1e7)
    assert sprintf("%G", 1e7) == sprintf("%E", 1e7)


def test_pointer_is_sixteen_uppercase_hex_digits():
    assert sprintf("%p", 0x1234) == format(0x1234, "016X")
    assert sprintf("%p", None) == format(0, "016X")


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d %d", 1)


def test_non_integer_for_integer_specifier_raises():
    with pytest.raises(TypeError):
        sprintf("%d", 1.5)


def test_trailing_percent_produces_nothing():
    assert sprintf("abc%") == "abc"


def test_snprintf_truncates_and_reports_full_length():
    full = sprintf("%d-%s", 123456, "tail")
    text, needed = snprintf(4, "%d-%s", 123456, "tail")
    assert text == full[:3]
    assert needed == len(full)


def test_snprintf_fits():
    text, needed = snprintf(64, "%5d", 42)
    assert text == sprintf("%5d", 42)
    assert needed == len(text)


def test_snprintf_zero_count():
    text, needed = snprintf(0, "%s", "abc")
    assert text == ""
    assert needed == len("abc")


def test_snprintf_negative_count_raises():
    with pytest.raises(ValueError):
        snprintf(-1, "x")


def test_fctprintf_sends_each_character():
    collected = []
    count = fctprintf(collected.append, "%s=%04d", "key", 7)
    assert "".join(collected) == sprintf("%s=%04d", "key", 7)
    assert count == len(collected)


def test_fctprintf_skips_nul_but_counts_it():
    collected = []
    count = fctprintf(collected.append, "a%cb", 0)
    assert collected == ["a", "b"]
    assert count == len("a?b")