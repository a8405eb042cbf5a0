"""Byte text codec: canonical encoding and lenient decoding."""

from asmedit.utils.hex_utils import (
    format_offset, from_hex_string, is_valid_hex_string, to_hex_string
)


def test_encode_is_lowercase_two_digit_space_joined():
    assert to_hex_string(b'\x0a\xff\x00') == "0a ff 00"


def test_encode_single_byte_has_no_separator():
    assert to_hex_string(b'\x55') == "55"


def test_encode_empty_is_empty_string():
    assert to_hex_string(b'') == ""


def test_round_trip_all_byte_values():
    data = bytes(range(256))
    assert from_hex_string(to_hex_string(data)) == data


def test_decode_tolerates_arbitrary_whitespace():
    assert from_hex_string(" 48\t89 \n  e5 ") == b'\x48\x89\xe5'


def test_decode_without_separators():
    assert from_hex_string("4889e5") == b'\x48\x89\xe5'


def test_decode_accepts_uppercase():
    assert from_hex_string("FF AB") == b'\xff\xab'


def test_malformed_pair_decodes_as_zero():
    assert from_hex_string("55 zz c3") == b'\x55\x00\xc3'


def test_sign_characters_are_malformed():
    assert from_hex_string("+1 -1") == b'\x00\x00'


def test_trailing_single_digit_is_read_alone():
    assert from_hex_string("55 c") == b'\x55\x0c'


def test_decode_empty_string():
    assert from_hex_string("") == b''


def test_valid_hex_string_checks_digits_and_parity():
    assert is_valid_hex_string("55 c3")
    assert not is_valid_hex_string("55 c")
    assert not is_valid_hex_string("5g")


def test_format_offset_is_padded_uppercase():
    assert format_offset(0x1a2b) == "00001A2B"
    assert format_offset(0xff, width=4) == "00FF"
