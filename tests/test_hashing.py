import pytest

from wowstudio.hashing import jenkins_hash


def test_empty_input_hashes_to_zero():
    assert jenkins_hash("") == 0
    assert jenkins_hash(b"") == 0


def test_single_character():
    assert jenkins_hash("a") == 0xCA2E9442


def test_sentence():
    assert jenkins_hash("The quick brown fox jumps over the lazy dog") == 0x519E91F5


@pytest.mark.parametrize("text", ["a", "World\\Maps\\Azeroth", "ünïcode"])
def test_str_and_utf8_bytes_agree(text):
    assert jenkins_hash(text) == jenkins_hash(text.encode("utf-8"))


def test_stops_at_nul_byte():
    assert jenkins_hash(b"ab\x00cd") == jenkins_hash(b"ab")


@pytest.mark.parametrize("data", [b"x", b"\xff\x80", b"a" * 500])
def test_result_fits_in_32_bits(data):
    assert 0 <= jenkins_hash(data) <= 0xFFFFFFFF


def test_different_inputs_differ():
    assert jenkins_hash("abc") != jenkins_hash("acb")