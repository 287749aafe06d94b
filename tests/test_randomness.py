import pytest

from authservice.randomness import Random, generate


def test_generate_round_trips_through_string():
    for _ in range(10):
        value = generate(32)
        assert len(value) == 32
        parsed = Random.from_string(str(value))
        assert value == parsed
        assert not (value != parsed)


def test_string_form_is_unpadded_web_safe_base64():
    assert str(Random(bytes([0xFB, 0xFF]))) == "-_8"
    assert Random.from_string("-_8") == Random(bytes([0xFB, 0xFF]))


def test_padded_input_is_accepted():
    assert Random.from_string("-_8=") == Random(bytes([0xFB, 0xFF]))


def test_different_sizes_are_unequal():
    assert Random(b"\x01\x02") != Random(b"\x01")


def test_different_contents_are_unequal():
    assert Random(b"\x01\x02") != Random(b"\x01\x03")


@pytest.mark.parametrize("text", ["!!", "ab+/", "a", "abc=="])
def test_malformed_text_raises(text):
    with pytest.raises(ValueError):
        Random.from_string(text)


def test_generated_values_differ():
    encoded = {str(generate(32)) for _ in range(10)}
    assert len(encoded) == 10
    assert all(len(text) == 43 for text in encoded)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        generate(-1)