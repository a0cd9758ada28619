import numpy as np
import pytest

from pixels import PixelBuffer


def test_from_rgb_array_packs_row_major():
    array = np.zeros((2, 3, 3), dtype=np.uint8)
    array[1, 2] = (0x11, 0x22, 0x33)

    buffer = PixelBuffer.from_rgb_array(array)

    assert (buffer.width, buffer.height) == (3, 2)
    assert buffer.pixels[1 * 3 + 2] == 0x332211
    assert buffer.get(2, 1) == 0x332211
    assert buffer.get(0, 0) == 0


def test_rgb_array_round_trip():
    array = np.random.default_rng(1).integers(0, 256, (5, 7, 3), dtype=np.uint8)

    assert np.array_equal(PixelBuffer.from_rgb_array(array).to_rgb_array(), array)


def test_length_must_match_dimensions():
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, [0, 0, 0])

    with pytest.raises(ValueError):
        PixelBuffer(0, 1, [])


def test_samples_must_fit_in_24_bits():
    with pytest.raises(ValueError):
        PixelBuffer(2, 1, [0x1000000, 0])

    with pytest.raises(ValueError):
        PixelBuffer.blank(2, 2, 0x1000000)

    buffer = PixelBuffer.blank(2, 2)
    with pytest.raises(ValueError):
        buffer.set(0, 0, 0x1000000)
    with pytest.raises(ValueError):
        buffer.set(0, 0, -1)

    buffer.set(1, 1, 0xFFFFFF)
    assert buffer.get(1, 1) == 0xFFFFFF
    assert buffer.get(0, 0) == 0


def test_set_and_fill():
    buffer = PixelBuffer.blank(4, 3)
    buffer.set(3, 2, 0xABCDEF)
    buffer.fill(1, 0, 2, 1, 0x123456)

    assert buffer.get(3, 2) == 0xABCDEF
    assert buffer.region(1, 0, 2, 1).tolist() == [[0x123456] * 2] * 2
    assert buffer.get(0, 0) == 0
    assert buffer.get(3, 0) == 0


def test_is_uniform():
    buffer = PixelBuffer.blank(4, 4, 0xFFFFFF)
    buffer.set(3, 3, 0)

    assert buffer.is_uniform(0, 0, 2, 3) == (True, 0xFFFFFF)
    assert buffer.is_uniform(0, 0, 3, 3) == (False, 0xFFFFFF)
    assert buffer.is_uniform(3, 3, 3, 3) == (True, 0)


def test_equality():
    assert PixelBuffer.blank(2, 2, 5) == PixelBuffer.blank(2, 2, 5)
    assert PixelBuffer.blank(2, 2, 5) != PixelBuffer.blank(2, 2, 6)
    assert PixelBuffer.blank(1, 4) != PixelBuffer.blank(4, 1)
