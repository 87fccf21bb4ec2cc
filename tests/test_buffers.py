import os
import random
import sys

import pytest

SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
	sys.path.insert(0, SRC)

from huffman_buffers import BitStream, ByteVector
from huffman_errors import IndexOutOfRangeError


def test_byte_vector_doubles_capacity():
	vec = ByteVector(capacity=2)
	assert vec.capacity == 2
	for b in (1, 2, 3):
		vec.append(b)
	assert vec.capacity == 4
	vec.append(4)
	vec.append(5)
	assert vec.capacity == 8
	assert vec.size() == 5
	assert vec.to_bytes() == b"\x01\x02\x03\x04\x05"


def test_byte_vector_to_bytes_has_no_slack():
	vec = ByteVector(capacity=64)
	vec.extend(b"abc")
	assert len(vec.to_bytes()) == 3
	vec.shrink_to_fit()
	assert vec.capacity == 3
	assert list(vec) == [97, 98, 99]


def test_byte_vector_get_out_of_range():
	vec = ByteVector(b"xy")
	assert vec.get(1) == ord("y")
	with pytest.raises(IndexOutOfRangeError):
		vec.get(2)
	with pytest.raises(IndexError):
		vec.get(-1)


def test_append_bits_msb_first():
	stream = BitStream()
	stream.append_bits(0b101, 3)
	stream.append_bits(0xABCD, 16)
	stream.append_bit(1)
	expected = (0b101 << 17) | (0xABCD << 1) | 1
	assert stream.bit_count() == 20
	assert stream.byte_count() == 3
	assert stream.read_bits(0, 20) == expected
	assert stream.to_bytes() == (expected << 4).to_bytes(3, "big")


def test_append_bits_uses_low_bits_only():
	stream = BitStream()
	stream.append_bits(0xFF05, 4)
	assert stream.read_bits(0, 4) == 0b0101


def test_pending_bits_are_readable_and_zero_padded():
	stream = BitStream()
	stream.append_bits(0b110, 3)
	assert [stream.read_bit(i) for i in range(3)] == [1, 1, 0]
	assert stream.byte_count() == 1
	assert stream.to_bytes() == b"\xc0"


def test_full_byte_is_flushed():
	stream = BitStream()
	stream.append_bits(0x5A, 8)
	assert stream.bytes.size() == 1
	assert stream.bit_count() == 8
	assert stream.to_bytes() == b"\x5a"


def test_append_bit_string():
	stream = BitStream()
	stream.append_bit_string("0100000101")
	assert stream.read_bits(0, 8) == 0x41
	assert stream.read_bits(8, 2) == 0b01


def test_append_long_bit_string():
	bits = "1" * 37 + "0" * 3
	stream = BitStream()
	stream.append_bit_string(bits)
	assert stream.bit_count() == 40
	assert stream.to_bytes() == int(bits, 2).to_bytes(5, "big")


def test_invalid_width():
	stream = BitStream()
	with pytest.raises(ValueError):
		stream.append_bits(1, 0)
	with pytest.raises(ValueError):
		stream.append_bits(1, 33)
	with pytest.raises(ValueError):
		stream.read_bits(0, 33)


def test_read_past_end():
	stream = BitStream()
	stream.append_bits(0b1, 1)
	with pytest.raises(IndexOutOfRangeError):
		stream.read_bit(1)
	with pytest.raises(IndexOutOfRangeError):
		stream.read_bit(64)


def test_read_bits_across_byte_boundary():
	stream = BitStream(b"\x0f\xf0")
	assert stream.read_bits(4, 8) == 0xFF
	assert stream.read_bits(0, 16) == 0x0FF0


def test_iter_bits_from_offset():
	assert list(BitStream(b"\xa5").iter_bits(3)) == [0, 0, 1, 0, 1]

	stream = BitStream()
	stream.append_bits(0xA5, 8)
	stream.append_bits(0b01, 2)
	assert list(stream.iter_bits(6)) == [0, 1, 0, 1]
	assert list(stream.iter_bits(9)) == [1]


def test_random_widths_reassemble():
	rng = random.Random(1234)
	stream = BitStream()
	expected = ""
	for _ in range(200):
		width = rng.randint(1, 32)
		value = rng.getrandbits(width)
		stream.append_bits(value, width)
		expected += format(value, "0{}b".format(width))

	assert stream.bit_count() == len(expected)
	assert stream.byte_count() == (len(expected) + 7) // 8
	assert "".join(str(b) for b in stream.iter_bits()) == expected
	assert stream.read_bits(0, 32) == int(expected[:32], 2)
	assert stream.read_bits(101, 17) == int(expected[101:118], 2)
