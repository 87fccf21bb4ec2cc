# filename: huffman_buffers.py

from huffman_errors import IndexOutOfRangeError


class ByteVector:
    """Append-only byte buffer that doubles its storage when full."""

    def __init__(self, source=None, capacity=16):
        if source is not None:
            self._data = bytearray(source)
            self._size = len(self._data)
        else:
            self._data = bytearray(max(1, capacity))
            self._size = 0

    def __len__(self):
        return self._size

    def __iter__(self):
        for i in range(self._size):
            yield self._data[i]

    @property
    def capacity(self):
        return len(self._data)

    def size(self):
        return self._size

    def append(self, byte):
        if self._size == len(self._data):
            # grow by doubling so appends stay amortized O(1)
            self._data.extend(bytes(max(1, len(self._data))))
        self._data[self._size] = byte & 0xFF
        self._size += 1

    def extend(self, raw):
        for byte in raw:
            self.append(byte)

    def get(self, index):
        if index < 0 or index >= self._size:
            raise IndexOutOfRangeError(
                f"index {index} out of range for buffer of size {self._size}")
        return self._data[index]

    def to_bytes(self):
        return bytes(self._data[:self._size])

    def shrink_to_fit(self):
        del self._data[self._size:]


class BitStream:
    """
    A sequence of bits stored MSB-first in a ByteVector.

    Up to seven trailing bits live in a pending byte until it fills up and is
    flushed into the buffer. Bit offset 0 is the first bit ever appended.
    """

    MAX_WIDTH = 32

    def __init__(self, source=None):
        self.bytes = ByteVector(source)
        self._pending = 0
        self._pending_bits = 0

    def __len__(self):
        return self.bit_count()

    def append_bit(self, bit):
        self.append_bits(bit & 1, 1)

    def append_bits(self, value, width):
        """Append the low `width` bits of `value`, most significant first."""
        if not 1 <= width <= self.MAX_WIDTH:
            raise ValueError(f"bit width must be within 1..{self.MAX_WIDTH}, got {width}")
        acc = (self._pending << width) | (value & ((1 << width) - 1))
        total = self._pending_bits + width
        while total >= 8:
            total -= 8
            self.bytes.append((acc >> total) & 0xFF)
        self._pending = acc & ((1 << total) - 1)
        self._pending_bits = total

    def append_bit_string(self, bits):
        # chars other than '0' and '1' give undefined results
        for start in range(0, len(bits), self.MAX_WIDTH):
            chunk = bits[start:start + self.MAX_WIDTH]
            self.append_bits(int(chunk, 2), len(chunk))

    def read_bit(self, index):
        byte_index, bit_index = divmod(index, 8)
        if byte_index < self.bytes.size():
            return (self.bytes.get(byte_index) >> (7 - bit_index)) & 1
        if byte_index == self.bytes.size() and bit_index < self._pending_bits:
            return (self._pending >> (self._pending_bits - 1 - bit_index)) & 1
        raise IndexOutOfRangeError(f"bit {index} is beyond the end of a {self.bit_count()}-bit stream")

    def read_bits(self, bit_offset, width):
        """Read `width` bits from `bit_offset`; the first bit read ends up as the MSB."""
        if not 1 <= width <= self.MAX_WIDTH:
            raise ValueError(f"bit width must be within 1..{self.MAX_WIDTH}, got {width}")
        value = 0
        for i in range(width):
            value = (value << 1) | self.read_bit(bit_offset + i)
        return value

    def iter_bits(self, bit_offset=0):
        """Yield bits one at a time from `bit_offset` to the end of the stream."""
        byte_index, bit_index = divmod(bit_offset, 8)
        for i in range(byte_index, self.bytes.size()):
            byte = self.bytes.get(i)
            for shift in range(7 - bit_index, -1, -1):
                yield (byte >> shift) & 1
            bit_index = 0
        if byte_index > self.bytes.size():
            return
        for shift in range(self._pending_bits - 1 - bit_index, -1, -1):
            yield (self._pending >> shift) & 1

    def bit_count(self):
        return self.bytes.size() * 8 + self._pending_bits

    def byte_count(self):
        # a partially filled byte still counts as a whole one
        return self.bytes.size() + (1 if self._pending_bits else 0)

    def to_bytes(self):
        out = self.bytes.to_bytes()
        if self._pending_bits:
            out += bytes([(self._pending << (8 - self._pending_bits)) & 0xFF])
        return out
