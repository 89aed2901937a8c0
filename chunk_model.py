import zlib

from chunk_type import ChunkType
from png_errors import ErrorKind, PngError

# CC - critical chunk | AC - ancillary chunk
chunk_types = {
    "49484452": "IHDR",  # CC
    "504c5445": "PLTE",  # CC
    "49444154": "IDAT",  # CC
    "49454e44": "IEND",  # CC
    "624b4744": "bKGD",  # AC
    "6348524d": "cHRM",  # AC
    "67414d41": "gAMA",  # AC
    "68495354": "hIST",  # AC
    "69434350": "iCCP",  # AC
    "69545874": "iTXt",  # AC
    "70485973": "pHYs",  # AC
    "73424954": "sBIT",  # AC
    "73504c54": "sPLT",  # AC
    "73524742": "sRGB",  # AC
    "74455874": "tEXt",  # AC
    "74494d45": "tIME",  # AC
    "74524e53": "tRNS",  # AC
    "7a545874": "zTXt",  # AC
}

LENGTH_BYTES = 4
TYPE_BYTES = 4
CRC_BYTES = 4
MIN_BYTES = LENGTH_BYTES + TYPE_BYTES + CRC_BYTES
MAX_LENGTH = 2**31 - 1


def chunk_crc(type_bytes, data):
    return zlib.crc32(type_bytes + data) & 0xFFFFFFFF


def is_standard_type(chunk_type):
    return chunk_type.bytes().hex() in chunk_types


class Chunk:
    """One length-prefixed, typed and checksummed PNG chunk.

    The CRC is never stored separately, it is always computed from the type
    and the payload, so a chunk built here can't carry a stale checksum.
    """

    __slots__ = ("_chunk_type", "_data")

    def __init__(self, chunk_type, data=b""):
        self._chunk_type = chunk_type
        self._data = bytes(data)

    @classmethod
    def parse(cls, buf):
        """Parse the chunk at the start of `buf`. Bytes after it are ignored."""
        buf = memoryview(buf)
        if len(buf) < MIN_BYTES:
            raise PngError(
                ErrorKind.TOO_SHORT,
                f"Minimum length of bytes expected {MIN_BYTES} but found {len(buf)}",
            )

        length = int.from_bytes(buf[:LENGTH_BYTES], byteorder="big")
        if length > MAX_LENGTH:
            raise PngError(
                ErrorKind.INVALID_LENGTH,
                f"Chunk declares {length} bytes of data, more than the maximum of {MAX_LENGTH}",
            )

        end = MIN_BYTES + length
        if len(buf) < end:
            raise PngError(
                ErrorKind.TOO_SHORT,
                f"Chunk declares {length} bytes of data but only {len(buf) - MIN_BYTES} are available",
            )

        type_bytes = bytes(buf[LENGTH_BYTES : LENGTH_BYTES + TYPE_BYTES])
        try:
            chunk_type = ChunkType.parse(type_bytes)
        except PngError as err:
            raise PngError(ErrorKind.INVALID_TYPE, f"Invalid chunk type: {err}") from err

        data = bytes(buf[LENGTH_BYTES + TYPE_BYTES : end - CRC_BYTES])
        crc = int.from_bytes(buf[end - CRC_BYTES : end], byteorder="big")

        chunk = cls(chunk_type, data)
        if chunk.crc() != crc:
            raise PngError(
                ErrorKind.CRC_MISMATCH,
                f"Invalid CRC for chunk '{chunk_type}'. Expected {chunk.crc()} but found {crc}",
            )
        return chunk

    def chunk_type(self):
        return self._chunk_type

    def data(self):
        return self._data

    def length(self):
        return len(self._data)

    def encoded_length(self):
        return MIN_BYTES + len(self._data)

    def crc(self):
        return chunk_crc(self._chunk_type.bytes(), self._data)

    def data_as_string(self):
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise PngError(
                ErrorKind.INVALID_UTF8,
                f"Data of chunk '{self._chunk_type}' is not valid UTF-8",
            ) from err

    def as_bytes(self):
        if len(self._data) > MAX_LENGTH:
            raise PngError(
                ErrorKind.INVALID_LENGTH,
                f"Chunk '{self._chunk_type}' holds {len(self._data)} bytes, more than the maximum of {MAX_LENGTH}",
            )
        return (
            len(self._data).to_bytes(LENGTH_BYTES, byteorder="big")
            + self._chunk_type.bytes()
            + self._data
            + self.crc().to_bytes(CRC_BYTES, byteorder="big")
        )

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._chunk_type == other._chunk_type and self._data == other._data

    def __hash__(self):
        return hash((self._chunk_type, self._data))

    def __str__(self):
        type = str(self._chunk_type)

        if not is_standard_type(self._chunk_type):
            return f"Type:{type} Length:{self.length()}"

        return f"Type:{type}    Length:{self.length()}"

    def __repr__(self):
        return f"<Chunk(type:{self._chunk_type} / length:{self.length()} bytes / crc:0x{self.crc():08X})>"
