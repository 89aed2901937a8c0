import struct
import zlib

import pytest

SIGNATURE = b"\x89PNG\r\n\x1a\n"
IHDR_DATA = struct.pack(">IIBBBBB", 1, 1, 8, 6, 0, 0, 0)
# One filtered scanline of a single RGBA pixel
IDAT_DATA = zlib.compress(b"\x00\xff\x00\x00\xff")


def raw_chunk(type_bytes, data, crc=None):
    if crc is None:
        crc = zlib.crc32(type_bytes + data)
    return struct.pack(">I", len(data)) + type_bytes + data + struct.pack(">I", crc)


# 1x1 RGBA image with IHDR, IDAT and IEND
MINIMAL_PNG = (
    SIGNATURE
    + raw_chunk(b"IHDR", IHDR_DATA)
    + raw_chunk(b"IDAT", IDAT_DATA)
    + raw_chunk(b"IEND", b"")
)


@pytest.fixture
def header_only_png():
    # Signature, IHDR and IEND, nothing else
    return SIGNATURE + raw_chunk(b"IHDR", IHDR_DATA) + raw_chunk(b"IEND", b"")


@pytest.fixture
def png_file(tmp_path, header_only_png):
    path = tmp_path / "image.png"
    path.write_bytes(header_only_png)
    return path
