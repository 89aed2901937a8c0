from png_errors import ErrorKind, PngError

# Bit 5 of each type byte is the upper/lower case bit of an ASCII letter
PROPERTY_BIT = 0b00100000
TYPE_LENGTH = 4


def is_valid_byte(byte):
    # Only A-Z and a-z are allowed in a chunk type code
    return 65 <= byte <= 90 or 97 <= byte <= 122


class ChunkType:
    """Four-letter PNG chunk type code.

    The case of each letter is a flag: ancillary (byte 0), private (byte 1),
    reserved (byte 2) and safe-to-copy (byte 3). Flags are read from the raw
    bytes every time, nothing else is stored.
    """

    __slots__ = ("_code",)

    def __init__(self, code):
        code = bytes(code)
        if len(code) != TYPE_LENGTH:
            raise PngError(
                ErrorKind.INVALID_BYTE,
                f"Expected {TYPE_LENGTH} bytes but received {len(code)} when creating chunk type",
            )
        if not all(is_valid_byte(byte) for byte in code):
            raise PngError(
                ErrorKind.INVALID_BYTE,
                f"Chunk type {code!r} contains one or more invalid characters",
            )
        self._code = code

    @classmethod
    def parse(cls, raw):
        return cls(raw)

    @classmethod
    def parse_from_string(cls, text):
        if not isinstance(text, str) or len(text) != TYPE_LENGTH or not text.isascii():
            raise PngError(
                ErrorKind.INVALID_FORMAT,
                f"Chunk type must be exactly {TYPE_LENGTH} ASCII letters, got {text!r}",
            )
        try:
            return cls.parse(text.encode("ascii"))
        except PngError as err:
            raise PngError(ErrorKind.INVALID_FORMAT, str(err)) from err

    @classmethod
    def require_valid(cls, chunk_type):
        """Return a legal chunk type, for callers about to create a new chunk."""
        if not isinstance(chunk_type, ChunkType):
            chunk_type = cls.parse_from_string(chunk_type)
        if not chunk_type.is_valid():
            raise PngError(
                ErrorKind.INVALID_TYPE,
                f"Chunk type '{chunk_type}' has the reserved bit set",
            )
        return chunk_type

    def bytes(self):
        return self._code

    def to_string(self):
        return self._code.decode("ascii")

    def is_critical(self):
        # uppercase = critical, lowercase = ancillary
        return self._code[0] & PROPERTY_BIT == 0

    def is_public(self):
        # uppercase = public, lowercase = private
        return self._code[1] & PROPERTY_BIT == 0

    def is_reserved_bit_valid(self):
        # must be uppercase in files conforming to this version of PNG
        return self._code[2] & PROPERTY_BIT == 0

    def is_safe_to_copy(self):
        # uppercase = unsafe to copy, lowercase = safe to copy
        return self._code[3] & PROPERTY_BIT != 0

    def is_valid(self):
        return all(is_valid_byte(byte) for byte in self._code) and self.is_reserved_bit_valid()

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code == other._code

    def __lt__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code < other._code

    def __hash__(self):
        return hash(self._code)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"ChunkType({self.to_string()!r})"
