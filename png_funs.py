import chardet

from chunk_model import Chunk, is_standard_type
from chunk_type import ChunkType
from png_errors import ErrorKind, PngError

# Below this chardet confidence a payload is not reported as text
MIN_TEXT_CONFIDENCE = 0.5


def _as_chunk_type(chunk_type):
    if isinstance(chunk_type, ChunkType):
        return chunk_type
    return ChunkType.parse_from_string(chunk_type)


def detect_text(data):
    """Return the payload decoded as text, or None if it doesn't look like text."""
    if not data:
        return None

    detected = chardet.detect(data)
    encoding = detected["encoding"]
    if encoding is None or (detected["confidence"] or 0) < MIN_TEXT_CONFIDENCE:
        return None

    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return None

    if not all(char.isprintable() or char.isspace() for char in text):
        return None
    return text


class Png:
    """A PNG file as its signature plus an ordered list of chunks.

    Nothing here keeps IHDR first or IEND last. `append_chunk` adds at the
    very end, `insert_before_end` keeps a trailing IEND in place.
    """

    SIGNATURE = b"\x89PNG\r\n\x1a\n"

    def __init__(self, chunks=None):
        self._chunks = list(chunks) if chunks is not None else []

    @classmethod
    def parse(cls, buf):
        buf = memoryview(buf)
        # Check if the buffer is a valid PNG file
        if bytes(buf[: len(cls.SIGNATURE)]) != cls.SIGNATURE:
            raise PngError(ErrorKind.INVALID_SIGNATURE, "Not a valid PNG file")

        # Read the chunks until the buffer is exhausted, IEND included
        chunks = []
        offset = len(cls.SIGNATURE)
        while offset < len(buf):
            chunk = Chunk.parse(buf[offset:])
            chunks.append(chunk)
            offset += chunk.encoded_length()

        return cls(chunks)

    def header(self):
        return self.SIGNATURE

    def chunks(self):
        return tuple(self._chunks)

    def append_chunk(self, chunk):
        self._chunks.append(chunk)

    def insert_before_end(self, chunk):
        end_type = ChunkType(b"IEND")
        for index in range(len(self._chunks) - 1, -1, -1):
            if self._chunks[index].chunk_type() == end_type:
                self._chunks.insert(index, chunk)
                return
        self._chunks.append(chunk)

    def chunk_by_type(self, chunk_type):
        chunk_type = _as_chunk_type(chunk_type)
        return next((chunk for chunk in self._chunks if chunk.chunk_type() == chunk_type), None)

    def remove_first_chunk(self, chunk_type):
        chunk_type = _as_chunk_type(chunk_type)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type() == chunk_type:
                return self._chunks.pop(index)

        raise PngError(ErrorKind.NOT_FOUND, f"Chunk '{chunk_type}' not found")

    def find_possible_messages(self):
        """Chunks of non-standard types whose payload reads as text."""
        return [
            chunk
            for chunk in self._chunks
            if not is_standard_type(chunk.chunk_type()) and detect_text(chunk.data()) is not None
        ]

    def as_bytes(self):
        return self.SIGNATURE + b"".join(chunk.as_bytes() for chunk in self._chunks)

    def __eq__(self, other):
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __len__(self):
        return len(self._chunks)

    def __str__(self):
        return "\n".join(str(chunk) for chunk in self._chunks)


def read_png(image):
    # Open the PNG file in binary mode
    with open(image, "rb") as file:
        return Png.parse(file.read())


def write_png(image, png):
    # Serialize first so a failure never leaves a half-written file
    data = png.as_bytes()
    with open(image, "wb") as file:
        file.write(data)
