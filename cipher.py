from png_errors import ErrorKind, PngError


def _xor(data, key):
    try:
        key_bytes = key.encode("utf-8")
    except UnicodeEncodeError as err:
        raise PngError(ErrorKind.INVALID_UTF8, "Key is not valid UTF-8") from err
    return bytes(byte ^ key_bytes[i % len(key_bytes)] for i, byte in enumerate(data))


def xor_encode(data, key=None):
    """XOR `data` with the repeated UTF-8 bytes of `key`. No key, no change."""
    if not key:
        return bytes(data)
    return _xor(data, key)


def xor_decode(data, key=None):
    if key:
        data = _xor(data, key)

    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as err:
        hint = ", wrong key?" if key else ""
        raise PngError(ErrorKind.INVALID_UTF8, f"Message is not valid UTF-8{hint}") from err
