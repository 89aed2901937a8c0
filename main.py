import argparse
import sys

import cipher
from chunk_model import Chunk
from chunk_type import ChunkType
from png_errors import ErrorKind, PngError
from png_funs import detect_text, read_png, write_png


def encode(args):
    # A new chunk needs a legal type, reserved bit included
    chunk_type = ChunkType.require_valid(args.chunk_type)
    try:
        message = args.message.encode("utf-8")
    except UnicodeEncodeError as err:
        raise PngError(ErrorKind.INVALID_UTF8, "Message is not valid UTF-8") from err
    data = cipher.xor_encode(message, args.key)

    png = read_png(args.file)
    png.insert_before_end(Chunk(chunk_type, data))

    write_png(args.output or args.file, png)
    print(f"Chunk '{chunk_type}' added")


def decode(args):
    png = read_png(args.file)
    chunk = png.chunk_by_type(args.chunk_type)
    if chunk is None:
        print(f"No message for Chunk '{args.chunk_type}'")
        return

    if args.key:
        message = cipher.xor_decode(chunk.data(), args.key)
    else:
        message = chunk.data_as_string()
    print(f"Message: {message}")


def remove(args):
    png = read_png(args.file)
    png.remove_first_chunk(args.chunk_type)

    write_png(args.file, png)
    print(f"Chunk '{args.chunk_type}' removed")


def print_chunks(args):
    png = read_png(args.file)
    for chunk in png.chunks():
        print(chunk)


def find(args):
    png = read_png(args.file)

    candidates = png.find_possible_messages()
    if not candidates:
        print("Couldn't find any possible Chunk with a message")
        return

    print("Chunks with possible messages:")
    for chunk in candidates:
        print(f"{chunk} Text:{detect_text(chunk.data())}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pngme", description="Hide, read and remove messages in PNG chunks."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Encode a message into a PNG file")
    encode_parser.add_argument("file", help="Path to the PNG file")
    encode_parser.add_argument("chunk_type", help="Four letter chunk type, e.g. RuSt")
    encode_parser.add_argument("message", help="Message to hide")
    encode_parser.add_argument("output", nargs="?", help="Write here instead of overwriting FILE")
    encode_parser.add_argument("-k", "--key", help="Key the message is XORed with")
    encode_parser.set_defaults(func=encode)

    decode_parser = subparsers.add_parser("decode", help="Decode a message from a PNG file")
    decode_parser.add_argument("file", help="Path to the PNG file")
    decode_parser.add_argument("chunk_type", help="Chunk type holding the message")
    decode_parser.add_argument("-k", "--key", help="Key the message was encoded with")
    decode_parser.set_defaults(func=decode)

    remove_parser = subparsers.add_parser("remove", help="Remove a chunk from a PNG file")
    remove_parser.add_argument("file", help="Path to the PNG file")
    remove_parser.add_argument("chunk_type", help="Chunk type to remove")
    remove_parser.set_defaults(func=remove)

    print_parser = subparsers.add_parser("print", help="Print the chunks of a PNG file")
    print_parser.add_argument("file", help="Path to the PNG file")
    print_parser.set_defaults(func=print_chunks)

    find_parser = subparsers.add_parser("find", help="List chunks that may hold a message")
    find_parser.add_argument("file", help="Path to the PNG file")
    find_parser.set_defaults(func=find)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (PngError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
