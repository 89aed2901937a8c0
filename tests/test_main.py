import pytest

from main import main


def test_encode_decode_remove(png_file, header_only_png, capsys):
    assert main(["encode", str(png_file), "RuSt", "Secret message"]) == 0
    assert "Chunk 'RuSt' added" in capsys.readouterr().out
    assert png_file.read_bytes() != header_only_png

    assert main(["decode", str(png_file), "RuSt"]) == 0
    assert capsys.readouterr().out == "Message: Secret message\n"

    assert main(["remove", str(png_file), "RuSt"]) == 0
    assert "Chunk 'RuSt' removed" in capsys.readouterr().out
    assert png_file.read_bytes() == header_only_png


def test_encode_keeps_iend_last(png_file, capsys):
    main(["encode", str(png_file), "RuSt", "Secret message"])
    capsys.readouterr()

    main(["print", str(png_file)])
    assert capsys.readouterr().out.splitlines() == [
        "Type:IHDR    Length:13",
        "Type:RuSt Length:14",
        "Type:IEND    Length:0",
    ]


def test_encode_to_output_file(png_file, header_only_png, tmp_path, capsys):
    output = tmp_path / "hidden.png"

    assert main(["encode", str(png_file), "RuSt", "Secret message", str(output)]) == 0
    assert png_file.read_bytes() == header_only_png

    main(["decode", str(output), "RuSt"])
    assert "Message: Secret message" in capsys.readouterr().out


def test_encode_decode_with_key(png_file, capsys):
    main(["encode", str(png_file), "RuSt", "Secret message", "--key", "pass"])
    capsys.readouterr()

    main(["decode", str(png_file), "RuSt", "-k", "pass"])
    assert capsys.readouterr().out == "Message: Secret message\n"

    # Without the key the payload is not the plain message
    main(["find", str(png_file)])
    assert "Secret message" not in capsys.readouterr().out


def test_encode_rejects_reserved_bit(png_file, header_only_png, capsys):
    assert main(["encode", str(png_file), "Rust", "Secret message"]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
    assert png_file.read_bytes() == header_only_png


def test_decode_missing_chunk(png_file, capsys):
    assert main(["decode", str(png_file), "RuSt"]) == 0
    assert capsys.readouterr().out == "No message for Chunk 'RuSt'\n"


def test_remove_missing_chunk_fails(png_file, header_only_png, capsys):
    assert main(["remove", str(png_file), "RuSt"]) == 1
    assert "Chunk 'RuSt' not found" in capsys.readouterr().err
    assert png_file.read_bytes() == header_only_png


def test_find(png_file, capsys):
    main(["find", str(png_file)])
    assert capsys.readouterr().out == "Couldn't find any possible Chunk with a message\n"

    main(["encode", str(png_file), "RuSt", "Secret message"])
    capsys.readouterr()

    main(["find", str(png_file)])
    assert capsys.readouterr().out.splitlines() == [
        "Chunks with possible messages:",
        "Type:RuSt Length:14 Text:Secret message",
    ]


def test_not_a_png(tmp_path, capsys):
    path = tmp_path / "image.png"
    path.write_bytes(b"not a png at all")

    assert main(["print", str(path)]) == 1
    assert capsys.readouterr().err == "Error: Not a valid PNG file\n"


def test_missing_file(tmp_path, capsys):
    assert main(["print", str(tmp_path / "missing.png")]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])


def test_encode_message_not_encodable(png_file, header_only_png, capsys):
    # Undecodable argv bytes arrive as lone surrogates
    assert main(["encode", str(png_file), "RuSt", "bad\udcff"]) == 1
    assert capsys.readouterr().err == "Error: Message is not valid UTF-8\n"
    assert png_file.read_bytes() == header_only_png


def test_encode_key_not_encodable(png_file, header_only_png, capsys):
    assert main(["encode", str(png_file), "RuSt", "Secret message", "-k", "\udcff"]) == 1
    assert capsys.readouterr().err == "Error: Key is not valid UTF-8\n"
    assert png_file.read_bytes() == header_only_png
