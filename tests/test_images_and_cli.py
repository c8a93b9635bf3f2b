import argparse
import os

import pytest

from retrodiffusion.cli import build_parser, main, run
from retrodiffusion.images import bytes_to_base64, file_to_base64, save_images
from retrodiffusion.inference.types import InferenceResponse

from .conftest import INFERENCE_BODY, PNG_B64, PNG_BYTES, make_response


def test_bytes_and_file_to_base64(tmp_path):
    assert bytes_to_base64(b"abc") == "YWJj"

    image = tmp_path / "input.png"
    image.write_bytes(PNG_BYTES)
    assert file_to_base64(str(image)) == PNG_B64

    data_url = tmp_path / "input.txt"
    data_url.write_text("data:image/png;base64,YWJj\n")
    assert file_to_base64(str(data_url)) == "YWJj"


def test_save_images(tmp_path):
    response = InferenceResponse.model_validate({**INFERENCE_BODY, "base64_images": [PNG_B64, "YWJj"]})

    paths = save_images(response, str(tmp_path / "out"), prefix="corgi", extension=".gif")

    assert [os.path.basename(p) for p in paths] == ["corgi_1.gif", "corgi_2.gif"]
    with open(paths[1], "rb") as f:
        assert f.read() == b"abc"


def test_parser_rejects_unknown_style():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["text2img", "castle", "--style", "rd_fast__nope"])


def test_text2img_command(http, tmp_path, capsys):
    args = build_parser().parse_args(
        ["--api-key", "k", "text2img", "castle", "--style", "rd_fast__retro", "--width", "128",
         "--height", "128", "--tile-x", "--out", str(tmp_path)]
    )

    assert run(args) == 0

    body = http.last["json"]
    assert body["prompt"] == "castle"
    assert body["width"] == 128
    assert body["tile_x"] is True
    assert "tile_y" not in body
    assert os.path.exists(tmp_path / "image_1.png")
    assert "999 remaining" in capsys.readouterr().out


def test_animate_command_writes_gif(http, tmp_path):
    args = build_parser().parse_args(["--api-key", "k", "animate", "knight", "--out", str(tmp_path)])

    run(args)

    assert http.last["json"]["width"] == 48
    assert os.path.exists(tmp_path / "image_1.gif")


def test_credits_command(http, capsys):
    http.response = make_response(200, {"credits": 42})
    assert main(["--api-key", "k", "credits"]) == 0
    assert capsys.readouterr().out.strip() == "42 credits remaining"


def test_errors_exit_with_code(http, capsys):
    http.response = make_response(402, {"message": "Not enough credits"})
    assert main(["--api-key", "k", "credits"]) == 1
    assert capsys.readouterr().err.strip() == "INSUFFICIENT_CREDITS: Not enough credits"


def test_missing_key_exits_with_code(capsys):
    assert main(["credits"]) == 1
    assert capsys.readouterr().err.startswith("CONFIGURATION_ERROR:")


@pytest.mark.parametrize(
    "argv",
    [
        ["--api-key", "k", "img2img", "castle", "--input", "missing.png"],
        ["--api-key", "k", "text2img", "castle", "--palette", "missing.png"],
        ["--api-key", "k", "animate", "knight", "--input", "missing.png"],
    ],
)
def test_missing_input_file_is_an_argument_error(http, capsys, argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "file not found: missing.png" in capsys.readouterr().err
    assert http.calls == []


def test_run_accepts_injected_client(tmp_path):
    class FakeCredits:
        def get(self):
            return argparse.Namespace(credits=7)

    client = argparse.Namespace(credits=FakeCredits())
    assert run(argparse.Namespace(command="credits"), client=client) == 0
