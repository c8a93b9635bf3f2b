import math

import pytest

from retrodiffusion import (
    AnimationRequest,
    ClientConfig,
    ConfigurationError,
    CreditsResponse,
    InferenceResponse,
    NetworkError,
    RetroDiffusionClient,
    TextToImageRequest,
    ValidationError,
)
from retrodiffusion.config import resolve_client_config

from .conftest import INFERENCE_BODY, PNG_BYTES, make_response


def test_missing_api_key_fails_synchronously(http):
    with pytest.raises(ConfigurationError) as excinfo:
        RetroDiffusionClient()
    assert excinfo.value.code == "CONFIGURATION_ERROR"
    assert "RD_TOKEN/RD_API_KEY" in excinfo.value.message
    assert http.calls == []


def test_api_key_priority(monkeypatch):
    monkeypatch.setenv("RD_API_KEY", "from-api-key")
    assert resolve_client_config().api_key == "from-api-key"

    monkeypatch.setenv("RD_TOKEN", "from-token")
    assert resolve_client_config().api_key == "from-token"

    assert resolve_client_config(api_key="explicit").api_key == "explicit"
    assert resolve_client_config(ClientConfig(api_key="from-config")).api_key == "from-config"


def test_dotenv_in_working_directory(tmp_path, monkeypatch):
    project = tmp_path / "project"
    project.mkdir()
    (project / ".env").write_text("RD_TOKEN=from-dotenv\n")
    monkeypatch.chdir(project)

    assert RetroDiffusionClient().config.api_key == "from-dotenv"


def test_environment_wins_over_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("RD_TOKEN=from-dotenv\n")
    monkeypatch.setenv("RD_TOKEN", "from-env")

    assert resolve_client_config().api_key == "from-env"


@pytest.mark.parametrize(
    "options,field",
    [
        ({"api_key": ""}, "api_key"),
        ({"base_url": "not a url"}, "base_url"),
        ({"timeout": 0}, "timeout"),
        ({"timeout": -1.5}, "timeout"),
        ({"retries": 6}, "retries"),
        ({"retries": -1}, "retries"),
        ({"retries": 1.5}, "retries"),
    ],
)
def test_invalid_config_values(options, field):
    with pytest.raises(ValidationError) as excinfo:
        RetroDiffusionClient(**{"api_key": "k", **options})
    assert excinfo.value.field == field


def test_unknown_option():
    with pytest.raises(ConfigurationError):
        RetroDiffusionClient(api_key="k", retry_count=3)


def test_config_is_frozen(client):
    assert client.config.api_key == "test-key"
    with pytest.raises(AttributeError):
        client.config.api_key = "other"


def test_text_to_image_posts_merged_payload(client, http):
    result = client.inference.text_to_image(
        {"prompt": "A cute corgi wearing sunglasses", "prompt_style": "rd_fast__retro"}
    )

    assert len(http.calls) == 1
    call = http.last
    assert call["method"] == "POST"
    assert call["url"].endswith("/inferences")
    assert call["headers"]["X-RD-Token"] == "test-key"
    assert call["json"] == {
        "width": 256,
        "height": 256,
        "num_images": 1,
        "strength": 0.8,
        "prompt": "A cute corgi wearing sunglasses",
        "prompt_style": "rd_fast__retro",
    }

    assert isinstance(result, InferenceResponse)
    assert result.model == "rd_fast"
    assert result.decoded_images() == [PNG_BYTES]


def test_validation_failure_never_reaches_network(client, http):
    with pytest.raises(ValidationError) as excinfo:
        client.inference.text_to_image({"prompt": ""})
    assert excinfo.value.field == "prompt"

    with pytest.raises(ValidationError):
        client.inference.image_to_image({"prompt": "x", "input_image": "data:image/png;base64,@@@"})

    with pytest.raises(ValidationError) as excinfo:
        client.inference.image_to_image({"prompt": ""})
    assert excinfo.value.field == "prompt"

    with pytest.raises(ValidationError) as excinfo:
        client.inference.text_to_image({"prompt": "x", "strength": math.nan})
    assert excinfo.value.field == "strength"

    assert http.calls == []


def test_animation_overrides_caller_fields(client, http):
    client.inference.animation({"prompt": "knight", "width": 256, "height": 256, "num_images": 3})

    body = http.last["json"]
    assert body["width"] == 48
    assert body["height"] == 48
    assert body["num_images"] == 1
    assert body["prompt_style"] == "animation__four_angle_walking"


def test_create_dispatches_typed_and_mapping_requests(client, http):
    client.inference.create(AnimationRequest(prompt="mage", return_spritesheet=True))
    assert http.last["json"]["prompt_style"] == "animation__four_angle_walking"

    client.inference.create(TextToImageRequest(prompt="potion", prompt_style="rd_fast__game_asset"))
    assert http.last["json"]["width"] == 256

    client.inference.create({"prompt": "photo", "input_image": "data:image/png;base64,YWJj", "strength": 0.3})
    assert http.last["json"]["input_image"] == "YWJj"
    assert http.last["json"]["strength"] == 0.3


def test_response_passthrough_fields(client, http):
    http.response = make_response(200, {**INFERENCE_BODY, "model": "rd_plus", "request_id": "abc"})
    result = client.inference.text_to_image({"prompt": "x"})
    assert result.model == "rd_plus"
    assert result.extra_fields == {"request_id": "abc"}


def test_malformed_inference_response(client, http):
    http.response = make_response(200, {"base64_images": []})
    with pytest.raises(NetworkError) as excinfo:
        client.inference.text_to_image({"prompt": "x"})
    assert excinfo.value.status_code == 200


def test_unknown_model_is_malformed(client, http):
    http.response = make_response(201, {**INFERENCE_BODY, "model": "rd_slow"})
    with pytest.raises(NetworkError) as excinfo:
        client.inference.text_to_image({"prompt": "x"})
    assert excinfo.value.status_code == 201


def test_malformed_credits_response_keeps_status(client, http):
    http.response = make_response(200, {"balance": 3})
    with pytest.raises(NetworkError) as excinfo:
        client.credits.get()
    assert excinfo.value.status_code == 200


def test_credits_get(client, http):
    http.response = make_response(200, {"credits": 100})

    result = client.credits.get()

    assert len(http.calls) == 1
    assert http.last["method"] == "GET"
    assert http.last["url"] == "https://api.retrodiffusion.ai/v1/inferences/credits"
    assert "json" not in http.last
    assert isinstance(result, CreditsResponse)
    assert result.credits == 100
    assert result.model_dump() == {"credits": 100}
