"""
Tests for the OpenAI copy and artwork suppliers.
"""
import asyncio
import base64
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from flyerkit.errors import ArtworkSupplierError, CopySupplierError
from flyerkit.models import FlyerInput
from flyerkit.services.artwork_generator import build_artwork_prompt, generate_flyer_artwork
from flyerkit.services.content_generator import (
    build_copy_prompt,
    generate_flyer_copy,
    parse_copy_response,
)

GOOD_RESPONSE = {
    "description": "A cozy winter night with friends.",
    "descriptions": [
        "A cozy winter night with friends.",
        "Warm drinks and snowy lights await.",
        "A cozy winter night with friends.",
        "This description is far too long to ever fit under the eleven word cap.",
    ],
    "taglines": ["Frosty Fun Awaits", "Snowy Night of Joy", "One two three four five six seven eight nine"],
    "palette": ["#0e7490", "#155e75", "#e0f2fe"],
}


def _chat_client(content):
    message = SimpleNamespace(content=content)
    response = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


def _image_client(b64):
    response = SimpleNamespace(data=[SimpleNamespace(b64_json=b64)])
    client = MagicMock()
    client.images.generate = AsyncMock(return_value=response)
    return client


class TestParseCopyResponse:
    """Validation and cleanup of the chat model's JSON."""

    def test_good_response(self):
        copy = parse_copy_response(json.dumps(GOOD_RESPONSE), "Winter Night")
        assert copy.description == "A cozy winter night with friends."
        assert copy.descriptions == (
            "A cozy winter night with friends.",
            "Warm drinks and snowy lights await.",
        )
        assert copy.taglines == ("Frosty Fun Awaits", "Snowy Night of Joy")
        assert copy.palette == ("#0E7490", "#155E75", "#E0F2FE")

    def test_invalid_json(self):
        with pytest.raises(CopySupplierError):
            parse_copy_response("not json", "Winter")

    def test_empty_content(self):
        with pytest.raises(CopySupplierError):
            parse_copy_response(None, "Winter")

    def test_non_object(self):
        with pytest.raises(CopySupplierError):
            parse_copy_response("[1, 2, 3]", "Winter")

    def test_no_usable_tagline(self):
        bad = dict(GOOD_RESPONSE, taglines=["One two three four five six seven eight nine"])
        with pytest.raises(CopySupplierError):
            parse_copy_response(json.dumps(bad), "Winter")

    def test_two_color_palette(self):
        bad = dict(GOOD_RESPONSE, palette=["#000000", "#FFFFFF"])
        with pytest.raises(CopySupplierError):
            parse_copy_response(json.dumps(bad), "Winter")

    def test_named_colors_rejected(self):
        bad = dict(GOOD_RESPONSE, palette=["red", "green", "blue"])
        with pytest.raises(CopySupplierError):
            parse_copy_response(json.dumps(bad), "Winter")

    def test_long_description_replaced(self):
        data = dict(GOOD_RESPONSE, description="word " * 20, descriptions=[])
        copy = parse_copy_response(json.dumps(data), "Game Night")
        assert copy.description == "Join us for Game Night."
        assert copy.descriptions == ("Join us for Game Night.",)


class TestGenerateFlyerCopy:

    def test_calls_chat_model(self, settings):
        client = _chat_client(json.dumps(GOOD_RESPONSE))
        with patch("flyerkit.services.content_generator.get_settings", return_value=settings):
            copy = asyncio.run(generate_flyer_copy("Winter Night", "Formal", "", client=client))

        assert copy.taglines[0] == "Frosty Fun Awaits"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == settings.openai_copy_model
        assert kwargs["response_format"] == {"type": "json_object"}
        assert "Theme: Winter Night" in kwargs["messages"][0]["content"]

    def test_missing_key(self, settings):
        with patch("flyerkit.services.content_generator.get_settings", return_value=settings):
            with pytest.raises(CopySupplierError):
                asyncio.run(generate_flyer_copy("Winter Night"))

    def test_request_failure_wrapped(self, settings):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("boom"))
        with patch("flyerkit.services.content_generator.get_settings", return_value=settings):
            with pytest.raises(CopySupplierError, match="boom"):
                asyncio.run(generate_flyer_copy("Winter Night", client=client))

    def test_prompt_defaults(self):
        prompt = build_copy_prompt("Eid Dinner")
        assert "Dress code: none" in prompt
        assert "Note: none" in prompt


class TestGenerateFlyerArtwork:

    def test_decodes_image(self, settings, make_png):
        png = make_png()
        client = _image_client(base64.b64encode(png).decode())
        flyer = FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM")
        with patch("flyerkit.services.artwork_generator.get_settings", return_value=settings):
            data = asyncio.run(generate_flyer_artwork(flyer, client=client))

        assert data == png
        kwargs = client.images.generate.call_args.kwargs
        assert kwargs["size"] == settings.openai_image_size
        assert "Theme: Eid Dinner" in kwargs["prompt"]

    def test_missing_image(self, settings):
        client = _image_client(None)
        flyer = FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM")
        with patch("flyerkit.services.artwork_generator.get_settings", return_value=settings):
            with pytest.raises(ArtworkSupplierError):
                asyncio.run(generate_flyer_artwork(flyer, client=client))

    def test_missing_key(self, settings):
        flyer = FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM")
        with patch("flyerkit.services.artwork_generator.get_settings", return_value=settings):
            with pytest.raises(ArtworkSupplierError):
                asyncio.run(generate_flyer_artwork(flyer))

    def test_prompt_placeholders(self):
        prompt = build_artwork_prompt(FlyerInput(theme="Eid Dinner", date_time_text="Fri 8 PM"))
        assert "Location: TBD" in prompt
        assert "Dress code: Not specified" in prompt
