import logging

import pytest

from adapters.ai_namer import AINameGenerator
from core.config import AppSettings
from core.domain.language import Language
from tests.fakes import make_client, tool_call_response


def test_default_is_english():
    assert Language.default() is Language.ENGLISH


def test_settings_default_language_comes_from_default(settings):
    assert AppSettings(_env_file=None).default_language is Language.default()


@pytest.mark.parametrize(
    ("language", "label"),
    [(Language.ENGLISH, "English"), (Language.SPANISH, "Spanish")],
)
def test_label(language, label):
    assert language.label() == label


@pytest.mark.asyncio
async def test_generator_logs_the_language_label(settings, caplog):
    client = make_client([tool_call_response('{"brandNames":["Libro"]}')])
    generator = AINameGenerator(settings, client=client, language=Language.SPANISH)

    with caplog.at_level(logging.INFO, logger="adapters.ai_namer"):
        await generator.generate()

    assert "Generated 1 Spanish candidates: Libro" in caplog.text
