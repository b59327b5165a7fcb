"""
Клиент для LM Studio API (OpenAI-compatible).

Этот модуль переводит один чанк текста за один запрос к chat/completions.
Ошибки не подавляются: любой сбой поднимается как ChunkTranslationError.
"""

from __future__ import annotations
import logging
from typing import Optional

import requests

from ocr_translate.core.config import (
    CHUNK_SIZE,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_LMSTUDIO_BASE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TARGET_LANGUAGE,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    DEFAULT_TRANSLATION_TIMEOUT,
    LMSTUDIO_API_KEY,
    LMSTUDIO_CHAT_PATH,
    LMSTUDIO_MODEL,
    BLOCK_SEPARATOR_TOKEN,
    PRESERVE_CLOSE,
    PRESERVE_OPEN,
)
from ocr_translate.core.exceptions import ChunkTranslationError
from ocr_translate.api.base import post_json
from ocr_translate.utils.text import sanitize_model_content


def build_system_prompt(
    tgt_lang: str = DEFAULT_TARGET_LANGUAGE,
    content_type: str = DEFAULT_CONTENT_TYPE,
) -> str:
    """
    Системный промпт для перевода технического текста.

    Args:
        tgt_lang: Целевой язык (например, "pt-BR")
        content_type: Тематика текста

    Returns:
        Текст промпта
    """
    return (
        f"Translate the following {content_type} technical text into {tgt_lang}.\n"
        "\n"
        "CRITICAL RULES:\n"
        f"1. PRESERVATION: never translate terms enclosed in {PRESERVE_OPEN} and "
        f"{PRESERVE_CLOSE}. In the output remove the tags but keep the term identical.\n"
        "2. CONTEXT: keep technical terms in English when that is the usual practice "
        "(backend, frontend, commit, merge, workflow, stack).\n"
        "3. CODE: leave code blocks and anything that looks like programming syntax intact.\n"
        f"4. FORMAT: every line '{BLOCK_SEPARATOR_TOKEN}' separates independent blocks. "
        "Keep each separator exactly once and in the same order; never merge or split blocks.\n"
        "5. STYLE: professional, technical and direct.\n"
        "\n"
        "Answer with the translation only."
    )


def lmstudio_translate_chunk(
    text: str,
    tgt_lang: str = DEFAULT_TARGET_LANGUAGE,
    model: str = LMSTUDIO_MODEL,
    base_url: str = DEFAULT_LMSTUDIO_BASE,
    temperature: float = DEFAULT_TEMPERATURE,
    top_p: float = DEFAULT_TOP_P,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: int = DEFAULT_TRANSLATION_TIMEOUT,
    max_input_chars: int = CHUNK_SIZE,
    content_type: str = DEFAULT_CONTENT_TYPE,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Переводит один чанк текста через LM Studio API.

    Args:
        text: Текст чанка (может содержать разметку PRESERVE и разделители блоков)
        tgt_lang: Целевой язык
        model: Название модели в LM Studio
        base_url: URL LM Studio API
        temperature: Температура генерации
        top_p: Параметр top_p
        max_tokens: Лимит токенов ответа
        timeout: Таймаут запроса в секундах
        max_input_chars: Допустимый размер входа переводчика
        content_type: Тематика текста для промпта
        session: HTTP сессия (по умолчанию глобальная)

    Returns:
        Переведённый текст

    Raises:
        ChunkTranslationError: Сбой сети, HTTP ошибка или пустой ответ модели
    """
    if not text.strip():
        return text

    if len(text) > max_input_chars:
        logging.warning(
            "Чанк длиной %d превышает лимит переводчика %d, ответ может быть обрезан",
            len(text),
            max_input_chars,
        )

    url = f"{base_url.rstrip('/')}/{LMSTUDIO_CHAT_PATH}"

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {LMSTUDIO_API_KEY}",
    }

    body = {
        "model": model,
        "messages": [
            {"role": "system", "content": build_system_prompt(tgt_lang, content_type)},
            {"role": "user", "content": text},
        ],
        "temperature": temperature,
        "top_p": top_p,
        "max_tokens": max_tokens,
    }

    try:
        data = post_json(url, body, headers=headers, timeout=timeout, session=session)
    except (requests.RequestException, ValueError) as e:
        raise ChunkTranslationError(f"LM Studio request failed: {e}") from e

    choices = data.get("choices")
    if not choices:
        raise ChunkTranslationError("LM Studio вернул пустой ответ")

    content = (choices[0].get("message") or {}).get("content") or ""
    translation = sanitize_model_content(content)
    if not translation:
        raise ChunkTranslationError("LM Studio вернул пустой перевод")

    logging.debug("Переведён чанк: %d -> %d символов", len(text), len(translation))
    return translation


class LMStudioTranslator:
    """
    Переводчик чанков с зафиксированными параметрами.

    Экземпляр вызывается как функция: translator(text) -> перевод.
    """

    def __init__(
        self,
        tgt_lang: str = DEFAULT_TARGET_LANGUAGE,
        model: str = LMSTUDIO_MODEL,
        base_url: str = DEFAULT_LMSTUDIO_BASE,
        max_input_chars: int = CHUNK_SIZE,
        session: Optional[requests.Session] = None,
    ):
        self.tgt_lang = tgt_lang
        self.model = model
        self.base_url = base_url
        self.max_input_chars = max_input_chars
        self.session = session

    def __call__(self, text: str) -> str:
        return lmstudio_translate_chunk(
            text,
            tgt_lang=self.tgt_lang,
            model=self.model,
            base_url=self.base_url,
            max_input_chars=self.max_input_chars,
            session=self.session,
        )
