import logging
from typing import Any, Dict, List, Optional

import requests

from article_models import Article, GenerationFailure, PromptPair, PromptSettings
from prompt_builder import (
    PARTS,
    SINGLE,
    assemble_content_prompt,
    assemble_title_prompt,
    part_word_counts,
)
from recipe_extractor import extract_recipe_data
from settings import OpenAIConfig
from term_suppressor import suppress

logger = logging.getLogger(__name__)

PART_MAX_TOKENS = 2000
TITLE_MAX_TOKENS = 50


def count_words(text: str) -> int:
    return len(text.split())


class OpenAIChatClient:
    """Thin chat-completions client; every failure is a GenerationFailure."""

    def __init__(self, config: OpenAIConfig):
        self.config = config

    def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int
    ) -> Dict[str, Any]:
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        try:
            resp = requests.post(
                url,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
                json={
                    "model": model,
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": max_tokens
                },
                timeout=self.config.timeout
            )
        except requests.RequestException as e:
            raise GenerationFailure(f"OpenAI request failed: {e}") from e
        if not resp.ok:
            raise GenerationFailure(f"OpenAI API error {resp.status_code}: {resp.text}")
        try:
            return resp.json()
        except ValueError as e:
            raise GenerationFailure(f"OpenAI returned a non-JSON body: {e}") from e


def _message_content(response: Any) -> str:
    try:
        content = response["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationFailure(f"Malformed OpenAI response: {response!r}") from e
    if not isinstance(content, str):
        raise GenerationFailure("OpenAI returned an empty response.")
    return content


class ArticleGenerator:
    """Turns a keyword into a titled HTML article, optionally with recipe data."""

    def __init__(self, client: OpenAIChatClient, config: OpenAIConfig):
        self.client = client
        self.config = config

    def generate(
        self,
        keyword: str,
        min_words: int = 800,
        settings: Optional[PromptSettings] = None
    ) -> Article:
        settings = settings or PromptSettings()
        mode = "multi-part" if settings.use_multi_part_generation else "single-pass"
        logger.info(f"Generating {mode} article for keyword: {keyword}")

        if settings.use_multi_part_generation:
            content = self._multi_part_content(keyword, min_words, settings)
        else:
            content = self._single_pass_content(keyword, min_words, settings)

        title = self._title(keyword, settings)
        word_count = count_words(content)
        logger.info(f'Generated article: "{title}" ({word_count} words)')

        recipe_data = None
        if settings.enable_recipe_detection:
            recipe_data = extract_recipe_data(content, keyword)
            if recipe_data:
                logger.info("Recipe detected and data extracted successfully")

        return Article(title=title, content=content, word_count=word_count, recipe_data=recipe_data)

    def _single_pass_content(self, keyword: str, min_words: int, settings: PromptSettings) -> str:
        prompt = assemble_content_prompt(SINGLE, keyword, min_words, settings)
        content = self._call(prompt, self.config.max_tokens)
        return suppress(content, settings.things_to_avoid)

    def _multi_part_content(self, keyword: str, min_words: int, settings: PromptSettings) -> str:
        part_words = part_word_counts(min_words)
        max_tokens = min(PART_MAX_TOKENS, self.config.max_tokens)
        parts = []
        for part in PARTS:
            logger.info(f"Generating {part} ({part_words[part]} words) for keyword: {keyword}")
            prompt = assemble_content_prompt(part, keyword, part_words[part], settings)
            text = self._call(prompt, max_tokens)
            parts.append(suppress(text, settings.things_to_avoid))
        combined = "\n\n".join(parts)
        return suppress(combined, settings.things_to_avoid)

    def _title(self, keyword: str, settings: PromptSettings) -> str:
        prompt = assemble_title_prompt(keyword, settings)
        title = self._call(prompt, TITLE_MAX_TOKENS).replace('"', "").strip()
        return suppress(title, settings.things_to_avoid)

    def _call(self, prompt: PromptPair, max_tokens: int) -> str:
        response = self.client.complete(
            model=self.config.model,
            messages=[
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user}
            ],
            temperature=self.config.temperature,
            max_tokens=max_tokens
        )
        return _message_content(response)
