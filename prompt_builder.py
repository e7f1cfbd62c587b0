"""Prompt assembly for article and title generation."""

from typing import Any, Dict, Optional

from article_models import PromptPair, PromptSettings
from constants import RECIPE_KEYWORD_RE

SINGLE = "single"
INTRO = "intro"
BODY = "body"
CONCLUSION = "conclusion"
PARTS = (INTRO, BODY, CONCLUSION)

# Percentage of the minimum word count given to each part of a multi-part article.
PART_WORD_SHARES = {INTRO: 20, BODY: 60, CONCLUSION: 20}

BASE_SYSTEM_MESSAGE = (
    "You are a professional content writer specializing in SEO-optimized articles "
    "that follow WordPress formatting standards."
)

TITLE_SYSTEM_MESSAGE = "Generate a compelling, SEO-friendly title for this article."

DEFAULT_CONTENT_PROMPT = """Write a comprehensive, engaging, and SEO-optimized article about "{keyword}" that follows these guidelines:

1. The article should be at least {minWords} words
2. Use proper WordPress formatting with H2 and H3 headings (no H1 as that's for the title)
3. Include a compelling introduction that hooks the reader
4. Break down the topic into logical sections with descriptive headings
5. Include practical tips, examples, and actionable advice
6. Add a conclusion that summarizes key points
7. Optimize for SEO with natural keyword usage
8. Make the content valuable and informative for the reader

Format the article with proper HTML tags:
- Use <h2> for main section headings
- Use <h3> for subsection headings
- Use <p> for paragraphs
- Use <ul> and <li> for bullet points where appropriate
- Use <ol> and <li> for numbered lists where appropriate

Write in a conversational, authoritative tone that engages the reader."""

DEFAULT_PART_PROMPTS = {
    INTRO: (
        "Write an engaging introduction for an article about {keyword}. The introduction "
        "should hook the reader, explain why the topic is important, and preview what the "
        "article will cover. Use approximately {minWords} words."
    ),
    BODY: (
        "Write the main body content for an article about {keyword}. This should include "
        "detailed information, breakdown of the topic into logical sections with appropriate "
        "H2 and H3 headings, practical tips, examples, and actionable advice. Use "
        "approximately {minWords} words."
    ),
    CONCLUSION: (
        "Write a conclusion for an article about {keyword}. The conclusion should summarize "
        "the key points, provide final thoughts, and possibly include a call to action. Use "
        "approximately {minWords} words."
    ),
}

PART_FORMAT_FOCUS = {
    INTRO: "Focus on writing the introduction part while keeping the overall article format in mind.",
    BODY: "Ensure you follow this structure while creating the main body content.",
    CONCLUSION: "Focus on writing the conclusion part according to this format.",
}

DEFAULT_RECIPE_FORMAT_PROMPT = """Please format this as a recipe article with the following sections:
1. A brief introduction about the dish
2. A "Ingredients" section with a clear, bulleted list (<ul><li>) of all ingredients with quantities
3. A "Instructions" section with numbered steps (<ol><li>) for preparation
4. Include preparation time, cooking time, and servings information clearly labeled (e.g., "Prep Time: 15 minutes")
5. Add a "Tips and Notes" section with helpful advice for making this recipe
6. If relevant, include nutrition information"""


def build_prompt(template: str, variables: Dict[str, Any]) -> str:
    """Replace every literal `{name}` placeholder in the template."""
    result = template
    for key, value in variables.items():
        result = result.replace("{" + key + "}", str(value))
    return result


def is_recipe_keyword(keyword: str) -> bool:
    return bool(RECIPE_KEYWORD_RE.search(keyword.lower()))


def system_message(settings: PromptSettings) -> str:
    message = BASE_SYSTEM_MESSAGE
    if settings.tone_voice:
        message += f"\n\nWrite in the following tone/voice: {settings.tone_voice}"
    return message


def seo_guidelines_block(settings: PromptSettings) -> str:
    if not settings.seo_guidelines:
        return ""
    return f"\n\nFollow these additional SEO guidelines:\n{settings.seo_guidelines}"


def avoid_block(settings: PromptSettings) -> str:
    if not settings.things_to_avoid:
        return ""
    return (
        "\n\nIMPORTANT: DO NOT mention, include, or reference ANY of the following in your "
        "content. This is a strict requirement. DO NOT use ANY of these terms or concepts:\n"
        f"{settings.things_to_avoid}"
    )


def article_format_block(settings: PromptSettings) -> str:
    if not (settings.use_article_format and settings.article_format):
        return ""
    return (
        "\n\nARTICLE FORMAT INSTRUCTIONS:\n"
        f"Follow this specific structure and format for the article:\n{settings.article_format}"
    )


def recipe_format_block(keyword: str, settings: PromptSettings) -> str:
    if not (settings.enable_recipe_detection and is_recipe_keyword(keyword)):
        return ""
    instructions = settings.recipe_format_prompt or DEFAULT_RECIPE_FORMAT_PROMPT
    return f"\n\nRECIPE FORMAT INSTRUCTIONS:\n{instructions}"


def format_instructions(keyword: str, settings: PromptSettings) -> str:
    """Article-format then recipe-format instructions, empty when neither applies."""
    return article_format_block(settings) + recipe_format_block(keyword, settings)


def _part_template(mode: str, settings: PromptSettings) -> str:
    custom = {
        INTRO: settings.part1_prompt,
        BODY: settings.part2_prompt,
        CONCLUSION: settings.part3_prompt,
    }[mode]
    return custom or DEFAULT_PART_PROMPTS[mode]


def assemble_content_prompt(
    mode: str,
    keyword: str,
    word_count: int,
    settings: Optional[PromptSettings] = None
) -> PromptPair:
    """Build the system/user messages for one content call.

    `mode` is SINGLE for a whole article or one of INTRO, BODY, CONCLUSION for
    a part of a multi-part article. Appendices follow a fixed order: SEO
    guidelines, things to avoid, article format, recipe format. Parts get the
    format instructions followed by a sentence focusing them on their own part.
    """
    settings = settings or PromptSettings()
    variables = {"keyword": keyword, "minWords": word_count}

    if mode == SINGLE:
        template = settings.main_prompt or DEFAULT_CONTENT_PROMPT
    elif mode in PARTS:
        template = _part_template(mode, settings)
    else:
        raise ValueError(f"Unknown prompt mode: {mode}")

    prompt = build_prompt(template, variables)
    prompt += seo_guidelines_block(settings)
    prompt += avoid_block(settings)

    instructions = format_instructions(keyword, settings)
    if instructions:
        prompt += instructions
        if mode in PARTS:
            prompt += f"\n\n{PART_FORMAT_FOCUS[mode]}"

    return PromptPair(system=system_message(settings), user=prompt)


def assemble_title_prompt(keyword: str, settings: Optional[PromptSettings] = None) -> PromptPair:
    settings = settings or PromptSettings()
    prompt = (
        f'Create an engaging, SEO-friendly title for an article about "{keyword}" '
        "that will attract clicks and is optimized for SEO."
    )
    if settings.things_to_avoid:
        prompt += (
            "\n\nIMPORTANT: DO NOT use ANY of the following words in the title: "
            f"{settings.things_to_avoid}"
        )
    return PromptPair(system=TITLE_SYSTEM_MESSAGE, user=prompt)


def part_word_counts(min_words: int) -> Dict[str, int]:
    return {part: min_words * share // 100 for part, share in PART_WORD_SHARES.items()}
