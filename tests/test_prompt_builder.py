import pytest

from article_models import PromptSettings
from prompt_builder import (
    BASE_SYSTEM_MESSAGE,
    BODY,
    CONCLUSION,
    INTRO,
    SINGLE,
    TITLE_SYSTEM_MESSAGE,
    assemble_content_prompt,
    assemble_title_prompt,
    build_prompt,
    is_recipe_keyword,
    part_word_counts,
)


def test_build_prompt_replaces_every_placeholder():
    template = "{keyword} / {minWords} / {keyword} ({minWords}) {keyword}"
    result = build_prompt(template, {"keyword": "a.*b", "minWords": 300})

    assert result == "a.*b / 300 / a.*b (300) a.*b"
    assert "{keyword}" not in result
    assert "{minWords}" not in result


def test_default_single_prompt_mentions_keyword_word_count_and_html():
    prompt = assemble_content_prompt(SINGLE, "paleo breakfast", 100)

    assert '"paleo breakfast"' in prompt.user
    assert "at least 100 words" in prompt.user
    assert "<h2>" in prompt.user and "<ol>" in prompt.user
    assert prompt.system == BASE_SYSTEM_MESSAGE


def test_appendices_follow_fixed_order():
    settings = PromptSettings(
        main_prompt="Write about {keyword}.",
        seo_guidelines="Use the keyword in the first paragraph.",
        things_to_avoid="delve",
        use_article_format=True,
        article_format="Intro, three tips, FAQ.",
        enable_recipe_detection=True,
    )
    user = assemble_content_prompt(SINGLE, "banana bread recipe", 500, settings).user

    positions = [
        user.index("Follow these additional SEO guidelines"),
        user.index("IMPORTANT: DO NOT mention"),
        user.index("ARTICLE FORMAT INSTRUCTIONS"),
        user.index("RECIPE FORMAT INSTRUCTIONS"),
    ]
    assert user.startswith("Write about banana bread recipe.")
    assert positions == sorted(positions)


def test_article_format_needs_flag_and_text():
    settings = PromptSettings(article_format="Intro, tips.", use_article_format=False)
    assert "ARTICLE FORMAT" not in assemble_content_prompt(SINGLE, "seo", 800, settings).user


def test_recipe_format_only_for_recipe_keywords():
    settings = PromptSettings(enable_recipe_detection=True, recipe_format_prompt="Custom recipe layout")

    assert "Custom recipe layout" in assemble_content_prompt(SINGLE, "Quick Dinner Ideas", 800, settings).user
    assert "RECIPE FORMAT" not in assemble_content_prompt(SINGLE, "garden tools", 800, settings).user


def test_is_recipe_keyword():
    assert is_recipe_keyword("Best Chocolate DESSERT")
    assert not is_recipe_keyword("running shoes")


def test_tone_voice_goes_to_system_message():
    prompt = assemble_content_prompt(SINGLE, "seo", 800, PromptSettings(tone_voice="playful"))
    assert prompt.system == BASE_SYSTEM_MESSAGE + "\n\nWrite in the following tone/voice: playful"


def test_part_prompts_use_custom_templates_and_focus_sentences():
    settings = PromptSettings(
        part3_prompt="Wrap up {keyword} in {minWords} words.",
        use_article_format=True,
        article_format="H2 per tip.",
    )

    intro = assemble_content_prompt(INTRO, "banana bread", 160, settings).user
    body = assemble_content_prompt(BODY, "banana bread", 480, settings).user
    conclusion = assemble_content_prompt(CONCLUSION, "banana bread", 160, settings).user

    assert "introduction for an article about banana bread" in intro
    assert intro.endswith("keeping the overall article format in mind.")
    assert body.endswith("while creating the main body content.")
    assert conclusion.startswith("Wrap up banana bread in 160 words.")
    assert conclusion.endswith("Focus on writing the conclusion part according to this format.")


def test_part_prompts_without_format_have_no_focus_sentence():
    user = assemble_content_prompt(BODY, "seo", 480).user
    assert "Ensure you follow this structure" not in user


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        assemble_content_prompt("epilogue", "seo", 100)


def test_title_prompt_carries_avoid_list():
    prompt = assemble_title_prompt("seo tips", PromptSettings(things_to_avoid="ultimate, guide"))

    assert prompt.system == TITLE_SYSTEM_MESSAGE
    assert '"seo tips"' in prompt.user
    assert prompt.user.endswith("DO NOT use ANY of the following words in the title: ultimate, guide")


def test_part_word_counts_floor_each_share():
    assert part_word_counts(800) == {"intro": 160, "body": 480, "conclusion": 160}
    assert part_word_counts(101) == {"intro": 20, "body": 60, "conclusion": 20}


def test_prompt_settings_from_camel_case_dict():
    settings = PromptSettings.from_dict({
        "useMultiPartGeneration": "true",
        "part1Prompt": "Intro {keyword}",
        "thingsToAvoid": "delve",
        "unknownKey": "ignored",
    })

    assert settings.use_multi_part_generation is True
    assert settings.part1_prompt == "Intro {keyword}"
    assert settings.things_to_avoid == "delve"
