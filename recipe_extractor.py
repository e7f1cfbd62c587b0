import logging
import re
from typing import List, Optional, Pattern

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from article_models import Nutrition, RecipeData, RecipeDetails
from constants import (
    BR_SPLIT_RE,
    CATEGORY_RULES,
    COMMON_RECIPE_KEYWORDS,
    CUISINES,
    DEFAULT_CATEGORY,
    DEFAULT_CUISINE,
    DEFAULT_DESCRIPTION,
    DEFAULT_METHOD,
    DEFAULT_TIMES,
    DEFAULT_YIELD,
    DIETS,
    INGREDIENTS_HEADING_RE,
    INSTRUCTIONS_HEADING_RE,
    KEYWORD_HEADER_EXCLUDE_RE,
    LEADING_NUMBER_RE,
    MEASUREMENT_UNITS,
    METHOD_RULES,
    MIN_RECIPE_INDICATORS,
    NOTES_HEADING_RE,
    NUTRITION_DEFAULTS,
    NUTRITION_HEADING_RE,
    NUTRITION_PATTERNS,
    PLACEHOLDER_INGREDIENTS,
    PLACEHOLDER_INSTRUCTIONS,
    PLACEHOLDER_NOTES,
    RECIPE_INDICATORS,
    TIME_PATTERNS,
    YIELD_RE,
)

logger = logging.getLogger(__name__)

SECTION_HEADINGS = ("h2", "h3")
MAX_DESCRIPTION_LENGTH = 300


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _node_text(node: PageElement) -> str:
    if isinstance(node, Tag):
        return node.get_text(" ")
    return str(node)


def _document_text(soup: BeautifulSoup) -> str:
    return _squash(soup.get_text(" "))


def count_recipe_indicators(html: str) -> int:
    lowered = html.lower()
    return sum(1 for term in RECIPE_INDICATORS if term in lowered)


def find_section(soup: BeautifulSoup, heading_re: Pattern[str]) -> Optional[List[PageElement]]:
    """Nodes after the first h2/h3 matching `heading_re`, up to the next h2/h3."""
    for heading in soup.find_all(SECTION_HEADINGS):
        if not heading_re.search(heading.get_text()):
            continue
        section: List[PageElement] = []
        for sibling in heading.next_siblings:
            if isinstance(sibling, Tag) and sibling.name in SECTION_HEADINGS:
                break
            section.append(sibling)
        return section
    return None


def _first_tag(section: List[PageElement], name: str) -> Optional[Tag]:
    for node in section:
        if not isinstance(node, Tag):
            continue
        if node.name == name:
            return node
        found = node.find(name)
        if found:
            return found
    return None


def _paragraphs(section: List[PageElement]) -> List[Tag]:
    found: List[Tag] = []
    for node in section:
        if not isinstance(node, Tag):
            continue
        if node.name == "p":
            found.append(node)
        else:
            found.extend(node.find_all("p"))
    return found


def _bare_list(tag: Tag) -> str:
    return f"<{tag.name}>{tag.decode_contents()}</{tag.name}>"


def _list_from(tag_name: str, items: List[str]) -> str:
    inner = "".join(f"<li>{item}</li>" for item in items)
    return f"<{tag_name}>{inner}</{tag_name}>"


def _is_empty_list(value: str) -> bool:
    return not value or value in ("<ul></ul>", "<ol></ol>")


def extract_description(soup: BeautifulSoup) -> str:
    paragraphs = soup.find_all("p")
    if not paragraphs:
        return DEFAULT_DESCRIPTION

    description = paragraphs[0].get_text().strip()
    if len(description) < 50 and len(paragraphs) > 1:
        description = paragraphs[1].get_text().strip()

    if len(description) > MAX_DESCRIPTION_LENGTH:
        description = description[:MAX_DESCRIPTION_LENGTH - 3] + "..."
    return description or DEFAULT_DESCRIPTION


def extract_ingredients(soup: BeautifulSoup) -> str:
    ingredients = ""
    section = find_section(soup, INGREDIENTS_HEADING_RE)
    if section:
        ul = _first_tag(section, "ul")
        if ul is not None:
            ingredients = _bare_list(ul)
        else:
            lines = BR_SPLIT_RE.split("".join(str(node) for node in section))
            if len(lines) > 2:
                items = [
                    line.strip() for line in lines
                    if line.strip()
                    and not line.strip().startswith("<")
                    and not line.strip().endswith(">")
                    and len(line.strip()) > 3
                ]
                ingredients = _list_from("ul", items)

    if _is_empty_list(ingredients):
        for ul in soup.find_all("ul"):
            lowered = str(ul).lower()
            if any(unit in lowered for unit in MEASUREMENT_UNITS):
                ingredients = _bare_list(ul)
                break

    if _is_empty_list(ingredients):
        ingredients = PLACEHOLDER_INGREDIENTS
    return ingredients


def extract_instructions(soup: BeautifulSoup) -> str:
    instructions = ""
    section = find_section(soup, INSTRUCTIONS_HEADING_RE)
    if section:
        ol = _first_tag(section, "ol")
        if ol is not None:
            instructions = _bare_list(ol)
        else:
            paragraphs = _paragraphs(section)
            if len(paragraphs) > 1:
                steps = []
                for p in paragraphs:
                    text = p.get_text().strip()
                    if len(text) > 5:
                        steps.append(LEADING_NUMBER_RE.sub("", text))
                instructions = _list_from("ol", steps)

    if _is_empty_list(instructions):
        ordered = soup.find_all("ol")
        if ordered:
            instructions = _bare_list(max(ordered, key=lambda ol: len(str(ol))))

    if _is_empty_list(instructions):
        instructions = PLACEHOLDER_INSTRUCTIONS
    return instructions


def extract_notes(soup: BeautifulSoup) -> str:
    notes = ""
    section = find_section(soup, NOTES_HEADING_RE)
    if section:
        ul = _first_tag(section, "ul")
        if ul is not None:
            notes = _bare_list(ul)
        else:
            tips = [p.get_text().strip() for p in _paragraphs(section)]
            notes = _list_from("ul", [tip for tip in tips if len(tip) > 5])

    if _is_empty_list(notes):
        notes = PLACEHOLDER_NOTES
    return notes


def extract_time(text: str, time_type: str) -> str:
    match = TIME_PATTERNS[time_type].search(text)
    if match:
        return f"{match.group(1)} {match.group(3).lower()}"
    return DEFAULT_TIMES[time_type]


def extract_yield(text: str) -> str:
    match = YIELD_RE.search(text)
    if not match:
        return DEFAULT_YIELD
    if match.group(2):
        return f"{match.group(1)}-{match.group(2)} servings"
    return f"{match.group(1)} servings"


def determine_category(content: str, keyword: str) -> str:
    lowered = content.lower()
    lowered_keyword = keyword.lower()
    for category, content_terms, keyword_terms in CATEGORY_RULES:
        if any(term in lowered for term in content_terms):
            return category
        if any(term in lowered_keyword for term in keyword_terms):
            return category
    return DEFAULT_CATEGORY


def determine_method(content: str) -> str:
    lowered = content.lower()
    for method, terms in METHOD_RULES:
        if any(term in lowered for term in terms):
            return method
    return DEFAULT_METHOD


def determine_cuisine(content: str, keyword: str) -> str:
    lowered = content.lower()
    lowered_keyword = keyword.lower()
    for cuisine, terms in CUISINES:
        for term in terms:
            if term in lowered or term in lowered_keyword:
                return cuisine
    return DEFAULT_CUISINE


def determine_diet(content: str) -> str:
    lowered = content.lower()
    for diet, terms in DIETS:
        if any(term in lowered for term in terms):
            return diet
    return ""


def extract_keywords(soup: BeautifulSoup, content: str, keyword: str) -> str:
    """Keyword, then section headers, then common recipe words found in the text."""
    parts = [keyword.strip()] if keyword.strip() else []
    for header in soup.find_all(SECTION_HEADINGS):
        text = _squash(header.get_text())
        if text and not KEYWORD_HEADER_EXCLUDE_RE.search(text):
            parts.append(text)

    lowered = content.lower()
    for common in COMMON_RECIPE_KEYWORDS:
        if common in lowered and common not in ", ".join(parts).lower():
            parts.append(common)
    return ", ".join(parts)


def extract_nutrition(soup: BeautifulSoup) -> Nutrition:
    nutrition = Nutrition()
    section = find_section(soup, NUTRITION_HEADING_RE)
    if section:
        text = _squash(" ".join(_node_text(node) for node in section))
        for name, pattern, unit in NUTRITION_PATTERNS:
            match = pattern.search(text)
            if match:
                setattr(nutrition, name, match.group(1) + unit)

    for name, default in NUTRITION_DEFAULTS.items():
        if not getattr(nutrition, name):
            setattr(nutrition, name, default)
    return nutrition


def extract_recipe_data(html: str, keyword: str) -> Optional[RecipeData]:
    """Return a fully populated RecipeData, or None when the HTML is not a recipe."""
    if count_recipe_indicators(html) < MIN_RECIPE_INDICATORS:
        return None

    logger.info("Recipe detected in content. Extracting recipe data...")
    soup = _parse(html)
    text = _document_text(soup)

    details = RecipeDetails(
        prep_time=extract_time(text, "prep"),
        cook_time=extract_time(text, "cook"),
        total_time=extract_time(text, "total"),
        yield_=extract_yield(text),
        category=determine_category(html, keyword),
        method=determine_method(html),
        cuisine=determine_cuisine(html, keyword),
        diet=determine_diet(html),
    )
    return RecipeData(
        description=extract_description(soup),
        ingredients=extract_ingredients(soup),
        instructions=extract_instructions(soup),
        notes=extract_notes(soup),
        details=details,
        keywords=extract_keywords(soup, html, keyword),
        nutrition=extract_nutrition(soup),
    )
