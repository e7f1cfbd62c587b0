from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


class ConfigurationError(ValueError):
    """Required settings are missing or malformed."""


class GenerationFailure(RuntimeError):
    """An LLM call failed; the whole article generation is aborted."""


class PublishError(RuntimeError):
    """The WordPress API rejected or never answered a request."""


@dataclass(frozen=True)
class PromptSettings:
    """Prompt customisation applied to every generation call."""

    use_multi_part_generation: bool = False
    main_prompt: str = ""
    part1_prompt: str = ""
    part2_prompt: str = ""
    part3_prompt: str = ""
    tone_voice: str = ""
    seo_guidelines: str = ""
    things_to_avoid: str = ""
    article_format: str = ""
    use_article_format: bool = False
    enable_recipe_detection: bool = False
    recipe_format_prompt: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptSettings":
        """Build settings from snake_case or camelCase keys, ignoring unknown ones."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in known or value is None:
                continue
            if name.startswith(("use_", "enable_")):
                values[name] = _as_bool(value)
            else:
                values[name] = str(value)
        return cls(**values)


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_" + ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "t", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


@dataclass
class RecipeDetails:
    prep_time: str
    cook_time: str
    total_time: str
    yield_: str
    category: str
    method: str
    cuisine: str
    diet: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "Prep Time": self.prep_time,
            "Cook Time": self.cook_time,
            "Total Time": self.total_time,
            "Yield": self.yield_,
            "Category": self.category,
            "Method": self.method,
            "Cuisine": self.cuisine,
            "Diet": self.diet,
        }


@dataclass
class Nutrition:
    serving_size: str = ""
    calories: str = ""
    sugar: str = ""
    sodium: str = ""
    fat: str = ""
    saturated_fat: str = ""
    unsaturated_fat: str = ""
    trans_fat: str = ""
    carbohydrates: str = ""
    fiber: str = ""
    protein: str = ""
    cholesterol: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "Serving Size": self.serving_size,
            "Calories": self.calories,
            "Sugar": self.sugar,
            "Sodium": self.sodium,
            "Fat": self.fat,
            "Saturated Fat": self.saturated_fat,
            "Unsaturated Fat": self.unsaturated_fat,
            "Trans Fat": self.trans_fat,
            "Carbohydrates": self.carbohydrates,
            "Fiber": self.fiber,
            "Protein": self.protein,
            "Cholesterol": self.cholesterol,
        }


@dataclass
class RecipeData:
    """Structured recipe card extracted from a generated article."""

    description: str
    ingredients: str
    instructions: str
    notes: str
    details: RecipeDetails
    keywords: str
    nutrition: Nutrition

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Description": self.description,
            "Ingredients": self.ingredients,
            "Instructions": self.instructions,
            "Notes": self.notes,
            "Details": self.details.to_dict(),
            "Keywords": self.keywords,
            "Nutrition": self.nutrition.to_dict(),
        }


@dataclass
class Article:
    title: str
    content: str
    word_count: int
    recipe_data: Optional[RecipeData] = None


@dataclass
class KeywordRow:
    """A keyword as read from the spreadsheet; never mutated here."""

    keyword: str
    status: str = "Pending"
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    post_id: Optional[int] = None
    post_url: Optional[str] = None
    publication_date: Optional[str] = None

    @property
    def is_published(self) -> bool:
        return (self.status or "").strip().lower() == "published"


@dataclass
class PublicationRecord:
    """What gets written back for a keyword once its article is live."""

    keyword: str
    post_id: Optional[int]
    post_url: Optional[str]
    publication_date: str
    word_count: int
    status: str = "Published"
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    has_recipe: bool = False

    def to_row(self) -> Dict[str, Any]:
        return {
            "Keyword": self.keyword,
            "Status": self.status,
            "Post ID": self.post_id,
            "Post URL": self.post_url,
            "Publication Date": self.publication_date,
            "Word Count": self.word_count,
            "OwnerId": self.owner_id,
            "CreatedBy": self.created_by,
        }
