from dataclasses import asdict

from bs4 import BeautifulSoup

from constants import (
    DEFAULT_DESCRIPTION,
    PLACEHOLDER_INGREDIENTS,
    PLACEHOLDER_INSTRUCTIONS,
    PLACEHOLDER_NOTES,
)
from recipe_extractor import (
    count_recipe_indicators,
    determine_category,
    determine_cuisine,
    determine_diet,
    determine_method,
    extract_description,
    extract_ingredients,
    extract_instructions,
    extract_keywords,
    extract_notes,
    extract_nutrition,
    extract_recipe_data,
    extract_time,
    extract_yield,
)

BANANA_BREAD = """
<p>Short intro.</p>
<p>This banana bread is moist, tender and packed with ripe banana flavor, perfect for a slow weekend morning.</p>
<p><strong>Prep Time:</strong> 15 minutes | <strong>Cook Time:</strong> 60 minutes | Total Time: 75 minutes</p>
<p>Servings: 8-10</p>
<h2>Ingredients</h2>
<ul>
<li>3 ripe bananas</li>
<li>2 cups all-purpose flour</li>
<li>1 teaspoon baking soda</li>
</ul>
<h2>Instructions</h2>
<ol>
<li>Preheat the oven to 350°F.</li>
<li>Mash the bananas and mix everything.</li>
<li>Bake for 60 minutes.</li>
</ol>
<h2>Tips and Notes</h2>
<p>Use very ripe bananas for the sweetest loaf.</p>
<p>Wrap leftovers tightly.</p>
<h2>Nutrition Information</h2>
<p>Calories: 320 | Fat: 12g | Saturated Fat: 4g | Carbohydrates: 48g | Protein: 5g | Sugar: 22g | Fiber: 2g | Sodium: 180mg | Cholesterol: 35mg</p>
"""


def _soup(html):
    return BeautifulSoup(html, "html.parser")


def test_returns_none_below_indicator_threshold():
    html = "<h2>Running Shoes</h2><p>Pick shoes that fit. Try them for 10 minutes.</p>"
    assert count_recipe_indicators(html) == 1
    assert extract_recipe_data(html, "running shoes") is None


def test_full_recipe_is_extracted():
    recipe = extract_recipe_data(BANANA_BREAD, "banana bread")

    assert recipe is not None
    assert recipe.description.startswith("This banana bread is moist")
    assert recipe.ingredients.startswith("<ul>") and "2 cups all-purpose flour" in recipe.ingredients
    assert recipe.instructions.startswith("<ol>") and "Bake for 60 minutes." in recipe.instructions
    assert recipe.notes == (
        "<ul><li>Use very ripe bananas for the sweetest loaf.</li><li>Wrap leftovers tightly.</li></ul>"
    )
    assert recipe.details.prep_time == "15 minutes"
    assert recipe.details.cook_time == "60 minutes"
    assert recipe.details.total_time == "75 minutes"
    assert recipe.details.yield_ == "8-10 servings"
    assert recipe.details.method == "Baking"

    nutrition = recipe.nutrition
    assert nutrition.calories == "320"
    assert nutrition.fat == "12g"
    assert nutrition.saturated_fat == "4g"
    assert nutrition.carbohydrates == "48g"
    assert nutrition.sodium == "180mg"
    assert nutrition.cholesterol == "35mg"
    assert nutrition.serving_size == "1 serving"
    assert nutrition.trans_fat == ""


def test_recipe_without_structure_falls_back_everywhere():
    html = "Bake it, boil it, simmer it. This recipe needs one cup of patience."

    recipe = extract_recipe_data(html, "mystery soup")

    assert recipe is not None
    assert recipe.description == DEFAULT_DESCRIPTION
    assert recipe.ingredients == PLACEHOLDER_INGREDIENTS
    assert recipe.instructions == PLACEHOLDER_INSTRUCTIONS
    assert recipe.notes == PLACEHOLDER_NOTES
    assert recipe.details.prep_time == "15 minutes"
    assert recipe.details.cook_time == "30 minutes"
    assert recipe.details.total_time == "45 minutes"
    assert recipe.details.yield_ == "4 servings"
    assert recipe.details.category == "Soup"
    assert recipe.details.diet == ""
    assert recipe.nutrition.calories == "250"
    assert recipe.nutrition.fat == "10g"
    assert recipe.nutrition.carbohydrates == "30g"
    assert recipe.nutrition.protein == "15g"
    assert all(value is not None for value in asdict(recipe).values())
    assert set(recipe.to_dict()["Details"]) == {
        "Prep Time", "Cook Time", "Total Time", "Yield", "Category", "Method", "Cuisine", "Diet"
    }


def test_description_truncated_to_300_characters():
    text = "word " * 100
    description = extract_description(_soup(f"<p>{text}</p>"))
    assert len(description) == 300
    assert description.endswith("...")


def test_ingredients_from_br_lines():
    html = "<h3>Ingredients</h3>\n2 eggs<br>\n1 cup milk<br/>\na pinch of salt<br>\n<h3>Next</h3>"
    assert extract_ingredients(_soup(html)) == (
        "<ul><li>2 eggs</li><li>1 cup milk</li><li>a pinch of salt</li></ul>"
    )


def test_ingredients_intro_paragraph_falls_through_to_list_with_units():
    html = (
        "<h2>Ingredients</h2>\n<p>Gather these before you start.</p>\n"
        "<h3>For the batter</h3>\n<ul><li>2 cups flour</li><li>1 teaspoon salt</li></ul>"
    )
    assert extract_ingredients(_soup(html)) == "<ul><li>2 cups flour</li><li>1 teaspoon salt</li></ul>"


def test_ingredients_paragraphs_without_br_are_not_turned_into_a_list():
    html = "<h2>Ingredients</h2>\n<p>Flour is key here.</p>\n<p>Eggs bind it.</p>\n<p>Salt sharpens it.</p>"
    assert extract_ingredients(_soup(html)) == PLACEHOLDER_INGREDIENTS


def test_ingredients_fall_back_to_list_with_measurements():
    html = "<ul><li>Be patient</li></ul><p>text</p><ul><li>2 tablespoons butter</li></ul>"
    assert extract_ingredients(_soup(html)) == "<ul><li>2 tablespoons butter</li></ul>"


def test_instructions_from_paragraphs_strip_leading_numbers():
    html = (
        "<h2>Directions</h2><p>1. Whisk the eggs well.</p><p>2) Fold in the flour.</p><p>Ok</p>"
        "<h2>Serving</h2><p>Serve warm.</p>"
    )
    assert extract_instructions(_soup(html)) == "<ol><li>Whisk the eggs well.</li><li>Fold in the flour.</li></ol>"


def test_instructions_fall_back_to_longest_ordered_list():
    html = "<ol><li>Short</li></ol><p>x</p><ol><li>A much longer step</li><li>Another step</li></ol>"
    assert extract_instructions(_soup(html)) == "<ol><li>A much longer step</li><li>Another step</li></ol>"


def test_notes_prefer_list_in_section():
    html = "<h2>Chef Tips</h2><ul><li>Rest the dough.</li></ul><h2>End</h2>"
    assert extract_notes(_soup(html)) == "<ul><li>Rest the dough.</li></ul>"


def test_time_and_yield_patterns():
    assert extract_time("preparation time: 10 to 15 minutes", "prep") == "10 minutes"
    assert extract_time("Cooking Time 2 Hours", "cook") == "2 hours"
    assert extract_yield("Makes: 12") == "12 servings"
    assert extract_yield("nothing here") == "4 servings"


def test_category_checks_content_and_keyword_in_order():
    assert determine_category("a morning meal", "pancakes") == "Breakfast"
    assert determine_category("plain text", "tomato soup") == "Soup"
    assert determine_category("a chocolate cake for dinner", "cake") == "Main Course"
    assert determine_category("plain text", "plain") == "Main Course"


def test_method_cuisine_and_diet_tables():
    assert determine_method("toss it in the slow cooker") == "Slow Cooking"
    assert determine_method("just mix") == "Cooking"
    assert determine_cuisine("plain", "chicken tikka masala") == "Indian"
    assert determine_cuisine("plain", "plain") == "American"
    assert determine_diet("a hearty vegan bowl") == "Vegan"
    assert determine_diet("a hearty bowl") == ""


def test_keywords_join_keyword_headers_and_common_words():
    html = "<h2>Why This Works</h2><h2>Ingredients</h2><h3>Storage Tips</h3><p>An easy homemade loaf.</p>"
    keywords = extract_keywords(_soup(html), html, "banana bread")
    assert keywords == "banana bread, Why This Works, homemade, easy"


def test_keywords_skip_common_words_already_present():
    html = "<h2>Easy Recipe Variations</h2><p>an easy recipe</p>"
    assert extract_keywords(_soup(html), html, "quick recipe") == "quick recipe, Easy Recipe Variations"


def test_nutrition_defaults_without_section():
    nutrition = extract_nutrition(_soup("<p>Calories: 900</p>"))
    assert nutrition.calories == "250"
    assert nutrition.sugar == ""
