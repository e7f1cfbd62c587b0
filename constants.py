import re
from typing import Dict, List, Pattern, Tuple

RECIPE_INDICATORS: List[str] = [
    "ingredients", "instructions", "preparation", "minutes",
    "cook time", "prep time", "servings", "recipe", "tablespoon",
    "teaspoon", "cup", "bake", "fry", "boil", "simmer"
]
MIN_RECIPE_INDICATORS = 3

RECIPE_KEYWORD_RE = re.compile(
    r"recipe|dish|cook|bake|food|meal|breakfast|lunch|dinner|dessert|appetizer|snack"
)

HTML_TAG_RE = re.compile(r"</?[a-z][\s\S]*>", re.I)
BR_SPLIT_RE = re.compile(r"<br\s*/?>", re.I)
LEADING_NUMBER_RE = re.compile(r"^\d+[\.\)\-]+\s*")

INGREDIENTS_HEADING_RE = re.compile(r"ingredients", re.I)
INSTRUCTIONS_HEADING_RE = re.compile(r"instructions|directions|method|steps|how to", re.I)
NOTES_HEADING_RE = re.compile(r"notes|tips|additional|advice", re.I)
NUTRITION_HEADING_RE = re.compile(r"nutrition|nutritional|nutrients", re.I)
KEYWORD_HEADER_EXCLUDE_RE = re.compile(r"ingredients|instructions|steps|notes|tips", re.I)

MEASUREMENT_UNITS = ["cup", "teaspoon", "tablespoon", "ounce", "pound"]

TIME_PATTERNS: Dict[str, Pattern[str]] = {
    "prep": re.compile(r"prep(?:aration)?\s+time:?\s*(\d+)(?:\s+to\s+(\d+))?\s+(minutes|hours)", re.I),
    "cook": re.compile(r"cook(?:ing)?\s+time:?\s*(\d+)(?:\s+to\s+(\d+))?\s+(minutes|hours)", re.I),
    "total": re.compile(r"total\s+time:?\s*(\d+)(?:\s+to\s+(\d+))?\s+(minutes|hours)", re.I),
}
DEFAULT_TIMES = {"prep": "15 minutes", "cook": "30 minutes", "total": "45 minutes"}

YIELD_RE = re.compile(r"(?:serves|servings|yield|makes):\s*(\d+)(?:\s*-\s*(\d+))?", re.I)
DEFAULT_YIELD = "4 servings"

# (field, pattern, unit suffix); order matters, first match per field wins
NUTRITION_PATTERNS: List[Tuple[str, Pattern[str], str]] = [
    ("calories", re.compile(r"calories:?\s*(\d+)", re.I), ""),
    ("saturated_fat", re.compile(r"(?<!un)saturated\s+fat:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("unsaturated_fat", re.compile(r"unsaturated\s+fat:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("trans_fat", re.compile(r"trans\s+fat:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("fat", re.compile(r"(?<!saturated )(?<!trans )\bfat:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("carbohydrates", re.compile(r"carb(?:ohydrate)?s:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("protein", re.compile(r"protein:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("sugar", re.compile(r"sugars?:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("fiber", re.compile(r"fiber:?\s*(\d+\.?\d*)\s*(?:g|grams)\b", re.I), "g"),
    ("sodium", re.compile(r"sodium:?\s*(\d+\.?\d*)\s*(?:mg|milligrams)\b", re.I), "mg"),
    ("cholesterol", re.compile(r"cholesterol:?\s*(\d+\.?\d*)\s*(?:mg|milligrams)\b", re.I), "mg"),
]
NUTRITION_DEFAULTS = {
    "serving_size": "1 serving",
    "calories": "250",
    "fat": "10g",
    "carbohydrates": "30g",
    "protein": "15g",
}

# (category, content terms, keyword terms), checked in this order
CATEGORY_RULES: List[Tuple[str, List[str], List[str]]] = [
    ("Breakfast", ["breakfast", "morning meal"], ["breakfast"]),
    ("Appetizer", ["appetizer", "starter", "hors d'oeuvre"], ["appetizer"]),
    ("Main Course", ["main course", "dinner", "entrée", "entree"], []),
    ("Dessert", ["dessert", "sweet", "cake", "cookie", "pie"], ["dessert"]),
    ("Side Dish", ["side dish", "accompaniment"], ["side"]),
    ("Soup", ["soup", "stew", "broth"], ["soup"]),
    ("Salad", ["salad"], ["salad"]),
    ("Drink", ["drink", "beverage", "cocktail", "smoothie"], []),
]
DEFAULT_CATEGORY = "Main Course"

METHOD_RULES: List[Tuple[str, List[str]]] = [
    ("Baking", ["bake", "roast", "oven"]),
    ("Boiling", ["boil", "blanch"]),
    ("Grilling", ["grill", "barbecue", "bbq"]),
    ("Slow Cooking", ["slow cooker", "crockpot"]),
    ("Pressure Cooking", ["pressure cooker", "instant pot"]),
    ("Steaming", ["steam"]),
    ("Frying", ["fry", "sauté", "saute"]),
    ("No-Cook", ["no cook", "no-cook", "raw"]),
]
DEFAULT_METHOD = "Cooking"

CUISINES: List[Tuple[str, List[str]]] = [
    ("Italian", ["italian", "pasta", "pizza", "risotto", "lasagna"]),
    ("Mexican", ["mexican", "taco", "burrito", "enchilada", "quesadilla", "salsa"]),
    ("Chinese", ["chinese", "stir fry", "stir-fry", "wok", "dim sum", "dumpling"]),
    ("Indian", ["indian", "curry", "masala", "tandoori", "naan"]),
    ("French", ["french", "ratatouille", "croissant", "soufflé", "souffle"]),
    ("Thai", ["thai", "pad thai", "curry", "tom yum"]),
    ("Japanese", ["japanese", "sushi", "teriyaki", "miso", "tempura"]),
    ("Mediterranean", ["mediterranean", "greek", "hummus", "falafel", "olive oil"]),
    ("American", ["american", "burger", "hot dog", "mac and cheese", "barbecue"]),
]
DEFAULT_CUISINE = "American"

DIETS: List[Tuple[str, List[str]]] = [
    ("Vegan", ["vegan", "plant-based", "no animal products"]),
    ("Vegetarian", ["vegetarian", "no meat", "meatless"]),
    ("Gluten Free", ["gluten-free", "gluten free", "without gluten"]),
    ("Low Calorie", ["low calorie", "low-calorie", "diet", "light"]),
    ("Low Fat", ["low fat", "low-fat", "fat free"]),
    ("Low Salt", ["low salt", "low-salt", "low sodium"]),
    ("Diabetic", ["diabetic", "diabetes", "low sugar", "sugar-free"]),
    ("Kosher", ["kosher", "jewish dietary laws"]),
    ("Halal", ["halal", "islamic dietary laws"]),
]

COMMON_RECIPE_KEYWORDS = [
    "homemade", "easy", "delicious", "quick", "healthy",
    "family", "dinner", "recipe", "best", "traditional"
]

DEFAULT_DESCRIPTION = "A delicious and easy recipe that everyone will love."
PLACEHOLDER_INGREDIENTS = "<ul><li>Ingredient 1</li><li>Ingredient 2</li><li>Ingredient 3</li></ul>"
PLACEHOLDER_INSTRUCTIONS = "<ol><li>Step 1</li><li>Step 2</li><li>Step 3</li></ol>"
PLACEHOLDER_NOTES = "<ul><li>For best results, let the dish rest for 5 minutes before serving.</li></ul>"

ALTERNATIVE_PLACEHOLDER = "[alternative]"
