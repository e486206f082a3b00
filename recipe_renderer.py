from typing import List

from constants import (
    ADD_PHRASE,
    BASE_CONNECTIVE,
    CLOSE_QUOTE,
    IDEOGRAPHIC_SPACE,
    INGREDIENT_PARTICLE,
    NESTED_STEP_SUFFIX,
    OPEN_QUOTE,
    OPTIONAL_PREFIX,
    STEP_CONNECTIVE,
    TERMINAL_PHRASE,
)
from recipe_models import AddIngredients, Instruction, Process, Recipe


def render_instruction(instruction: Instruction) -> str:
    """Render one step; embedded recipes are rendered inline, depth first."""
    if isinstance(instruction, Process):
        return f"{OPEN_QUOTE}{instruction.text}{CLOSE_QUOTE}"
    if not isinstance(instruction, AddIngredients):
        raise TypeError(f"not a recipe instruction: {instruction!r}")

    parts: List[str] = []
    if instruction.optional:
        parts.append(OPTIONAL_PREFIX)
    parts.append(f"{OPEN_QUOTE}{instruction.recipe.base}{INGREDIENT_PARTICLE}")
    for step in instruction.recipe.instructions:
        parts.append(f"{IDEOGRAPHIC_SPACE}{render_instruction(step)}{NESTED_STEP_SUFFIX}")
    parts.append(f"{ADD_PHRASE}{CLOSE_QUOTE}")
    return "".join(parts)


def render(recipe: Recipe) -> str:
    parts = [recipe.base]
    if recipe.instructions:
        parts.append(BASE_CONNECTIVE)
    for instruction in recipe.instructions:
        parts.append(f"\n{render_instruction(instruction)}{STEP_CONNECTIVE}")
    parts.append(f"\n{TERMINAL_PHRASE}")
    return "".join(parts)
