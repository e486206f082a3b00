from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Recipe:
    """A named item and the ordered instructions that produce it."""

    base: str
    instructions: Tuple["Instruction", ...] = ()


@dataclass(frozen=True)
class AddIngredients:
    """Adds a whole sub-recipe as an ingredient, optionally "to taste"."""

    recipe: Recipe
    optional: bool = False


@dataclass(frozen=True)
class Process:
    text: str


Instruction = Union[AddIngredients, Process]
