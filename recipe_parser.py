import logging
from typing import Dict, List, Optional, Pattern

from constants import (
    BASE_TEXT_RE,
    CLOSE_GROUP,
    DEFAULT_MAX_DEPTH,
    INGREDIENT_MARKER,
    INLINE_TEXT_RE,
    OPEN_GROUP,
    OPTIONAL_MARKER,
    PROCESS_TEXT_RE,
    SKIP_RE,
    SNIPPET_LENGTH,
    STEP_SEPARATOR,
    WHITE_SPACE,
)
from recipe_models import AddIngredients, Instruction, Process, Recipe

log = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised for the first position of the input that no rule could match."""

    def __init__(self, source: str, position: int, expected: str):
        self.source = source
        self.position = position
        self.expected = expected
        super().__init__(source, position, expected)

    def __str__(self) -> str:
        return self.describe()

    @property
    def remaining(self) -> str:
        return self.source[self.position:]

    @property
    def line(self) -> int:
        return self.source.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        return self.position - (self.source.rfind("\n", 0, self.position) + 1) + 1

    def describe(self) -> str:
        where = f"line {self.line}, column {self.column}"
        if not self.remaining:
            return f"expected {self.expected} at {where} (end of input)"
        snippet = self.remaining.split("\n", 1)[0][:SNIPPET_LENGTH]
        return f"expected {self.expected} at {where}: {snippet!r}"


class NestingTooDeep(ParseError):
    """Parenthesized recipes nested past the configured limit."""

    def __init__(self, source: str, position: int, limit: int, expected: Optional[str] = None):
        self.limit = limit
        super().__init__(source, position, expected or f"at most {limit} levels of nested recipes")


class _Parser:
    def __init__(self, source: str, max_depth: int):
        self.source = source
        self.max_depth = max_depth
        self.pos = 0
        self.depth = 0
        self.deepest = 0
        # A `(` group that failed at a position fails the same way when retried.
        self.failed_groups: Dict[int, ParseError] = {}

    def fail(self, expected: str) -> ParseError:
        return ParseError(self.source, self.pos, expected)

    def skip(self) -> None:
        self.pos = SKIP_RE.match(self.source, self.pos).end()

    def at(self, token: str) -> bool:
        self.skip()
        return self.source.startswith(token, self.pos)

    def expect(self, token: str) -> None:
        if not self.at(token):
            raise self.fail(repr(token))
        self.pos += len(token)

    def match_text(self, pattern: Pattern[str]) -> Optional[str]:
        self.skip()
        m = pattern.match(self.source, self.pos)
        if not m:
            return None
        text = m.group(0).strip(WHITE_SPACE)
        if not text:
            return None
        self.pos = m.end()
        return text

    def text(self, pattern: Pattern[str], expected: str) -> str:
        text = self.match_text(pattern)
        if text is None:
            raise self.fail(expected)
        return text

    def document(self) -> Recipe:
        recipe = self.recipe()
        self.skip()
        if self.pos != len(self.source):
            raise self.fail("end of input")
        return recipe

    def recipe(self) -> Recipe:
        base = self.text(BASE_TEXT_RE, "recipe name")
        instructions: List[Instruction] = []
        if self.at(STEP_SEPARATOR):
            self.pos += len(STEP_SEPARATOR)
            instructions.append(self.instruction())
            while self.at(STEP_SEPARATOR):
                self.pos += len(STEP_SEPARATOR)
                instructions.append(self.instruction())
        return Recipe(base=base, instructions=tuple(instructions))

    def instruction(self) -> Instruction:
        self.skip()
        # `?` and `+` are reserved: they always start an ingredient.
        if self.source.startswith((OPTIONAL_MARKER, INGREDIENT_MARKER), self.pos):
            return self.add_ingredients()
        return Process(self.text(PROCESS_TEXT_RE, "processing step"))

    def add_ingredients(self) -> AddIngredients:
        optional = self.at(OPTIONAL_MARKER)
        if optional:
            self.pos += len(OPTIONAL_MARKER)
        self.expect(INGREDIENT_MARKER)
        return AddIngredients(recipe=self.ingredient_source(), optional=optional)

    def ingredient_source(self) -> Recipe:
        start = self.pos
        group_error: Optional[ParseError] = None
        if self.at(OPEN_GROUP):
            try:
                return self.group()
            except NestingTooDeep:
                raise
            except ParseError as err:
                group_error = err
                self.pos = start

        base = self.match_text(INLINE_TEXT_RE)
        if base is None:
            raise group_error or self.fail(f"ingredient name or {OPEN_GROUP!r}")
        return Recipe(base=base)

    def group(self) -> Recipe:
        start = self.pos
        if self.depth >= self.max_depth:
            raise NestingTooDeep(self.source, start, self.max_depth)
        if start in self.failed_groups:
            raise self.failed_groups[start].with_traceback(None)
        self.pos += len(OPEN_GROUP)
        self.depth += 1
        self.deepest = max(self.deepest, self.depth)
        try:
            recipe = self.recipe()
            self.expect(CLOSE_GROUP)
        except NestingTooDeep:
            raise
        except ParseError as err:
            self.failed_groups[start] = err
            raise
        finally:
            self.depth -= 1
        return recipe


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Recipe:
    """Parse a complete recipe description into a `Recipe` tree.

    Raises `ParseError` at the first position that cannot be matched, and
    `NestingTooDeep` when parentheses nest deeper than `max_depth`.
    """
    parser = _Parser(source, max_depth)
    try:
        recipe = parser.document()
    except RecursionError:
        raise NestingTooDeep(
            source,
            parser.pos,
            parser.deepest,
            f"fewer nested recipes (recursion limit reached after {parser.deepest} levels)",
        ) from None
    log.debug("parsed recipe %r with %d instructions", recipe.base, len(recipe.instructions))
    return recipe
