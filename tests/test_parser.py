import pytest

from recipe_models import AddIngredients, Process, Recipe
from recipe_parser import NestingTooDeep, ParseError, parse


def nested_recipe_text(levels: int) -> str:
    text = "core"
    for _ in range(levels):
        text = f"shell > + ({text})"
    return text


def test_parse_base_only_recipe_is_trimmed_leaf():
    assert parse("  tomato soup \t") == Recipe(base="tomato soup")
    assert parse("tomato soup").instructions == ()


def test_parse_steps_and_inline_ingredient_across_lines():
    recipe = parse("aaa > bbb\n> + ccc")

    assert recipe == Recipe(
        base="aaa",
        instructions=(
            Process("bbb"),
            AddIngredients(recipe=Recipe(base="ccc"), optional=False),
        ),
    )


def test_parse_optional_parenthesized_ingredient():
    recipe = parse("x > ? + (y > z)")

    assert recipe == Recipe(
        base="x",
        instructions=(
            AddIngredients(
                recipe=Recipe(base="y", instructions=(Process("z"),)),
                optional=True,
            ),
        ),
    )


def test_parse_commented_nested_document():
    source = """  # comment
aaa > bbb # comment
> + (#
    ccc>ddd>+( eee )
# comment
) > ? + (
    fff>ggg
)
# comment"""

    assert parse(source) == Recipe(
        base="aaa",
        instructions=(
            Process("bbb"),
            AddIngredients(
                recipe=Recipe(
                    base="ccc",
                    instructions=(
                        Process("ddd"),
                        AddIngredients(recipe=Recipe(base="eee"), optional=False),
                    ),
                ),
                optional=False,
            ),
            AddIngredients(
                recipe=Recipe(base="fff", instructions=(Process("ggg"),)),
                optional=True,
            ),
        ),
    )


def test_comments_and_whitespace_do_not_change_the_tree():
    compact = parse("dough>knead>+(egg>beat)>?+salt")
    spaced = parse(
        "# bread\n"
        "  dough   # base\n"
        "\t>  knead \n"
        "> # egg wash\n"
        "  + ( egg\n    > beat  # well\n  )\n"
        ">\t?\n+ salt # a pinch\n"
        "# done\n"
    )

    assert spaced == compact


def test_internal_whitespace_is_kept():
    recipe = parse("fried  rice > stir   fry")

    assert recipe.base == "fried  rice"
    assert recipe.instructions == (Process("stir   fry"),)


def test_question_mark_inside_text_is_plain_text():
    assert parse("what? > why not?").instructions == (Process("why not?"),)


def test_inline_ingredient_may_contain_closing_paren():
    recipe = parse("x > + y (fresh)")

    assert recipe.instructions == (AddIngredients(recipe=Recipe(base="y (fresh)")),)


def test_unclosed_group_falls_back_to_inline_name():
    recipe = parse("x > + (y")

    assert recipe.instructions == (AddIngredients(recipe=Recipe(base="(y")),)


def test_parse_rejects_empty_step_list():
    with pytest.raises(ParseError) as exc:
        parse("aaa >")

    assert exc.value.expected == "processing step"
    assert exc.value.position == 5
    assert exc.value.remaining == ""
    assert str(exc.value) == "expected processing step at line 1, column 6 (end of input)"


def test_parse_rejects_trailing_content():
    with pytest.raises(ParseError) as exc:
        parse("aaa > bbb ) ccc")

    assert exc.value.remaining == ") ccc"
    assert str(exc.value) == "expected end of input at line 1, column 11: ') ccc'"


def test_question_mark_must_precede_plus():
    with pytest.raises(ParseError) as exc:
        parse("x > ? y")

    assert exc.value.expected == "'+'"
    assert exc.value.column == 7


def test_plus_cannot_start_a_processing_step():
    with pytest.raises(ParseError) as exc:
        parse("x > + > y")

    assert exc.value.expected == "ingredient name or '('"


@pytest.mark.parametrize("source", ["", "   \n", "# only a comment\n", "> step"])
def test_parse_requires_a_base(source):
    with pytest.raises(ParseError) as exc:
        parse(source)

    assert exc.value.expected == "recipe name"


def test_error_position_reports_line_and_column():
    with pytest.raises(ParseError) as exc:
        parse("soup\n> boil\n>\n")

    assert (exc.value.line, exc.value.column) == (4, 1)


def test_nesting_within_limit_is_parsed():
    recipe = parse(nested_recipe_text(3), max_depth=3)

    depth = 0
    while recipe.instructions:
        recipe = recipe.instructions[0].recipe
        depth += 1
    assert depth == 3
    assert recipe.base == "core"


def test_nesting_past_limit_is_rejected():
    with pytest.raises(NestingTooDeep) as exc:
        parse(nested_recipe_text(4), max_depth=3)

    assert exc.value.limit == 3
    assert isinstance(exc.value, ParseError)


def test_default_limit_allows_moderate_nesting():
    recipe = parse(nested_recipe_text(50))

    assert recipe.base == "shell"


def test_recursion_exhaustion_is_reported_as_parse_error():
    with pytest.raises(NestingTooDeep) as exc:
        parse(nested_recipe_text(5000), max_depth=10**6)

    assert "recursion limit reached after" in str(exc.value)
    assert "at most" not in str(exc.value)


def test_many_unclosed_groups_fall_back_to_inline_names():
    recipe = parse("x" + " > +(a" * 40)

    assert recipe.base == "x"
    assert recipe.instructions == (AddIngredients(recipe=Recipe(base="(a")),) * 40


def test_trimming_keeps_control_characters():
    assert parse("a\x1f > b").base == "a\x1f"


def test_trimming_removes_unicode_spaces():
    recipe = parse("\u3000rice\u00a0 > boil\u2003")

    assert recipe.base == "rice"
    assert recipe.instructions == (Process("boil"),)
