import re
from typing import Pattern

# Insignificant content between tokens: whitespace and `#` comments.
SKIP_RE: Pattern[str] = re.compile(r"(?:[ \t\r\n]+|#[^\r\n]*)*")

BASE_TEXT_RE: Pattern[str] = re.compile(r"[^>)#\r\n]+")
PROCESS_TEXT_RE: Pattern[str] = re.compile(r"[^>)#\r\n]+")
INLINE_TEXT_RE: Pattern[str] = re.compile(r"[^>#\r\n]+")

# Unicode White_Space only, narrower than str.isspace().
WHITE_SPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

STEP_SEPARATOR = ">"
OPTIONAL_MARKER = "?"
INGREDIENT_MARKER = "+"
OPEN_GROUP = "("
CLOSE_GROUP = ")"

DEFAULT_MAX_DEPTH = 100
SNIPPET_LENGTH = 40

# Output template
IDEOGRAPHIC_SPACE = "　"
OPEN_QUOTE = "「"
CLOSE_QUOTE = "」"
BASE_CONNECTIVE = IDEOGRAPHIC_SPACE + "に"
STEP_CONNECTIVE = IDEOGRAPHIC_SPACE + "をして"
TERMINAL_PHRASE = "完成！"
OPTIONAL_PREFIX = "お好みで" + IDEOGRAPHIC_SPACE
INGREDIENT_PARTICLE = IDEOGRAPHIC_SPACE + "を"
NESTED_STEP_SUFFIX = IDEOGRAPHIC_SPACE + "して"
ADD_PHRASE = "加える"

ERROR_PREFIX = "parse error: "
