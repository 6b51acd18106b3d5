"""
Programming language guesser for code clips.

An ordered list of cheap structural signatures (prefix, substring or regex
tests). The first signature that matches names the language; JSON is tried
last because it needs a full parse. Returns None when nothing matches, which
the classifier reads as "not code".
"""

import re
from collections.abc import Callable

from src.classifier.signals import parse_json
from src.utils.logging import get_logger

logger = get_logger(__name__)

# Languages with a display colour in the clip list
LANGUAGE_COLORS: dict[str, str] = {
    "javascript": "#f7df1e",
    "typescript": "#3178c6",
    "python": "#3776ab",
    "rust": "#dea584",
    "html": "#e34f26",
    "css": "#1572b6",
    "json": "#292929",
    "sql": "#e38c00",
    "bash": "#4eaa25",
    "java": "#ed8b00",
    "csharp": "#239120",
    "cpp": "#00599c",
    "go": "#00add8",
    "ruby": "#cc342d",
    "php": "#777bb4",
    "swift": "#fa7343",
    "kotlin": "#7f52ff",
    "yaml": "#cb171e",
    "markdown": "#083fa1",
    "plaintext": "#888888",
}

_ES_IMPORT = re.compile(r"^\s*import\s.+\sfrom\s+['\"]", re.MULTILINE)
_JS_LEADING_KEYWORD = re.compile(r"(const|let|var|function|class|export|import)\s")
_PY_FROM_IMPORT = re.compile(r"^from\s+[\w.]+\s+import\s", re.MULTILINE)
_JAVA_LEADING_KEYWORD = re.compile(r"(public|private|protected|class|interface|package)\s")
_SQL_LEADING_KEYWORD = re.compile(r"\s*(SELECT|INSERT|UPDATE|DELETE|CREATE|DROP|ALTER)\s", re.IGNORECASE)
_CSS_RULE = re.compile(r"[.#][a-zA-Z][\w-]*\s*\{")
_SCSS_VARIABLE = re.compile(r"^\s*\$[\w-]+\s*:", re.MULTILINE)
_SHEBANG = re.compile(r"#!\s*/")
_GO_PACKAGE = re.compile(r"^package\s+\w+", re.MULTILINE)


def _is_php(code: str) -> bool:
    return "<?php" in code


def _is_html(code: str) -> bool:
    return code.startswith("<!DOCTYPE") or (code.startswith("<") and ">" in code)


def _is_typescript(code: str) -> bool:
    return _ES_IMPORT.search(code) is not None


def _is_javascript(code: str) -> bool:
    return _JS_LEADING_KEYWORD.match(code) is not None or "=>" in code


def _is_rust(code: str) -> bool:
    return "fn " in code and ("let " in code or "mut " in code)


def _is_python(code: str) -> bool:
    if "def " in code and ":" in code and "{" not in code:
        return True
    return _PY_FROM_IMPORT.search(code) is not None


def _is_java(code: str) -> bool:
    return _JAVA_LEADING_KEYWORD.match(code) is not None


def _is_c(code: str) -> bool:
    return "#include" in code or "int main(" in code


def _is_cpp(code: str) -> bool:
    return "using namespace" in code or "std::" in code


def _is_sql(code: str) -> bool:
    return _SQL_LEADING_KEYWORD.match(code) is not None


def _is_yaml(code: str) -> bool:
    return code.startswith("---") and ":" in code


def _is_ini(code: str) -> bool:
    return code.startswith("[") and "=" in code


def _is_css(code: str) -> bool:
    return "body {" in code or _CSS_RULE.search(code) is not None


def _is_scss(code: str) -> bool:
    return "@mixin" in code or _SCSS_VARIABLE.search(code) is not None


def _is_bash(code: str) -> bool:
    return _SHEBANG.match(code) is not None


def _is_go(code: str) -> bool:
    return "func " in code and (":=" in code or _GO_PACKAGE.search(code) is not None)


def _is_kotlin(code: str) -> bool:
    return "fun " in code and "val " in code


def _is_swift(code: str) -> bool:
    return "func " in code and "var " in code


def _is_json(code: str) -> bool:
    if not (code.startswith("{") or code.startswith("[")):
        return False
    try:
        parse_json(code)
    except ValueError:
        return False
    return True


# Order matters: first match wins.
LANGUAGE_SIGNATURES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("php", _is_php),
    ("html", _is_html),
    ("typescript", _is_typescript),
    ("javascript", _is_javascript),
    ("rust", _is_rust),
    ("python", _is_python),
    ("java", _is_java),
    ("c", _is_c),
    ("cpp", _is_cpp),
    ("sql", _is_sql),
    ("yaml", _is_yaml),
    ("ini", _is_ini),
    ("css", _is_css),
    ("scss", _is_scss),
    ("bash", _is_bash),
    ("go", _is_go),
    ("kotlin", _is_kotlin),
    ("swift", _is_swift),
    ("json", _is_json),
)


def guess_language(code: str) -> str | None:
    """Guess the programming language of a code snippet.

    Args:
        code: Snippet text.

    Returns:
        Language tag (e.g. "python", "rust") or None if no signature matches.
    """
    trimmed = code.strip()
    if not trimmed:
        return None

    for language, matches in LANGUAGE_SIGNATURES:
        if matches(trimmed):
            logger.debug("Language signature matched", language=language)
            return language

    return None


def language_color(language: str | None) -> str:
    """Badge colour for a language tag (plaintext colour if unknown)."""
    if language is None:
        return LANGUAGE_COLORS["plaintext"]
    return LANGUAGE_COLORS.get(language, LANGUAGE_COLORS["plaintext"])
