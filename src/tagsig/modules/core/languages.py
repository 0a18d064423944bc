"""Editor language names and the ctags language labels they accept."""

from __future__ import annotations

# Editor language -> ctags `language:` labels whose tags are compatible
DEFAULT_LANGUAGE_MAP: dict[str, list[str]] = {
    "asm": ["Asm"],
    "aspvbs": ["Asp"],
    "awk": ["Awk"],
    "c": ["C", "C++"],
    "cpp": ["C", "C++"],
    "cs": ["C#"],
    "cobol": ["Cobol"],
    "eiffel": ["Eiffel"],
    "erlang": ["Erlang"],
    "fortran": ["Fortran"],
    "go": ["Go"],
    "html": ["HTML", "JavaScript"],
    "java": ["Java"],
    "javascript": ["JavaScript"],
    "lisp": ["Lisp"],
    "lua": ["Lua"],
    "make": ["Make"],
    "pascal": ["Pascal"],
    "perl": ["Perl"],
    "php": ["PHP"],
    "python": ["Python"],
    "rexx": ["REXX"],
    "ruby": ["Ruby"],
    "rust": ["Rust"],
    "scheme": ["Scheme"],
    "sh": ["Sh"],
    "zsh": ["Sh"],
    "sql": ["SQL"],
    "slang": ["SLang"],
    "sml": ["SML"],
    "systemverilog": ["SystemVerilog"],
    "tcl": ["Tcl"],
    "vera": ["Vera"],
    "verilog": ["Verilog"],
    "vhdl": ["VHDL"],
    "vim": ["Vim"],
    "yacc": ["YACC"],
}

# Tags for this language are often written without their enclosing namespace
NAMESPACE_LANGUAGE = "cpp"

SEMICOLON_LANGUAGES = frozenset(
    {"c", "cpp", "cs", "java", "javascript", "systemverilog"}
)
COLON_LANGUAGES = frozenset({"python"})
BRACE_LANGUAGES = frozenset({"go"})


def accepts(language_map: dict[str, list[str]], editor_language: str | None, tag_language: str) -> bool:
    """Whether tags labelled `tag_language` are usable from `editor_language`.

    Editor languages missing from the map accept everything.
    """
    if not editor_language or editor_language not in language_map:
        return True
    return tag_language in language_map[editor_language]


def declaration_terminator(language: str | None) -> str:
    """Regex tail that ends a declaration line in `language`."""
    if language in COLON_LANGUAGES:
        return r"\s*:\s*(?:#.*)?$"
    if language in BRACE_LANGUAGES:
        return r"\s*\{?\s*(?://.*)?$"
    # C family default, also used for languages without a known terminator
    return r"\s*;"
