"""Named path-mapping styles for the CLI.

A preset stands in for a --style bitmask. Names describe the output shape.
"""

import sys

PRESETS = {
    "full": {"style": 0},
    "include": {"style": 2},
    "include-parent": {"style": 3},
    "abbrev": {"style": 4},
    "compact": {"style": 6},
    "compact-parent": {"style": 7},
}

PRESET_COMMANDS = {"call", "hover", "shorten", "candidates"}


def apply_preset(args, command: str) -> None:
    """Apply preset defaults to parsed args. Explicit flags take precedence. Mutates args in-place."""
    preset_name = getattr(args, "preset", None)
    if not preset_name:
        return
    if command not in PRESET_COMMANDS:
        return
    if preset_name not in PRESETS:
        valid = ", ".join(sorted(PRESETS.keys()))
        print(f"Error: Unknown preset '{preset_name}'. Valid presets: {valid}", file=sys.stderr)
        sys.exit(1)

    argv = sys.argv[1:]

    def _is_explicit(key: str) -> bool:
        flag = f"--{key.replace('_', '-')}"
        return any(a == flag or a.startswith(f"{flag}=") for a in argv)

    for key, value in PRESETS[preset_name].items():
        if _is_explicit(key):
            continue
        setattr(args, key, value)
