import sys
from pathlib import Path
from typing import Sequence


LIGHT_BLUE = "\033[94m"
RED = "\033[91m"
RESET = "\033[0m"


def format_path_for_console(path: Path, root: Path | None = None) -> str:
    """
    Render a path relative to root (when it sits under it) in light blue.
    """
    resolved = path.resolve()
    display = resolved.as_posix()
    if root:
        try:
            display = "/" + resolved.relative_to(root.resolve()).as_posix()
        except ValueError:
            pass
    return f"{LIGHT_BLUE}{display}{RESET}"


def format_build_summary(
    weapon_count: int, variant_count: int, names: Sequence[str], format_version: int
) -> str:
    return (
        f"{weapon_count} weapon levels, {variant_count} variants, "
        f"{len(names)} names (format v{format_version})"
    )


def print_error(message: str) -> None:
    print(f"{RED}[error]{RESET} {message}", file=sys.stderr)
