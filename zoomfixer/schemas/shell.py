from dataclasses import dataclass

@dataclass(frozen=True)
class ShellResult:
    """Outcome of one external command"""

    command: str        # Rendered command line, executable included
    output: str         # stdout and stderr merged
    exit_code: int
