"""
Privilege elevation through AppleScript.

A command string is embedded into a single ``do shell script`` call so
macOS shows exactly one administrator prompt, however many sub-commands
the string chains together.
"""

_PREFIX = 'do shell script "'
_SUFFIX = '" with administrator privileges'


class ElevatedScript(str):
    """AppleScript produced by wrap_for_elevation(); only these count as already wrapped."""


def is_elevated_script(text: str) -> bool:
    """True when ``text`` has the shape of a wrapped script."""
    return text.startswith(_PREFIX) and text.endswith(_SUFFIX)


def wrap_for_elevation(command: str) -> ElevatedScript:
    """
    Build the AppleScript that runs ``command`` with administrator privileges.

    Backslashes are escaped before double quotes so the escaping can be
    undone exactly. A script returned by an earlier call is passed back
    untouched; a plain string is always escaped, even one that happens to
    look like a wrapped script.
    """
    if isinstance(command, ElevatedScript):
        return command

    escaped = command.replace("\\", "\\\\").replace('"', '\\"')
    return ElevatedScript(f"{_PREFIX}{escaped}{_SUFFIX}")


def unwrap_elevated(script: str) -> str:
    """Recover the original command from a script built by wrap_for_elevation()."""
    if not is_elevated_script(script):
        raise ValueError("Not an elevated shell script")

    body = script[len(_PREFIX):-len(_SUFFIX)]
    chars = []
    i = 0
    while i < len(body):
        if body[i] == "\\" and i + 1 < len(body):
            chars.append(body[i + 1])
            i += 2
        else:
            chars.append(body[i])
            i += 1
    return "".join(chars)
