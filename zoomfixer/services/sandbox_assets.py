import os
from typing import Dict

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets", "sandbox")

DOCKERFILE = "Dockerfile"
ENTRYPOINT = "entrypoint.sh"


def read_asset(name: str) -> str:
    with open(os.path.join(ASSETS_DIR, name), "r", encoding="utf-8") as f:
        return f.read()


def write_build_context(directory: str) -> Dict[str, str]:
    """
    Write the Dockerfile and an executable entrypoint into ``directory``.
    Returns the written paths keyed by file name.
    """
    written = {}
    for name in (DOCKERFILE, ENTRYPOINT):
        path = os.path.join(directory, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(read_asset(name))
        written[name] = path

    os.chmod(written[ENTRYPOINT], 0o755)
    return written
