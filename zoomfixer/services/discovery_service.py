"""
Locates Zoom application bundles and decides how each one is removed.
"""
import fnmatch
import os
from typing import Iterable, List, Optional, Tuple
from zoomfixer.config import constants
from zoomfixer.utils.logger import log


class DiscoveryService:

    @staticmethod
    def matches(name: str, patterns: Iterable[str]) -> bool:
        lowered = name.lower()
        return any(fnmatch.fnmatchcase(lowered, p.lower()) for p in patterns)

    @staticmethod
    def find_installations(
        roots: Optional[Iterable[str]] = None,
        max_depth: int = constants.DISCOVERY_MAX_DEPTH,
        patterns: Optional[Iterable[str]] = None
    ) -> List[str]:
        """
        Walk each root up to ``max_depth`` levels for directories whose name
        matches one of ``patterns`` (case-insensitive).

        Matched bundles are not descended into. Results are canonical paths,
        de-duplicated, in order of first discovery.
        """
        roots = constants.DISCOVERY_ROOTS if roots is None else list(roots)
        patterns = constants.DISCOVERY_PATTERNS if patterns is None else list(patterns)

        found = []
        seen = set()

        def walk(directory: str, depth: int):
            try:
                with os.scandir(directory) as entries:
                    children = sorted(entries, key=lambda e: e.name)
            except OSError:
                return

            for entry in children:
                try:
                    if not entry.is_dir():
                        continue
                except OSError:
                    continue

                if DiscoveryService.matches(entry.name, patterns):
                    canonical = os.path.realpath(entry.path)
                    if canonical not in seen:
                        seen.add(canonical)
                        found.append(canonical)
                elif depth < max_depth and not entry.is_symlink():
                    walk(entry.path, depth + 1)

        for root in roots:
            if os.path.isdir(root):
                walk(root, 1)
            else:
                log.debug(f"Discovery root missing: {root}")

        return found

    @staticmethod
    def existing_defaults(candidates: Optional[Iterable[str]] = None) -> List[str]:
        """Known bundle locations that exist, used when discovery came back empty."""
        candidates = constants.DEFAULT_INSTALL_PATHS if candidates is None else candidates
        return [p for p in candidates if os.path.exists(p)]

    @staticmethod
    def is_admin_path(path: str, admin_root: str = constants.SYSTEM_APPLICATIONS) -> bool:
        """True when ``path`` sits under the system-wide applications folder."""
        root = admin_root.rstrip("/")
        return path == root or path.startswith(root + "/")

    @staticmethod
    def partition(
        paths: Iterable[str],
        admin_root: str = constants.SYSTEM_APPLICATIONS
    ) -> Tuple[List[str], List[str]]:
        """
        Split discovered paths into (admin_paths, user_paths).

        Admin paths need elevation and are removed in the privileged batch;
        user paths can be removed right away.
        """
        admin, user = [], []
        for p in paths:
            (admin if DiscoveryService.is_admin_path(p, admin_root) else user).append(p)
        return admin, user
