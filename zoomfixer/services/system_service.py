import os
import platform
import webbrowser
import psutil
from typing import List
from zoomfixer.utils.logger import log

class SystemService:
    @staticmethod
    def find_processes(name: str) -> List[int]:
        """
        PIDs of running processes whose name or command line mentions ``name``.
        Processes that vanish or deny access mid-scan are skipped.
        """
        pids = []
        needle = name.lower()
        for proc in psutil.process_iter(["pid", "name", "cmdline"]):
            try:
                proc_name = (proc.info.get("name") or "").lower()
                cmdline = " ".join(proc.info.get("cmdline") or []).lower()
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            if needle in proc_name or needle in cmdline:
                pids.append(proc.info["pid"])
        return pids

    @staticmethod
    def kill_processes(name: str) -> int:
        """
        SIGKILL every process found by find_processes(), except this one.
        Returns how many were killed; ones that exit first or deny access are skipped.
        """
        own_pid = os.getpid()
        killed = 0
        for pid in SystemService.find_processes(name):
            if pid == own_pid:
                continue
            try:
                psutil.Process(pid).kill()
                killed += 1
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        return killed

    @staticmethod
    def open_url(url: str) -> bool:
        """Open ``url`` in the default browser. Returns False when no browser is available."""
        opened = webbrowser.open(url)
        if not opened:
            log.warning(f"No browser available to open {url}")
        return opened

    @staticmethod
    def is_macos() -> bool:
        return platform.system() == "Darwin"
