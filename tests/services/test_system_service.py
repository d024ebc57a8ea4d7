"""
Tests for the psutil-backed process helpers.
"""

import os
import psutil
from unittest.mock import MagicMock, patch
from zoomfixer.services.system_service import SystemService


def fake_proc(pid, name, cmdline):
    proc = MagicMock()
    proc.info = {"pid": pid, "name": name, "cmdline": cmdline}
    return proc


@patch("zoomfixer.services.system_service.psutil.process_iter")
def test_find_processes_matches_name_or_cmdline(mock_iter):
    mock_iter.return_value = [
        fake_proc(10, "zoom.us", ["/Applications/zoom.us.app/Contents/MacOS/zoom.us"]),
        fake_proc(11, "caphost", ["/Applications/zoom.us.app/Contents/Frameworks/caphost"]),
        fake_proc(12, "Safari", ["/Applications/Safari.app/Contents/MacOS/Safari"]),
        fake_proc(13, None, None),
    ]

    assert SystemService.find_processes("zoom.us") == [10, 11]


@patch("zoomfixer.services.system_service.psutil.Process")
@patch.object(SystemService, "find_processes")
def test_kill_processes_skips_self_and_vanished(mock_find, mock_process):
    mock_find.return_value = [os.getpid(), 21, 22, 23]
    victims = {21: MagicMock(), 22: MagicMock(), 23: MagicMock()}
    victims[22].kill.side_effect = psutil.NoSuchProcess(22)
    victims[23].kill.side_effect = psutil.AccessDenied(23)
    mock_process.side_effect = lambda pid: victims[pid]

    assert SystemService.kill_processes("zoom.us") == 1

    victims[21].kill.assert_called_once_with()
    assert os.getpid() not in [c.args[0] for c in mock_process.call_args_list]


@patch.object(SystemService, "find_processes", return_value=[])
def test_kill_processes_with_nothing_running(mock_find):
    assert SystemService.kill_processes("zoom.us") == 0
