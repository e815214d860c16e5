import os

import pytest

from neovide.bridge.command import (
    NvimNotFoundError,
    build_nvim_command,
    create_platform_shell_command,
    nvim_command,
    platform_exists,
    platform_which,
)
from neovide.cmd_line import CmdLineSettings


def _executable(directory, name="nvim"):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    os.chmod(path, 0o755)
    return path


def test_no_shell_command_on_linux():
    assert create_platform_shell_command("which", ["nvim"], "linux", False, {}) is None


def test_no_shell_command_on_windows_without_wsl():
    assert create_platform_shell_command("which", ["nvim"], "win32", False, {}) is None


def test_wsl_shell_command():
    argv = create_platform_shell_command("which", ["nvim"], "win32", True, {})
    assert argv == ["wsl", "--cd", "~", "$SHELL", "-lc", "which nvim"]


def test_macos_shell_command_uses_login_shell_without_term():
    argv = create_platform_shell_command("which", ["nvim"], "darwin", False, {"SHELL": "/bin/zsh"})
    assert argv == ["/bin/zsh", "-l", "-c", "which nvim"]


def test_macos_shell_command_with_term_and_default_shell():
    argv = create_platform_shell_command("which", ["nvim"], "darwin", False, {"TERM": "xterm"})
    assert argv == ["/bin/sh", "-c", "which nvim"]


def test_nvim_command_plain():
    assert nvim_command("nvim", ["--embed", "-p"], "linux", False, {}) == ["nvim", "--embed", "-p"]


def test_nvim_command_wsl():
    argv = nvim_command("nvim", ["--embed", "--clean"], "win32", True, {})
    assert argv == ["wsl", "$SHELL", "-lc", "nvim --embed --clean"]


def test_nvim_command_macos_quotes_arguments():
    argv = nvim_command("nvim", ["--embed", "a b"], "darwin", False, {"SHELL": "/bin/zsh", "TERM": "x"})
    assert argv == ["/bin/zsh", "-c", "nvim --embed 'a b'"]


def test_platform_exists(tmp_path):
    present = tmp_path / "present"
    present.write_text("")
    assert platform_exists(str(present), "linux", False, {}) is True
    assert platform_exists(str(tmp_path / "missing"), "linux", False, {}) is False


def test_platform_which_searches_path(tmp_path):
    path = _executable(tmp_path)
    assert platform_which("nvim", "linux", False, {"PATH": str(tmp_path)}) == str(path)


def test_platform_which_missing(tmp_path):
    assert platform_which("nvim", "linux", False, {"PATH": str(tmp_path)}) is None


def test_build_uses_configured_binary(tmp_path):
    binary = _executable(tmp_path, "custom")
    settings = CmdLineSettings(neovim_bin=str(binary), neovim_args=["--clean"])
    argv = build_nvim_command(settings, "linux", {"PATH": str(tmp_path)})
    assert argv == [str(binary), "--embed", "--clean"]


def test_build_falls_back_to_path(tmp_path):
    nvim = _executable(tmp_path)
    settings = CmdLineSettings(neovim_bin=str(tmp_path / "missing"), neovim_args=["-p", "x"])
    argv = build_nvim_command(settings, "linux", {"PATH": str(tmp_path)})
    assert argv == [str(nvim), "--embed", "-p", "x"]


def test_build_without_nvim_raises(tmp_path):
    with pytest.raises(NvimNotFoundError):
        build_nvim_command(CmdLineSettings(), "linux", {"PATH": str(tmp_path)})