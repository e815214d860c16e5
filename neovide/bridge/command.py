"""Locating Neovim and building the command line that starts it embedded."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..cmd_line import CmdLineSettings

_log = logging.getLogger(__name__)

_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


class NvimNotFoundError(RuntimeError):
    """Raised when no Neovim binary can be found."""


def _is_windows(platform: str) -> bool:
    return platform.startswith("win")


def _is_macos(platform: str) -> bool:
    return platform in ("darwin", "macos")


def _defaults(
    platform: str | None, environ: Mapping[str, str] | None
) -> tuple[str, Mapping[str, str]]:
    return (
        sys.platform if platform is None else platform,
        os.environ if environ is None else environ,
    )


def _run(argv: list[str], environ: Mapping[str, str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        argv,
        capture_output=True,
        env=dict(environ),
        creationflags=_NO_WINDOW,
        check=False,
    )


def create_platform_shell_command(
    command: str,
    args: Sequence[str],
    platform: str | None = None,
    wsl: bool = False,
    environ: Mapping[str, str] | None = None,
) -> list[str] | None:
    """The argv running ``command`` through a login shell, where the platform needs one.

    That is WSL on Windows when ``wsl`` is set, and the user's shell on macOS;
    elsewhere None.
    """
    platform, environ = _defaults(platform, environ)
    line = f"{command} {' '.join(args)}"
    if _is_windows(platform) and wsl:
        return ["wsl", "--cd", "~", "$SHELL", "-lc", line]
    if _is_macos(platform):
        argv = [environ.get("SHELL", "/bin/sh")]
        if "TERM" not in environ:
            argv.append("-l")
        argv += ["-c", line]
        return argv
    return None


def platform_exists(
    bin: str,
    platform: str | None = None,
    wsl: bool = False,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """Whether ``bin`` exists, checked inside WSL where that is in use."""
    platform, environ = _defaults(platform, environ)
    if _is_windows(platform):
        argv = create_platform_shell_command("exists", ["-x", bin], platform, wsl, environ)
        if argv is not None:
            try:
                result = _run(argv, environ)
            except OSError as error:
                raise RuntimeError("Exists failed") from error
            return result.returncode == 0
    return Path(bin).exists()


def platform_which(
    bin: str,
    platform: str | None = None,
    wsl: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """The full path of ``bin``, or None when it cannot be found."""
    platform, environ = _defaults(platform, environ)
    argv = create_platform_shell_command("which", [bin], platform, wsl, environ)
    if argv is not None:
        _log.debug("Running which command: %r", argv)
        try:
            result = _run(argv, environ)
        except OSError:
            result = None
        if result is not None:
            if result.returncode == 0:
                return result.stdout.decode("utf-8").strip()
            return None
    return shutil.which(bin, path=environ.get("PATH"))


def nvim_command(
    bin: str,
    args: Sequence[str],
    platform: str | None = None,
    wsl: bool = False,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """The argv that runs ``bin`` with ``args`` on this platform."""
    platform, environ = _defaults(platform, environ)
    if _is_macos(platform):
        argv = [environ.get("SHELL", "/bin/sh")]
        if "TERM" not in environ:
            argv.append("-l")
        quoted = " ".join(shlex.quote(arg) for arg in args)
        argv += ["-c", f"{bin} {quoted}"]
        return argv
    if _is_windows(platform) and wsl:
        return ["wsl", "$SHELL", "-lc", f"{bin} {' '.join(args)}"]
    return [bin, *args]


def build_nvim_command(
    settings: CmdLineSettings,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """The argv that starts Neovim embedded with the configured arguments.

    Uses ``settings.neovim_bin`` when it exists, otherwise ``nvim`` from
    the search path; raises ``NvimNotFoundError`` if neither is found.
    """
    platform, environ = _defaults(platform, environ)
    args = ["--embed", *settings.neovim_args]
    if settings.neovim_bin is not None:
        if platform_exists(settings.neovim_bin, platform, settings.wsl, environ):
            command = nvim_command(settings.neovim_bin, args, platform, settings.wsl, environ)
            _log.debug("Starting neovim with: %r", command)
            return command
        _log.warning("NEOVIM_BIN is invalid falling back to first bin in PATH")
    path = platform_which("nvim", platform, settings.wsl, environ)
    if path is None:
        raise NvimNotFoundError("nvim not found!")
    command = nvim_command(path, args, platform, settings.wsl, environ)
    _log.debug("Starting neovim with: %r", command)
    return command