"""Command-line and environment settings."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import TypeVar

from .dimensions import Dimensions
from .frame import Frame

T = TypeVar("T")

_FALSE_LITERALS = frozenset({"", "n", "no", "f", "false", "off", "0"})


class CommandLineError(ValueError):
    """Raised when the command line or an environment setting is invalid."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise CommandLineError(message)


@dataclass
class CmdLineSettings:
    """Settings taken from the command line and the environment."""

    files_to_open: list[str] = field(default_factory=list)
    neovim_args: list[str] = field(default_factory=list)
    geometry: Dimensions | None = None
    size: Dimensions | None = None
    log_to_file: bool = False
    server: str | None = None
    wsl: bool = False
    frame: Frame = Frame.FULL
    maximized: bool = False
    multi_grid: bool = False
    no_fork: bool = False
    idle: bool = True
    no_tabs: bool = False
    srgb: bool = False
    nosrgb: bool = False
    vsync: bool = True
    novsync: bool = False
    neovim_bin: str | None = None
    wayland_app_id: str = "neovide"
    x11_wm_class: str = "neovide"
    x11_wm_class_instance: str = "neovide"


def _falsey(value: str) -> bool:
    return value.lower() not in _FALSE_LITERALS


def _strict_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise CommandLineError(f"invalid boolean value {value!r}, expected 'true' or 'false'")


def _dimensions(text: str) -> Dimensions:
    try:
        return Dimensions.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _frame_parser(platform: str) -> Callable[[str], Frame]:
    allowed = Frame.variants(platform)

    def parse(value: str) -> Frame:
        try:
            frame = Frame.parse(value)
        except ValueError:
            frame = None
        if frame not in allowed:
            choices = ", ".join(str(f) for f in allowed)
            raise argparse.ArgumentTypeError(
                f"invalid value {value!r} (possible values: {choices})"
            )
        return frame

    return parse


def _srgb_default(platform: str) -> bool:
    return platform.startswith("win")


def build_parser(platform: str | None = None) -> argparse.ArgumentParser:
    """Build the argument parser for options given before ``--``."""
    platform = sys.platform if platform is None else platform
    parser = _Parser(
        prog="neovide",
        description="A simple graphical user interface for Neovim.",
        epilog="Arguments after -- are passed to Neovim without interpretation.",
        allow_abbrev=False,
    )
    add = parser.add_argument
    add("files_to_open", nargs="*", metavar="FILES_TO_OPEN",
        help="files to open (plainly appended to Neovim args)")
    add("--geometry", type=_dimensions, help="the geometry of the window")
    add("--size", type=_dimensions, help="the size of the window in pixels")
    add("--log", dest="log_to_file", action="store_true",
        help="enable logging to a file in the current directory")
    add("--server", "--remote-tcp", metavar="ADDRESS",
        help="connect to the named pipe or socket at ADDRESS")
    add("--wsl", action="store_const", const=True,
        help="run Neovim in WSL rather than on the host [env: NEOVIDE_WSL]")
    add("--frame", type=_frame_parser(platform),
        help="which window decorations to use [env: NEOVIDE_FRAME] [default: full]")
    add("--maximized", action="store_const", const=True,
        help="maximize the window on startup [env: NEOVIDE_MAXIMIZED]")
    add("--multigrid", dest="multi_grid", action="store_const", const=True,
        help="enable the multigrid extension [env: NEOVIDE_MULTIGRID]")
    add("--nofork", dest="no_fork", action="store_true",
        help="stay attached to the launching shell instead of forking")
    add("--noidle", dest="idle", action="store_const", const=False,
        help="render every frame [env: NEOVIDE_IDLE]")
    add("--notabs", dest="no_tabs", action="store_true",
        help="do not open multiple files in tabs (they are still buffers)")
    add("--srgb", action="store_const", const=True,
        help="request sRGB when initializing the window [env: NEOVIDE_SRGB]")
    add("--nosrgb", action="store_true",
        help="do not request sRGB when initializing the window")
    add("--vsync", action="store_const", const=True,
        help="request VSync on the window [env: NEOVIDE_VSYNC] [default]")
    add("--novsync", action="store_true", help="do not request VSync on the window")
    add("--neovim-bin", dest="neovim_bin",
        help="Neovim binary to run instead of nvim on PATH [env: NEOVIM_BIN]")
    add("--wayland_app_id", dest="wayland_app_id",
        help="app ID shown to the compositor [env: NEOVIDE_APP_ID] [default: neovide]")
    add("--x11-wm-class", dest="x11_wm_class",
        help="class part of WM_CLASS [env: NEOVIDE_WM_CLASS] [default: neovide]")
    add("--x11-wm-class-instance", dest="x11_wm_class_instance",
        help="instance part of WM_CLASS [env: NEOVIDE_WM_CLASS_INSTANCE] [default: neovide]")
    return parser


def _resolve(
    given: T | None,
    environ: Mapping[str, str],
    name: str,
    convert: Callable[[str], T],
    default: T,
) -> T:
    if given is not None:
        return given
    if name in environ:
        return convert(environ[name])
    return default


def _env_converter(convert: Callable[[str], T], name: str) -> Callable[[str], T]:
    def wrapped(value: str) -> T:
        try:
            return convert(value)
        except (ValueError, argparse.ArgumentTypeError) as exc:
            raise CommandLineError(f"invalid value in {name}: {exc}") from None

    return wrapped


def parse_command_line(
    args: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> CmdLineSettings:
    """Parse ``args`` (program name first) without post-processing."""
    args = list(sys.argv if args is None else args)
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    rest = args[1:]
    if "--" in rest:
        split = rest.index("--")
        rest, passthrough = rest[:split], rest[split + 1:]
    else:
        passthrough = []

    ns = build_parser(platform).parse_intermixed_args(rest)

    def env_str(value: str) -> str:
        return value

    return CmdLineSettings(
        files_to_open=list(ns.files_to_open or []),
        neovim_args=passthrough,
        geometry=ns.geometry,
        size=ns.size,
        log_to_file=ns.log_to_file,
        server=ns.server,
        wsl=_resolve(ns.wsl, environ, "NEOVIDE_WSL",
                     _env_converter(_strict_bool, "NEOVIDE_WSL"), False),
        frame=_resolve(ns.frame, environ, "NEOVIDE_FRAME",
                       _env_converter(_frame_parser(platform), "NEOVIDE_FRAME"), Frame.FULL),
        maximized=_resolve(ns.maximized, environ, "NEOVIDE_MAXIMIZED", _falsey, False),
        multi_grid=_resolve(ns.multi_grid, environ, "NEOVIDE_MULTIGRID", _falsey, False),
        no_fork=ns.no_fork,
        idle=_resolve(ns.idle, environ, "NEOVIDE_IDLE", _falsey, True),
        no_tabs=ns.no_tabs,
        srgb=_resolve(ns.srgb, environ, "NEOVIDE_SRGB", _falsey, _srgb_default(platform)),
        nosrgb=ns.nosrgb,
        vsync=_resolve(ns.vsync, environ, "NEOVIDE_VSYNC", _falsey, True),
        novsync=ns.novsync,
        neovim_bin=_resolve(ns.neovim_bin, environ, "NEOVIM_BIN", env_str, None),
        wayland_app_id=_resolve(ns.wayland_app_id, environ, "NEOVIDE_APP_ID",
                                env_str, "neovide"),
        x11_wm_class=_resolve(ns.x11_wm_class, environ, "NEOVIDE_WM_CLASS",
                              env_str, "neovide"),
        x11_wm_class_instance=_resolve(ns.x11_wm_class_instance, environ,
                                       "NEOVIDE_WM_CLASS_INSTANCE", env_str, "neovide"),
    )


def handle_command_line_arguments(
    args: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> CmdLineSettings:
    """Parse the command line and build the final Neovim arguments."""
    settings = parse_command_line(args, environ, platform)
    tab_flag = [] if settings.no_tabs else ["-p"]
    return replace(
        settings,
        files_to_open=[],
        neovim_args=tab_flag + settings.files_to_open + settings.neovim_args,
        vsync=settings.vsync and not settings.novsync,
        srgb=settings.srgb and not settings.nosrgb,
    )