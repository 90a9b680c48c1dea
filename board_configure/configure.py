#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import sys
import argparse
import logging
import subprocess # nosec

from .lib import external_tools
from .lib.error import ConfigureError, ConfigurationUnchanged, MissingBoardSelection
from .board_resolver import BoardResolvingStage, list_configs, find_boards
from .source_locator import SourceLocatingStage
from .materializer import MaterializingStage
from .appsdir import AppsDirResolvingStage, ConfigPatchingStage
from .pipeline import PipelineObject, PipelineEngine
from .settings import Settings

DESCRIPTION = "Select a board configuration and install it into the top-level build directory."

EPILOG = """\
<board-selection> is either:
  For in-tree boards: a <board-name>:<config-name> pair where <board-name> is
  the name of the board in the boards directory and <config-name> is the name
  of the board configuration sub-directory (e.g. boardname:nsh), or: For
  out-of-tree custom boards: a path to the board's configuration directory,
  either relative to TOPDIR (e.g. ../mycustomboards/myboardname/config/nsh)
  or an absolute path.

Default host: use the host setup in the defconfig file.

Environment:
  TOPDIR               the top-level build directory (default: current directory)
  KCONFIG_CONFIG       name of the installed configuration (default: .config)
  MAKE                 make command used for distclean (default: make, gmake with -B)
  CONFIGURE_TOOLS_DIR  location of process_config.sh and sethost.sh (default: TOPDIR/tools)
"""

HOSTS = [
    ("-l", "selects the Linux (l) host environment"),
    ("-m", "selects the macOS (m) host environment"),
    ("-c", "selects the Windows host and Cygwin (c) environment"),
    ("-g", "selects the Windows host and MinGW/MSYS environment"),
    ("-n", "selects the Windows host and Windows native (n) environment"),
    ("-B", "selects the *BSD (B) host environment"),
]

class HostAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.host = (namespace.host or []) + [option_string]
        namespace.winnative = "y" if option_string == "-n" else "n"
        namespace.bsd_host = namespace.bsd_host or option_string == "-B"

def log_level_type(parser):
    def aux(arg):
        arg = arg.lower()
        if arg in ["critical", "error", "warning", "info", "debug"]:
            return arg
        else:
            parser.error(f"{arg} is not a valid log level")
    return aux

def build_parser():
    parser = argparse.ArgumentParser(prog="configure", description=DESCRIPTION, epilog=EPILOG,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-E", dest="enforce_distclean", action="store_true", default=False,
                        help="enforces distclean if already configured")
    parser.add_argument("-e", dest="distclean", action="store_true", default=False,
                        help="performs distclean if configuration changed")
    parser.add_argument("-S", dest="store_tmpdir", action="store_true", default=False,
                        help="adds the nxtmpdir folder for third-party packages")
    for option, help_text in HOSTS:
        parser.add_argument(option, dest="host", action=HostAction, help=help_text)
    parser.add_argument("-L", dest="list_boards", nargs="?", const="", default=None, metavar="boardname",
                        help="lists available configurations for given boards, or all boards if no board is given. "
                             "board name can be partial here")
    parser.add_argument("-a", dest="appdir", metavar="app-dir",
                        help="is the path to the apps/ directory, relative to the top-level directory")
    parser.add_argument("--loglevel", default="info", type=log_level_type(parser),
                        help="choose log level, e.g. debug, info, warning, error or critical")
    parser.add_argument("board_selection", nargs="?", metavar="board-selection",
                        help="<board-name>:<config-name> or the path to a configuration directory")
    parser.add_argument("make_opts", nargs=argparse.REMAINDER, metavar="make-opts",
                        help="directly passed to make")
    parser.set_defaults(host=[], winnative=None, bsd_host=False)
    return parser

def dump_configs(topdir, partial_name):
    if partial_name and not find_boards(topdir, partial_name):
        print(f"board {partial_name} not found")
        return
    for config in list_configs(topdir, partial_name):
        print(config)

def configure(settings, args):
    pipeline = PipelineEngine(["settings", "args", "board_selection"])
    pipeline.add_stages([
        BoardResolvingStage(),
        SourceLocatingStage(),
        MaterializingStage(),
        AppsDirResolvingStage(),
        ConfigPatchingStage(),
    ])

    obj = PipelineObject(settings=settings, args=args, board_selection=args.board_selection)
    pipeline.run(obj)
    return obj

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.loglevel.upper())

    settings = Settings.from_environ()

    if args.list_boards is not None:
        dump_configs(settings.topdir, args.list_boards)
        return 0

    try:
        if not args.board_selection:
            raise MissingBoardSelection("Missing <board/config> argument")
        configure(settings, args)
    except ConfigurationUnchanged as e:
        logging.info(e)
        return 0
    except ConfigureError as e:
        logging.error(e)
        if e.show_usage:
            parser.print_help(sys.stderr)
        return e.exit_code
    except external_tools.ExecutableNotFound as e:
        logging.critical(e)
        return 1
    except subprocess.CalledProcessError as e:
        logging.critical(e)
        return e.returncode

    return 0

if __name__ == "__main__":
    sys.exit(main())
