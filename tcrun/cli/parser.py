"""
tcrun command-line interface.

Finds a tool in an installed toolchain and either prints its path or runs
it with SDKROOT pointing at the selected SDK:

    tcrun swiftc --version
    tcrun --find swiftc
    tcrun --sdk Android.sdk --toolchain 6.0.1-RELEASE swift build
    tcrun --show-sdk-path
    tcrun --toolchains

Single-dash spellings of the long options (``-sdk``, ``-find``, ...) are
accepted as well.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from tcrun.core.config import TcrunConfig, find_config_file, load_config
from tcrun.core.environment import default_sdk_name, default_toolchain_id
from tcrun.store import ConfigurationStore, create_store
from tcrun.toolchain.dispatcher import Dispatcher
from tcrun.toolchain.installation import enumerate_installations
from tcrun.toolchain.resolver import Resolver

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("tcrun")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

MODE_FIND = "find"
MODE_RUN = "run"

EXIT_NOT_FOUND = 1


class CLI:
    """tcrun command-line interface."""

    def __init__(
        self,
        store: Optional[ConfigurationStore] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize CLI with argument parser.

        Args:
            store: Configuration store to read installations from
                (defaults to the one selected by the configuration file)
            environ: Environment for selectors and the launched tool
                (defaults to os.environ)
        """
        self.store = store
        self.environ = environ
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="tcrun",
            description="Swift Toolchain Execution Helper",
            epilog="Arguments after TOOL are passed to the tool unchanged",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "-version",
            "--version",
            action="version",
            version=f"tcrun {__version__}",
            help="Print the version of the tool",
        )
        parser.add_argument(
            "-show-sdk-path",
            "--show-sdk-path",
            dest="show_sdk_path",
            action="store_true",
            help="Print the path to the SDK",
        )
        parser.add_argument(
            "-show-sdk-platform-path",
            "--show-sdk-platform-path",
            dest="show_sdk_platform_path",
            action="store_true",
            help="Print the path to the SDK platform",
        )
        parser.add_argument(
            "-toolchains",
            "--toolchains",
            dest="list_toolchains",
            action="store_true",
            help="List the available toolchains",
        )
        parser.add_argument(
            "-sdk",
            "--sdk",
            metavar="NAME",
            help="Use the specified SDK (default: last component of SDKROOT)",
        )
        parser.add_argument(
            "-toolchain",
            "--toolchain",
            metavar="ID",
            help="Use the specified toolchain (default: TOOLCHAINS)",
        )

        mode = parser.add_mutually_exclusive_group()
        mode.add_argument(
            "-f",
            "-find",
            "--find",
            dest="mode",
            action="store_const",
            const=MODE_FIND,
            help="Find the tool in the toolchain and print the path",
        )
        mode.add_argument(
            "-r",
            "-run",
            "--run",
            dest="mode",
            action="store_const",
            const=MODE_RUN,
            help="Find the tool in the toolchain and execute the tool (default)",
        )
        parser.set_defaults(mode=MODE_RUN)

        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: $TCRUN_CONFIG or ~/.tcrun.yaml)",
        )

        parser.add_argument("tool", nargs="?", metavar="TOOL", help="Tool to find or run")
        parser.add_argument(
            "arguments",
            nargs=argparse.REMAINDER,
            metavar="ARGS",
            help="Arguments for the tool",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)

        informational = (
            parsed_args.show_sdk_path
            or parsed_args.show_sdk_platform_path
            or parsed_args.list_toolchains
        )
        if not informational and not parsed_args.tool:
            self.parser.error("Missing expected argument '<tool>'")

        return parsed_args

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code: 0 for informational output and ``--find``, the tool's
            exit code in run mode, non-zero on errors
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            return self._execute(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _load_store(self, config: TcrunConfig) -> ConfigurationStore:
        if self.store is not None:
            return self.store
        return create_store(config)

    def _execute(self, args) -> int:
        """
        Resolve the selectors and perform the requested action.

        Args:
            args: Parsed arguments

        Returns:
            Exit code
        """
        config = load_config(find_config_file(args.config, self.environ))
        installations = enumerate_installations(
            self._load_store(config), config.product_prefix
        )

        if args.list_toolchains:
            for installation in installations:
                print(installation.describe())
            return 0

        sdk_name = args.sdk or default_sdk_name(self.environ, config.default_sdk)
        toolchain_id = args.toolchain or default_toolchain_id(self.environ)

        resolution = Resolver(installations).resolve(toolchain_id, sdk_name)
        if resolution is None:
            selectors = f"SDK {sdk_name}"
            if toolchain_id:
                selectors = f"toolchain {toolchain_id} and {selectors}"
            logger.warning(f"No installation provides {selectors}")
            return EXIT_NOT_FOUND

        if args.show_sdk_platform_path:
            print(resolution.platform.location)
            return 0

        if args.show_sdk_path:
            print(resolution.sdk.location)
            return 0

        tool = resolution.find_tool(args.tool, config.executable_extensions)
        if tool is None:
            logger.warning(f"Tool not found: {args.tool}")
            return EXIT_NOT_FOUND

        if args.mode == MODE_FIND:
            print(tool)
            return 0

        result = Dispatcher(self.environ).run(tool, args.arguments, resolution.sdk)
        return result.exit_code


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
