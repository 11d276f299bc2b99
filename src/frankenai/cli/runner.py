"""CLI runner orchestration.

This module handles command dispatch and execution for the franken-ai CLI.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from frankenai.cli.arguments import build_parser
from frankenai.cli.commands import Command
from frankenai.cli.commands.detect import DetectCommand
from frankenai.cli.commands.init import InitCommand
from frankenai.cli.commands.modules import ModulesCommand
from frankenai.cli.commands.update import UpdateCommand, normalize_update_args
from frankenai.cli.exit_codes import (
    EXIT_ABORTED,
    EXIT_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from frankenai.config import load_config
from frankenai.config.loader import ConfigError
from frankenai.core.logging import configure_logging, get_logger
from frankenai.guidelines.store import GuidelineNotFoundError

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get franken-ai version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("franken-ai")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from frankenai import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        """Initialize CLIRunner with parser and commands."""
        self.parser = build_parser()
        self._version = get_version()
        self.detect_cmd = DetectCommand(version=self._version)
        self.init_cmd = InitCommand()
        self.update_cmd = UpdateCommand()
        self.modules_cmd = ModulesCommand()

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle --help specially to return 0
        if argv is not None:
            argv_list = list(argv)
            if "--help" in argv_list or "-h" in argv_list:
                self.parser.print_help()
                return EXIT_SUCCESS
        else:
            argv_list = None

        args = self.parser.parse_args(argv_list)

        # Configure logging as early as possible
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = getattr(args, "command", None)

        if command == "detect":
            return self._handle_detect(args)
        elif command == "init":
            return self._handle_init(args)
        elif command == "update":
            return self._handle_update(args)
        elif command == "modules":
            return self._handle_modules(args)
        else:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS

    def _handle_detect(self, args: Namespace) -> int:
        """Handle the detect command."""
        return self._run_command(self.detect_cmd, args, Path(args.path))

    def _handle_init(self, args: Namespace) -> int:
        """Handle the init command."""
        return self._run_command(self.init_cmd, args, Path(args.path))

    def _handle_update(self, args: Namespace) -> int:
        """Handle the update command."""
        normalize_update_args(args)
        return self._run_command(self.update_cmd, args, Path(args.path))

    def _handle_modules(self, args: Namespace) -> int:
        """Handle the modules command."""
        return self._run_command(self.modules_cmd, args, Path.cwd())

    def _run_command(self, command: Command, args: Namespace, project_root: Path) -> int:
        """Load configuration for ``project_root`` and execute ``command``.

        Args:
            command: Command to execute.
            args: Parsed command-line arguments.
            project_root: Directory whose project config applies.

        Returns:
            Exit code.
        """
        try:
            config = load_config(
                project_root=project_root.resolve(),
                cli_config_path=getattr(args, "config", None),
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        try:
            return command.execute(args, config)
        except GuidelineNotFoundError as e:
            LOGGER.error(f"Missing guideline: {e.key}")
            return EXIT_FAILURE
        except KeyboardInterrupt:
            print("\nAborted.")
            return EXIT_ABORTED
