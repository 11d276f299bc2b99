"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from frankenai.config.models import FrankenAIConfig


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command.
        """

    @abstractmethod
    def execute(self, args: Namespace, config: "FrankenAIConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Optional FrankenAI configuration.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from frankenai.cli.commands.detect import DetectCommand
from frankenai.cli.commands.init import InitCommand
from frankenai.cli.commands.modules import ModulesCommand
from frankenai.cli.commands.update import UpdateCommand

__all__ = [
    "Command",
    "DetectCommand",
    "InitCommand",
    "ModulesCommand",
    "UpdateCommand",
]
