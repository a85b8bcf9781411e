"""Resource kinds, commands, and the command authorization table.

The table says which commands are legal for which kind and what sort of
target each command needs. It is built once at startup and never mutated.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import NotAuthorized


class ResourceKind(enum.Enum):
    IMAGE = "image"
    CONTAINER = "container"
    VOLUME = "volume"

    @property
    def token(self) -> str:
        return self.value


class ResourceCommand(enum.Enum):
    LIST = "ls"
    REMOVE = "rm"
    TAG = "tag"
    STOP = "stop"

    @property
    def token(self) -> str:
        return self.value


class TargetType(enum.Enum):
    FREE_TEXT = "free_text"
    SELECT_FROM_LIST = "select_from_list"
    NONE = "none"


@dataclass(frozen=True)
class Prompt:
    """A validated (kind, command, target) triple ready for execution."""

    kind: ResourceKind
    command: ResourceCommand
    target: str = ""

    def arguments(self) -> list[str]:
        """Positional arguments for the external tool.

        The target string is split on whitespace, so an empty target adds no
        argument and several selected identifiers become several arguments.
        """
        return [self.kind.token, self.command.token, *self.target.split()]


@dataclass(frozen=True)
class AuthorizationTable:
    """Allowed commands per kind, target types per command, legends per kind."""

    allowed: Mapping[ResourceKind, tuple[ResourceCommand, ...]]
    target_types: Mapping[ResourceCommand, TargetType]
    legends: Mapping[ResourceKind, str]

    def __post_init__(self) -> None:
        for kind, commands in self.allowed.items():
            missing = [command.token for command in commands if command not in self.target_types]
            if missing:
                raise ValueError(f"no target type for {', '.join(missing)} (allowed for {kind.token})")
            if kind not in self.legends:
                raise ValueError(f"no legend for {kind.token}")

    def is_allowed(self, kind: ResourceKind, command: ResourceCommand) -> bool:
        return command in self.allowed.get(kind, ())

    def target_type(self, command: ResourceCommand) -> TargetType:
        return self.target_types[command]

    def legend(self, kind: ResourceKind) -> str:
        return self.legends[kind]

    def authorize(self, kind: ResourceKind, command: ResourceCommand) -> TargetType:
        """Return the target type for a legal pair, raise ``NotAuthorized`` otherwise."""
        if not self.is_allowed(kind, command):
            raise NotAuthorized(kind.token, command.token)
        return self.target_type(command)


def default_authorization_table() -> AuthorizationTable:
    return AuthorizationTable(
        allowed=MappingProxyType(
            {
                ResourceKind.IMAGE: (ResourceCommand.LIST, ResourceCommand.REMOVE, ResourceCommand.TAG),
                ResourceKind.CONTAINER: (ResourceCommand.LIST, ResourceCommand.REMOVE, ResourceCommand.STOP),
                ResourceKind.VOLUME: (ResourceCommand.LIST, ResourceCommand.REMOVE),
            }
        ),
        target_types=MappingProxyType(
            {
                ResourceCommand.REMOVE: TargetType.SELECT_FROM_LIST,
                ResourceCommand.STOP: TargetType.SELECT_FROM_LIST,
                ResourceCommand.LIST: TargetType.NONE,
                ResourceCommand.TAG: TargetType.FREE_TEXT,
            }
        ),
        legends=MappingProxyType(
            {
                ResourceKind.IMAGE: "Available commands for image:\n l = ls, r = rm, t = tag",
                ResourceKind.CONTAINER: "Available commands for container:\n l = ls, r = rm, s = stop",
                ResourceKind.VOLUME: "Available commands for volume:\n l = ls, r = rm",
            }
        ),
    )
