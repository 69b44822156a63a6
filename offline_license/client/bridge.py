"""Command bridge exposing license checks to a desktop UI layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from .checker import LicenseChecker

CommandCallable = Callable[..., Any]


class UnknownCommandError(KeyError):
    """Raised when the UI invokes a command that was never registered."""


@dataclass
class CommandBridge:
    """Routes named UI commands to Python callables."""

    routes: Dict[str, CommandCallable] = field(default_factory=dict)

    def register(self, name: str, fn: CommandCallable) -> None:
        self.routes[name] = fn

    def commands(self) -> List[str]:
        return sorted(self.routes)

    def invoke(self, name: str, **kwargs: Any) -> Any:
        fn = self.routes.get(name)
        if fn is None:
            raise UnknownCommandError(name)
        return fn(**kwargs)


def build_bridge(checker: LicenseChecker) -> CommandBridge:
    """Bridge with the production command set."""
    bridge = CommandBridge()

    def verify_license(*, token: str) -> Dict[str, Any]:
        return checker.check(token).to_dict()

    bridge.register("verify_license", verify_license)
    return bridge
