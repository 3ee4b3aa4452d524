# =============================================================================
# tools/registry.py  —  The Tool Table
# =============================================================================
#
# The set of tools is a static mapping: name → (description, handler).
# It is built ONCE at startup as an immutable ToolTable and handed to
# create_server(), which registers every row on a fresh FastMCP instance.
# Nothing registers itself on a shared server object at import time.
# =============================================================================

from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator

ToolHandler = Callable[..., Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    """One MCP tool: its public name, what the LLM reads, and the coroutine."""

    name: str
    description: str
    handler: ToolHandler


class ToolTable:
    """Ordered, read-only collection of ToolSpecs keyed by name."""

    def __init__(self, specs: tuple[ToolSpec, ...]) -> None:
        names = [spec.name for spec in specs]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate tool names: {', '.join(duplicates)}")
        self._specs = tuple(specs)
        self._by_name = {spec.name: spec for spec in self._specs}

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __getitem__(self, name: str) -> ToolSpec:
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise KeyError(f"Tool '{name}' is not registered") from exc

    def names(self) -> list[str]:
        return [spec.name for spec in self._specs]
