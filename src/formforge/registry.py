"""Extension registry for formforge.

Provides registration and lookup for caller-supplied producers of:
- Field types (FormField subclasses)
- Validation kinds
- Normalization kinds

Each catalog owns its own ExtensionRegistry, so the same kind name may be
registered independently for fields, validations and normalizations.

Example:
    catalog = ValidationCatalog()

    @catalog.extensions.extension("even")
    class EvenValidation:
        def __init__(self, argument):
            self.argument = argument
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

# A producer is any callable building an instance, usually a class.
Producer = Callable[..., Any]


class ExtensionRegistry:
    """Open map from a symbolic kind to a producer.

    Registrations are visible to every lookup made through the owning catalog
    as soon as they are made. Callers that register for a bounded period
    (a test, a plugin's active window) must unregister when done.
    """

    def __init__(self, name: str = "extensions"):
        self.name = name
        self._producers: dict[str, Producer] = {}

    def register(self, kind: str, producer: Producer) -> None:
        """Register a producer for a kind.

        Re-registering a kind replaces the previous producer (last writer wins).

        Args:
            kind: Symbolic name used in form specs (e.g., "phone", "titlecase")
            producer: Callable taking the directive argument and returning an instance
        """
        if kind in self._producers and self._producers[kind] is not producer:
            logger.warning("Overwriting %s registration for '%s'", self.name, kind)
        self._producers[kind] = producer
        logger.debug("Registered %s kind '%s'", self.name, kind)

    def unregister(self, kind: str) -> None:
        """Remove a kind. Removing an absent kind is a no-op."""
        if self._producers.pop(kind, None) is not None:
            logger.debug("Unregistered %s kind '%s'", self.name, kind)

    def register_class(self, cls: type) -> type:
        """Register a class under its ``extension_type`` attribute.

        Raises:
            ValueError: If the class does not declare ``extension_type``
        """
        self.register(_extension_type(cls), cls)
        return cls

    def unregister_class(self, cls: type) -> None:
        """Remove the registration keyed by the class's ``extension_type``."""
        self.unregister(_extension_type(cls))

    def extension(self, kind: str) -> Callable[[type], type]:
        """Decorator to register a class under ``kind``.

        Usage:
            @registry.extension("titlecase")
            class TitleCase:
                ...
        """

        def decorator(cls: type) -> type:
            self.register(kind, cls)
            return cls

        return decorator

    def supports(self, kind: str) -> bool:
        """Check if a kind is registered."""
        return kind in self._producers

    def get(self, kind: str) -> Producer | None:
        """Get the producer for a kind, or None."""
        return self._producers.get(kind)

    def all(self) -> Mapping[str, Producer]:
        """Read-only view of every registration."""
        return MappingProxyType(self._producers)

    def list_registered(self) -> list[str]:
        """List all registered kinds."""
        return sorted(self._producers.keys())

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._producers.clear()

    def __contains__(self, kind: object) -> bool:
        return kind in self._producers

    def __len__(self) -> int:
        return len(self._producers)

    def __repr__(self) -> str:
        return f"ExtensionRegistry({self.name!r}, kinds={self.list_registered()!r})"


def _extension_type(cls: type) -> str:
    kind = getattr(cls, "extension_type", None)
    if not kind:
        raise ValueError(
            f"{cls.__name__} has no 'extension_type'. "
            "Declare it as a class attribute or use register(kind, cls)."
        )
    return kind
