"""
Capsule template registry.

Holds capsule definitions keyed by id and answers support/lookup queries.
Template lookup is an explicit two-level mapping:
capsule id -> definition, then platform -> template.

The registry is read-only while compilations run, so any number of
platform compilers can share one instance without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from .errors import RegistryError
from .ir import CapsuleDefinition, PlatformTemplate

logger = logging.getLogger(__name__)


class CapsuleTemplateRegistry:
    """
    Registry of capsule definitions.

    Supports:
    - Registration of definitions (last registration wins)
    - Lookup by id
    - Per-platform support queries
    """

    def __init__(self, definitions: Iterable[CapsuleDefinition | Mapping[str, Any]] = ()) -> None:
        self._definitions: dict[str, CapsuleDefinition] = {}
        self.register(definitions)

    def register(self, definitions: Iterable[CapsuleDefinition | Mapping[str, Any]]) -> None:
        """
        Register capsule definitions.

        Raw mappings are validated into CapsuleDefinition. A definition whose
        id is already registered replaces the earlier one.

        Args:
            definitions: Definitions or raw definition dicts

        Raises:
            RegistryError: If a raw mapping is not a valid definition
        """
        for definition in definitions:
            if not isinstance(definition, CapsuleDefinition):
                try:
                    definition = CapsuleDefinition.model_validate(definition)
                except ValidationError as e:
                    raise RegistryError(f"Invalid capsule definition: {e}") from e

            if definition.id in self._definitions:
                logger.debug("Replacing capsule definition '%s'", definition.id)
            self._definitions[definition.id] = definition

    def lookup(self, capsule_id: str) -> CapsuleDefinition | None:
        """Get a definition by id, or None."""
        return self._definitions.get(capsule_id)

    def template(self, capsule_id: str, platform: str) -> PlatformTemplate | None:
        """Get the template a capsule declares for a platform, or None."""
        definition = self.lookup(capsule_id)
        if definition is None:
            return None
        return definition.platforms.get(platform)

    def supports(self, capsule_id: str, platform: str) -> bool:
        """True iff the capsule is registered and declares a template for the platform."""
        return self.template(capsule_id, platform) is not None

    def platforms_for(self, capsule_id: str) -> list[str]:
        """Platforms a capsule declares templates for."""
        definition = self.lookup(capsule_id)
        if definition is None:
            return []
        return list(definition.platforms)

    def ids(self) -> list[str]:
        """All registered capsule ids, in registration order."""
        return list(self._definitions)

    def __contains__(self, capsule_id: object) -> bool:
        return capsule_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[CapsuleDefinition]:
        return iter(self._definitions.values())


def default_registry() -> CapsuleTemplateRegistry:
    """
    Build a registry pre-loaded with the built-in capsules.

    Returns:
        New CapsuleTemplateRegistry instance
    """
    from ..capsules import get_builtin_capsules

    return CapsuleTemplateRegistry(get_builtin_capsules())
