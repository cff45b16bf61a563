"""
Registry of shortcode definitions

Maps shortcode names to ShortcodeDefinition objects. The insertion pass
consults it to decide which located shortcodes to render during which
pass. Once populated it is only read, so one registry can be shared by
renders running in parallel.
"""

from typing import Callable, Dict, List, Optional

from ..models.definitions import FileKind, ShortcodeDefinition


class ShortcodeRegistry:
    """
    Registry of shortcode definitions

    Example:
        >>> registry = ShortcodeRegistry()
        >>> definition = registry.shortcode_add("hr", FileKind.HTML, lambda sc: "<hr>")
        >>> registry.get("hr").file_kind
        <FileKind.HTML: 'html'>
    """

    def __init__(self, definitions: Optional[List[ShortcodeDefinition]] = None) -> None:
        self.specs: Dict[str, ShortcodeDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: ShortcodeDefinition) -> None:
        """Register a definition under its name and all its aliases"""
        self.specs[definition.name] = definition
        for alias in definition.aliases:
            self.specs[alias] = definition

    def shortcode_add(
        self,
        name: str,
        file_kind: FileKind,
        handler: Callable,
        description: str = "",
    ) -> ShortcodeDefinition:
        """Build and register a definition in one step"""
        definition = ShortcodeDefinition(
            name=name, file_kind=file_kind, handler=handler, description=description
        )
        self.register(definition)
        return definition

    def get(self, name: str) -> Optional[ShortcodeDefinition]:
        return self.specs.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.specs

    def names(self) -> List[str]:
        return sorted(self.specs)

    def definitions_listByKind(self, kind: FileKind) -> List[ShortcodeDefinition]:
        """Get all distinct definitions rendered during one pass"""
        seen: List[ShortcodeDefinition] = []
        for definition in self.specs.values():
            if definition.file_kind == kind and definition not in seen:
                seen.append(definition)
        return seen
