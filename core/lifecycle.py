from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

__all__ = [
    'ComponentMetadata', 'ComponentState', 'ComponentRegistryMissingError', 'DuplicateIdentifierError',
    'MetadataValidationError', 'make_component_id', 'slugify', 'ID_SEPARATOR',
]
logger = logging.getLogger(__name__)

ID_SEPARATOR = '.'
_SLUG_STRIP = re.compile(r'[^A-Za-z0-9_-]')


class MetadataValidationError(ValueError):
    pass


class ComponentState(str, Enum):
    UNSTARTED = 'unstarted'
    WAITING_ON_DEPENDENCIES = 'waiting_on_dependencies'
    RENDERING = 'rendering'
    READY = 'ready'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (ComponentState.READY, ComponentState.FAILED)


def slugify(display_name: str) -> str:
    """Display name with spaces replaced by '-' and special characters dropped."""
    return _SLUG_STRIP.sub('', display_name.strip().replace(' ', '-'))


def make_component_id(kind: str, slug: str) -> str:
    if not kind or not slug:
        raise MetadataValidationError(f"Cannot build a component id from kind={kind!r}, slug={slug!r}")
    return f'{kind}{ID_SEPARATOR}{slug}'


@dataclass(frozen=True)
class ComponentMetadata:
    id: str
    kind: str
    slug: str
    display_name: str
    icon: str = ''
    hotkey: str = ''
    dependencies: Tuple[str, ...] = field(default_factory=tuple)
    description: str = ''

    def __post_init__(self) -> None:
        if not all([self.id, self.kind, self.slug, self.display_name]):
            raise MetadataValidationError('ComponentMetadata fields id, kind, slug, display_name must be non-empty.')
        if self.id != make_component_id(self.kind, self.slug):
            raise MetadataValidationError(
                f"Component id '{self.id}' does not match kind '{self.kind}' and slug '{self.slug}'"
            )
        deps = tuple(self.dependencies)
        for dep_id in deps:
            if not isinstance(dep_id, str) or not dep_id:
                raise MetadataValidationError(f"Dependencies of '{self.id}' must be non-empty strings, got {dep_id!r}")
        if dep_id_dupes := sorted({d for d in deps if deps.count(d) > 1}):
            logger.warning(f"Component '{self.id}' declares duplicate dependencies: {dep_id_dupes}")
        # Keep declaration order, drop repeats.
        object.__setattr__(self, 'dependencies', tuple(dict.fromkeys(deps)))

    @classmethod
    def build(cls, kind: str, display_name: str, *, slug: Optional[str] = None, icon: str = '', hotkey: str = '',
              dependencies: Iterable[str] = (), description: str = '') -> 'ComponentMetadata':
        slug = slug or slugify(display_name)
        return cls(
            id=make_component_id(kind, slug),
            kind=kind,
            slug=slug,
            display_name=display_name,
            icon=icon,
            hotkey=hotkey,
            dependencies=tuple(dependencies),
            description=description,
        )

    @property
    def ready_event_name(self) -> str:
        return f'{self.id}-ready'

    @property
    def trigger_name(self) -> str:
        return f'trigger-{self.id}'

    @property
    def element_id(self) -> str:
        return f'{self.id}-button'

    @property
    def enabled_key(self) -> str:
        return f'{self.id}-enabled'

    @property
    def hotkey_display_key(self) -> str:
        return f'display-{self.kind}-hotkeys'

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['dependencies'] = list(self.dependencies)
        return data

    def __str__(self) -> str:
        return f'{self.display_name} (ID: {self.id}, Kind: {self.kind}, Dependencies: {len(self.dependencies)})'


class ComponentRegistryMissingError(KeyError):
    def __init__(self, component_id: str, message: Optional[str] = None, available_components: Optional[List[str]] = None):
        default_message = f"Component with ID '{component_id}' not found in the registry."
        if available_components:
            sorted_keys = sorted(available_components)
            default_message += f" Available components ({len(sorted_keys)} total): {', '.join(sorted_keys)}"
        final_message = message if message is not None else default_message
        super().__init__(final_message)
        self.component_id = component_id
        self.available_components = available_components or []


class DuplicateIdentifierError(ValueError):
    def __init__(self, component_id: str):
        super().__init__(f"A component with ID '{component_id}' is already registered.")
        self.component_id = component_id
