"""
Named registries for pluggable components.

Seeding strategies register themselves here under the name used by the
``init`` option, so ``init="kmpp"`` resolves to the k-means++ seeder.
"""

from typing import Dict, List, Type

from .errors import InvalidConfig


class Registry:
    """
    Mapping from option names to component classes.

    Usage:
        seeders = Registry("seeders")

        @seeders.register("rand")
        class UniformSeeder(BaseSeeder):
            ...

        seeder = seeders.create("rand")
    """

    def __init__(self, name: str):
        self.name = name
        self._classes: Dict[str, Type] = {}

    def register(self, name: str, cls: Type = None):
        """Register ``cls`` under ``name``; usable as a class decorator."""
        if cls is not None:
            self._classes[name] = cls
            return cls

        def decorator(cls_):
            self._classes[name] = cls_
            return cls_

        return decorator

    def get(self, name: str) -> Type:
        """Look up a registered class, raising InvalidConfig if unknown."""
        try:
            return self._classes[name]
        except KeyError:
            raise InvalidConfig(
                f"'{name}' not found in {self.name} registry. Available: {self.list()}"
            ) from None

    def create(self, name: str, **kwargs):
        return self.get(name)(**kwargs)

    def list(self) -> List[str]:
        return sorted(self._classes)

    def __contains__(self, name: str) -> bool:
        return name in self._classes


_registries: Dict[str, Registry] = {}


def get_registry(name: str) -> Registry:
    """Get or create a named registry."""
    if name not in _registries:
        _registries[name] = Registry(name)
    return _registries[name]


seeders = get_registry("seeders")
