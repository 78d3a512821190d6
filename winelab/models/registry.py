"""
Name-based lookup of the classifiers a walkthrough can compare.

Model modules decorate their class with ``@register(...)``; configs then
refer to models by registered name or alias:

    >>> @register("knn", family="classical", aliases=["nearest_neighbors"])
    ... class KNNModel(SklearnClassifierModel):
    ...     ...
    >>> ModelRegistry.create("nearest_neighbors", config={"n_neighbors": 7})

Lookups ignore case and surrounding whitespace.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .base import BaseModel

logger = logging.getLogger(__name__)

ModelClass = type[BaseModel]


def _key(name: str) -> str:
    return name.strip().lower()


class ModelRegistry:
    """
    Process-wide table of model classes.

    ``_models`` maps every accepted name (canonical or alias) to its class,
    ``_families`` lists canonical names per family and ``_metadata`` holds
    the registration details of each canonical name.
    """

    _models: dict[str, ModelClass] = {}
    _families: dict[str, list[str]] = {}
    _metadata: dict[str, dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        family: str,
        description: str = "",
        aliases: list[str] | None = None,
    ) -> Callable[[ModelClass], ModelClass]:
        """
        Class decorator adding a model under ``name`` and its ``aliases``.

        Raises:
            TypeError: The decorated class does not derive from BaseModel
            ValueError: ``name`` is taken
        """

        def decorator(model_class: ModelClass) -> ModelClass:
            if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
                raise TypeError(
                    f"{getattr(model_class, '__name__', model_class)!r} must be a "
                    f"subclass of BaseModel to be registered"
                )
            if name in cls._models:
                owner = cls._models[name].__name__
                raise ValueError(f"Model '{name}' is already registered to {owner}")

            cls._models[name] = model_class
            accepted = []
            for alias in aliases or []:
                if alias in cls._models:
                    logger.warning(f"Alias '{alias}' for '{name}' is taken; ignoring it")
                    continue
                cls._models[alias] = model_class
                accepted.append(alias)

            cls._families.setdefault(family, []).append(name)
            cls._metadata[name] = {
                "name": name,
                "family": family,
                "description": description,
                "aliases": accepted,
                "class": model_class.__name__,
            }
            logger.debug(f"Registered {model_class.__name__} as '{name}' ({family})")
            return model_class

        return decorator

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return _key(name) in cls._models

    @classmethod
    def get(cls, name: str) -> ModelClass:
        """Model class for a name or alias; ValueError when unknown."""
        key = _key(name)
        try:
            return cls._models[key]
        except KeyError:
            raise ValueError(
                f"Unknown model '{name}'. Available models: {sorted(cls._models)}"
            ) from None

    @classmethod
    def canonical_name(cls, name: str) -> str:
        """The name a model was registered under, given any accepted alias."""
        key = _key(name)
        model_class = cls.get(key)
        if key in cls._metadata:
            return key
        for canonical, meta in cls._metadata.items():
            if key in meta["aliases"] and cls._models[canonical] is model_class:
                return canonical
        return key

    @classmethod
    def create(cls, name: str, config: dict[str, Any] | None = None, **kwargs: Any) -> BaseModel:
        """New unfitted instance of the named model."""
        return cls.get(name)(config=config, **kwargs)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    @classmethod
    def list_all(cls) -> list[str]:
        """Canonical names, sorted. Aliases are not listed."""
        return sorted(cls._metadata)

    @classmethod
    def list_models(cls) -> dict[str, list[str]]:
        """Family -> sorted canonical names."""
        return {family: sorted(names) for family, names in cls._families.items()}

    @classmethod
    def families(cls) -> list[str]:
        return sorted(cls._families)

    @classmethod
    def count(cls) -> int:
        return len(cls._metadata)

    @classmethod
    def get_metadata(cls, name: str) -> dict[str, Any]:
        """Copy of the registration record (name, family, description, aliases, class)."""
        meta = cls._metadata[cls.canonical_name(name)]
        return {**meta, "aliases": list(meta["aliases"])}

    @classmethod
    def get_model_info(cls, name: str) -> dict[str, Any]:
        """
        Registration record plus properties read from a fresh instance:
        ``requires_scaling`` and ``default_config``.
        """
        meta = cls.get_metadata(name)
        probe = cls.get(name)()
        return {
            "name": meta["name"],
            "family": probe.model_family,
            "description": meta["description"],
            "aliases": meta["aliases"],
            "requires_scaling": probe.requires_scaling,
            "default_config": probe.get_default_config(),
        }

    @classmethod
    def clear(cls) -> None:
        """Forget every registration (test isolation)."""
        for table in (cls._models, cls._families, cls._metadata):
            table.clear()


def register(
    name: str,
    family: str,
    description: str = "",
    aliases: list[str] | None = None,
) -> Callable[[ModelClass], ModelClass]:
    """Shorthand for ``ModelRegistry.register``."""
    return ModelRegistry.register(name, family, description=description, aliases=aliases)


__all__ = ["ModelRegistry", "register"]
