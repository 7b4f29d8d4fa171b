# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability decorators for processors.

``@processor_version`` stamps a semantic version on a processor class;
the version doubles as the output format version, so any change that
alters pixels must bump it. ``@processor_tags`` stamps capability
metadata used to list processors by category.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-03

Modified
--------
2026-03-03
"""

# Standard library
import importlib.metadata
from typing import Optional, Sequence, Type, TypeVar

# SARVIZ internal
from sarviz.vocabulary import Polarization, ProcessorCategory

T = TypeVar('T')


def _installed_version() -> str:
    try:
        return importlib.metadata.version('sarviz')
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def processor_version(version: Optional[str] = None):
    """Class decorator that sets ``__processor_version__``.

    Without an explicit *version* the installed ``sarviz`` distribution
    version is used (``'unknown'`` in an uninstalled checkout).

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Identity(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> Identity.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_version__ = version or _installed_version()
        return cls
    return decorator


def _require_members(enum_cls, values, label: str) -> None:
    for value in values:
        if not isinstance(value, enum_cls):
            raise TypeError(
                f"{label} expects {enum_cls.__name__} members, got {value!r}"
            )


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    polarizations: Optional[Sequence[Polarization]] = None,
    description: Optional[str] = None,
):
    """Class decorator that sets ``__processor_tags__``.

    Parameters
    ----------
    category : ProcessorCategory, optional
        Processing category.
    polarizations : Sequence[Polarization], optional
        Channels the processor is tuned for; empty means any.
    description : str, optional
        Short human-readable purpose.

    Raises
    ------
    TypeError
        If a tag is given as a plain string instead of an enum member.
    """
    if category is not None:
        _require_members(ProcessorCategory, [category], 'category')
    pols = tuple(polarizations or ())
    _require_members(Polarization, pols, 'polarizations')
    tags = {'category': category, 'polarizations': pols,
            'description': description}

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = dict(tags)
        return cls
    return decorator
