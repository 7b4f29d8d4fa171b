# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative processor parameters.

Constraint markers (``Range``, ``Options``, ``Desc``) are placed inside
``typing.Annotated`` class-body fields of ``ImageProcessor`` subclasses.
``collect_param_specs`` turns those fields into ``ParamSpec`` records at
class-definition time, and ``ImageProcessor._resolve_params`` validates
runtime overrides against them.

Usage
-----
::

    from typing import Annotated
    from sarviz.image_processing.params import Desc, Options, Range

    class SarAutoscale(ImageTransform):
        strategy: Annotated[AutoscaleStrategy,
                            Options(*AutoscaleStrategy),
                            Desc('Contrast strategy')] = AutoscaleStrategy.CLAHE
        clip_limit: Annotated[float, Range(min=1.0), Desc('CLAHE clip')] = 2.0

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
2026-03-09
"""

# Standard library
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# SARVIZ internal
from sarviz.exceptions import ValidationError

Number = Union[int, float]


class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


@dataclass(frozen=True)
class Range(ParamMeta):
    """Inclusive bounds on a numeric parameter; either side may be open."""

    min: Optional[Number] = None
    max: Optional[Number] = None


class Options(ParamMeta):
    """Closed set of allowed values, e.g. ``Options(*BitDepth)``."""

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options needs at least one allowed value")
        self.choices = tuple(choices)

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


@dataclass(frozen=True)
class Desc(ParamMeta):
    """One-line description shown in processor introspection."""

    text: str


@dataclass(frozen=True)
class ParamSpec:
    """Tunable parameter as collected from an ``Annotated`` field.

    ``int`` values satisfy a ``float`` parameter; ``bool`` values do not.
    """

    name: str
    param_type: type
    default: Any
    description: str = ''
    min_value: Optional[Number] = None
    max_value: Optional[Number] = None
    choices: Optional[Tuple] = None

    def _type_ok(self, value: Any) -> bool:
        if self.param_type is float:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        return isinstance(value, self.param_type)

    def validate(self, value: Any) -> None:
        """Check *value* against type, bounds and choices.

        Raises
        ------
        TypeError
            If *value* is not an instance of ``param_type``.
        ValidationError
            If *value* is out of bounds or not an allowed choice.
        """
        if not self._type_ok(value):
            raise TypeError(
                f"{self.name}: expected {self.param_type.__name__}, "
                f"got {type(value).__name__} ({value!r})"
            )
        low, high = self.min_value, self.max_value
        if (low is not None and value < low) or (high is not None and value > high):
            raise ValidationError(
                f"{self.name}={value!r} outside [{low}, {high}]"
            )
        if self.choices is not None and value not in self.choices:
            allowed = ', '.join(repr(c) for c in self.choices)
            raise ValidationError(
                f"{self.name}={value!r} not one of: {allowed}"
            )


def _field_names(cls: type):
    """Annotated attribute names, base classes first."""
    seen = {}
    for klass in reversed(cls.__mro__):
        seen.update(dict.fromkeys(vars(klass).get('__annotations__', {})))
    return list(seen)


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build the ``ParamSpec`` tuple for every marked field on *cls*.

    Fields without a ``ParamMeta`` marker are skipped.

    Raises
    ------
    TypeError
        If one field carries both ``Range`` and ``Options``.
    """
    hints = get_type_hints(cls, include_extras=True)
    specs = []
    for name in _field_names(cls):
        hint = hints.get(name)
        if hint is None or get_origin(hint) is not Annotated:
            continue
        markers = {type(m): m for m in hint.__metadata__
                   if isinstance(m, ParamMeta)}
        if not markers:
            continue
        bounds = markers.get(Range)
        options = markers.get(Options)
        if bounds is not None and options is not None:
            raise TypeError(
                f"{cls.__qualname__}.{name}: a parameter takes Range or "
                f"Options, not both"
            )
        desc = markers.get(Desc)
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__origin__,
            default=getattr(cls, name, None),
            description=desc.text if desc is not None else '',
            min_value=bounds.min if bounds is not None else None,
            max_value=bounds.max if bounds is not None else None,
            choices=options.choices if options is not None else None,
        ))
    return tuple(specs)
