# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for grid processors.

Defines ``ImageProcessor``, the common base for every processor class,
and the ``ImageTransform`` ABC for dense grid-to-grid transforms.
``ImageProcessor`` provides version checking at first instantiation and
``typing.Annotated`` tunable parameters resolved through ``**kwargs``.

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
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# SARVIZ internal
from sarviz.image_processing.params import ParamSpec, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all grid processors.

    Subclasses declare tunables as ``Annotated`` class fields; these are
    gathered into ``__param_specs__`` when the subclass is created.
    Concrete subclasses are expected to carry ``@processor_version``;
    the first instance of an unversioned class emits a ``UserWarning``.
    The check lives in ``__new__`` because class decorators run after
    ``__init_subclass__``.
    """

    __param_specs__: Tuple[ParamSpec, ...] = ()

    _unversioned_checked: set = set()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        checked = ImageProcessor._unversioned_checked
        if cls not in checked:
            checked.add(cls)
            concrete = not getattr(cls, '__abstractmethods__', None)
            if concrete and not getattr(cls, '__processor_version__', None):
                warnings.warn(
                    f"{cls.__qualname__} has no processor version; "
                    f"decorate it with @processor_version('x.y.z')",
                    UserWarning,
                    stacklevel=2,
                )
        return super().__new__(cls)

    def _validate_params(self) -> None:
        """Check the instance value of every declared tunable."""
        for spec in self.__param_specs__:
            spec.validate(getattr(self, spec.name))

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Tunable values for one call.

        A declared name present in *kwargs* overrides the instance value
        for this call only; other keys (such as ``valid_mask``) are left
        for the caller.

        Raises
        ------
        TypeError, ValidationError
            If a resolved value fails its ``ParamSpec``.
        """
        resolved = {
            spec.name: kwargs.get(spec.name, getattr(self, spec.name))
            for spec in self.__param_specs__
        }
        for spec in self.__param_specs__:
            spec.validate(resolved[spec.name])
        logger.debug("%s params: %s", type(self).__name__, resolved)
        return resolved

    def __repr__(self) -> str:
        fields = ', '.join(f"{spec.name}={getattr(self, spec.name)!r}"
                           for spec in self.__param_specs__)
        return f"{type(self).__name__}({fields})"


class ImageTransform(ImageProcessor):
    """Dense transform from a ``(rows, cols)`` grid to a grid of the same shape."""

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Transform *source*; ``**kwargs`` may override tunables per call."""
