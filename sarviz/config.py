# -*- coding: utf-8 -*-
"""
Config - Processing parameters for presets and batch configuration.

``ProcessingParams`` gathers every choice the end-to-end pipeline needs:
output format, bit depth, the channel selection (a single polarization,
the dual-polarization pair, or a channel algebra operation), the
autoscale strategy, the synthetic RGB mode, the target long side and
the square-padding flag. Parameters round-trip through plain
dictionaries and YAML documents.

Dependencies
------------
PyYAML

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-08

Modified
--------
2026-03-11
"""

# Standard library
import logging
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import yaml

# SARVIZ internal
from sarviz.exceptions import ValidationError
from sarviz.vocabulary import (
    AutoscaleStrategy,
    BitDepth,
    OutputFormat,
    Polarization,
    PolarizationOperation,
    SyntheticRgbMode,
)

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = ('.yaml', '.yml')


def _coerce_enum(enum_cls, value: Any, key: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        for member in enum_cls:
            if text in (member.value, member.name.lower()):
                return member
    choices = ', '.join(m.value for m in enum_cls)
    raise ValidationError(
        f"Invalid value {value!r} for '{key}'; expected one of: {choices}"
    )


_ENUM_FIELDS = {
    'output_format': OutputFormat,
    'bit_depth': BitDepth,
    'polarization': Polarization,
    'operation': PolarizationOperation,
    'autoscale': AutoscaleStrategy,
    'synthetic_rgb_mode': SyntheticRgbMode,
}


@dataclass
class ProcessingParams:
    """Parameters of one visualization run.

    Attributes
    ----------
    output_format : OutputFormat
        Target file format. Default ``TIFF``.
    bit_depth : BitDepth
        Quantization depth. JPEG output is always 8-bit. Default ``U8``.
    polarization : Polarization
        Channel for single-band output. Default ``VV``.
    operation : PolarizationOperation, optional
        Combine the dual-polarization pair into one band instead of
        reading a single channel.
    multiband : bool
        Use the dual-polarization pair: two bands for TIFF, a synthetic
        RGB composite for JPEG/PNG.
    autoscale : AutoscaleStrategy
        Contrast strategy. Default ``CLAHE``.
    synthetic_rgb_mode : SyntheticRgbMode
        Composite mode for multiband JPEG/PNG output.
    target_size : int, optional
        Long side of the output in pixels; ``None`` keeps the original
        resolution.
    pad : bool
        Zero-pad the output to a square.
    """

    output_format: OutputFormat = OutputFormat.TIFF
    bit_depth: BitDepth = BitDepth.U8
    polarization: Polarization = Polarization.VV
    operation: Optional[PolarizationOperation] = None
    multiband: bool = False
    autoscale: AutoscaleStrategy = AutoscaleStrategy.CLAHE
    synthetic_rgb_mode: SyntheticRgbMode = SyntheticRgbMode.DEFAULT
    target_size: Optional[int] = None
    pad: bool = False

    def __post_init__(self) -> None:
        for key, enum_cls in _ENUM_FIELDS.items():
            value = getattr(self, key)
            if value is None and key == 'operation':
                continue
            setattr(self, key, _coerce_enum(enum_cls, value, key))
        for key in ('multiband', 'pad'):
            if not isinstance(getattr(self, key), bool):
                raise ValidationError(
                    f"'{key}' must be a bool, got {getattr(self, key)!r}"
                )
        if self.target_size is not None:
            if (isinstance(self.target_size, bool)
                    or not isinstance(self.target_size, int)
                    or self.target_size <= 0):
                raise ValidationError(
                    f"Size must be greater than 0, got: {self.target_size!r}"
                )
        if self.multiband and self.operation is not None:
            raise ValidationError(
                "'multiband' and 'operation' are mutually exclusive"
            )

    @property
    def effective_bit_depth(self) -> BitDepth:
        """Bit depth actually produced; JPEG is always 8-bit."""
        if self.output_format is OutputFormat.JPEG:
            return BitDepth.U8
        return self.bit_depth

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProcessingParams':
        """Build parameters from a mapping of field names to values.

        Enum fields accept member values (``'u16'``, ``'log-ratio'``) or
        names in any case.

        Raises
        ------
        ValidationError
            If *data* has unknown keys or invalid values.
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Processing parameters must be a mapping, got "
                f"{type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown processing parameter(s): {', '.join(unknown)}"
            )
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-type mapping; enums are stored by value."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.value if isinstance(value, Enum) else value
        return out

    @classmethod
    def from_yaml(cls, source: Union[str, Path]) -> 'ProcessingParams':
        """Load parameters from a YAML file path or YAML text.

        A single-line string naming an existing file or ending in
        ``.yaml`` / ``.yml`` is read as a path. An empty document yields
        the defaults.

        Raises
        ------
        FileNotFoundError
            If a path is given and does not exist.
        """
        if isinstance(source, str) and '\n' not in source:
            candidate = Path(source.strip())
            if candidate.is_file() or candidate.suffix.lower() in _YAML_SUFFIXES:
                source = candidate
        if isinstance(source, Path):
            with open(source, 'r') as f:
                data = yaml.safe_load(f)
            logger.debug("Loaded processing parameters from %s", source)
        else:
            data = yaml.safe_load(source)
        return cls.from_dict(data or {})

    def to_yaml(self, path: Optional[Union[str, Path]] = None) -> str:
        """Serialize to YAML; also write to *path* when given."""
        text = yaml.safe_dump(self.to_dict(), sort_keys=False)
        if path is not None:
            with open(path, 'w') as f:
                f.write(text)
        return text
