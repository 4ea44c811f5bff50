"""Tolerance configuration shared by every regionCAD operation.

A single :class:`Tolerance` value is resolved at the public API
boundary and passed explicitly through every internal call, so a whole
computation always compares points, parameters and sample offsets
against the same numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from regioncad.errors import InputShapeError
from regioncad.geom import epsilon


@dataclass(frozen=True)
class Tolerance:
    """Immutable tolerance configuration.

    ``eps`` is the coincidence tolerance for points and segment
    parameters.  ``quantum`` is the grid that VNF vertices are snapped
    to before deduplication.  ``side_step`` bounds the sideways step
    used when sampling on either side of a path fragment.
    """

    eps: float = epsilon
    quantum: float = 1.0 / 1024.0
    side_step: float = 1.0 / 2048.0

    def __post_init__(self) -> None:
        if not self.eps > 0:
            raise InputShapeError('tolerance eps must be positive',
                                  {'eps': self.eps})
        if not self.quantum > 0:
            raise InputShapeError('tolerance quantum must be positive',
                                  {'quantum': self.quantum})
        if not self.side_step > self.eps:
            raise InputShapeError('side_step must exceed eps',
                                  {'eps': self.eps, 'side_step': self.side_step})

    def with_eps(self, eps: float) -> "Tolerance":
        """Return a copy of this tolerance with a different ``eps``.
        ``side_step`` is raised to ``4*eps`` if it would no longer
        exceed the new ``eps``."""

        return replace(self, eps=eps, side_step=max(self.side_step, 4.0 * eps))

    def quantize(self, value: float) -> float:
        """Snap ``value`` to the ``quantum`` grid."""

        q = round(value / self.quantum) * self.quantum
        # normalize -0.0 to 0.0
        return q + 0.0


DEFAULT_TOLERANCE = Tolerance()


__all__ = ['Tolerance', 'DEFAULT_TOLERANCE']
