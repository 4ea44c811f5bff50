"""Validation helpers for regionCAD meshes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence

from regioncad.errors import InputShapeError
from regioncad.vnf import isvnf


def vnf_indices_valid(vnf) -> "CheckResult":
    """Every face has at least three indices, all in range."""

    if not isvnf(vnf):
        raise InputShapeError('vnf_indices_valid expects a VNF')

    n = len(vnf.vertices)
    short = []
    bad = []
    for idx, face in enumerate(vnf.faces):
        if len(face) < 3:
            short.append(idx)
        if any(i < 0 or i >= n for i in face):
            bad.append(idx)

    warnings: List[str] = []
    if short:
        warnings.append(f'faces with fewer than 3 indices: {short}')
    if bad:
        warnings.append(f'faces with out of range indices: {bad}')
    return CheckResult(not warnings, warnings)


def vnf_faces_oriented(vnf) -> "CheckResult":
    """Neighbouring faces agree on winding: no directed edge is used by
    more than one face."""

    if not isvnf(vnf):
        raise InputShapeError('vnf_faces_oriented expects a VNF')

    directed = Counter()
    for face in vnf.faces:
        for a, b in _face_edges(face):
            directed[(a, b)] += 1

    repeated = [edge for edge, count in directed.items() if count > 1]
    if repeated:
        return CheckResult(False, [f'directed edges used more than once: {repeated}'])
    return CheckResult(True, [])


def vnf_watertight(vnf) -> "CheckResult":
    if not isvnf(vnf):
        raise InputShapeError('vnf_watertight expects a VNF')

    edges = Counter()
    for face in vnf.faces:
        for a, b in _face_edges(face):
            edges[_edge_key(a, b)] += 1

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {invalid}')

    return CheckResult(ok, warnings)


def _face_edges(face: Sequence[int]):
    return [(face[i], face[(i + 1) % len(face)]) for i in range(len(face))]


def _edge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'vnf_indices_valid',
    'vnf_faces_oriented',
    'vnf_watertight',
]
