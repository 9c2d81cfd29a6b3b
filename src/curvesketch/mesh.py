"""Surfaces of revolution and the indexed triangle mesh they produce."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple

import numpy as np

from curvesketch.errors import InvalidParameterError
from curvesketch.points import Vec3

logger = logging.getLogger(__name__)

AXES = ('x', 'y', 'z')
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass(frozen=True, eq=False)
class Mesh:
    """Indexed triangle mesh with flat vertex and face buffers.

    ``vertices`` holds ``x, y, z`` triples back to back; ``faces`` holds
    vertex-index triples.  Surfaces of revolution are laid out ring-major.
    """

    vertices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    faces: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.size // 3)

    @property
    def face_count(self) -> int:
        return int(self.faces.size // 3)

    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def vertex_array(self) -> np.ndarray:
        """Vertices reshaped to ``(V, 3)``."""
        return self.vertices.reshape(-1, 3)

    def face_array(self) -> np.ndarray:
        """Faces reshaped to ``(F, 3)``."""
        return self.faces.reshape(-1, 3)


def revolve_profile(profile: Sequence[Sequence[float]],
                    axis: str = 'y',
                    angle: float = 360.0,
                    segments: int = 32,
                    *,
                    fold: bool = True) -> Mesh:
    """Sweep a 2D ``profile`` about ``axis`` and return the triangle mesh.

    ``angle`` is the total sweep in degrees, split into ``segments`` steps;
    ``segments + 1`` rings are emitted, so a full turn repeats the seam
    ring.  For each profile point ``(a, b)`` the radius is ``|a|`` (``|b|``
    when revolving about ``x``); pass ``fold=False`` to keep the signed
    coordinate instead.

    Each quad between rings ``i, i+1`` and profile points ``j, j+1`` is
    split into triangles ``(a, b, c)`` and ``(b, d, c)`` where
    ``a = i*L + j``, ``b = a + L``, ``c = a + 1`` and ``d = b + 1``.
    """

    if axis not in AXES:
        raise InvalidParameterError(f"axis must be one of {AXES}, got {axis!r}")
    if segments < 1:
        raise InvalidParameterError('segments must be >= 1')

    prof = np.asarray([(float(p[0]), float(p[1])) for p in profile], dtype=np.float64)
    length = len(prof)
    if length < 2:
        logger.debug('revolve_profile: profile has %d points, need at least 2', length)
        return Mesh()

    step = math.radians(angle) / segments
    theta = np.arange(segments + 1, dtype=np.float64) * step
    cos_t = np.cos(theta)[:, None]
    sin_t = np.sin(theta)[:, None]

    a = prof[:, 0][None, :]
    b = prof[:, 1][None, :]
    ring_shape = (segments + 1, length)

    if axis == 'x':
        radius = np.abs(b) if fold else b
        vx = np.broadcast_to(a, ring_shape)
        vy = radius * cos_t
        vz = radius * sin_t
    elif axis == 'y':
        radius = np.abs(a) if fold else a
        vx = radius * cos_t
        vy = np.broadcast_to(b, ring_shape)
        vz = radius * sin_t
    else:
        radius = np.abs(a) if fold else a
        vx = radius * cos_t
        vy = radius * sin_t
        vz = np.broadcast_to(b, ring_shape)

    vertices = np.stack([vx, vy, vz], axis=-1).reshape(-1)

    ring = np.arange(segments, dtype=np.int64)[:, None] * length
    col = np.arange(length - 1, dtype=np.int64)[None, :]
    ia = (ring + col).reshape(-1)
    ib = ia + length
    ic = ia + 1
    id_ = ib + 1
    quads = np.stack([ia, ib, ic, ib, id_, ic], axis=-1)
    faces = quads.reshape(-1)

    logger.debug('revolve_profile: %d rings x %d points, %d triangles',
                 segments + 1, length, faces.size // 3)
    return Mesh(vertices=np.ascontiguousarray(vertices, dtype=np.float64),
                faces=np.ascontiguousarray(faces, dtype=np.int64))


def vertex_normals(mesh: Mesh) -> np.ndarray:
    """Return ``(V, 3)`` unit normals accumulated from face cross products.

    Each face contributes its unnormalised normal (area weighted) to its
    three vertices.  Vertices touched only by degenerate faces get a zero
    vector.
    """

    verts = mesh.vertex_array()
    normals = np.zeros_like(verts)
    if mesh.face_count == 0:
        return normals

    tris = mesh.face_array()
    v0 = verts[tris[:, 0]]
    v1 = verts[tris[:, 1]]
    v2 = verts[tris[:, 2]]
    face_n = np.cross(v1 - v0, v2 - v0)
    for k in range(3):
        np.add.at(normals, tris[:, k], face_n)

    lengths = np.linalg.norm(normals, axis=1)
    nonzero = lengths > 1e-12
    normals[nonzero] /= lengths[nonzero][:, None]
    return normals


def mesh_view(mesh: Mesh) -> Iterator[TriTuple]:
    """Yield triangles as ``(normal, v0, v1, v2)`` tuples.

    Normals are unit vectors.  Degenerate (zero area) faces, such as those
    touching the axis of a revolved profile, are skipped silently.
    """

    verts = mesh.vertex_array()
    for idx0, idx1, idx2 in mesh.face_array():
        v0 = tuple(float(c) for c in verts[idx0])
        v1 = tuple(float(c) for c in verts[idx1])
        v2 = tuple(float(c) for c in verts[idx2])
        n = np.cross(np.subtract(v1, v0), np.subtract(v2, v0))
        length = float(np.linalg.norm(n))
        if length <= 1e-12:
            continue
        normal = (float(n[0]) / length, float(n[1]) / length, float(n[2]) / length)
        yield normal, v0, v1, v2


__all__ = [
    'AXES',
    'Mesh',
    'revolve_profile',
    'vertex_normals',
    'mesh_view',
]
