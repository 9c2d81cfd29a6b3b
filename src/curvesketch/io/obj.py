"""Wavefront OBJ export and import for curvesketch meshes."""

from __future__ import annotations

import io
import logging
from typing import List, TextIO

import numpy as np

from curvesketch.errors import InsufficientInputError, InvalidParameterError
from curvesketch.mesh import Mesh

logger = logging.getLogger(__name__)

_HEADER = '# Generated by curvesketch'


def format_obj(mesh: Mesh, *, header: str = _HEADER) -> str:
    """Return ``mesh`` as OBJ text.

    Vertices are written as ``v x y z`` with six decimals and faces as
    ``f i j k`` with 1-based indices.
    """

    buf = io.StringIO()
    _write_text(mesh, buf, header)
    return buf.getvalue()


def write_obj(mesh: Mesh, path_or_file, *, header: str = _HEADER) -> None:
    """Write ``mesh`` to OBJ.

    ``path_or_file`` can be a filesystem path or an open text stream.
    """

    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    try:
        _write_text(mesh, stream, header)
    finally:
        if close_when_done:
            stream.close()


def _write_text(mesh: Mesh, stream: TextIO, header: str) -> None:
    print(header, file=stream)
    print('# Vertices', file=stream)
    for x, y, z in mesh.vertex_array():
        # Adding 0.0 turns -0.0 into 0.0 so it prints without a sign.
        print(f"v {x + 0.0:.6f} {y + 0.0:.6f} {z + 0.0:.6f}", file=stream)
    print('', file=stream)
    print('# Faces', file=stream)
    for a, b, c in mesh.face_array():
        print(f"f {a + 1} {b + 1} {c + 1}", file=stream)


# ---------------------------------------------------------------------------
# OBJ Import
# ---------------------------------------------------------------------------


def _face_index(token: str, vertex_count: int, lineno: int) -> int:
    """Convert an OBJ face token (``7``, ``7/1``, ``7//3``, ``-1``) to 0-based."""
    try:
        idx = int(token.split('/', 1)[0])
    except ValueError:
        raise InvalidParameterError(f"line {lineno}: bad face index {token!r}") from None
    if idx < 0:
        return vertex_count + idx
    return idx - 1


def read_obj(path_or_file) -> Mesh:
    """Read OBJ text and return a :class:`Mesh`.

    Only ``v`` and ``f`` records are used.  Polygon faces are split into a
    triangle fan around their first vertex.  Raises
    :class:`InsufficientInputError` if the data holds no vertices and
    :class:`InvalidParameterError` for malformed ``v`` or ``f`` records.
    """

    if hasattr(path_or_file, 'read'):
        text = path_or_file.read()
        if isinstance(text, bytes):
            text = text.decode('utf-8', errors='replace')
    else:
        with open(path_or_file, 'r', encoding='utf-8') as f:
            text = f.read()

    vertices: List[float] = []
    faces: List[int] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if not parts or parts[0].startswith('#'):
            continue
        if parts[0] == 'v':
            if len(parts) < 4:
                raise InvalidParameterError(f"line {lineno}: vertex needs three coordinates")
            try:
                vertices.extend([float(c) for c in parts[1:4]])
            except ValueError:
                raise InvalidParameterError(f"line {lineno}: bad vertex coordinate") from None
        elif parts[0] == 'f':
            count = len(vertices) // 3
            idx = [_face_index(tok, count, lineno) for tok in parts[1:]]
            if len(idx) < 3:
                raise InvalidParameterError(f"line {lineno}: face needs at least three vertices")
            if any(i < 0 or i >= count for i in idx):
                raise InvalidParameterError(f"line {lineno}: face references a missing vertex")
            for k in range(1, len(idx) - 1):
                faces.extend((idx[0], idx[k], idx[k + 1]))
        else:
            logger.debug('read_obj: ignoring %r record on line %d', parts[0], lineno)

    if not vertices:
        raise InsufficientInputError('OBJ data contains no vertices')

    return Mesh(vertices=np.asarray(vertices, dtype=np.float64),
                faces=np.asarray(faces, dtype=np.int64))


__all__ = ['format_obj', 'write_obj', 'read_obj']
