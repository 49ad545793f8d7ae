from pathlib import Path
from typing import Iterable, Sequence

import numpy as np
import trimesh

from bsp_painter.types.polygon import Polygon


class PolygonMesh:
    """
    Shared vertex array plus faces given as index rings of three or more
    vertices. Unlike a triangle mesh the faces keep their original arity, so
    quads survive a round trip through OBJ.
    """
    def __init__(self, points, faces: Iterable[Sequence[int]]):
        points = np.asarray(points, dtype=np.float64)
        if points.shape[-1] != 3 or len(points.shape) != 2:
            raise ValueError(f"Points must have shape (N, 3), got {points.shape}")
        faces = [tuple(int(i) for i in face) for face in faces]
        for face in faces:
            if len(face) < 3:
                raise ValueError(f"Face {face} has fewer than 3 vertices")
            if min(face) < 0 or max(face) >= len(points):
                raise ValueError(f"Face {face} references a vertex outside [0, {len(points)})")

        self.points = points
        self.faces = faces

    @staticmethod
    def from_polygons(polygons: Iterable[Polygon]) -> 'PolygonMesh':
        points = []
        faces = []
        offset = 0
        for polygon in polygons:
            points.append(polygon.vertices)
            faces.append(tuple(range(offset, offset + len(polygon))))
            offset += len(polygon)
        if not points:
            return PolygonMesh(np.zeros((0, 3)), [])
        return PolygonMesh(np.concatenate(points), faces)

    def to_polygons(self) -> list[Polygon]:
        """
        Raises:
            DegeneratePolygonError: if a face's first three vertices are collinear
        """
        return [Polygon(self.points[list(face)]) for face in self.faces]

    def triangles(self) -> np.ndarray:
        """Fan triangulation of every face, (M, 3) vertex indices."""
        triangles = [
            (face[0], face[i], face[i + 1])
            for face in self.faces
            for i in range(1, len(face) - 1)
        ]
        return np.array(triangles, dtype=np.int64).reshape(-1, 3)

    def as_trimesh(self) -> trimesh.Trimesh:
        return trimesh.Trimesh(vertices=self.points, faces=self.triangles(), process=False)

    @staticmethod
    def _stream_obj_elements(file_path: Path | str, chunk_size: int = 8192):
        """
        Stream elements from an OBJ file line by line using a generator.

        Yields:
            tuple: (element_type, values) where element_type is 'v' or 'f' and values are the raw tokens
        """
        remainder = ""
        with open(file_path, 'rb') as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    if remainder:
                        line = remainder.strip()
                        if line and not line.startswith('#'):
                            values = line.split()
                            if values[0] in ('v', 'f'):
                                yield values[0], values[1:]
                    break

                text = remainder + chunk.decode('utf-8')
                lines = text.split('\n')

                # Save the last partial line for the next iteration
                remainder = lines[-1]

                for line in lines[:-1]:
                    line = line.strip()
                    if line and not line.startswith('#'):
                        values = line.split()
                        if values[0] in ('v', 'f'):
                            yield values[0], values[1:]

    @staticmethod
    def from_obj(file_path: Path | str) -> 'PolygonMesh':
        """
        Read vertices and (possibly non-triangular) faces from an OBJ file.

        Raises:
            ValueError: If the OBJ file is invalid or doesn't contain required data
        """
        vertices = []
        faces = []
        for elem_type, values in PolygonMesh._stream_obj_elements(file_path):
            if elem_type == 'v':
                try:
                    vertices.append([float(x) for x in values[:3]])
                except ValueError:
                    raise ValueError(f"Invalid vertex format: {values}")
                if len(vertices[-1]) != 3:
                    raise ValueError(f"Invalid vertex format: {values}")

            elif elem_type == 'f':
                try:
                    # OBJ indices are 1-based, negative ones count back from the last vertex
                    face = []
                    for v in values:
                        index = int(v.split('/')[0])
                        face.append(index - 1 if index > 0 else len(vertices) + index)
                except ValueError:
                    raise ValueError(f"Invalid face format: {values}")
                faces.append(face)

        if len(vertices) == 0:
            raise ValueError("No vertices found in OBJ file")
        if len(faces) == 0:
            raise ValueError("No faces found in OBJ file")

        return PolygonMesh(np.array(vertices), faces)

    def to_obj(self, file_path: Path | str, chunk_size: int = 8192) -> None:
        def generate_obj_lines():
            yield "# OBJ file created by PolygonMesh\n"

            for vertex in self.points:
                yield f"v {vertex[0]:.6f} {vertex[1]:.6f} {vertex[2]:.6f}\n"

            for face in self.faces:
                yield "f " + " ".join(str(i + 1) for i in face) + "\n"

        with open(file_path, 'w') as f:
            buffer = ""
            for line in generate_obj_lines():
                buffer += line
                if len(buffer) >= chunk_size:
                    f.write(buffer)
                    buffer = ""

            if buffer:
                f.write(buffer)
