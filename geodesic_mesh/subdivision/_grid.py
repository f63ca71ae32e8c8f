# SPDX-FileCopyrightText: Copyright (c) 2023 - 2026 NVIDIA CORPORATION & AFFILIATES.
# SPDX-FileCopyrightText: All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Triangulated grids that fill the interior of one seed face.

A face is swept row by row from its ``v1 -> v2`` side towards the opposite
corner (triangles) or side (quadrilaterals). Row ends come from the face's
boundary edges; row interiors are freshly interpolated points that belong to
this face alone. Consecutive rows are stitched into triangles that keep the
face's counter-clockwise winding.
"""

import torch

from geodesic_mesh.subdivision._edges import EdgeTable

Triangle = tuple[int, int, int]


class PointBuffer:
    """Append-only point store that hands out the indices of what it receives."""

    def __init__(self, boundary_points: torch.Tensor):
        self.boundary_points = boundary_points
        self._chunks = [boundary_points]
        self._count = len(boundary_points)

    def extend(self, points: torch.Tensor) -> list[int]:
        start = self._count
        self._chunks.append(points)
        self._count += len(points)
        return list(range(start, self._count))

    def to_tensor(self) -> torch.Tensor:
        return torch.cat(self._chunks, dim=0)


def fill_triangle(
    face: list[int],
    edges: EdgeTable,
    buffer: PointBuffer,
    interpolate,
) -> list[Triangle]:
    """Triangulate a seed triangle ``(v1, v2, v3)`` into ``(n + 1)**2`` triangles.

    Row ``j`` runs between the ``j``-th points of the ``v1 -> v3`` and
    ``v2 -> v3`` edges with ``n - 1 - j`` interior points, so rows shrink by
    one point each until the last collapses onto ``v3``. Between two rows,
    upward triangles ``(cur[k], cur[k+1], new[k])`` alternate with downward
    ones ``(cur[k+1], new[k+1], new[k])``.
    """
    v1, v2, v3 = face
    n = edges.complexity
    points = buffer.boundary_points

    left = edges.run(v1, v3)
    right = edges.run(v2, v3)
    current = [v1, *edges.run(v1, v2), v2]

    triangles: list[Triangle] = []
    for j in range(n):
        interior = buffer.extend(
            interpolate(points[left[j]], points[right[j]], n - 1 - j)
        )
        new = [left[j], *interior, right[j]]
        for k in range(n - j):
            triangles.append((current[k], current[k + 1], new[k]))
            triangles.append((current[k + 1], new[k + 1], new[k]))
        triangles.append((current[n - j], current[n + 1 - j], new[n - j]))
        current = new

    triangles.append((current[0], current[1], v3))
    return triangles


def fill_quad(
    face: list[int],
    edges: EdgeTable,
    buffer: PointBuffer,
    interpolate,
) -> list[Triangle]:
    """Triangulate a seed quadrilateral ``(v1, v2, v3, v4)`` into ``2 * (n + 1)**2`` triangles.

    Rows run between the ``v1 -> v4`` and ``v2 -> v3`` edges, each with ``n``
    interior points, and the last row is the ``v4 -> v3`` edge itself. Each
    grid cell is split along a diagonal chosen by ``(row + column) % 2``, so
    neighboring cells use opposite diagonals.
    """
    v1, v2, v3, v4 = face
    n = edges.complexity
    points = buffer.boundary_points

    left = edges.run(v1, v4)
    right = edges.run(v2, v3)
    ### Every interior row has n points, so the whole face interpolates at once
    interior = interpolate(points[left], points[right], n)  # (n, n, 3)
    row_ids = [buffer.extend(interior[j]) for j in range(n)]

    current = [v1, *edges.run(v1, v2), v2]
    triangles: list[Triangle] = []
    for j in range(n + 1):
        if j < n:
            new = [left[j], *row_ids[j], right[j]]
        else:
            new = [v4, *edges.run(v4, v3), v3]
        for k in range(n + 1):
            if (j + k) % 2 == 0:
                triangles.append((current[k], current[k + 1], new[k + 1]))
                triangles.append((current[k], new[k + 1], new[k]))
            else:
                triangles.append((current[k], current[k + 1], new[k]))
                triangles.append((current[k + 1], new[k + 1], new[k]))
        current = new

    return triangles
