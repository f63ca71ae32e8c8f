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

"""Geodesic subdivision of seed polyhedra onto the unit sphere.

Every seed edge receives ``complexity`` new points along its great circle,
and every seed face is filled with a triangulated grid whose interior points
are interpolated row by row between the face's edges. The result is a closed
triangle mesh on the unit sphere, with counter-clockwise winding seen from
outside.

Point layout of the result:

1. Seed vertices, in seed order.
2. Edge points: edge ``k`` owns ``[n_vertices + k * c, n_vertices + (k + 1) * c)``
   for complexity ``c``, ordered from its lower-indexed endpoint.
3. Face interior points, face by face and row by row.
"""

import logging
from numbers import Integral

import torch

from geodesic_mesh.errors import InvalidComplexityError
from geodesic_mesh.geometry.interpolation import InterpolationMethod, get_interpolator
from geodesic_mesh.mesh import Mesh
from geodesic_mesh.seeds import SeedKind, SeedShape, get_seed
from geodesic_mesh.subdivision._edges import EdgeTable, interpolate_edges
from geodesic_mesh.subdivision._grid import PointBuffer, fill_quad, fill_triangle

logger = logging.getLogger(__name__)


def check_complexity(complexity: int) -> None:
    """Reject anything but a non-negative integer complexity.

    Raises
    ------
    InvalidComplexityError
        If ``complexity`` is not an integer (booleans included) or is negative.
    """
    if isinstance(complexity, bool) or not isinstance(complexity, Integral):
        raise InvalidComplexityError(
            f"complexity must be a non-negative integer, got {complexity=}"
        )
    if complexity < 0:
        raise InvalidComplexityError(
            f"complexity must be non-negative, got {complexity=}"
        )


def subdivide_seed(
    seed: SeedShape,
    complexity: int,
    interpolation: InterpolationMethod = "projected",
) -> Mesh:
    """Subdivide a seed shape, inserting ``complexity`` points per edge.

    Triangular faces become ``(complexity + 1)**2`` triangles each and
    quadrilateral faces ``2 * (complexity + 1)**2``. Complexity 0 returns the
    seed's own vertices with its faces triangulated.

    Parameters
    ----------
    seed : SeedShape
        Seed tables. Faces must be wound counter-clockwise seen from outside.
    complexity : int
        Number of new points inserted along each seed edge.
    interpolation : {"projected", "arc"}
        Great-circle interpolation policy for edge and row points.

    Returns
    -------
    Mesh
        Subdivided mesh with ``cell_data["seed_face"]`` holding the seed face
        index of each triangle.

    Raises
    ------
    InvalidComplexityError
        If ``complexity`` is negative or not an integer.
    InconsistentMeshError
        If the seed's edge and face tables disagree.
    """
    check_complexity(complexity)
    interpolate = get_interpolator(interpolation)
    device = seed.vertices.device

    ### Complexity 0 leaves the seed unchanged
    if complexity == 0:
        triangles, face_ids = seed.triangulated_faces()
        return Mesh(
            points=seed.vertices.clone(),
            cells=triangles.clone(),
            cell_data={"seed_face": face_ids},
        )

    ### Densify every edge, then fill every face
    edge_table = EdgeTable(seed.edges, seed.n_vertices, complexity)
    buffer = PointBuffer(
        torch.cat(
            [
                seed.vertices,
                interpolate_edges(seed.vertices, seed.edges, complexity, interpolate),
            ],
            dim=0,
        )
    )
    fill = fill_triangle if seed.is_triangular else fill_quad

    triangles: list[tuple[int, int, int]] = []
    face_ids: list[int] = []
    for face_index, face in enumerate(seed.faces.tolist()):
        face_triangles = fill(face, edge_table, buffer, interpolate)
        triangles.extend(face_triangles)
        face_ids.extend([face_index] * len(face_triangles))

    mesh = Mesh(
        points=buffer.to_tensor(),
        cells=torch.tensor(triangles, dtype=torch.int64, device=device),
        cell_data={
            "seed_face": torch.tensor(face_ids, dtype=torch.int64, device=device)
        },
    )
    logger.debug(
        "Subdivided seed (%d faces) at complexity %d with %s interpolation: "
        "%d points, %d triangles",
        seed.n_faces,
        complexity,
        interpolation,
        mesh.n_points,
        mesh.n_cells,
    )
    return mesh


def subdivide(
    seed: SeedKind | str | SeedShape,
    complexity: int,
    interpolation: InterpolationMethod = "projected",
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Build a geodesic polyhedron from a seed polyhedron.

    Parameters
    ----------
    seed : SeedKind, str or SeedShape
        ``"tetrahedron"``, ``"cube"``, ``"octahedron"``, ``"icosahedron"``
        (or the matching :class:`SeedKind`), or custom seed tables.
    complexity : int
        Number of new points inserted along each seed edge. 0 returns the
        seed itself.
    interpolation : {"projected", "arc"}
        Great-circle interpolation policy.
    dtype : torch.dtype
        Floating dtype of the points.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Closed triangle mesh on the unit sphere.

    Raises
    ------
    InvalidComplexityError
        If ``complexity`` is negative or not an integer.
    UnsupportedSeedError
        If ``seed`` names no built-in seed.

    Examples
    --------
    >>> mesh = subdivide("icosahedron", complexity=1)
    >>> mesh.n_points, mesh.n_cells
    (42, 80)
    >>> subdivide(SeedKind.CUBE, complexity=2).n_cells  # 6 * 2 * 3**2
    108
    """
    check_complexity(complexity)
    get_interpolator(interpolation)
    return subdivide_seed(
        get_seed(seed, dtype=dtype, device=device),
        complexity=complexity,
        interpolation=interpolation,
    )
