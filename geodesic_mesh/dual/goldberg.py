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

"""Goldberg polyhedra as duals of geodesic triangle meshes.

The dual of a closed triangle mesh swaps the roles of vertices and faces:
every mesh vertex becomes a polygon whose corners surround it. Applied to a
subdivided seed, the seed's own vertices (valence 3, 4 or 5) become
triangles, squares or pentagons and every other vertex (valence 6) becomes a
hexagon.

Two placements of the dual corners are supported:

- Class 1, ``(m, 0)``: one corner per mesh triangle, at its centroid pushed
  onto the sphere. The polygon around a vertex lists the triangles of its fan.
- Class 2, ``(m, m)``: one corner per directed edge ``i -> j``, one third of
  the way from ``i`` to ``j``. The polygon around ``i`` lists the corners on
  its outgoing edges, and every mesh triangle ``(a, b, c)`` adds the hexagon
  ``d(a,b), d(b,a), d(b,c), d(c,b), d(c,a), d(a,c)``.

Every polygon is closed with a centre point (the normalized mean of its
corners) and fan-triangulated as ``(corner_k, corner_k+1, centre)``. Fans are
walked counter-clockwise, so these triangles keep the outward winding of the
input.
"""

import logging

import torch
import torch.nn.functional as F

from geodesic_mesh.errors import InconsistentMeshError, UnsupportedSeedError
from geodesic_mesh.geometry.interpolation import InterpolationMethod
from geodesic_mesh.mesh import Mesh
from geodesic_mesh.neighbors import Adjacency, compute_corner_fans
from geodesic_mesh.seeds import (
    SEED_FACE_DEGREES,
    SeedKind,
    SeedShape,
    resolve_seed_kind,
)
from geodesic_mesh.subdivision import check_complexity, subdivide
from geodesic_mesh.utilities._tolerances import safe_eps

logger = logging.getLogger(__name__)


def _check_valences(valences: torch.Tensor, face_degree: int | None) -> None:
    """Every vertex must yield a seed polygon or a hexagon."""
    if face_degree is None:
        invalid = valences < 3
        expected = "at least 3"
    else:
        invalid = (valences != face_degree) & (valences != 6)
        expected = f"{face_degree} or 6"
    if invalid.any():
        point = torch.nonzero(invalid)[0].item()
        raise InconsistentMeshError(
            f"Point {point} has {valences[point].item()} incident triangles, "
            f"expected {expected}."
        )


def _sort_polygons_by_degree(polygons: Adjacency) -> Adjacency:
    """Reorder polygons by ascending degree, keeping ties in their original order."""
    counts = polygons.counts
    order = torch.argsort(counts, stable=True)
    sorted_counts = counts[order]

    offsets = torch.zeros_like(polygons.offsets)
    offsets[1:] = torch.cumsum(sorted_counts, dim=0)

    ### Gather each polygon's entries from its old position
    new_polygon_ids = torch.repeat_interleave(
        torch.arange(len(order), device=order.device), sorted_counts
    )
    within = (
        torch.arange(len(new_polygon_ids), device=order.device)
        - offsets[new_polygon_ids]
    )
    old_positions = polygons.offsets[order[new_polygon_ids]] + within

    return Adjacency(offsets=offsets, indices=polygons.indices[old_positions])


def _class1_polygons(
    mesh: Mesh, fans: Adjacency
) -> tuple[torch.Tensor, Adjacency]:
    """Dual corners at triangle centroids; one polygon per point."""
    centroids = mesh.cell_centroids
    dual_points = F.normalize(centroids, dim=-1, eps=safe_eps(centroids.dtype))
    return dual_points, Adjacency(offsets=fans.offsets, indices=fans.indices // 3)


def _class2_polygons(
    mesh: Mesh, fans: Adjacency, successors: torch.Tensor
) -> tuple[torch.Tensor, Adjacency]:
    """Dual corners at edge thirds; one polygon per point plus one hexagon per triangle."""
    cells = mesh.cells.to(torch.int64)
    device = cells.device
    n_corners = cells.numel()
    corner_points = cells.reshape(-1)
    corner_next = cells.roll(-1, dims=1).reshape(-1)

    ### One dual point per directed edge point -> next, stored in fan order
    origins = mesh.points[corner_points[fans.indices]]
    targets = mesh.points[corner_next[fans.indices]]
    thirds = origins + (targets - origins) / 3
    dual_points = F.normalize(thirds, dim=-1, eps=safe_eps(thirds.dtype))

    # slots[c] is the dual point on corner c's outgoing edge
    slots = torch.empty(n_corners, dtype=torch.int64, device=device)
    slots[fans.indices] = torch.arange(n_corners, dtype=torch.int64, device=device)

    ### Hexagon of triangle (a, b, c): for each corner, the third on its
    # outgoing edge, then the third leaving the next corner back towards it.
    # successors[next corner] is the corner at that point whose outgoing
    # edge points back at the current corner's point.
    corners = torch.arange(n_corners, dtype=torch.int64, device=device).reshape(-1, 3)
    hexagons = torch.stack(
        [slots[corners], slots[successors[corners.roll(-1, dims=1)]]], dim=-1
    ).reshape(-1)

    n_cells = mesh.n_cells
    hexagon_offsets = fans.offsets[-1] + 6 * torch.arange(
        1, n_cells + 1, dtype=torch.int64, device=device
    )
    polygons = Adjacency(
        offsets=torch.cat([fans.offsets, hexagon_offsets]),
        indices=torch.cat(
            [torch.arange(n_corners, dtype=torch.int64, device=device), hexagons]
        ),
    )
    return dual_points, polygons


def _triangulate_polygons(dual_points: torch.Tensor, polygons: Adjacency) -> Mesh:
    """Close every polygon with a centre point and fan-triangulate it."""
    polygon_ids, corners = polygons.expand_to_pairs()
    counts = polygons.counts

    ### Centre point: mean of the corners, pushed back onto the sphere
    sums = torch.zeros(
        (polygons.n_sources, 3), dtype=dual_points.dtype, device=dual_points.device
    ).index_add_(0, polygon_ids, dual_points[corners])
    centers = F.normalize(
        sums / counts[:, None].to(sums.dtype), dim=-1, eps=safe_eps(sums.dtype)
    )

    next_corners = corners[polygons.cyclic_next_positions()]
    cells = torch.stack(
        [corners, next_corners, len(dual_points) + polygon_ids], dim=-1
    )
    return Mesh(
        points=torch.cat([dual_points, centers], dim=0),
        cells=cells,
        cell_data={"dual_face": polygon_ids},
    )


def dualize_mesh(
    mesh: Mesh,
    class1: bool = True,
    face_degree: int | None = None,
) -> Mesh:
    """Build the Goldberg dual of a closed, consistently-wound triangle mesh.

    Parameters
    ----------
    mesh : Mesh
        Subdivided triangular seed (or any closed triangle mesh on the unit
        sphere whose triangles face outward).
    class1 : bool
        True for a Class 1 ``(m, 0)`` dual with corners at triangle
        centroids; False for a Class 2 ``(m, m)`` dual with corners at edge
        thirds.
    face_degree : int, optional
        Valence of the original seed vertices. When given, every point must
        have this valence or 6. When None, any valence of at least 3 is
        accepted.

    Returns
    -------
    Mesh
        Fan-triangulated dual. Polygons are emitted in ascending order of
        degree, and ``cell_data["dual_face"]`` maps each triangle to its
        polygon. With ``V``, ``E``, ``F`` the counts of the input, Class 1
        gives ``F + V`` points and ``2E`` triangles; Class 2 gives
        ``2E + V + F`` points and ``2E + 6F`` triangles.

    Raises
    ------
    InconsistentMeshError
        If the mesh is not a closed, consistently-wound 2-manifold, or a
        valence is not allowed by ``face_degree``.
    """
    ### Rebuild the ordered fan of every point, then classify by valence
    fans, successors = compute_corner_fans(mesh.cells, mesh.n_points)
    valences = fans.counts
    _check_valences(valences, face_degree)

    if class1:
        dual_points, polygons = _class1_polygons(mesh, fans)
    else:
        dual_points, polygons = _class2_polygons(mesh, fans, successors)

    polygons = _sort_polygons_by_degree(polygons)
    dual = _triangulate_polygons(dual_points, polygons)

    if logger.isEnabledFor(logging.DEBUG):
        degrees, counts = torch.unique(polygons.counts, return_counts=True)
        logger.debug(
            "Built class %d dual: %d polygons %s, %d points, %d triangles",
            1 if class1 else 2,
            polygons.n_sources,
            dict(zip(degrees.tolist(), counts.tolist())),
            dual.n_points,
            dual.n_cells,
        )
    return dual


def dualize(
    seed: SeedKind | str | SeedShape,
    complexity: int,
    class1: bool = True,
    interpolation: InterpolationMethod = "projected",
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Build a Goldberg polyhedron by subdividing a seed and taking its dual.

    Parameters
    ----------
    seed : SeedKind, str or SeedShape
        ``"tetrahedron"``, ``"octahedron"`` or ``"icosahedron"`` (or the
        matching :class:`SeedKind`), or custom triangular seed tables.
    complexity : int
        Number of new points inserted along each seed edge before dualizing.
    class1 : bool
        True for a Class 1 ``(m, 0)`` dual, False for Class 2 ``(m, m)``.
    interpolation : {"projected", "arc"}
        Great-circle interpolation policy for the subdivision.
    dtype : torch.dtype
        Floating dtype of the points.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Fan-triangulated Goldberg polyhedron on the unit sphere.

    Raises
    ------
    InvalidComplexityError
        If ``complexity`` is negative or not an integer.
    UnsupportedSeedError
        If the seed is unknown or has quadrilateral faces (the cube).

    Examples
    --------
    >>> from geodesic_mesh.validation import face_degree_histogram
    >>> face_degree_histogram(dualize("icosahedron", complexity=1))
    {5: 12, 6: 30}
    """
    check_complexity(complexity)

    if isinstance(seed, SeedShape):
        if not seed.is_triangular:
            raise UnsupportedSeedError(
                f"Duals are only built for triangular seeds, but got faces of "
                f"shape {tuple(seed.faces.shape)}"
            )
        face_degree = None
    else:
        kind = resolve_seed_kind(seed)
        if kind not in SEED_FACE_DEGREES:
            raise UnsupportedSeedError(
                f"Seed {kind.value!r} has no dual mapping; expected one of "
                f"{[k.value for k in SEED_FACE_DEGREES]}"
            )
        face_degree = SEED_FACE_DEGREES[kind]

    mesh = subdivide(
        seed,
        complexity=complexity,
        interpolation=interpolation,
        dtype=dtype,
        device=device,
    )
    return dualize_mesh(mesh, class1=class1, face_degree=face_degree)
