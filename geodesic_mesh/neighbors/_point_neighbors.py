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

"""Compute point-based adjacency relationships in closed triangle meshes.

This module provides functions to compute:
- Point-to-cells adjacency (star of each vertex, unordered)
- Point fans (the cells and neighbors around each vertex in rotational order)

Generated meshes carry no adjacency structure, so fans are rebuilt from the
triangle winding alone. Each triangle corner is described by its point and the
two other corners of its triangle, ``prev`` and ``next`` in winding order. The
corner that follows corner ``c`` around its point is the one whose ``next``
equals ``prev[c]``. Rather than scanning for that match, every corner is keyed
once by its outgoing directed edge ``point -> next`` and looked up by
``point -> prev``.
"""

import logging
from typing import TYPE_CHECKING

import torch

from geodesic_mesh.errors import InconsistentMeshError
from geodesic_mesh.neighbors._adjacency import Adjacency, build_adjacency_from_pairs

if TYPE_CHECKING:
    from geodesic_mesh.mesh import Mesh

logger = logging.getLogger(__name__)


def get_point_to_cells_adjacency(mesh: "Mesh") -> Adjacency:
    """Compute the star of each vertex (all cells containing each point).

    Parameters
    ----------
    mesh : Mesh
        Input triangle mesh.

    Returns
    -------
    Adjacency
        Adjacency where adjacency.to_list()[i] contains all cell indices that
        contain point i, in ascending order. Isolated points have empty lists.

    Examples
    --------
        >>> points = torch.eye(3)
        >>> cells = torch.tensor([[0, 1, 2], [0, 2, 1]])
        >>> get_point_to_cells_adjacency(Mesh(points=points, cells=cells)).to_list()
        [[0, 1], [0, 1], [0, 1]]
    """
    n_cells, n_vertices_per_cell = mesh.cells.shape

    ### Create (point_id, cell_id) pairs for all vertices in all cells
    point_ids = mesh.cells.reshape(-1)
    cell_ids = torch.arange(
        n_cells, dtype=torch.int64, device=mesh.cells.device
    ).repeat_interleave(n_vertices_per_cell)

    return build_adjacency_from_pairs(
        source_indices=point_ids,
        target_indices=cell_ids,
        n_sources=mesh.n_points,
    )


def _compute_corner_successors(cells: torch.Tensor, n_points: int) -> torch.Tensor:
    """Find, for every triangle corner, the next corner around the same point.

    Corner ``c`` is ``cells.reshape(-1)[c]``, i.e. corner ``k`` of triangle
    ``t`` has id ``3 * t + k``.

    Parameters
    ----------
    cells : torch.Tensor
        Triangle indices, shape (n_cells, 3).
    n_points : int
        Number of points referenced by ``cells``.

    Returns
    -------
    torch.Tensor
        Shape (3 * n_cells,), dtype int64. Corner id of the successor of each
        corner.

    Raises
    ------
    InconsistentMeshError
        If a directed edge appears twice (inconsistent winding or a
        non-manifold edge), or if some corner has no successor (an open
        boundary).
    """
    cells = cells.to(torch.int64)
    corner_points = cells.reshape(-1)
    corner_next = cells.roll(-1, dims=1).reshape(-1)
    corner_prev = cells.roll(1, dims=1).reshape(-1)

    ### Key every corner by its outgoing directed edge point -> next
    outgoing_keys = corner_points * n_points + corner_next
    order = torch.argsort(outgoing_keys)
    sorted_keys = outgoing_keys[order]

    repeated = sorted_keys[1:] == sorted_keys[:-1]
    if repeated.any():
        key = sorted_keys[1:][repeated][0].item()
        raise InconsistentMeshError(
            f"Directed edge ({key // n_points} -> {key % n_points}) appears in more "
            f"than one triangle; the mesh is not a consistently-wound 2-manifold."
        )

    ### The successor of a corner owns the directed edge point -> prev
    wanted_keys = corner_points * n_points + corner_prev
    positions = torch.searchsorted(sorted_keys, wanted_keys).clamp(
        max=len(sorted_keys) - 1
    )
    found = sorted_keys[positions] == wanted_keys
    if not found.all():
        missing = torch.nonzero(~found)[0].item()
        raise InconsistentMeshError(
            f"Corner {missing} (point {corner_points[missing].item()}) has no "
            f"neighboring triangle across edge "
            f"({corner_points[missing].item()}, {corner_prev[missing].item()}); "
            f"the mesh is not closed."
        )

    return order[positions]


def compute_corner_fans(
    cells: torch.Tensor, n_points: int
) -> tuple[Adjacency, torch.Tensor]:
    """Order the triangle corners around every point.

    All fans are walked in parallel, one step per valence level, starting
    from each point's lowest corner id. Each walk is bounded by the number of
    corners at its point: it must visit every one of them exactly once and
    then return to its start.

    Parameters
    ----------
    cells : torch.Tensor
        Triangle indices, shape (n_cells, 3).
    n_points : int
        Number of points referenced by ``cells``.

    Returns
    -------
    tuple[Adjacency, torch.Tensor]
        ``(fans, successors)``. ``fans.to_list()[i]`` holds the corner ids at
        point ``i`` in counter-clockwise order (seen from the side the
        triangle normals face). ``successors`` is the per-corner successor
        from :func:`_compute_corner_successors`.

    Raises
    ------
    InconsistentMeshError
        If any fan closes before visiting all of its corners, or does not
        close at all.
    """
    device = cells.device
    n_corners = cells.numel()
    successors = _compute_corner_successors(cells, n_points)

    corners_by_point = build_adjacency_from_pairs(
        source_indices=cells.reshape(-1).to(torch.int64),
        target_indices=torch.arange(n_corners, dtype=torch.int64, device=device),
        n_sources=n_points,
    )

    ### Walk every non-isolated point's fan in lockstep
    counts = corners_by_point.counts
    active_points = torch.nonzero(counts > 0).squeeze(-1)
    point_counts = counts[active_points]
    point_offsets = corners_by_point.offsets[active_points]
    starts = corners_by_point.indices[point_offsets]

    ordered = torch.empty_like(corners_by_point.indices)
    current = starts
    max_valence = int(point_counts.max().item()) if len(active_points) > 0 else 0
    for step in range(max_valence):
        live = point_counts > step
        if step > 0 and ((current == starts) & live).any():
            point = active_points[(current == starts) & live][0].item()
            raise InconsistentMeshError(
                f"Fan around point {point} closed after {step} of "
                f"{counts[point].item()} incident triangles."
            )
        ordered[point_offsets[live] + step] = current[live]
        current = torch.where(live, successors[current], current)

    if (current != starts).any():
        point = active_points[current != starts][0].item()
        raise InconsistentMeshError(
            f"Fan around point {point} did not close after visiting all "
            f"{counts[point].item()} incident triangles."
        )

    logger.debug(
        "Ordered %d corner fans (max valence %d)", len(active_points), max_valence
    )
    return Adjacency(offsets=corners_by_point.offsets, indices=ordered), successors


def get_point_fans(mesh: "Mesh") -> tuple[Adjacency, Adjacency]:
    """Compute the cells and neighboring points around each point, in order.

    Parameters
    ----------
    mesh : Mesh
        Closed, consistently-wound triangle mesh.

    Returns
    -------
    tuple[Adjacency, Adjacency]
        ``(fan_cells, fan_neighbors)`` sharing the same offsets.
        ``fan_cells.to_list()[i]`` lists the cells around point ``i``
        counter-clockwise; ``fan_neighbors.to_list()[i][k]`` is the point
        reached from ``i`` along the edge that cell ``fan_cells[i][k]`` leaves
        by (its ``next`` corner).

    Raises
    ------
    InconsistentMeshError
        If the mesh is not a closed, consistently-wound 2-manifold.

    Examples
    --------
        >>> from geodesic_mesh import subdivide
        >>> fan_cells, fan_neighbors = get_point_fans(subdivide("octahedron", 0))
        >>> fan_cells.counts.tolist()
        [4, 4, 4, 4, 4, 4]
    """
    fans, _ = compute_corner_fans(mesh.cells, mesh.n_points)
    corner_next = mesh.cells.roll(-1, dims=1).reshape(-1).to(torch.int64)
    return (
        Adjacency(offsets=fans.offsets, indices=fans.indices // 3),
        Adjacency(offsets=fans.offsets, indices=corner_next[fans.indices]),
    )
