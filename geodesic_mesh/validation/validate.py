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

"""Mesh validation for generated spheres.

Checks the properties every geodesic or Goldberg mesh is built to satisfy:
valid indices, no repeated corner within a triangle, points on the sphere,
a closed consistently-wound surface, and outward orientation.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING

import torch

from geodesic_mesh.utilities._tolerances import degenerate_tol

if TYPE_CHECKING:
    from geodesic_mesh.mesh import Mesh


def _directed_edge_keys(mesh: "Mesh") -> torch.Tensor:
    """Encode every directed triangle edge ``a -> b`` as ``a * n_points + b``."""
    cells = mesh.cells.to(torch.int64)
    return (cells * mesh.n_points + cells.roll(-1, dims=1)).reshape(-1)


def validate_mesh(
    mesh: "Mesh",
    check_out_of_bounds: bool = True,
    check_repeated_vertices: bool = True,
    check_unit_norm: bool = True,
    check_closed_manifold: bool = True,
    check_orientation: bool = True,
    radius: float = 1.0,
    tolerance: float | None = None,
    raise_on_error: bool = False,
) -> Mapping[str, bool | int | float | torch.Tensor]:
    """Validate mesh integrity against the invariants of generated spheres.

    Parameters
    ----------
    mesh : Mesh
        Mesh to validate
    check_out_of_bounds : bool
        Check that cell indices are valid
    check_repeated_vertices : bool
        Check that no triangle uses the same point twice
    check_unit_norm : bool
        Check that every point lies at distance ``radius`` from the origin
    check_closed_manifold : bool
        Check that every directed edge appears exactly once and its reverse
        also appears, i.e. the surface is closed and consistently wound
    check_orientation : bool
        Check that the enclosed signed volume is positive (outward winding)
    radius : float
        Expected sphere radius for ``check_unit_norm``.
    tolerance : float | None
        Relative tolerance on point radii. If ``None`` (default), uses a
        dtype-aware tolerance of 100 machine epsilons.
    raise_on_error : bool
        If True, raise ValueError on first error. If False,
        return dict with all validation results.

    Returns
    -------
    Mapping[str, bool | int | float | torch.Tensor]
        Dictionary with validation results:
            - "valid": bool, True if all enabled checks passed
            - "n_out_of_bounds_cells": int
            - "out_of_bounds_cell_indices": Tensor (if any found)
            - "n_repeated_vertex_cells": int
            - "repeated_vertex_cell_indices": Tensor (if any found)
            - "n_off_sphere_points": int
            - "max_radius_error": float
            - "n_duplicate_directed_edges": int
            - "n_unmatched_directed_edges": int
            - "is_closed_manifold": bool
            - "signed_volume": float

    Raises
    ------
    ValueError
        If raise_on_error=True and validation fails

    Examples
    --------
    >>> from geodesic_mesh import subdivide
    >>> report = validate_mesh(subdivide("octahedron", complexity=2))
    >>> assert report["valid"] == True
    """
    ### Default tolerance based on point dtype
    if tolerance is None:
        tolerance = degenerate_tol(mesh.points.dtype)

    results = {
        "valid": True,
    }

    ### Check for out-of-bounds indices FIRST (before any geometric computations)
    if check_out_of_bounds:
        out_of_bounds_cells = ((mesh.cells < 0) | (mesh.cells >= mesh.n_points)).any(
            dim=1
        )
        n_out_of_bounds = int(out_of_bounds_cells.sum().item())
        results["n_out_of_bounds_cells"] = n_out_of_bounds

        if n_out_of_bounds > 0:
            results["valid"] = False
            results["out_of_bounds_cell_indices"] = torch.where(out_of_bounds_cells)[0]

            if raise_on_error:
                raise ValueError(
                    f"Found {n_out_of_bounds} cells with out-of-bounds indices.\n"
                    f"Cell indices must be in range [0, {mesh.n_points}).\n"
                    f"Problem cells: {results['out_of_bounds_cell_indices'].tolist()[:10]}"
                )

            ### Can't compute geometry with invalid indices
            return results

    if check_repeated_vertices:
        cells = mesh.cells
        repeated = (
            (cells[:, 0] == cells[:, 1])
            | (cells[:, 1] == cells[:, 2])
            | (cells[:, 2] == cells[:, 0])
        )
        n_repeated = int(repeated.sum().item())
        results["n_repeated_vertex_cells"] = n_repeated

        if n_repeated > 0:
            results["valid"] = False
            results["repeated_vertex_cell_indices"] = torch.where(repeated)[0]

            if raise_on_error:
                raise ValueError(
                    f"Found {n_repeated} cells that use a point more than once.\n"
                    f"Problem cells: {results['repeated_vertex_cell_indices'].tolist()[:10]}"
                )

    if check_unit_norm:
        radius_errors = (mesh.points.norm(dim=-1) / radius - 1).abs()
        max_error = radius_errors.max().item() if mesh.n_points > 0 else 0.0
        n_off_sphere = int((radius_errors > tolerance).sum().item())
        results["n_off_sphere_points"] = n_off_sphere
        results["max_radius_error"] = max_error

        if n_off_sphere > 0:
            results["valid"] = False

            if raise_on_error:
                raise ValueError(
                    f"Found {n_off_sphere} points off the sphere of {radius=}.\n"
                    f"Largest relative radius error: {max_error=} > {tolerance=}"
                )

    if check_closed_manifold:
        keys = _directed_edge_keys(mesh)
        unique_keys = torch.unique(keys)
        n_duplicates = len(keys) - len(unique_keys)

        ### The reverse of every directed edge b -> a must be present too
        reversed_keys = (unique_keys % mesh.n_points) * mesh.n_points + (
            unique_keys // mesh.n_points
        )
        n_unmatched = int((~torch.isin(reversed_keys, unique_keys)).sum().item())

        results["n_duplicate_directed_edges"] = n_duplicates
        results["n_unmatched_directed_edges"] = n_unmatched
        results["is_closed_manifold"] = n_duplicates == 0 and n_unmatched == 0

        if not results["is_closed_manifold"]:
            results["valid"] = False

            if raise_on_error:
                raise ValueError(
                    f"Mesh is not a closed, consistently-wound surface: "
                    f"{n_duplicates} repeated and {n_unmatched} unmatched directed edges."
                )

    if check_orientation:
        signed_volume = mesh.signed_volume.item()
        results["signed_volume"] = signed_volume

        if not signed_volume > 0:
            results["valid"] = False

            if raise_on_error:
                raise ValueError(
                    f"Mesh must enclose a positive signed volume (outward-facing "
                    f"triangles), but got {signed_volume=}"
                )

    return results
