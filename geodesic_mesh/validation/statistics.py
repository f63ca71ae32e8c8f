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

"""Topological and geometric summaries of generated meshes."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

import torch

if TYPE_CHECKING:
    from geodesic_mesh.mesh import Mesh


def count_edges(mesh: "Mesh") -> int:
    """Number of distinct undirected edges used by the triangles."""
    cells = mesh.cells.to(torch.int64)
    edges = torch.stack([cells, cells.roll(-1, dims=1)], dim=-1).reshape(-1, 2)
    edges = torch.sort(edges, dim=-1).values
    return len(torch.unique(edges, dim=0))


def euler_characteristic(mesh: "Mesh") -> int:
    """Compute ``V - E + F``; 2 for any closed surface of genus 0.

    Examples
    --------
    >>> from geodesic_mesh import subdivide
    >>> euler_characteristic(subdivide("cube", complexity=3))
    2
    """
    return mesh.n_points - count_edges(mesh) + mesh.n_cells


def face_degree_histogram(mesh: "Mesh") -> dict[int, int]:
    """Count the polygons of a fan-triangulated dual by number of sides.

    Each polygon of degree ``d`` was split into ``d`` triangles, so the
    degree is the number of triangles sharing a ``cell_data["dual_face"]``
    value.

    Returns
    -------
    dict[int, int]
        ``{degree: number_of_polygons}`` in ascending order of degree.

    Raises
    ------
    KeyError
        If the mesh carries no ``"dual_face"`` cell data.
    """
    if "dual_face" not in mesh.cell_data.keys():
        raise KeyError(
            "face_degree_histogram requires cell_data['dual_face'], which only "
            "dual meshes carry."
        )
    degrees = torch.bincount(mesh.cell_data["dual_face"])
    values, counts = torch.unique(degrees[degrees > 0], return_counts=True)
    return dict(zip(values.tolist(), counts.tolist()))


def compute_mesh_statistics(mesh: "Mesh") -> Mapping[str, int | float | dict]:
    """Summarize a generated mesh.

    Returns
    -------
    Mapping[str, int | float | dict]
        Dictionary with:
            - "n_points", "n_cells", "n_edges": int
            - "euler_characteristic": int
            - "min_area", "max_area", "mean_area": float
            - "area_ratio": float, max_area / min_area
            - "face_degree_histogram": dict (dual meshes only)
    """
    n_edges = count_edges(mesh)
    stats = {
        "n_points": mesh.n_points,
        "n_cells": mesh.n_cells,
        "n_edges": n_edges,
        "euler_characteristic": mesh.n_points - n_edges + mesh.n_cells,
    }

    if mesh.n_cells > 0:
        areas = mesh.cell_areas
        stats["min_area"] = areas.min().item()
        stats["max_area"] = areas.max().item()
        stats["mean_area"] = areas.mean().item()
        stats["area_ratio"] = stats["max_area"] / stats["min_area"]

    if "dual_face" in mesh.cell_data.keys():
        stats["face_degree_histogram"] = face_degree_histogram(mesh)

    return stats
