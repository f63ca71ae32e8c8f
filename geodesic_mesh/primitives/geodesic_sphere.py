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

"""Geodesic sphere surface in 3D space.

A sphere created by subdividing a seed polyhedron and projecting every new
point onto the sphere surface.

Dimensional: 2D manifold in 3D space (closed, no boundary).
"""

import torch

from geodesic_mesh.geometry.interpolation import InterpolationMethod
from geodesic_mesh.mesh import Mesh
from geodesic_mesh.seeds import SeedKind
from geodesic_mesh.subdivision import subdivide


def load(
    radius: float = 1.0,
    complexity: int = 2,
    seed: SeedKind | str = SeedKind.ICOSAHEDRON,
    interpolation: InterpolationMethod = "projected",
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a geodesic sphere of a given radius.

    Unlike repeated midpoint subdivision, the triangle count grows with the
    square of ``complexity + 1`` rather than by powers of four:

    - icosahedron: ``20 * (complexity + 1)**2`` triangles
    - octahedron: ``8 * (complexity + 1)**2`` triangles
    - tetrahedron: ``4 * (complexity + 1)**2`` triangles
    - cube: ``12 * (complexity + 1)**2`` triangles

    Parameters
    ----------
    radius : float
        Radius of the sphere.
    complexity : int
        Number of new points inserted along each seed edge.
    seed : SeedKind or str
        Seed polyhedron to subdivide.
    interpolation : {"projected", "arc"}
        Great-circle interpolation policy.
    dtype : torch.dtype
        Floating dtype of the points.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Closed triangle mesh with every point at distance ``radius`` from
        the origin.

    Examples
    --------
    >>> from geodesic_mesh.primitives import geodesic_sphere
    >>> mesh = geodesic_sphere.load(radius=2.0, complexity=2)
    >>> mesh.n_cells  # 20 * 3**2
    180
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius=}")

    mesh = subdivide(
        seed,
        complexity=complexity,
        interpolation=interpolation,
        dtype=dtype,
        device=device,
    )
    return Mesh(points=mesh.points * radius, cells=mesh.cells, cell_data=mesh.cell_data)
