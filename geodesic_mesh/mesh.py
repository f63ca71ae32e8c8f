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

from typing import TYPE_CHECKING, Any, Self

import torch
import torch.nn.functional as F
from tensordict import TensorDict, tensorclass

from geodesic_mesh.utilities._tolerances import safe_eps
from geodesic_mesh.utilities.mesh_repr import format_mesh_repr


@tensorclass(tensor_only=True)
class Mesh:
    r"""A triangulated closed surface embedded in 3D space.

    This is the in-memory value returned by every generator in this package: a
    vertex array and a triangle index array, with no stored adjacency. Anything
    relational (incident faces, fans, edges) is re-derived from shared indices
    when needed; see :mod:`geodesic_mesh.neighbors`.

    Per-triangle provenance travels alongside the geometry in ``cell_data``, a
    ``TensorDict`` whose batch dimension is ``n_cells``. Generators write:

    - ``cell_data["seed_face"]``: the seed face a subdivided triangle came from.
    - ``cell_data["dual_face"]``: the dual polygon a fan triangle belongs to.

    Triangles are wound counter-clockwise when seen from outside, so
    :attr:`cell_normals` point away from the origin and :attr:`signed_volume`
    is positive for every generated sphere.

    Parameters
    ----------
    points : torch.Tensor
        Vertex coordinates, shape (n_points, 3), floating dtype.
    cells : torch.Tensor
        Triangle vertex indices, shape (n_cells, 3), integer dtype.
    cell_data : TensorDict or dict[str, torch.Tensor], optional
        Per-triangle data. Dicts are automatically converted to TensorDict.

    Examples
    --------
    >>> points = torch.eye(3)
    >>> mesh = Mesh(points=points, cells=torch.tensor([[0, 1, 2]]))
    >>> mesh.n_points, mesh.n_cells
    (3, 1)
    >>> mesh.cell_normals
    tensor([[0.5774, 0.5774, 0.5774]])
    """

    points: torch.Tensor  # shape: (n_points, 3)
    cells: torch.Tensor  # shape: (n_cells, 3)
    cell_data: TensorDict | None = None

    def __post_init__(self):
        ### Validate shapes and dtypes
        if not torch.compiler.is_compiling():
            if self.points.ndim != 2 or self.points.shape[-1] != 3:
                raise ValueError(
                    f"`points` must have shape (n_points, 3), but got {self.points.shape=}."
                )
            if self.cells.ndim != 2 or self.cells.shape[-1] != 3:
                raise ValueError(
                    f"`cells` must have shape (n_cells, 3), but got {self.cells.shape=}."
                )
            if torch.is_floating_point(self.cells):
                raise TypeError(
                    f"`cells` must have an int-like dtype, but got {self.cells.dtype=}."
                )
            if self.points.device != self.cells.device:
                raise ValueError(
                    f"`points` and `cells` must be on the same device, "
                    f"but got {self.points.device=} and {self.cells.device=}."
                )

        ### Batch cell data on the cells
        cell_data = self.cell_data
        if isinstance(cell_data, TensorDict):
            cell_data.batch_size = torch.Size([self.n_cells])  # Ensure shape-compatible
        else:
            cell_data = TensorDict(
                {} if cell_data is None else dict(cell_data),
                batch_size=torch.Size([self.n_cells]),
                device=self.cells.device,
            )
        self.cell_data = cell_data

    if TYPE_CHECKING:
        # Type stub for the `to` method dynamically added by @tensorclass.
        def to(self, *args: Any, **kwargs: Any) -> Self:
            """Move mesh and all attached data to specified device or dtype."""
            ...

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_spatial_dims(self) -> int:
        return self.points.shape[-1]

    @property
    def n_cells(self) -> int:
        return self.cells.shape[0]

    @property
    def n_manifold_dims(self) -> int:
        return self.cells.shape[-1] - 1

    @property
    def cell_centroids(self) -> torch.Tensor:
        """Compute the arithmetic mean of each triangle's vertices.

        Returns
        -------
        torch.Tensor
            Tensor of shape (n_cells, 3). Centroids lie strictly inside the
            sphere; normalize them to project back onto it.
        """
        return self.points[self.cells].mean(dim=1)

    @property
    def cell_areas(self) -> torch.Tensor:
        """Compute triangle areas using the Gram determinant method.

        The area of a triangle with vertices (v0, v1, v2) is:
            Area = (1/2) * sqrt(det(E^T @ E))
        where E is the matrix with columns (v1-v0, v2-v0).

        Returns
        -------
        torch.Tensor
            Tensor of shape (n_cells,) containing the area of each triangle.
        """
        ### Compute relative vectors from first vertex to the other two
        # Shape: (n_cells, 2, 3)
        relative_vectors = (
            self.points[self.cells[:, 1:]] - self.points[self.cells[:, [0]]]
        )

        ### Gram matrix G = E^T @ E, shape (n_cells, 2, 2)
        gram_matrix = torch.matmul(relative_vectors, relative_vectors.transpose(-2, -1))

        return gram_matrix.det().abs().sqrt() / 2

    @property
    def cell_normals(self) -> torch.Tensor:
        """Compute unit normal vectors following the right-hand rule.

        For a triangle (v0, v1, v2) the normal is the normalized cross product
        (v1 - v0) × (v2 - v0). Counter-clockwise triangles seen from outside the
        sphere therefore get outward normals.

        Returns
        -------
        torch.Tensor
            Tensor of shape (n_cells, 3) containing unit normals.
        """
        corners = self.points[self.cells]
        normals = torch.linalg.cross(
            corners[:, 1] - corners[:, 0], corners[:, 2] - corners[:, 0], dim=-1
        )
        return F.normalize(normals, dim=-1, eps=safe_eps(normals.dtype))

    @property
    def signed_volume(self) -> torch.Tensor:
        """Compute the signed volume enclosed by the surface.

        Sums the signed volumes of the tetrahedra (origin, v0, v1, v2):
            V = (1/6) * sum(v0 · (v1 × v2))

        The result is positive when triangles face outward, negative when
        they face inward, and meaningless for open surfaces.

        Returns
        -------
        torch.Tensor
            Scalar tensor with the enclosed volume.
        """
        corners = self.points[self.cells]
        triple_products = (
            corners[:, 0] * torch.linalg.cross(corners[:, 1], corners[:, 2], dim=-1)
        ).sum(dim=-1)
        return triple_products.sum() / 6


### Override the tensorclass __repr__ with custom formatting
# Note: Must be done after class definition because @tensorclass overrides __repr__
# even when defined inside the class body
def _mesh_repr(self) -> str:
    return format_mesh_repr(self)


Mesh.__repr__ = _mesh_repr  # type: ignore
