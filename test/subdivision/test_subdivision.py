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

"""Tests for geodesic subdivision of seed polyhedra."""

import pytest
import torch

from geodesic_mesh import (
    InconsistentMeshError,
    InvalidComplexityError,
    SeedKind,
    SeedShape,
    subdivide,
)
from geodesic_mesh.seeds import get_seed, tetrahedron
from geodesic_mesh.subdivision import subdivide_seed
from geodesic_mesh.subdivision._edges import EdgeTable
from geodesic_mesh.validation import euler_characteristic, validate_mesh

###############################################################################
# Counts and structure
###############################################################################


class TestSubdivisionCounts:
    """Tests for the number of points and triangles produced."""

    @pytest.mark.parametrize("complexity", [0, 1, 2, 3, 5])
    def test_counts(self, seed_name, complexity, subdivision_counts):
        """Test closed-form point and triangle counts for every seed."""
        mesh = subdivide(seed_name, complexity)

        n_points, n_cells = subdivision_counts(seed_name, complexity)
        assert mesh.n_points == n_points
        assert mesh.n_cells == n_cells

    def test_icosahedron_complexity_one(self):
        """Test the 80-triangle, 42-point icosahedral sphere."""
        mesh = subdivide(SeedKind.ICOSAHEDRON, 1)

        assert mesh.n_cells == 80
        assert mesh.n_points == 42

    @pytest.mark.parametrize("complexity", [1, 4])
    def test_triangles_per_seed_face(self, seed_name, complexity):
        """Test that each seed face yields (n+1)^2 or 2(n+1)^2 triangles."""
        seed = get_seed(seed_name)
        mesh = subdivide(seed_name, complexity)

        per_face = torch.bincount(mesh.cell_data["seed_face"], minlength=seed.n_faces)
        expected = (complexity + 1) ** 2 * (1 if seed.is_triangular else 2)
        assert (per_face == expected).all()

    def test_complexity_zero_returns_seed(self, seed_name):
        """Test that complexity 0 returns the seed vertices and triangulated faces."""
        seed = get_seed(seed_name)
        mesh = subdivide(seed_name, 0)
        triangles, face_ids = seed.triangulated_faces()

        assert torch.equal(mesh.points, seed.vertices)
        assert torch.equal(mesh.cells, triangles)
        assert torch.equal(mesh.cell_data["seed_face"], face_ids)

    def test_seed_vertices_come_first(self, seed_name):
        """Test that subdivision keeps the seed vertices at the front, unchanged."""
        seed = get_seed(seed_name)
        mesh = subdivide(seed_name, 3)
        assert torch.equal(mesh.points[: seed.n_vertices], seed.vertices)

    def test_topology_independent_of_interpolation(self, seed_name):
        """Test that both interpolation policies produce identical triangles."""
        projected = subdivide(seed_name, 4, interpolation="projected")
        arc = subdivide(seed_name, 4, interpolation="arc")

        assert torch.equal(projected.cells, arc.cells)
        assert projected.n_points == arc.n_points


###############################################################################
# Geometric and topological invariants
###############################################################################


class TestSubdivisionInvariants:
    """Tests for the properties every subdivided mesh must satisfy."""

    @pytest.mark.parametrize("complexity", [1, 2, 3])
    def test_points_on_unit_sphere(self, seed_name, complexity, interpolation):
        """Test that every point has unit length."""
        mesh = subdivide(seed_name, complexity, interpolation=interpolation)
        assert torch.allclose(
            mesh.points.norm(dim=-1), torch.ones(mesh.n_points), atol=1e-5
        )

    @pytest.mark.parametrize("complexity", [0, 1, 2, 3])
    def test_valid_indices_and_no_repeated_corners(self, seed_name, complexity):
        """Test index range and distinct corners per triangle."""
        mesh = subdivide(seed_name, complexity)
        cells = mesh.cells

        assert cells.min() >= 0
        assert cells.max() < mesh.n_points
        assert (cells[:, 0] != cells[:, 1]).all()
        assert (cells[:, 1] != cells[:, 2]).all()
        assert (cells[:, 2] != cells[:, 0]).all()

    @pytest.mark.parametrize("complexity", [0, 1, 2, 3])
    def test_closed_outward_surface(self, seed_name, complexity, interpolation):
        """Test closedness, consistent winding and outward orientation."""
        mesh = subdivide(seed_name, complexity, interpolation=interpolation)

        report = validate_mesh(mesh)

        assert report["valid"]
        assert report["is_closed_manifold"]
        assert report["signed_volume"] > 0
        assert euler_characteristic(mesh) == 2

    def test_every_triangle_faces_outward(self, seed_name):
        """Test that each triangle normal points away from the origin."""
        mesh = subdivide(seed_name, 3, dtype=torch.float64)
        outward = (mesh.cell_normals * mesh.cell_centroids).sum(dim=-1)
        assert (outward > 0).all()

    def test_no_duplicate_points(self, seed_name):
        """Test that shared edges reuse points instead of duplicating them."""
        mesh = subdivide(seed_name, 3, dtype=torch.float64)
        distances = torch.cdist(mesh.points, mesh.points)
        distances.fill_diagonal_(float("inf"))
        assert distances.min() > 1e-6

    def test_edge_points_run_from_lower_index(self):
        """Test that edge k's points start next to its lower-indexed endpoint."""
        seed = get_seed("icosahedron", dtype=torch.float64)
        complexity = 3
        mesh = subdivide("icosahedron", complexity, dtype=torch.float64)

        for k, (a, b) in enumerate(seed.edges.tolist()):
            low, high = min(a, b), max(a, b)
            first = seed.n_vertices + k * complexity
            run = mesh.points[first : first + complexity]
            to_low = (run - seed.vertices[low]).norm(dim=-1)
            to_high = (run - seed.vertices[high]).norm(dim=-1)
            assert (to_low[1:] > to_low[:-1]).all()
            assert (to_high[1:] < to_high[:-1]).all()

    def test_arc_edge_points_evenly_spaced(self):
        """Test that arc interpolation spaces edge points at equal angles."""
        complexity = 4
        mesh = subdivide("octahedron", complexity, interpolation="arc", dtype=torch.float64)
        seed = get_seed("octahedron", dtype=torch.float64)

        a, b = seed.edges[0].tolist()
        run = mesh.points[seed.n_vertices : seed.n_vertices + complexity]
        chain = torch.cat([seed.vertices[[a]], run, seed.vertices[[b]]])
        steps = (chain[1:] - chain[:-1]).norm(dim=-1)
        assert torch.allclose(steps, steps[0].expand_as(steps))

    def test_dtype_and_device(self, device):
        """Test that dtype and device are honored."""
        mesh = subdivide("octahedron", 2, dtype=torch.float64, device=device)

        assert mesh.points.dtype == torch.float64
        assert mesh.points.device.type == device
        assert mesh.cells.device.type == device
        assert mesh.cells.dtype == torch.int64

    def test_custom_seed_shape(self):
        """Test that a ready-made SeedShape can be subdivided directly."""
        mesh = subdivide_seed(tetrahedron.load(), 2)
        assert mesh.n_cells == 4 * 9
        assert validate_mesh(mesh)["valid"]

    def test_float32_seed_shape_in_float64(self):
        """Test that a float32 SeedShape subdivides at float64 precision."""
        mesh = subdivide(get_seed("icosahedron"), 2, dtype=torch.float64)

        assert mesh.points.dtype == torch.float64
        assert mesh.n_cells == 20 * 9
        assert validate_mesh(mesh)["valid"]


###############################################################################
# Edge lookup
###############################################################################


class TestEdgeTable:
    """Tests for the seed edge lookup."""

    def test_run_direction(self):
        """Test that runs follow the traversal direction of the face."""
        table = EdgeTable(torch.tensor([[0, 1], [2, 1]]), n_seed_vertices=3, complexity=3)

        assert table.run(0, 1) == [3, 4, 5]
        assert table.run(1, 0) == [5, 4, 3]
        # Stored [2, 1], but points still run from the lower index 1
        assert table.run(1, 2) == [6, 7, 8]
        assert table.run(2, 1) == [8, 7, 6]

    def test_zero_complexity_runs_are_empty(self):
        """Test that complexity 0 gives empty runs."""
        table = EdgeTable(torch.tensor([[0, 1]]), n_seed_vertices=2, complexity=0)
        assert table.run(1, 0) == []


###############################################################################
# Error handling
###############################################################################


class TestSubdivisionErrors:
    """Tests for subdivision error handling."""

    @pytest.mark.parametrize("complexity", [-1, -10])
    def test_negative_complexity(self, complexity):
        """Test that negative complexity is rejected."""
        with pytest.raises(InvalidComplexityError, match="non-negative"):
            subdivide("icosahedron", complexity)

    @pytest.mark.parametrize("complexity", [1.5, "2", True, None])
    def test_non_integer_complexity(self, complexity):
        """Test that non-integer complexity is rejected."""
        with pytest.raises(InvalidComplexityError, match="integer"):
            subdivide("icosahedron", complexity)

    def test_invalid_complexity_is_a_value_error(self):
        """Test that complexity errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            subdivide("cube", -1)

    def test_unknown_interpolation(self):
        """Test that unknown interpolation policies are rejected before work."""
        with pytest.raises(ValueError, match="Unknown interpolation method"):
            subdivide("cube", 1, interpolation="linear")

    def test_missing_edge(self):
        """Test that a face side with no matching edge fails fast."""
        seed = tetrahedron.load()
        broken = SeedShape(vertices=seed.vertices, edges=seed.edges[:-1], faces=seed.faces)

        with pytest.raises(InconsistentMeshError, match="No seed edge joins"):
            subdivide_seed(broken, 1)

    def test_duplicate_edge(self):
        """Test that a repeated edge fails fast."""
        seed = tetrahedron.load()
        edges = torch.cat([seed.edges, seed.edges[:1].flip(-1)])
        broken = SeedShape(vertices=seed.vertices, edges=edges, faces=seed.faces)

        with pytest.raises(InconsistentMeshError, match="more than once"):
            subdivide_seed(broken, 1)
