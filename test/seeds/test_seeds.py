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

"""Tests for the seed polyhedron tables."""

import pytest
import torch

from geodesic_mesh.errors import UnsupportedSeedError
from geodesic_mesh.seeds import (
    SEED_FACE_DEGREES,
    SeedKind,
    SeedShape,
    get_seed,
    resolve_seed_kind,
)


def _signed_face_volumes(seed: SeedShape) -> torch.Tensor:
    triangles, _ = seed.triangulated_faces()
    corners = seed.vertices.double()[triangles]
    return (
        corners[:, 0] * torch.linalg.cross(corners[:, 1], corners[:, 2], dim=-1)
    ).sum(dim=-1)


class TestSeedTables:
    """Tests for the vertex, edge and face tables of the built-in seeds."""

    @pytest.mark.parametrize(
        "name,n_vertices,n_edges,n_faces,face_size",
        [
            ("tetrahedron", 4, 6, 4, 3),
            ("cube", 8, 12, 6, 4),
            ("octahedron", 6, 12, 8, 3),
            ("icosahedron", 12, 30, 20, 3),
        ],
    )
    def test_table_sizes(self, name, n_vertices, n_edges, n_faces, face_size):
        """Test the number of vertices, edges and faces of each seed."""
        seed = get_seed(name)

        assert seed.n_vertices == n_vertices
        assert seed.n_edges == n_edges
        assert seed.n_faces == n_faces
        assert seed.faces.shape[-1] == face_size
        assert seed.n_vertices - seed.n_edges + seed.n_faces == 2

    def test_vertices_are_unit_vectors(self, seed_name):
        """Test that every seed vertex lies on the unit sphere."""
        seed = get_seed(seed_name, dtype=torch.float64)
        assert torch.allclose(
            seed.vertices.norm(dim=-1), torch.ones(seed.n_vertices, dtype=torch.float64)
        )

    def test_edges_have_equal_length(self, seed_name):
        """Test that each seed is regular (all edges the same length)."""
        seed = get_seed(seed_name, dtype=torch.float64)
        lengths = (seed.vertices[seed.edges[:, 0]] - seed.vertices[seed.edges[:, 1]]).norm(
            dim=-1
        )
        assert torch.allclose(lengths, lengths[0].expand_as(lengths))

    def test_edges_are_unique(self, seed_name):
        """Test that no unordered pair appears twice in the edge table."""
        seed = get_seed(seed_name)
        canonical = torch.sort(seed.edges, dim=-1).values
        assert len(torch.unique(canonical, dim=0)) == seed.n_edges

    def test_face_sides_are_edges(self, seed_name):
        """Test that every side of every face is listed as an edge."""
        seed = get_seed(seed_name)
        edges = {tuple(sorted(edge)) for edge in seed.edges.tolist()}
        for face in seed.faces.tolist():
            for a, b in zip(face, face[1:] + face[:1]):
                assert tuple(sorted((a, b))) in edges

    def test_faces_wind_outward(self, seed_name):
        """Test that every face is counter-clockwise seen from outside."""
        seed = get_seed(seed_name)
        assert (_signed_face_volumes(seed) > 0).all()

    def test_dtype_and_device(self, seed_name, device):
        """Test that dtype and device are honored."""
        seed = get_seed(seed_name, dtype=torch.float64, device=device)

        assert seed.vertices.dtype == torch.float64
        assert seed.vertices.device.type == device
        assert seed.edges.dtype == torch.int64
        assert seed.faces.device.type == device


class TestSeedResolution:
    """Tests for resolving seeds by enum, name or value."""

    def test_resolve_by_enum_and_name(self):
        """Test that enum members and case-insensitive names resolve."""
        assert resolve_seed_kind(SeedKind.CUBE) is SeedKind.CUBE
        assert resolve_seed_kind("Octahedron") is SeedKind.OCTAHEDRON
        assert resolve_seed_kind("icosahedron") is SeedKind.ICOSAHEDRON

    def test_seed_shape_passthrough(self):
        """Test that a SeedShape is accepted and moved to the requested dtype."""
        seed = get_seed("tetrahedron")
        converted = get_seed(seed, dtype=torch.float64)

        assert converted.vertices.dtype == torch.float64
        assert torch.equal(converted.faces, seed.faces)

    def test_seed_shape_widened_to_unit_norm(self):
        """Test that widening a float32 SeedShape keeps float64 unit vectors."""
        seed = get_seed("icosahedron", dtype=torch.float32)
        converted = get_seed(seed, dtype=torch.float64)
        norms = converted.vertices.norm(dim=-1)

        assert torch.allclose(norms, torch.ones_like(norms), rtol=0, atol=1e-14)

    def test_face_degrees(self):
        """Test the dual face degree table."""
        assert SEED_FACE_DEGREES[SeedKind.TETRAHEDRON] == 3
        assert SEED_FACE_DEGREES[SeedKind.OCTAHEDRON] == 4
        assert SEED_FACE_DEGREES[SeedKind.ICOSAHEDRON] == 5
        assert SeedKind.CUBE not in SEED_FACE_DEGREES

    def test_triangulated_quads(self):
        """Test that quads split into two triangles that share the v1-v3 diagonal."""
        seed = get_seed("cube")
        triangles, face_ids = seed.triangulated_faces()

        assert triangles.shape == (12, 3)
        assert face_ids.tolist() == [0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5]
        assert triangles[:2].tolist() == [[0, 1, 3], [0, 3, 2]]


class TestSeedErrors:
    """Tests for seed lookup and table validation errors."""

    @pytest.mark.parametrize("name", ["dodecahedron", "", 3])
    def test_unknown_seed(self, name):
        """Test that unknown seeds are rejected."""
        with pytest.raises(UnsupportedSeedError, match="Unknown seed"):
            get_seed(name)

    def test_non_unit_vertices(self):
        """Test that off-sphere vertices are rejected."""
        with pytest.raises(ValueError, match="unit vectors"):
            SeedShape(
                vertices=torch.tensor([[2.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]),
                edges=torch.tensor([[0, 1], [1, 2], [0, 2]]),
                faces=torch.tensor([[0, 1, 2]]),
            )

    def test_out_of_range_face(self):
        """Test that face indices must reference existing vertices."""
        with pytest.raises(ValueError, match="must index into"):
            SeedShape(
                vertices=torch.eye(3),
                edges=torch.tensor([[0, 1], [1, 2], [0, 2]]),
                faces=torch.tensor([[0, 1, 5]]),
            )

    def test_pentagonal_faces(self):
        """Test that faces must be triangles or quadrilaterals."""
        with pytest.raises(ValueError, match="n_faces, 3"):
            SeedShape(
                vertices=torch.eye(3),
                edges=torch.tensor([[0, 1], [1, 2], [0, 2]]),
                faces=torch.tensor([[0, 1, 2, 0, 1]]),
            )

    def test_float_edges(self):
        """Test that edge indices must be integers."""
        with pytest.raises(TypeError, match="int-like"):
            SeedShape(
                vertices=torch.eye(3),
                edges=torch.tensor([[0.0, 1.0], [1.0, 2.0], [0.0, 2.0]]),
                faces=torch.tensor([[0, 1, 2]]),
            )
