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

"""Tests for rotations about arbitrary axes."""

import math

import pytest
import torch

from geodesic_mesh.transformations import rotate_about_axis
from geodesic_mesh.transformations.geometric import _build_rotation_matrix


class TestRotateAboutAxis:
    """Tests for rotate_about_axis."""

    def test_quarter_turn_about_z(self, device):
        """Test the right-hand rule for a quarter turn."""
        x = torch.tensor([1.0, 0.0, 0.0], device=device)
        z = torch.tensor([0.0, 0.0, 1.0], device=device)

        rotated = rotate_about_axis(x, z, math.pi / 2)

        assert torch.allclose(
            rotated, torch.tensor([0.0, 1.0, 0.0], device=device), atol=1e-6
        )

    def test_axis_need_not_be_normalized(self):
        """Test that scaling the axis does not change the rotation."""
        v = torch.tensor([0.3, -0.2, 0.9])
        axis = torch.tensor([1.0, 2.0, 3.0])

        assert torch.allclose(
            rotate_about_axis(v, axis, 0.7), rotate_about_axis(v, 5 * axis, 0.7)
        )

    def test_preserves_length(self):
        """Test that rotation is an isometry."""
        v = torch.randn(10, 3, dtype=torch.float64)
        axis = torch.randn(10, 3, dtype=torch.float64)
        angle = torch.rand(10, dtype=torch.float64) * 2 * math.pi

        rotated = rotate_about_axis(v, axis, angle)

        assert torch.allclose(rotated.norm(dim=-1), v.norm(dim=-1))

    def test_broadcast_over_angles(self):
        """Test that one vector can be rotated by many angles at once."""
        x = torch.tensor([1.0, 0.0, 0.0], dtype=torch.float64)
        z = torch.tensor([0.0, 0.0, 1.0], dtype=torch.float64)
        angles = torch.linspace(0, math.pi, 5, dtype=torch.float64)

        rotated = rotate_about_axis(x, z, angles)

        assert rotated.shape == (5, 3)
        assert torch.allclose(rotated[:, 0], torch.cos(angles))
        assert torch.allclose(rotated[:, 1], torch.sin(angles))

    def test_matrix_is_orthonormal(self):
        """Test that Rodrigues matrices satisfy R^T R = I and det R = 1."""
        axis = torch.randn(4, 3, dtype=torch.float64)
        matrices = _build_rotation_matrix(torch.tensor([0.1, 1.0, 2.0, 3.0]).double(), axis)

        identity = torch.eye(3, dtype=torch.float64).expand(4, 3, 3)
        assert torch.allclose(matrices.transpose(-2, -1) @ matrices, identity)
        assert torch.allclose(torch.linalg.det(matrices), torch.ones(4, dtype=torch.float64))


class TestRotationErrors:
    """Tests for rotation error handling."""

    def test_zero_axis(self):
        """Test that a zero-length axis is rejected."""
        with pytest.raises(ValueError, match="near-zero length"):
            rotate_about_axis(torch.tensor([1.0, 0.0, 0.0]), torch.zeros(3), 1.0)

    def test_non_3d_axis(self):
        """Test that only 3D axes are supported."""
        with pytest.raises(NotImplementedError, match="3D axes"):
            rotate_about_axis(torch.ones(2), torch.ones(2), 1.0)
