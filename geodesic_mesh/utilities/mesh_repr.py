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

"""Utility functions for string-formatting Mesh representations."""

import torch
from tensordict import TensorDict


def format_mesh_repr(mesh) -> str:
    """Format a complete Mesh representation.

    Parameters
    ----------
    mesh : Mesh
        The Mesh instance to format.

    Returns
    -------
    str
        Formatted string representation of the mesh.
    """
    ### Build the first line with class name and key properties
    class_name = mesh.__class__.__name__
    parts = [
        f"n_points={mesh.n_points}",
        f"n_cells={mesh.n_cells}",
        f"dtype={mesh.points.dtype}",
    ]

    # mesh.device is None by default and only set when user calls .to(device)
    device = mesh.device
    if device is not None:
        parts.append(f"device={device}")

    first_line = f"{class_name}({', '.join(parts)})"
    return f"{first_line}\n    cell_data: {_format_tensordict_repr(mesh.cell_data)}"


def _format_tensordict_repr(td: TensorDict) -> str:
    """Format a TensorDict as ``{key: trailing_shape, ...}`` on a single line.

    Parameters
    ----------
    td : TensorDict
        TensorDict to format.

    Returns
    -------
    str
        Formatted string representation.
    """
    keys = sorted(td.keys())
    if len(keys) == 0:
        return "{}"

    batch_dims = len(td.batch_size)
    items = []
    for key in keys:
        value = td[key]
        if isinstance(value, TensorDict):
            items.append(f"{key}: {_format_tensordict_repr(value)}")
        elif isinstance(value, torch.Tensor):
            items.append(f"{key}: {tuple(value.shape[batch_dims:])}")
        else:
            items.append(f"{key}: <{type(value).__name__}>")
    return "{" + ", ".join(items) + "}"
