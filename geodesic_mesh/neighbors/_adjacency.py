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

"""Ragged adjacency storage shared by fan reconstruction and dual polygons.

Both the faces around a vertex and the corners of a dual polygon are
variable-length cyclic lists. They are stored with offset-indices encoding so
that all downstream work stays in tensor operations.
"""

import torch
from tensordict import tensorclass


@tensorclass
class Adjacency:
    """Ragged adjacency list stored with offset-indices encoding.

    Attributes:
        offsets: Indices into the indices array marking the start of each list.
            Shape (n_sources + 1,), dtype int64. The i-th source's entries are
            indices[offsets[i]:offsets[i+1]].
        indices: Flattened array of all entries.
            Shape (total_neighbors,), dtype int64.

    Examples
    --------
        >>> # A triangle and a square sharing one flat index array
        >>> adj = Adjacency(
        ...     offsets=torch.tensor([0, 3, 7]),
        ...     indices=torch.tensor([4, 5, 6, 0, 1, 2, 3]),
        ... )
        >>> adj.to_list()
        [[4, 5, 6], [0, 1, 2, 3]]
    """

    offsets: torch.Tensor  # shape: (n_sources + 1,), dtype: int64
    indices: torch.Tensor  # shape: (total_neighbors,), dtype: int64

    def __post_init__(self):
        if not torch.compiler.is_compiling():
            ### Validate offsets is non-empty
            if len(self.offsets) < 1:
                raise ValueError(
                    f"Offsets array must have length >= 1 (n_sources + 1), but got {len(self.offsets)=}. "
                    f"Even for 0 sources, offsets should be [0]."
                )

            ### Validate offsets starts at 0
            if self.offsets[0].item() != 0:
                raise ValueError(
                    f"First offset must be 0, but got {self.offsets[0].item()=}."
                )

            ### Validate last offset equals length of indices
            last_offset = self.offsets[-1].item()
            indices_length = len(self.indices)
            if last_offset != indices_length:
                raise ValueError(
                    f"Last offset must equal length of indices, but got "
                    f"{last_offset=} != {indices_length=}."
                )

    def to_list(self) -> list[list[int]]:
        """Convert adjacency to a ragged list-of-lists representation.

        The order of entries within each sublist is preserved, which matters
        here: fans and polygons are cyclic sequences.

        Returns
        -------
        list[list[int]]
            Ragged list where result[i] contains all entries of source i.
        """
        ### Convert to CPU numpy for Python list operations
        offsets_np = self.offsets.cpu().numpy()
        indices_np = self.indices.cpu().numpy()

        return [
            indices_np[offsets_np[i] : offsets_np[i + 1]].tolist()
            for i in range(len(offsets_np) - 1)
        ]

    @property
    def n_sources(self) -> int:
        """Number of source elements (points or polygons) in the adjacency."""
        return len(self.offsets) - 1

    @property
    def n_total_neighbors(self) -> int:
        """Total number of entries across all sources."""
        return len(self.indices)

    @property
    def counts(self) -> torch.Tensor:
        """Number of entries for each source element.

        Returns
        -------
        torch.Tensor
            Shape (n_sources,), dtype int64. For a vertex fan this is the
            valence; for a dual polygon it is the polygon degree.
        """
        return self.offsets[1:] - self.offsets[:-1]

    def expand_to_pairs(self) -> tuple[torch.Tensor, torch.Tensor]:
        """Expand offset-indices encoding to (source_idx, target_idx) pairs.

        This is the inverse of build_adjacency_from_pairs.

        Returns
        -------
        tuple[torch.Tensor, torch.Tensor]
            Tuple of (source_indices, target_indices), both shape (n_total_neighbors,).

        Examples
        --------
            >>> adj = Adjacency(
            ...     offsets=torch.tensor([0, 2, 4, 5]),
            ...     indices=torch.tensor([10, 11, 20, 21, 30]),
            ... )
            >>> sources, targets = adj.expand_to_pairs()
            >>> sources.tolist()
            [0, 0, 1, 1, 2]
        """
        device = self.offsets.device

        ### Handle empty adjacency
        if self.n_total_neighbors == 0:
            return (
                torch.tensor([], dtype=torch.int64, device=device),
                self.indices,
            )

        ### offsets[i] <= position < offsets[i+1] means position belongs to source i
        positions = torch.arange(
            self.n_total_neighbors, dtype=torch.int64, device=device
        )
        source_indices = torch.searchsorted(self.offsets, positions, right=True) - 1

        return source_indices, self.indices

    def cyclic_next_positions(self) -> torch.Tensor:
        """Flat position of the entry that follows each entry within its list.

        Each source's list is treated as a cycle, so the last entry of a list
        wraps around to its first.

        Returns
        -------
        torch.Tensor
            Shape (n_total_neighbors,), dtype int64.

        Examples
        --------
            >>> adj = Adjacency(
            ...     offsets=torch.tensor([0, 3, 5]),
            ...     indices=torch.tensor([7, 8, 9, 1, 2]),
            ... )
            >>> adj.cyclic_next_positions().tolist()
            [1, 2, 0, 4, 3]
        """
        source_ids, _ = self.expand_to_pairs()
        positions = torch.arange(
            self.n_total_neighbors, dtype=torch.int64, device=self.offsets.device
        )
        next_positions = positions + 1
        wraps = next_positions == self.offsets[source_ids + 1]
        return torch.where(wraps, self.offsets[source_ids], next_positions)


def build_adjacency_from_pairs(
    source_indices: torch.Tensor,  # shape: (n_pairs,)
    target_indices: torch.Tensor,  # shape: (n_pairs,)
    n_sources: int,
) -> Adjacency:
    """Build offset-index adjacency from (source, target) pairs.

    Algorithm:
        1. Sort pairs by source index (then by target for consistency)
        2. Use bincount to count entries per source
        3. Use cumsum to compute offsets

    Parameters
    ----------
    source_indices : torch.Tensor
        Source entity indices, shape (n_pairs,)
    target_indices : torch.Tensor
        Target entity indices, shape (n_pairs,)
    n_sources : int
        Total number of source entities (may exceed max(source_indices))

    Returns
    -------
    Adjacency
        Adjacency whose i-th list holds the targets paired with source i,
        in ascending order.

    Examples
    --------
        >>> sources = torch.tensor([0, 0, 1, 3])
        >>> targets = torch.tensor([2, 1, 3, 0])
        >>> build_adjacency_from_pairs(sources, targets, n_sources=4).to_list()
        [[1, 2], [3], [], [0]]
    """
    device = source_indices.device

    ### Handle empty pairs
    if len(source_indices) == 0:
        return Adjacency(
            offsets=torch.zeros(n_sources + 1, dtype=torch.int64, device=device),
            indices=torch.zeros(0, dtype=torch.int64, device=device),
        )

    ### Lexicographic sort by (source, target) using two stable argsorts.
    sort_by_target = torch.argsort(target_indices, stable=True)
    sort_indices = sort_by_target[
        torch.argsort(source_indices[sort_by_target], stable=True)
    ]

    sorted_sources = source_indices[sort_indices]
    sorted_targets = target_indices[sort_indices]

    ### offsets[i] marks the start of source i's list
    offsets = torch.zeros(n_sources + 1, dtype=torch.int64, device=device)
    offsets[1:] = torch.cumsum(
        torch.bincount(sorted_sources, minlength=n_sources), dim=0
    )

    return Adjacency(offsets=offsets, indices=sorted_targets)
