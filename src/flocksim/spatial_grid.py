from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from pygame.math import Vector2


class SpatialGrid:
    """Uniform bucket grid over snapshot positions, keyed by boid index.

    Queries return exactly the brute-force neighbour set: strict radius cutoff,
    the querying index excluded and coincident boids skipped.
    """

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self._cell_size = cell_size
        self._cells: Dict[Tuple[int, int], List[int]] = {}
        self._active_keys: List[Tuple[int, int]] = []
        self._positions: Sequence[Vector2] = ()

    @property
    def cell_size(self) -> float:
        return self._cell_size

    def build_neighbor_cell_offsets(self, radius: float) -> List[Tuple[int, int]]:
        cell_range = int(math.ceil(radius / self._cell_size))
        return [(dx, dy) for dx in range(-cell_range, cell_range + 1) for dy in range(-cell_range, cell_range + 1)]

    def clear(self) -> None:
        for key in self._active_keys:
            bucket = self._cells.get(key)
            if bucket:
                bucket.clear()
        self._active_keys.clear()
        self._positions = ()

    def rebuild(self, positions: Sequence[Vector2]) -> None:
        self.clear()
        self._positions = positions
        for index, position in enumerate(positions):
            self.insert(index, position)

    def insert(self, index: int, position: Vector2) -> None:
        key = self._cell_key(position)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = []
            self._cells[key] = bucket
            self._active_keys.append(key)
        elif not bucket:
            # Bucket survived a clear(); mark it active again.
            self._active_keys.append(key)
        bucket.append(index)

    def collect_neighbors(
        self,
        index: int,
        cell_offsets: List[Tuple[int, int]],
        radius: float,
        out: List[int],
    ) -> List[int]:
        out.clear()
        positions = self._positions
        position = positions[index]
        base_key = self._cell_key(position)
        radius_sq = radius * radius
        pos_x = position.x
        pos_y = position.y
        cells = self._cells
        append = out.append

        for dx, dy in cell_offsets:
            bucket = cells.get((base_key[0] + dx, base_key[1] + dy))
            if not bucket:
                continue
            for other in bucket:
                if other == index:
                    continue
                other_pos = positions[other]
                offset_x = other_pos.x - pos_x
                offset_y = other_pos.y - pos_y
                dist_sq = offset_x * offset_x + offset_y * offset_y
                if 0.0 < dist_sq < radius_sq:
                    append(other)
        out.sort()
        return out

    def _cell_key(self, position: Vector2) -> Tuple[int, int]:
        return (int(position.x // self._cell_size), int(position.y // self._cell_size))
