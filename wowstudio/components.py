"""Entity components for world objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

ADT_TILE_SIZE = 533.33333
ADT_MAX_WIDTH = 64
CHUNKS_PER_TILE = 16
CHUNK_VERTEX_COUNT = 9 * 9 + 8 * 8


class BaseComponent:
    """A component attached to an entity."""

    def __init__(self, entity: Any) -> None:
        self.entity = entity


class Camera(BaseComponent):
    main_camera: ClassVar[Optional["Camera"]] = None


class Doodad(BaseComponent):
    pass


class Model(BaseComponent):
    pass


class WorldModelObject(BaseComponent):
    pass


@dataclass
class ChunkGPUData:
    """Per-vertex data of one map chunk, as sent to the GPU."""

    discard: bool = True
    hole: list[bool] = field(default_factory=lambda: [False] * CHUNK_VERTEX_COUNT)
    height: list[float] = field(default_factory=lambda: [0.0] * CHUNK_VERTEX_COUNT)
    colour: list[tuple[float, float, float, float]] = field(
        default_factory=lambda: [(0.0, 0.0, 0.0, 0.0)] * CHUNK_VERTEX_COUNT
    )
    normal: list[tuple[float, float, float]] = field(
        default_factory=lambda: [(0.0, 0.0, 0.0)] * CHUNK_VERTEX_COUNT
    )


class MapTile(BaseComponent):
    """A map tile made of 16x16 chunks, all zeroed on creation."""

    def __init__(self, entity: Any) -> None:
        super().__init__(entity)
        self.gpu_data = [
            [ChunkGPUData(discard=False) for _ in range(CHUNKS_PER_TILE)]
            for _ in range(CHUNKS_PER_TILE)
        ]
        self.loaded = False

    def chunk(self, x: int, y: int) -> ChunkGPUData:
        """Return the chunk at column ``x`` of row ``y``."""
        if not (0 <= x < CHUNKS_PER_TILE and 0 <= y < CHUNKS_PER_TILE):
            raise IndexError(f"chunk ({x}, {y}) is outside the tile")
        return self.gpu_data[x][y]