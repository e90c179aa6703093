import pytest

from wowstudio.components import (
    CHUNK_VERTEX_COUNT,
    BaseComponent,
    Camera,
    ChunkGPUData,
    Doodad,
    MapTile,
    Model,
    WorldModelObject,
)


@pytest.mark.parametrize("cls", [BaseComponent, Camera, Doodad, Model, WorldModelObject, MapTile])
def test_component_keeps_entity(cls):
    entity = object()
    assert cls(entity).entity is entity


def test_no_main_camera_by_default():
    camera = Camera(object())
    assert camera.main_camera is None


def test_chunk_defaults_discard():
    chunk = ChunkGPUData()
    assert chunk.discard is True
    assert len(chunk.height) == CHUNK_VERTEX_COUNT == 9 * 9 + 8 * 8


def test_chunks_do_not_share_lists():
    first, second = ChunkGPUData(), ChunkGPUData()
    first.height[0] = 5.0
    assert second.height[0] == 0.0


def test_map_tile_starts_zeroed_and_unloaded():
    tile = MapTile(None)
    assert tile.loaded is False
    assert len(tile.gpu_data) == 16
    assert all(len(row) == 16 for row in tile.gpu_data)
    chunk = tile.chunk(3, 4)
    assert chunk.discard is False
    assert not any(chunk.hole)
    assert len(chunk.colour) == CHUNK_VERTEX_COUNT


def test_map_tile_chunks_are_distinct():
    tile = MapTile(None)
    tile.chunk(0, 0).height[0] = 1.0
    assert tile.chunk(0, 1).height[0] == 0.0
    assert tile.chunk(0, 0).height[0] == 1.0


@pytest.mark.parametrize("x, y", [(-1, 0), (0, 16), (16, 0)])
def test_chunk_out_of_range_raises(x, y):
    with pytest.raises(IndexError):
        MapTile(None).chunk(x, y)