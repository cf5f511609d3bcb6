import json

import pytest

from dungeon_bsp.generators.bsp import GeneratorSettings
from dungeon_bsp.pipeline import (
    GenerationPipeline,
    PipelineError,
    PipelineSettings,
    PipelineStage,
    load_settings,
    save_settings,
)
from dungeon_bsp.scene import BoxScene, SceneCollaborator


class BlindScene(SceneCollaborator):
    def instantiate(self, volume, kind, color):
        pass

    def probe(self, origin, direction):
        return None

    def reset(self):
        pass


def test_successful_run_records_every_stage():
    pipeline = GenerationPipeline(PipelineSettings(seed=42))
    result = pipeline.generate()

    assert result.success, result.errors
    assert result.errors == []
    assert result.stages_completed == [
        PipelineStage.INITIALIZE,
        PipelineStage.SPLIT,
        PipelineStage.ROOMS,
        PipelineStage.CONNECT,
        PipelineStage.VALIDATE,
        PipelineStage.COMPLETE,
    ]
    assert result.seed == 42
    assert result.dungeon.seed == 42
    assert result.metrics['room_count'] == len(result.dungeon.rooms)
    assert result.metrics['corridor_count'] == len(result.dungeon.corridors)
    assert 'connect_time' in result.metrics
    assert result.total_time >= 0.0


def test_seeded_runs_are_reproducible():
    first = GenerationPipeline(PipelineSettings(seed=7)).generate()
    second = GenerationPipeline(PipelineSettings(seed=7)).generate()
    assert first.dungeon.rooms == second.dungeon.rooms
    assert first.dungeon.corridors == second.dungeon.corridors


def test_each_run_gets_a_fresh_scene():
    pipeline = GenerationPipeline(PipelineSettings(seed=3))
    pipeline.generate()
    first_scene = pipeline.scene
    pipeline.generate()
    assert pipeline.scene is not first_scene
    assert pipeline.scene.visible_count == len(first_scene.requests)


def test_unseeded_run_reports_its_seed():
    result = GenerationPipeline(PipelineSettings(seed=None)).generate()
    assert result.success
    assert result.seed is not None
    assert result.dungeon.seed == result.seed


def test_external_scene_is_used():
    scene = BoxScene()
    result = GenerationPipeline(PipelineSettings(seed=11), scene=scene).generate()
    assert result.success
    assert len(scene.requests) == result.metrics['room_count'] + result.metrics['corridor_count']


def test_reused_scene_matches_fresh_run():
    scene = BoxScene()
    pipeline = GenerationPipeline(PipelineSettings(seed=1), scene=scene)
    assert pipeline.generate().success

    pipeline.settings.seed = 2
    reused = pipeline.generate()
    fresh = GenerationPipeline(PipelineSettings(seed=2)).generate()

    assert reused.success
    assert reused.dungeon.rooms == fresh.dungeon.rooms
    assert reused.dungeon.corridors == fresh.dungeon.corridors
    # Only the second run's geometry is left in the scene
    assert len(scene.requests) == len(fresh.dungeon.rooms) + len(fresh.dungeon.corridors)


def test_generation_failure_is_recorded_with_stage():
    result = GenerationPipeline(PipelineSettings(seed=5), scene=BlindScene()).generate()

    assert not result.success
    assert result.dungeon is None
    assert len(result.errors) == 1
    assert result.errors[0].startswith("[connect]")
    assert result.stages_completed == [
        PipelineStage.INITIALIZE, PipelineStage.SPLIT, PipelineStage.ROOMS,
    ]
    assert result.seed == 5
    assert 'total_time' in result.metrics


def test_validation_can_be_skipped():
    result = GenerationPipeline(PipelineSettings(seed=8, validate_result=False)).generate()
    assert result.success
    assert PipelineStage.VALIDATE not in result.stages_completed


@pytest.mark.parametrize("settings", [
    PipelineSettings(root_extents=(0.0, 5.0, 50.0)),
    PipelineSettings(generator=GeneratorSettings(min_room_coverage=0.3)),
    PipelineSettings(generator=GeneratorSettings(edge_buffer=-1.0)),
    PipelineSettings(generator=GeneratorSettings(edge_buffer=0.0)),
])
def test_invalid_settings_rejected(settings):
    with pytest.raises(PipelineError, match="Invalid settings"):
        GenerationPipeline(settings)


def test_settings_round_trip(tmp_path):
    settings = PipelineSettings(
        root_center=(10.0, 0.0, -5.0),
        root_extents=(40.0, 4.0, 60.0),
        generator=GeneratorSettings(corridor_width=2.0, max_depth=4),
        seed=1234,
        validate_result=False,
    )
    path = save_settings(settings, tmp_path / "profiles" / "dungeon.json")

    assert path.exists()
    loaded = load_settings(path)
    assert loaded == settings


def test_settings_file_is_plain_json(tmp_path):
    path = save_settings(PipelineSettings(seed=3), tmp_path / "settings.json")
    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['seed'] == 3
    assert data['root_extents'] == [50.0, 5.0, 50.0]
    assert data['generator']['corridor_width'] == 1.0


def test_partial_settings_file_uses_defaults(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({'seed': 9, 'generator': {'edge_buffer': 1.5, 'bogus': 1}}),
                    encoding='utf-8')

    loaded = load_settings(path)

    assert loaded.seed == 9
    assert loaded.generator.edge_buffer == 1.5
    assert loaded.generator.corridor_width == GeneratorSettings().corridor_width
    assert loaded.root_extents == (50.0, 5.0, 50.0)


def test_non_object_settings_file_rejected(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(path)
