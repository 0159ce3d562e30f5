from lottie_animator.timeline import KeyframeIndex, sample_layer
from lottie_animator.types import AnimatableProperty, Project

from factories import make_keyframe, make_rect_layer


def test_tracks_are_grouped_and_sorted():
    index = KeyframeIndex.from_keyframes([
        make_keyframe("a", 2, "x", 20),
        make_keyframe("b", 0, "x", 0),
        make_keyframe("c", 1, "y", 5),
        make_keyframe("d", 1, "x", 10, layer_id="layer2"),
    ])
    assert [k.id for k in index.track("layer1", AnimatableProperty.X)] == ["b", "a"]
    assert [k.id for k in index.track("layer1", "y")] == ["c"]
    assert [k.id for k in index.track("layer2", "x")] == ["d"]
    assert index.track("layer3", "x") == []
    assert index.layer_ids() == ["layer1", "layer2"]
    assert len(index) == 4


def test_duplicate_time_keeps_last_keyframe():
    index = KeyframeIndex.from_keyframes([
        make_keyframe("first", 1, "x", 10),
        make_keyframe("second", 1, "x", 20),
    ])
    track = index.track("layer1", "x")
    assert [k.id for k in track] == ["second"]
    assert len(index) == 1


def test_shared_ids_do_not_replace_each_other():
    index = KeyframeIndex.from_keyframes([
        make_keyframe("k", 0, "x", 100),
        make_keyframe("k", 1, "x", 300),
        make_keyframe("k", 0, "rotation", 45),
    ])
    assert [k.value for k in index.track("layer1", "x")] == [100, 300]
    assert [k.value for k in index.track("layer1", "rotation")] == [45]
    assert len(index) == 3

    assert index.remove_keyframe("k")
    assert len(index) == 0
    assert index.layer_ids() == []


def test_add_keyframe_replaces_value_at_existing_time():
    index = KeyframeIndex()
    created = index.add_keyframe("layer1", "opacity", 1.0, time=0.5)
    updated = index.add_keyframe("layer1", "opacity", 0.25, time=0.5, easing="ease-out")
    assert updated.id == created.id
    track = index.track("layer1", AnimatableProperty.OPACITY)
    assert len(track) == 1
    assert track[0].value == 0.25
    assert track[0].easing == "ease-out"
    assert index.has_keyframe_at("layer1", "opacity", 0.5)
    assert not index.has_keyframe_at("layer1", "opacity", 1.0)


def test_remove_keyframe_and_layer():
    index = KeyframeIndex()
    kf = index.add_keyframe("layer1", "x", 1, time=0)
    index.add_keyframe("layer1", "y", 2, time=0)
    index.add_keyframe("layer2", "x", 3, time=0)

    assert index.remove_keyframe(kf.id)
    assert not index.remove_keyframe(kf.id)
    assert index.track("layer1", "x") == []
    assert index.remove_layer("layer1") == 1
    assert index.layer_ids() == ["layer2"]


def test_value_at_uses_default_for_empty_track():
    index = KeyframeIndex.from_keyframes([
        make_keyframe("a", 0, "x", 0),
        make_keyframe("b", 2, "x", 100),
    ])
    assert index.value_at("layer1", "x", 1) == 50
    assert index.value_at("layer1", "y", 1, default=7) == 7
    assert index.value_at("layer1", "y", 1) == 0


def test_sample_layer_mixes_keyframed_and_static_values():
    layer = make_rect_layer(rotation=45, opacity=0.8)
    index = KeyframeIndex.from_keyframes([
        make_keyframe("a", 0, "x", 0),
        make_keyframe("b", 1, "x", 300),
        make_keyframe("c", 0, "opacity", 0),
        make_keyframe("d", 1, "opacity", 1),
    ])
    sample = sample_layer(index, layer, 0.5)
    assert sample.x == 150
    assert sample.y == 100
    assert sample.rotation == 45
    assert sample.scale_x == 1
    assert sample.opacity == 0.5


def test_index_does_not_modify_project():
    keyframes = [make_keyframe("a", 1, "x", 10), make_keyframe("b", 1, "x", 20)]
    project = Project(layers=[make_rect_layer()], keyframes=keyframes)
    KeyframeIndex.from_keyframes(project.keyframes)
    assert [k.id for k in project.keyframes] == ["a", "b"]


def test_with_settings_returns_updated_copy():
    project = Project(name="Untitled Project")
    updated = project.with_settings(name="Updated Name", width=1280)
    assert updated.name == "Updated Name"
    assert updated.width == 1280
    assert updated.height == 600
    assert project.name == "Untitled Project"


def test_iteration_gives_flat_timeline_view():
    index = KeyframeIndex.from_keyframes([
        make_keyframe("b2", 1, "y", 0, layer_id="b"),
        make_keyframe("a2", 2, "x", 0, layer_id="a"),
        make_keyframe("a1", 0, "x", 0, layer_id="a"),
    ])
    assert [k.id for k in index] == ["a1", "a2", "b2"]
