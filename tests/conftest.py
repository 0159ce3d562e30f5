import pytest

from lottie_animator.types import Project


@pytest.fixture
def project_factory():
    def _make(layers=None, keyframes=None, **settings):
        data = {"name": "Test", "width": 800, "height": 600, "fps": 30, "duration": 2}
        data.update(settings)
        return Project(layers=layers or [], keyframes=keyframes or [], **data)

    return _make


@pytest.fixture
def editor_project_json():
    """A project as the editor saves it, with camelCase keys."""
    return {
        "name": "Editor Export",
        "width": 800,
        "height": 600,
        "fps": 30,
        "duration": 2,
        "layers": [
            {
                "id": "layer1",
                "name": "Animated Rectangle",
                "visible": True,
                "locked": False,
                "element": {
                    "type": "rect",
                    "x": 0,
                    "y": 0,
                    "width": 100,
                    "height": 100,
                    "transform": {"x": 100, "y": 100, "rotation": 0, "scaleX": 1, "scaleY": 1},
                    "style": {"fill": "#ff0000", "stroke": "none", "strokeWidth": 1, "opacity": 1},
                },
            }
        ],
        "keyframes": [
            {"id": "kf1", "time": 0, "property": "x", "value": 100, "easing": "linear", "layerId": "layer1"},
            {"id": "kf2", "time": 1, "property": "x", "value": 300, "easing": "ease-in", "layerId": "layer1"},
        ],
    }
