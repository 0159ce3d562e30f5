from lottie_animator.config import AppConfig, load_config


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("output_dir: ./out\nindent: 2\nstrict: false\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.output_dir == "./out"
    assert cfg.indent == 2
    assert cfg.strict is False
    assert cfg.default_name is None


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()
