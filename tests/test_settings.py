import json

from settings import _load_config_file, prepare_root


def test_config_file_values(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"dir": "/srv/files", "host": "0.0.0.0", "port": "9000"}))

    assert _load_config_file(str(cfg)) == {"dir": "/srv/files", "host": "0.0.0.0", "port": "9000"}


def test_missing_or_broken_config_gives_defaults(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")

    assert _load_config_file(str(tmp_path / "absent.json")) == {}
    assert _load_config_file(str(broken)) == {}


def test_prepare_root_creates_absolute_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    root = prepare_root("data/public")

    assert root.is_absolute()
    assert root.is_dir()
    assert root == (tmp_path / "data" / "public").resolve()
