import pytest

from codescan.config import ScanConfig, load_config
from codescan.errors import ConfigError


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = load_config(environ={})

    assert config == ScanConfig()


def test_loads_yaml_file(tmp_path):
    path = tmp_path / "codescan.yaml"
    path.write_text(
        "workers: 4\n"
        "disabled_rules:\n  - direct_new\n"
        "exclude: ['*/Test/*']\n"
        "strict_markup: true\n",
        encoding="utf-8",
    )

    config = load_config(path, environ={})

    assert config.workers == 4
    assert config.disabled_rules == ["direct_new"]
    assert config.exclude == ["*/Test/*"]
    assert config.strict_markup is True


def test_default_file_is_picked_up(tmp_path, monkeypatch):
    (tmp_path / ".codescan.yaml").write_text("workers: 2\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config(environ={}).workers == 2


def test_env_overrides_workers(tmp_path):
    path = tmp_path / "codescan.yaml"
    path.write_text("workers: 2\n", encoding="utf-8")

    assert load_config(path, environ={"CODESCAN_WORKERS": "8"}).workers == 8


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "codescan.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path, environ={}) == ScanConfig()


@pytest.mark.parametrize(
    "document",
    [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "workers: 0\n",
        "workers: many\n",
        "workers: true\n",
        "disabled_rules: [1, 2]\n",
        "strict_markup: maybe\n",
        "workers: [unclosed\n",
    ],
)
def test_invalid_documents_raise(tmp_path, document):
    path = tmp_path / "codescan.yaml"
    path.write_text(document, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml", environ={})


def test_invalid_env_workers_raise():
    with pytest.raises(ConfigError):
        ScanConfig().apply_env({"CODESCAN_WORKERS": "-1"})
