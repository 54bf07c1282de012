import json

from smart_autofill.utils.config_manager import AutofillConfig, load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg == AutofillConfig()
    assert (cfg.suggestion_count, cfg.cache_size, cfg.context_limit) == (3, 10, 50)
    assert (cfg.reward, cfg.penalty) == (50, 2)


def test_json_overrides_known_keys(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"reward": 10, "bogus": 1, "cache_completions": "yes", "penalty": -3}))
    cfg = load_config(str(p))
    assert cfg.reward == 10
    assert cfg.cache_completions is True
    assert cfg.penalty == 2


def test_broken_file_falls_back(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2")
    assert load_config(str(p)) == AutofillConfig()
    assert load_config(str(tmp_path / "missing.json")) == AutofillConfig()


def test_with_overrides_is_a_copy():
    base = AutofillConfig()
    small = base.with_overrides(cache_size=2)
    assert small.cache_size == 2
    assert base.cache_size == 10
