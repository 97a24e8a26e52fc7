from __future__ import annotations

import pytest
from pydantic import ValidationError

from material_flow_graph.core.config import Settings, _load_settings_overrides


def test_overrides_are_read_from_material_flow_section(tmp_path) -> None:
    config = tmp_path / "material_flow.toml"
    config.write_text('[material_flow]\nfetch_retry_backoff = "1.5"\nunknown_key = 1\n', encoding="utf-8")
    overrides = _load_settings_overrides(config)
    assert overrides == {"fetch_retry_backoff": "1.5"}
    assert Settings(**overrides).fetch_retry_backoff == 1.5


def test_unparsable_override_is_rejected(tmp_path) -> None:
    config = tmp_path / "material_flow.toml"
    config.write_text('[mfg]\nfetch_retry_backoff = "fast"\n', encoding="utf-8")
    with pytest.raises(ValidationError):
        Settings(**_load_settings_overrides(config))


def test_missing_file_yields_no_overrides(tmp_path) -> None:
    assert _load_settings_overrides(tmp_path / "absent.toml") == {}
