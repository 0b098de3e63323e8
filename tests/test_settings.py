from __future__ import annotations

from pathlib import Path

from workflowkit.settings import DEFAULT_BUNDLE_ID, DEFAULT_MAGIC_PREFIX, falsy, load_settings, truthy


def test_load_settings_from_alfred_environment(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "alfred_workflow_bundleid": "com.example.search",
            "alfred_workflow_cache": str(tmp_path / "cache"),
            "alfred_workflow_data": str(tmp_path / "data"),
            "WORKFLOWKIT_OPEN_COMMAND": "open",
        }
    )

    assert settings.bundle_id == "com.example.search"
    assert settings.cache_dir == tmp_path / "cache"
    assert settings.data_dir == tmp_path / "data"
    assert settings.log_file == tmp_path / "cache" / "com.example.search.log"
    assert settings.magic_prefix == DEFAULT_MAGIC_PREFIX
    assert settings.open_command == "open"
    assert settings.update_package is None


def test_load_settings_falls_back_to_home(tmp_path: Path) -> None:
    settings = load_settings({"WORKFLOWKIT_HOME": str(tmp_path), "WORKFLOWKIT_MAGIC_PREFIX": "wf:"})

    assert settings.bundle_id == DEFAULT_BUNDLE_ID
    assert settings.cache_dir == tmp_path / DEFAULT_BUNDLE_ID / "cache"
    assert settings.data_dir == tmp_path / DEFAULT_BUNDLE_ID / "data"
    assert settings.command_descriptor == settings.data_dir / "magic_actions.yaml"
    assert settings.magic_prefix == "wf:"


def test_env_flag_helpers() -> None:
    assert truthy(" Yes ")
    assert not truthy(None)
    assert falsy("off")
    assert not falsy("1")
