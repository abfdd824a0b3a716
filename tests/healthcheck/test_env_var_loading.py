import os
import importlib
import sys
from pathlib import Path

# Get the path to the root directory
root_dir = Path(__file__).parent.parent.parent


def test_env_var_loading_precedence(monkeypatch):
    """
    Test that environment variables are loaded with the correct precedence:
    .env file > system environment variables.
    """
    dot_env_path = root_dir / ".env"
    original_dot_env_content = None
    if dot_env_path.exists():
        with open(dot_env_path, "r") as f:
            original_dot_env_content = f.read()

    common_module = sys.modules["common.global_config"]

    try:
        # 1. Set mock system environment variables
        monkeypatch.setenv("DEV_ENV", "system")
        monkeypatch.setenv("MINIMAX_GROUP_ID", "system_group_id")
        # This one is also in the .env file, which should win
        monkeypatch.setenv("MINIMAX_API_KEY", "system_minimax_key")

        # 2. Create a temporary .env file
        dot_env_content = "DEV_ENV=dotenv\n" "MINIMAX_API_KEY=dotenv_minimax_key\n"
        with open(dot_env_path, "w") as f:
            f.write(dot_env_content)

        # 3. Reload the common module to pick up the new .env file
        importlib.reload(common_module)
        reloaded_config = common_module.global_config  # type: ignore

        # 4. Assert that the variables are loaded with the correct precedence
        assert reloaded_config.DEV_ENV == "dotenv", "Should load from .env first"
        assert (
            reloaded_config.MINIMAX_GROUP_ID == "system_group_id"
        ), "Should fall back to system env"
        assert (
            reloaded_config.MINIMAX_API_KEY == "dotenv_minimax_key"
        ), "Should load from .env"
        assert reloaded_config.is_development is False

    finally:
        # Clean up and restore the original .env file if it existed
        if original_dot_env_content is not None:
            with open(dot_env_path, "w") as f:
                f.write(original_dot_env_content)
        else:
            if os.path.exists(dot_env_path):
                os.remove(dot_env_path)

        # Reload the original config to avoid side effects on other tests
        importlib.reload(common_module)


def test_missing_credentials_do_not_block_startup(monkeypatch):
    common_module = sys.modules["common.global_config"]
    monkeypatch.delenv("MINIMAX_API_KEY", raising=False)
    monkeypatch.delenv("MINIMAX_GROUP_ID", raising=False)

    try:
        importlib.reload(common_module)
        config = common_module.global_config  # type: ignore
        if not (root_dir / ".env").exists():
            assert config.MINIMAX_API_KEY is None
            assert config.MINIMAX_GROUP_ID is None
        assert config.service_name
    finally:
        importlib.reload(common_module)


def test_unset_dev_env_hides_tracebacks(monkeypatch):
    common_module = sys.modules["common.global_config"]
    errors_module = importlib.import_module("src.api.errors")
    monkeypatch.delenv("DEV_ENV", raising=False)

    config = common_module.Config(_env_file=None)  # type: ignore
    monkeypatch.setattr(errors_module, "global_config", config)

    assert config.is_development is False
    try:
        raise ValueError("boom")
    except ValueError as e:
        body = errors_module.error_body("Something failed", e)
    assert body == {"error": "Something failed"}
