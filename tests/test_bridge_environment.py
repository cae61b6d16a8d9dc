from orka_plugins.bridge.environment import DENIED_ENV_PREFIXES, denied_prefixes, sanitize_env


def test_credential_prefixes_are_dropped_and_path_kept():
    env = sanitize_env({"OPENAI_API_KEY": "x", "PATH": "/bin"})
    assert env == {"PATH": "/bin"}


def test_all_default_prefixes_filtered():
    parent = {f"{p}SECRET": "v" for p in DENIED_ENV_PREFIXES}
    parent["HOME"] = "/home/u"
    assert sanitize_env(parent) == {"HOME": "/home/u"}


def test_unlisted_prefixes_pass_through():
    parent = {"AZURE_OPENAI_KEY": "a", "MY_OPENAI_TOKEN": "b", "openai_api_key": "c"}
    assert sanitize_env(parent) == parent


def test_extra_prefixes_extend_denylist():
    env = sanitize_env({"GROQ_API_KEY": "g", "LANG": "C"}, extra_prefixes=["GROQ_", "  ", ""])
    assert env == {"LANG": "C"}


def test_denied_prefixes_deduplicates_in_order():
    assert denied_prefixes(["OPENAI_", "X_"]) == (*DENIED_ENV_PREFIXES, "X_")


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "secret")
    monkeypatch.setenv("ORKA_TEST_MARKER", "1")
    env = sanitize_env()
    assert "ANTHROPIC_API_KEY" not in env
    assert env["ORKA_TEST_MARKER"] == "1"


def test_parent_mapping_is_not_mutated():
    parent = {"AWS_REGION": "eu", "PATH": "/bin"}
    sanitize_env(parent)
    assert parent == {"AWS_REGION": "eu", "PATH": "/bin"}
