import pytest

from passgen.config import PEPPER_ENV_VAR


@pytest.fixture
def wordlist_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("alpha\n  bravo  \n\ncharlie\n   \ndelta\n", encoding="utf-8")
    return path


@pytest.fixture
def no_pepper(monkeypatch):
    # setenv first so teardown removes the variable even if a .env file set it
    monkeypatch.setenv(PEPPER_ENV_VAR, "placeholder")
    monkeypatch.delenv(PEPPER_ENV_VAR)


@pytest.fixture
def env_file(tmp_path, no_pepper):
    path = tmp_path / ".env"
    path.write_text('# secrets\nPASSGEN_PEPPER="s3cret-pepper"\n', encoding="utf-8")
    return path
