import json
from datetime import date

import pytest
from typer.testing import CliRunner

from xcfetch import cli
from xcfetch.config import Settings
from xcfetch.ingest.xeno_canto_api import XenoCantoClient

runner = CliRunner()

META_NAME = "XC928094 - Eurasian Wren - Troglodytes troglodytes.xc.json"


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("XC_API_KEY", raising=False)
    current = Settings(_env_file=None)
    monkeypatch.setattr(cli, "get_settings", lambda: current)
    monkeypatch.setattr("xcfetch.pipeline.utc_today", lambda: date(2026, 10, 18))
    return current


@pytest.fixture
def use_session(monkeypatch):
    def install(session):
        monkeypatch.setattr(
            cli,
            "XenoCantoClient",
            lambda api_key, timeout: XenoCantoClient(api_key, timeout=timeout, session=session),
        )
        return session

    return install


def _invoke(tmp_path, *extra):
    args = ["XC928094", "--key", "k", "--output-dir", str(tmp_path / "out"), "--index", str(tmp_path / "index.json")]
    return runner.invoke(cli.app, args + list(extra))


def test_metadata_only_then_rerun(tmp_path, settings, use_session, make_session, api_ok, make_response, raw_record):
    session = use_session(make_session(api_ok, make_response(200, {"recordings": [raw_record]})))

    result = _invoke(tmp_path, "--metadata-only")
    assert result.exit_code == 0, result.output
    assert "Attribution: J. Doe, XC928094. Accessible at www.xeno-canto.org/928094" in result.output

    out = tmp_path / "out"
    assert [p.name for p in out.iterdir()] == [META_NAME]
    first_meta = (out / META_NAME).read_text(encoding="utf-8")
    assert json.loads(first_meta)["attribution"] == "J. Doe, XC928094. Accessible at www.xeno-canto.org/928094"

    index_text = (tmp_path / "index.json").read_text(encoding="utf-8")
    index = json.loads(index_text)
    assert [s["xc_id"] for s in index["sounds"]] == [928094]
    assert index["sounds"][0]["filename"] is None

    rerun = _invoke(tmp_path, "--metadata-only")
    assert rerun.exit_code == 0, rerun.output
    assert "already present" in rerun.output
    assert (out / META_NAME).read_text(encoding="utf-8") == first_meta
    assert (tmp_path / "index.json").read_text(encoding="utf-8") == index_text
    assert len(session.calls) == 2


def test_download_without_index(tmp_path, settings, use_session, make_session, api_ok, make_response):
    session = use_session(make_session(api_ok, make_response(200, content=b"mp3-bytes")))

    result = _invoke(tmp_path, "--no-index")
    assert result.exit_code == 0, result.output
    audio = tmp_path / "out" / "XC928094 - Eurasian Wren - Troglodytes troglodytes.mp3"
    assert audio.read_bytes() == b"mp3-bytes"
    assert session.calls[1]["url"] == "https://xeno-canto.org/928094/download"
    assert not (tmp_path / "index.json").exists()


def test_api_error_writes_nothing(tmp_path, settings, use_session, make_session, make_response):
    use_session(make_session(make_response(200, {"error": "invalid key"})))

    result = _invoke(tmp_path)
    assert result.exit_code == 1
    assert "invalid key" in result.output
    assert not (tmp_path / "out").exists()
    assert not (tmp_path / "index.json").exists()


def test_missing_key_exits_before_network(tmp_path, settings, use_session, make_session):
    session = use_session(make_session())

    result = runner.invoke(cli.app, ["928094", "--output-dir", str(tmp_path)])
    assert result.exit_code == 2
    assert "API key required" in result.output
    assert session.calls == []


def test_bad_identifier(tmp_path, settings, use_session, make_session):
    session = use_session(make_session())

    result = runner.invoke(cli.app, ["https://example.com/928094", "--key", "k"])
    assert result.exit_code == 2
    assert "Unrecognized recording identifier" in result.output
    assert session.calls == []
