"""CLI tests using click's CliRunner with a fake extractor."""

import json
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from linkvault import cli
from linkvault.lifecycle import ItemStatus
from linkvault.llm.base import LLMProvider
from linkvault.store import ItemStore

from .conftest import FakeExtractor

OK = "https://a.test/ok"
BAD = "https://b.test/bad"


@pytest.fixture
def env(monkeypatch, tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-test")
    monkeypatch.setenv("LINKVAULT_USER", "alice")
    monkeypatch.setenv("LLM_PROVIDER", "openrouter")
    monkeypatch.setenv("AI_OPEN_ROUTER_KEY", "or-test")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return db_url


@pytest.fixture
def extractor(monkeypatch):
    fake = FakeExtractor(failing={BAD})
    monkeypatch.setattr(cli.Extractor, "from_config", lambda config: fake)
    return fake


def _invoke(*args):
    return CliRunner().invoke(cli.main, list(args))


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_bulk_import_json_streams_one_line_per_url(env, extractor):
    result = _invoke("bulk-import", "--json", OK, BAD)

    assert result.exit_code == 1
    assert _json_lines(result.stdout) == [
        {"completed": 1, "total": 2, "url": OK, "status": "success"},
        {"completed": 2, "total": 2, "url": BAD, "status": "failed"},
    ]


def test_bulk_import_all_successful(env, extractor):
    result = _invoke("bulk-import", OK, "https://c.test/ok")

    assert result.exit_code == 0
    assert "[1/2]" in result.output
    assert "[2/2]" in result.output
    assert "2 imported, 0 failed" in result.output


def test_bulk_import_all_failed_exits_2(env, extractor):
    result = _invoke("bulk-import", BAD)

    assert result.exit_code == 2


def test_bulk_import_reads_url_file(env, extractor, tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_text(f"# reading list\n{OK}\n\nhttps://c.test/ok\n", encoding="utf-8")

    result = _invoke("bulk-import", "--file", str(url_file))

    assert result.exit_code == 0
    assert extractor.calls == [OK, "https://c.test/ok"]


def test_bulk_import_url_file_skips_indented_comments(env, extractor, tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_text(f"  # reading list\n\t# more\n  {OK}  \n", encoding="utf-8")

    result = _invoke("bulk-import", "--file", str(url_file))

    assert result.exit_code == 0
    assert extractor.calls == [OK]


def test_bulk_import_rejects_bad_url(env, extractor):
    result = _invoke("bulk-import", OK, "not-a-url")

    assert result.exit_code == 2
    assert extractor.calls == []


def test_bulk_import_requires_urls(env, extractor):
    assert _invoke("bulk-import").exit_code == 2


def test_import_success_and_items_listing(env, extractor):
    result = _invoke("import", OK)
    assert result.exit_code == 0
    assert f"Title of {OK}" in result.output

    listing = _invoke("items")
    assert listing.exit_code == 0
    assert "COMPLETED" in listing.output


def test_unknown_llm_provider_only_blocks_summarize(env, extractor, monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "parrot")

    assert _invoke("import", OK).exit_code == 0
    assert _invoke("items").exit_code == 0

    [item] = ItemStore.from_url(env).find_many("alice")
    result = _invoke("summarize", item.id)
    assert result.exit_code == 2
    assert "Unknown LLM provider" in result.output


def test_import_failure_exits_1(env, extractor):
    result = _invoke("import", BAD)

    assert result.exit_code == 1
    [item] = ItemStore.from_url(env).find_many("alice")
    assert item.status == ItemStatus.FAILED


def test_missing_user_is_a_config_error(env, extractor, monkeypatch):
    monkeypatch.delenv("LINKVAULT_USER")

    assert _invoke("items").exit_code == 2


def test_missing_firecrawl_key(env, monkeypatch):
    monkeypatch.setenv("FIRECRAWL_API_KEY", "")

    result = _invoke("import", OK)

    assert result.exit_code == 2
    assert "FIRECRAWL_API_KEY" in result.output


def test_show_renders_item_and_hides_other_users(env, extractor):
    _invoke("import", OK)
    [item] = ItemStore.from_url(env).find_many("alice")

    shown = _invoke("show", item.id)
    assert shown.exit_code == 0
    assert shown.output.startswith("---\n")
    assert f"source: \"{OK}\"" in shown.output

    assert _invoke("--user", "mallory", "show", item.id).exit_code == 1


def test_discover_lists_links(env, monkeypatch):
    fake = MagicMock()
    fake.map_url.return_value = [OK, "https://a.test/other"]
    monkeypatch.setattr(cli.Extractor, "from_config", lambda config: fake)

    result = _invoke("discover", "https://a.test", "--search", "ok")

    assert result.exit_code == 0
    assert result.output.splitlines() == [OK, "https://a.test/other"]
    fake.map_url.assert_called_once_with("https://a.test", search="ok")


def test_summarize_saves_summary_and_tags(env, extractor, monkeypatch):
    _invoke("import", OK)
    [item] = ItemStore.from_url(env).find_many("alice")

    llm = MagicMock(spec=LLMProvider)
    llm.max_input_tokens = 100_000
    llm.generate.side_effect = ["A short summary.", "Python, Testing"]
    monkeypatch.setattr(cli, "get_llm_provider", lambda config: llm)

    result = _invoke("summarize", item.id)

    assert result.exit_code == 0
    assert "A short summary." in result.output
    assert "Tags: python, testing" in result.output
    saved = ItemStore.from_url(env).find_one(item.id, "alice")
    assert saved.tags == ["python", "testing"]
