import os

import pytest

from playbook.errors import SourceUnavailableError
from playbook.file_utils.cache import RenderCache
from playbook.staging.html import RenderConfig, render

PLAYBOOK = "TABLE OF CONTENTS\n1. PURPOSE\n=====\nPomona Blend helps orchards.\n"


@pytest.fixture()
def source(tmp_path) -> str:
    path = tmp_path / "playbook.txt"
    path.write_text(PLAYBOOK, encoding="utf-8")
    return str(path)


@pytest.fixture()
def render_calls(mocker):
    return mocker.patch("playbook.file_utils.cache.render", wraps=render)


def test_cache_renders_an_unchanged_source_once(source, render_calls):
    cache = RenderCache()

    first = cache.get(source)
    second = cache.get(source)

    assert "<h2>1. PURPOSE</h2>" in first
    assert second == first
    assert render_calls.call_count == 1
    assert source in cache


def test_cache_rerenders_when_the_source_changes(source, render_calls):
    cache = RenderCache()
    cache.get(source)

    with open(source, "a", encoding="utf-8") as f:
        f.write("Call growers in spring.\n")
    stat = os.stat(source)
    os.utime(source, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

    html = cache.get(source)

    assert "Call growers in spring." in html
    assert render_calls.call_count == 2


def test_cache_invalidate_drops_one_or_every_entry(source, tmp_path, render_calls):
    other = tmp_path / "other.txt"
    other.write_text(PLAYBOOK, encoding="utf-8")
    cache = RenderCache()
    cache.get(source)
    cache.get(str(other))

    cache.invalidate(source)
    assert source not in cache
    assert str(other) in cache

    cache.invalidate()
    assert str(other) not in cache

    cache.get(source)
    assert render_calls.call_count == 3


def test_cache_renders_with_its_config(source):
    html = RenderCache(config=RenderConfig(assets_dir="static")).get(source)
    assert 'src="static/Pomona10lbs.jpg"' in html


def test_cache_raises_for_a_missing_source(tmp_path):
    with pytest.raises(SourceUnavailableError):
        RenderCache().get(str(tmp_path / "missing.txt"))
