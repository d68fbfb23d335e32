"""Unit tests for the asset localizer service."""

import pytest

from domain.parsers.asset_scanner import local_filename
from services.asset_localizer import AssetLocalizer


@pytest.mark.asyncio
async def test_downloads_each_reference_once(fake_api, tmp_path):
    localizer = AssetLocalizer(fake_api, tmp_path / "assets")
    texts = [
        '<img src="http://x/a.png"> and again <img src=\'http://x/a.png\'>',
        "<img src=http://x/b.gif>",
    ]

    mapping = await localizer.collect_and_download(5, texts)

    assert mapping == {
        "http://x/a.png": f"./assets/5/{local_filename('http://x/a.png')}",
        "http://x/b.gif": f"./assets/5/{local_filename('http://x/b.gif')}",
    }
    assert len(fake_api.downloads) == 2
    for reference in mapping:
        assert (tmp_path / "assets" / "5" / local_filename(reference)).is_file()


@pytest.mark.asyncio
async def test_failed_download_is_left_out(fake_api, tmp_path):
    fake_api.failing_urls.add("http://x/broken.png")
    localizer = AssetLocalizer(fake_api, tmp_path / "assets")

    mapping = await localizer.collect_and_download(
        1, ['<img src="http://x/broken.png"><img src="http://x/ok.png">']
    )

    assert list(mapping) == ["http://x/ok.png"]


@pytest.mark.asyncio
async def test_no_references_means_no_downloads(fake_api, tmp_path):
    mapping = await AssetLocalizer(fake_api, tmp_path / "assets").collect_and_download(1, ["plain", ""])

    assert mapping == {}
    assert fake_api.downloads == []


@pytest.mark.asyncio
async def test_relative_reference_resolved_against_base(fake_api, tmp_path):
    localizer = AssetLocalizer(fake_api, tmp_path / "assets", asset_base_url="https://loj.ac/")

    mapping = await localizer.collect_and_download(2, ['<img src="/uploads/fig.png">'])

    assert fake_api.downloads[0][0] == "https://loj.ac/uploads/fig.png"
    assert mapping["/uploads/fig.png"].startswith("./assets/2/fig_")


def test_rewrite_delegates_to_scanner():
    text = '<img src="http://x/a.png">'
    assert AssetLocalizer.rewrite(text, {"http://x/a.png": "./assets/1/a.png"}) == "./assets/1/a.png"
    assert AssetLocalizer.rewrite(text, {}) == text


@pytest.mark.asyncio
async def test_control_characters_in_reference_do_not_break_download(fake_api, tmp_path):
    localizer = AssetLocalizer(fake_api, tmp_path / "assets")

    mapping = await localizer.collect_and_download(1, ['<img src="http://x/a%00.png">'])

    filename = local_filename("http://x/a%00.png")
    assert "\x00" not in filename
    assert mapping == {"http://x/a%00.png": f"./assets/1/{filename}"}
    assert (tmp_path / "assets" / "1" / filename).is_file()


@pytest.mark.asyncio
async def test_local_paths_follow_configured_assets_dir(fake_api, tmp_path):
    localizer = AssetLocalizer(fake_api, tmp_path / "static" / "img", output_dir=tmp_path)

    mapping = await localizer.collect_and_download(4, ["<img src=http://x/a.png>"])

    filename = local_filename("http://x/a.png")
    assert mapping == {"http://x/a.png": f"./static/img/4/{filename}"}
    assert (tmp_path / "static" / "img" / "4" / filename).is_file()
