import pytest

from uploader.core.errors import AssetNotFound
from uploader.utils.asset_keys import asset_key_for


@pytest.mark.parametrize(
    ("locator", "expected"),
    [
        ("VIDEO#uploads/teaser.mp4", "uploads/teaser.mp4"),
        ("VIDEO#VIDEO#nested.mp4", "VIDEO#nested.mp4"),
        ("plain/key.mov", "plain/key.mov"),
        ("video#lowercase.mp4", "video#lowercase.mp4"),
    ],
)
def test_asset_key_strips_single_record_prefix(locator: str, expected: str) -> None:
    assert asset_key_for(locator) == expected


@pytest.mark.parametrize("locator", ["", "VIDEO#"])
def test_asset_key_requires_an_object_name(locator: str) -> None:
    with pytest.raises(AssetNotFound):
        asset_key_for(locator)
