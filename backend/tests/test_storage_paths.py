from storefront.services.storage.paths import asset_key, sanitize_filename


def test_asset_key_format():
    assert asset_key("logo.png", now_ms=1700000000123, prefix="product-images", token="k3x9a7qz") == (
        "product-images/1700000000123-k3x9a7qz-logo.png"
    )


def test_asset_key_uses_configured_prefix():
    key = asset_key("logo.png", now_ms=1, token="t")
    assert key == "product-images/1-t-logo.png"


def test_asset_key_without_prefix():
    assert asset_key("logo.png", now_ms=5, prefix="", token="t") == "5-t-logo.png"


def test_same_name_in_same_millisecond_gets_distinct_keys():
    first = asset_key("logo.png", now_ms=42)
    second = asset_key("logo.png", now_ms=42)

    assert first != second
    assert first.startswith("product-images/42-") and first.endswith("-logo.png")


def test_sanitize_strips_directories_and_unsafe_chars():
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename("C:\\Users\\me\\my logo (1).png") == "my_logo_1_.png"
    assert sanitize_filename("...") == "asset"
