import pytest
from PIL import Image

from faceview.textures import Texture, TextureStore


@pytest.fixture
def image_path(tmp_path):
    img = Image.new("RGB", (2, 2), (0, 0, 255))
    img.putpixel((0, 0), (255, 0, 0))
    img.putpixel((1, 0), (255, 0, 0))
    path = tmp_path / "face.png"
    img.save(path)
    return str(path)


def test_load_flips_and_converts(image_path):
    tex = Texture()
    texid = tex.load(image_path)
    assert texid > 0
    assert tex.texid == texid
    assert tex.pathname == image_path
    assert tex.image.mode == "RGBA"
    assert tex.image.getpixel((0, 1)) == (255, 0, 0, 255)
    assert tex.image.getpixel((0, 0)) == (0, 0, 255, 255)


def test_load_missing_raises(tmp_path):
    tex = Texture()
    with pytest.raises(OSError):
        tex.load(str(tmp_path / "missing.png"))
    assert tex.texid == 0


def test_reload_keeps_id(image_path):
    tex = Texture()
    texid = tex.load(image_path)
    Image.new("RGB", (3, 3), (0, 255, 0)).save(image_path)
    tex.reload()
    assert tex.texid == texid
    assert tex.image.size == (3, 3)


def test_reload_unloaded_raises():
    with pytest.raises(OSError):
        Texture().reload()


def test_store_shares_by_path(image_path):
    store = TextureStore()
    first = store.find_or_add(image_path)
    second = store.find_or_add(image_path)
    assert first == second
    assert len(store) == 1


def test_store_compares_case_insensitively(image_path):
    store = TextureStore()
    first = store.find_or_add(image_path)
    assert store.find_or_add(image_path.upper()) == first
    assert len(store) == 1


def test_store_distinct_paths_get_distinct_ids(image_path, tmp_path):
    other = tmp_path / "other.png"
    Image.new("RGB", (1, 1)).save(other)
    store = TextureStore()
    a = store.find_or_add(image_path)
    b = store.find_or_add(str(other))
    assert a != b
    assert len(store) == 2


def test_store_missing_returns_zero(tmp_path):
    store = TextureStore()
    assert store.find_or_add(str(tmp_path / "nothing.png")) == 0
    assert len(store) == 0


def test_store_reload(image_path):
    store = TextureStore()
    store.find_or_add(image_path)
    Image.new("RGB", (5, 4)).save(image_path)
    store.reload()
    assert store.textures[0].image.size == (5, 4)