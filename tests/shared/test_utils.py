"""Tests for filesystem and identifier helpers"""
import uuid

from utils.filesystem import ensure_dir
from utils.generators import generate_id, generate_image_name


class TestEnsureDir:
    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"

        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_idempotent(self, tmp_path):
        target = tmp_path / "imgs"
        (ensure_dir(target) / "keep.png").write_bytes(b"x")

        for _ in range(3):
            ensure_dir(target)

        assert (target / "keep.png").read_bytes() == b"x"


class TestGenerators:
    def test_generate_id_is_uuid4(self):
        value = generate_id()

        assert uuid.UUID(value).version == 4

    def test_ids_are_unique(self):
        assert len({generate_id() for _ in range(1000)}) == 1000

    def test_image_name_keeps_extension(self):
        assert generate_image_name("a.png").endswith(".png")
        assert generate_image_name("photo.JPG").endswith(".JPG")
        assert generate_image_name("archive.tar.gz").endswith(".gz")

    def test_image_name_drops_directories(self):
        name = generate_image_name("..\\..\\evil/dir/shot.webp")

        assert "/" not in name and "\\" not in name
        assert name.endswith(".webp")

    def test_image_name_without_extension(self):
        name = generate_image_name("README")

        assert uuid.UUID(name)
