"""Unit tests for installation discovery."""

from gst_patcher.services.locator import locate, matches_crossover_bundle
from tests.fixtures.data import MATCHING_BUNDLES, NON_MATCHING_BUNDLES


class TestMatchesCrossoverBundle:
    """Tests for the default name predicate."""

    def test_matching_names(self):
        for name in MATCHING_BUNDLES:
            assert matches_crossover_bundle(name), name

    def test_non_matching_names(self):
        for name in NON_MATCHING_BUNDLES:
            assert not matches_crossover_bundle(name), name


class TestLocate:
    """Tests for scanning an applications directory."""

    def test_finds_matching_directories(self, applications_dir):
        for name in MATCHING_BUNDLES + NON_MATCHING_BUNDLES:
            (applications_dir / name).mkdir()

        found = locate(applications_dir)

        assert sorted(i.name for i in found) == sorted(MATCHING_BUNDLES)

    def test_installation_paths(self, applications_dir):
        (applications_dir / "CrossOver.app").mkdir()

        [install] = locate(applications_dir)

        assert install.root == applications_dir / "CrossOver.app"
        assert install.name == "CrossOver.app"

    def test_ignores_files(self, applications_dir):
        (applications_dir / "CrossOver.app").write_text("not a bundle")

        assert locate(applications_dir) == []

    def test_not_recursive(self, applications_dir):
        (applications_dir / "Utilities" / "CrossOver.app").mkdir(parents=True)

        assert locate(applications_dir) == []

    def test_empty_directory(self, applications_dir):
        assert locate(applications_dir) == []

    def test_missing_root_returns_empty(self, temp_dir):
        assert locate(temp_dir / "nope") == []

    def test_custom_predicate(self, applications_dir):
        (applications_dir / "Wine.app").mkdir()
        (applications_dir / "CrossOver.app").mkdir()

        found = locate(applications_dir, lambda name: name.startswith("Wine"))

        assert [i.name for i in found] == ["Wine.app"]

    def test_does_not_modify_filesystem(self, applications_dir):
        (applications_dir / "CrossOver.app").mkdir()
        before = sorted(p.name for p in applications_dir.rglob("*"))

        locate(applications_dir)

        assert sorted(p.name for p in applications_dir.rglob("*")) == before
