"""
Tests for the catalog store, source resolution and the build pipeline.
"""
import json
import logging
from pathlib import Path

import pytest

from docusage.catalog import CatalogError, CatalogStore, new_catalog
from docusage.extractors.usage_extractor import ExtractorSettings, UsageExtractor
from docusage.models import CatalogEntry
from docusage.pipeline import build_component_data, run_build, usage_for_page
from docusage.readers import candidate_paths, read_file_safe, resolve_source

HOME_PAGE = """\
import { Button } from '../component/Button';
import { Card } from '../component/Card';
import { useTheme } from '../hooks/useTheme';

export default function HomePage() {
  const [theme, setTheme] = useTheme();
  return (
    <Card>
      <Button label="Start" />
    </Card>
  );
}
"""


def write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def catalog_doc() -> dict:
    return {
        "version": "1.0",
        "components": [
            {"displayName": "Button", "type": "component", "filePath": "src/component/Button.tsx"},
            {"displayName": "Card", "type": "component", "filePath": "src/component/Card.tsx"},
            {"displayName": "useTheme", "type": "hook", "filePath": "src/hooks/useTheme.ts"},
            {"displayName": "HomePage", "type": "page", "filePath": "src/pages/HomePage.tsx"},
            {"displayName": "AboutPage", "type": "page", "filePath": "src/pages/AboutPage.tsx"},
        ],
    }


@pytest.fixture
def project(tmp_path):
    """Project root with sources and a docs build directory inside it."""
    write(tmp_path, "src/pages/HomePage.tsx", HOME_PAGE)
    docs = tmp_path / "smartdocs"
    docs.mkdir()
    return tmp_path


class TestCatalogStore:
    """Tests for loading and saving catalog documents."""

    def test_round_trip_preserves_unknown_keys(self, tmp_path):
        """Extra keys on the document and entries survive save/load."""
        data = catalog_doc()
        data["components"][0]["props"] = [{"name": "label", "type": "string"}]
        data["projectName"] = "My App"
        path = tmp_path / "content" / "search.json"

        CatalogStore.save(data, path)
        loaded = CatalogStore.load(path)

        assert loaded == data

    def test_missing_file(self, tmp_path):
        """A missing catalog raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            CatalogStore.load(tmp_path / "search.json")

    def test_invalid_json(self, tmp_path):
        """Unparseable JSON raises CatalogError."""
        path = write(tmp_path, "search.json", "{not json")
        with pytest.raises(CatalogError):
            CatalogStore.load(path)

    def test_not_an_object(self, tmp_path):
        """A top-level list is rejected."""
        path = write(tmp_path, "search.json", "[]")
        with pytest.raises(CatalogError):
            CatalogStore.load(path)

    def test_components_not_a_list(self, tmp_path):
        """components must be a list."""
        path = write(tmp_path, "search.json", json.dumps({"components": {}}))
        with pytest.raises(CatalogError):
            CatalogStore.load(path)

    def test_missing_components_defaults_empty(self, tmp_path):
        """A document without components loads as empty."""
        path = write(tmp_path, "search.json", "{}")
        assert CatalogStore.load(path)["components"] == []

    def test_entries_skip_non_dicts(self):
        """Malformed items are ignored when building entries."""
        entries = CatalogStore.entries({"components": [{"displayName": "Card"}, "junk", 3]})
        assert [e.display_name for e in entries] == ["Card"]

    def test_new_catalog(self):
        """Fresh documents carry a version and the entries."""
        data = new_catalog([CatalogEntry(display_name="Card", type="component")])
        assert data["version"] == "1.0"
        assert "generatedAt" in data
        assert data["components"] == [{"displayName": "Card", "type": "component", "filePath": ""}]


class TestReaders:
    """Tests for file reading and source resolution."""

    def test_read_missing_file(self, tmp_path, caplog):
        """Missing files return None with a warning."""
        with caplog.at_level(logging.WARNING):
            assert read_file_safe(tmp_path / "missing.tsx") is None
        assert "FileNotFoundError" in caplog.text

    def test_read_latin1_fallback(self, tmp_path):
        """Non-UTF-8 bytes fall back to latin-1."""
        path = tmp_path / "Page.tsx"
        path.write_bytes("<Card title='caf\xe9' />".encode("latin-1"))
        assert read_file_safe(path) == "<Card title='caf\xe9' />"

    def test_candidate_order(self, tmp_path):
        """Parent of the build directory is tried first, raw path last."""
        base = tmp_path / "smartdocs"
        candidates = candidate_paths("src/App.tsx", base)
        assert candidates[0] == (tmp_path / "src/App.tsx").resolve()
        assert candidates[1] == (base / "src/App.tsx").resolve()
        assert candidates[2] == (tmp_path.parent / "src/App.tsx").resolve()
        assert candidates[-1] == Path("src/App.tsx")

    def test_candidates_unique(self, tmp_path):
        """Absolute paths collapse to a single candidate."""
        target = (tmp_path / "App.tsx").resolve()
        assert candidate_paths(str(target), tmp_path) == [target]

    def test_resolve_from_project_root(self, project):
        """Sources are found relative to the parent of the build directory."""
        resolved = resolve_source("src/pages/HomePage.tsx", project / "smartdocs")
        assert resolved is not None
        path, content = resolved
        assert path == (project / "src/pages/HomePage.tsx").resolve()
        assert content == HOME_PAGE

    def test_resolve_from_base_dir(self, project):
        """Sources are also found relative to the build directory itself."""
        assert resolve_source("src/pages/HomePage.tsx", project) is not None

    def test_resolve_missing(self, project):
        """Unknown paths resolve to None."""
        assert resolve_source("src/pages/Nope.tsx", project / "smartdocs") is None
        assert resolve_source("", project) is None


class TestBuildComponentData:
    """Tests for attaching usedComponents to page entries."""

    def test_pages_get_used_components(self, project):
        """Found pages carry their usage records."""
        updated, summary = build_component_data(catalog_doc(), project / "smartdocs")
        home = next(c for c in updated["components"] if c["displayName"] == "HomePage")

        assert home["usedComponents"] == [
            {"name": "Button", "type": "component", "count": 1, "firstUsage": home["usedComponents"][0]["firstUsage"]},
            {"name": "Card", "type": "component", "count": 1, "firstUsage": home["usedComponents"][1]["firstUsage"]},
            {"name": "useTheme", "type": "hook", "count": 2, "firstUsage": home["usedComponents"][2]["firstUsage"]},
        ]
        assert '<Button label="Start" />' in home["usedComponents"][0]["firstUsage"]
        assert summary.pages_total == 2
        assert summary.pages_analyzed == 1
        assert summary.pages_with_usage == 1

    def test_missing_page_left_unchanged(self, project, caplog):
        """Pages without a source file are reported, not failed."""
        data = catalog_doc()
        with caplog.at_level(logging.WARNING):
            updated, summary = build_component_data(data, project / "smartdocs")

        about = next(c for c in updated["components"] if c["displayName"] == "AboutPage")
        assert "usedComponents" not in about
        assert summary.pages_missing == ["AboutPage"]
        assert "Could not find source file for AboutPage" in caplog.text

    def test_non_pages_pass_through(self, project):
        """Components and hooks are not analyzed."""
        updated, _ = build_component_data(catalog_doc(), project / "smartdocs")
        for raw in updated["components"]:
            if raw["type"] != "page":
                assert "usedComponents" not in raw

    def test_input_not_modified(self, project):
        """The input document is left as it was."""
        data = catalog_doc()
        snapshot = json.loads(json.dumps(data))
        build_component_data(data, project / "smartdocs")
        assert data == snapshot

    def test_custom_extractor(self, project):
        """The given extractor's settings are used."""
        extractor = UsageExtractor(ExtractorSettings(dedupe_hook_calls=True))
        updated, _ = build_component_data(catalog_doc(), project / "smartdocs", extractor)
        home = next(c for c in updated["components"] if c["displayName"] == "HomePage")
        counts = {u["name"]: u["count"] for u in home["usedComponents"]}
        assert counts["useTheme"] == 1

    def test_page_without_file_path_skipped(self, project):
        """Pages lacking a filePath are passed through and not counted."""
        data = {"components": [{"displayName": "Orphan", "type": "page"}]}
        updated, summary = build_component_data(data, project)
        assert updated["components"] == data["components"]
        assert summary.pages_total == 0

    def test_page_with_no_usage(self, project):
        """A page that uses nothing gets an empty list."""
        write(project, "src/pages/Empty.tsx", "export default function Empty() { return null; }\n")
        data = {"components": [{"displayName": "Empty", "type": "page", "filePath": "src/pages/Empty.tsx"}]}
        updated, summary = build_component_data(data, project)
        assert updated["components"][0]["usedComponents"] == []
        assert summary.pages_analyzed == 1
        assert summary.pages_with_usage == 0


class TestRunBuild:
    """Tests for the load/build/save driver."""

    def test_updates_catalog_in_place(self, project):
        """The catalog file is rewritten with usage data."""
        catalog_path = project / "smartdocs" / "content" / "search.json"
        CatalogStore.save(catalog_doc(), catalog_path)

        summary = run_build(catalog_path, base_dir=project / "smartdocs")

        saved = CatalogStore.load(catalog_path)
        home = next(c for c in saved["components"] if c["displayName"] == "HomePage")
        assert [u["name"] for u in home["usedComponents"]] == ["Button", "Card", "useTheme"]
        assert saved["version"] == "1.0"
        assert summary.pages_analyzed == 1

    def test_defaults_to_cwd(self, project, monkeypatch):
        """Without base_dir, paths resolve from the working directory."""
        catalog_path = project / "smartdocs" / "content" / "search.json"
        CatalogStore.save(catalog_doc(), catalog_path)
        monkeypatch.chdir(project / "smartdocs")

        summary = run_build(catalog_path)

        assert summary.pages_analyzed == 1


class TestUsageForPage:
    """Tests for render-time usage lookup."""

    def test_returns_stored_usage(self, project):
        """Stored usedComponents are returned without scanning."""
        stored = [{"name": "Card", "type": "component", "count": 9, "firstUsage": "<Card />"}]
        raw = {"displayName": "HomePage", "type": "page", "filePath": "missing.tsx", "usedComponents": stored}
        assert usage_for_page(raw, catalog_doc()["components"], project) == stored

    def test_extracts_on_the_fly(self, project):
        """Without stored data the page source is scanned."""
        components = catalog_doc()["components"]
        raw = components[3]
        used = usage_for_page(raw, components, project / "smartdocs")
        assert [u["name"] for u in used] == ["Button", "Card", "useTheme"]

    def test_missing_source_gives_empty_list(self, project):
        """Missing sources degrade to no usage."""
        components = catalog_doc()["components"]
        assert usage_for_page(components[4], components, project) == []
