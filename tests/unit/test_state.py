"""Tests for the manifest model and its serialization."""
from __future__ import annotations

import json


def _sample_state():  # noqa: ANN202
    from loom.generator.imports import Import
    from loom.generator.state import CodeGenerator, State

    app = Import(path="loom.framework.app", name="app")
    sitemap = Import(path="myapp.generator.sitemap", name="sitemap")
    return State(
        file_generators=(CodeGenerator.create(app, "loom/cmd/app/main.py"),),
        generate_dirs=(CodeGenerator.create(sitemap, "loom/internal/sitemap"),),
        imports=(app, sitemap),
    )


class TestCodeGenerator:
    """Tests for CodeGenerator."""

    def test_create_derives_camel(self) -> None:
        """camel is derived from the import alias and keeps keyword suffixes."""
        from loom.generator.imports import Import
        from loom.generator.state import CodeGenerator

        entry = CodeGenerator.create(Import(path="myapp.generator.import", name="import_"), "x")

        assert entry.camel == "import_"

    def test_to_dict(self) -> None:
        """to_dict nests the import."""
        from loom.generator.imports import Import
        from loom.generator.state import CodeGenerator

        entry = CodeGenerator.create(Import(path="loom.framework.view", name="view"), "loom/v")

        assert entry.to_dict() == {
            "import": {"name": "view", "path": "loom.framework.view"},
            "path": "loom/v",
            "camel": "view",
        }


class TestState:
    """Tests for State."""

    def test_generators_iterates_all_lists(self) -> None:
        """generators() walks the four lists in order."""
        state = _sample_state()

        assert [g.path for g in state.generators()] == [
            "loom/cmd/app/main.py",
            "loom/internal/sitemap",
        ]

    def test_canonical_json(self) -> None:
        """Canonical JSON uses camelCase keys and keeps list order."""
        state = _sample_state()

        canonical = state.to_canonical_json()
        data = json.loads(canonical)

        assert " " not in canonical
        assert list(data) == sorted(data)
        assert set(data) == {"fileGenerators", "fileServers", "generateDirs", "imports", "serveFiles"}
        assert [i["name"] for i in data["imports"]] == ["app", "sitemap"]
        assert data["generateDirs"][0]["path"] == "loom/internal/sitemap"

    def test_fingerprint_stable(self) -> None:
        """Equal manifests share a fingerprint."""
        first = _sample_state()
        second = _sample_state()

        assert first.fingerprint() == second.fingerprint()
        assert len(first.fingerprint()) == 64

    def test_fingerprint_tracks_order(self) -> None:
        """Reordering entries changes the fingerprint."""
        from dataclasses import replace

        state = _sample_state()
        reordered = replace(state, imports=tuple(reversed(state.imports)))

        assert state.fingerprint() != reordered.fingerprint()

    def test_canonical_json_nested_keys(self) -> None:
        """Entry keys are sorted too."""
        state = _sample_state()

        canonical = state.to_canonical_json()

        assert '{"camel":"app","import":{"name":"app","path":"loom.framework.app"},' in canonical
