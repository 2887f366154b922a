"""Scenario tests for the generate, check and publish API pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from restgate.cache import ChangeDetectionCache
from restgate.exceptions import CompatibilityError, GenerationError
from restgate.generation import idl_kind, snapshot_kind
from restgate.model import GenerationRequest
from restgate.pipeline import ApiPipelineInputs, KindTarget, build_resolver_path, collect_api_inputs, run_api_pipeline
from tests.fakes import FailingGenerator, RecordingGenerator, write_text


class ApiProject:
    """A throwaway project: compiled resources, descriptors and a mutable resource model."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.fields: list[dict[str, str]] = [{"name": "id", "type": "long"}, {"name": "message", "type": "string"}]
        self.resources = ["greetings", "tones"]
        self.idl_generator = RecordingGenerator(self._idl_outputs)
        self.snapshot_generator = RecordingGenerator(self._snapshot_outputs)
        write_text(self.classes_dir / "com" / "example" / "GreetingsResource.class", "v1")
        write_text(self.descriptor_dir / "com" / "example" / "Greeting.pdsc", '{"name": "Greeting"}')

    @property
    def classes_dir(self) -> Path:
        return self.root / "server" / "classes"

    @property
    def descriptor_dir(self) -> Path:
        return self.root / "data" / "pegasus"

    @property
    def idl_published(self) -> Path:
        return self.root / "api" / "idl"

    @property
    def snapshot_published(self) -> Path:
        return self.root / "api" / "snapshot"

    def recompile(self, marker: str) -> None:
        write_text(self.classes_dir / "com" / "example" / "GreetingsResource.class", marker)

    def inputs(self, level: str) -> ApiPipelineInputs:
        return ApiPipelineInputs(
            api_name="greetings-api",
            compat_level=level,  # type: ignore[arg-type]
            resource_products=(self.classes_dir,),
            resource_packages=("com.example",),
            resource_source_paths=(str(self.root / "server" / "src"),),
            resolver_path=build_resolver_path(self.descriptor_dir),
        )

    def targets(self) -> tuple[KindTarget, ...]:
        return (
            KindTarget(
                kind=snapshot_kind(self.snapshot_generator),
                generated_dir=self.root / "build" / "snapshot_json",
                published_dir=self.snapshot_published,
            ),
            KindTarget(
                kind=idl_kind(self.idl_generator),
                generated_dir=self.root / "build" / "restspec_json",
                published_dir=self.idl_published,
            ),
        )

    def _idl_document(self, resource: str) -> dict[str, object]:
        return {"name": resource, "namespace": "com.example", "schema": "com.example.Greeting", "fields": self.fields}

    def _idl_outputs(self, request: GenerationRequest) -> dict[str, str]:
        return {
            f"com.example.{resource}.restspec.json": json.dumps(self._idl_document(resource))
            for resource in self.resources
        }

    def _snapshot_outputs(self, request: GenerationRequest) -> dict[str, str]:
        return {
            f"com.example.{resource}.snapshot.json": json.dumps(
                {"models": [{"name": "com.example.Greeting", "fields": self.fields}], "schema": self._idl_document(resource)}
            )
            for resource in self.resources
        }


def _published_state(directory: Path) -> dict[str, str]:
    return {path.name: path.read_text(encoding="utf-8") for path in sorted(directory.glob("*.json"))}


@pytest.fixture
def project(tmp_path: Path) -> ApiProject:
    return ApiProject(tmp_path)


def _run(project: ApiProject, cache: ChangeDetectionCache, level: str = "equivalent"):
    return run_api_pipeline(project.inputs(level), project.targets(), cache)


def test_fresh_project_publishes_every_artifact(project: ApiProject, cache: ChangeDetectionCache) -> None:
    result = _run(project, cache)

    assert result.regenerated is True
    for kind in result.kinds:
        assert kind.report is not None and kind.report.verdict == "equivalent"
        assert kind.publish is not None and len(kind.publish.copied) == 2
    assert sorted(_published_state(project.idl_published)) == [
        "com.example.greetings.restspec.json",
        "com.example.tones.restspec.json",
    ]
    assert len(_published_state(project.snapshot_published)) == 2


def test_no_op_rerun_skips_generation(project: ApiProject, cache: ChangeDetectionCache) -> None:
    first = _run(project, cache)
    second = _run(project, cache)

    assert second.regenerated is False
    assert len(project.idl_generator.calls) == 1
    assert len(project.snapshot_generator.calls) == 1
    assert second.files_for("idl") == first.files_for("idl")
    assert second.files_for("snapshot") == first.files_for("snapshot")


def test_backwards_compatible_addition_is_published(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache, "backwards")
    project.fields = [*project.fields, {"name": "tone", "type": "string"}]
    project.recompile("v2")

    result = _run(project, cache, "backwards")

    idl = next(kind for kind in result.kinds if kind.kind == "idl")
    assert idl.report is not None and idl.report.verdict == "compatible"
    assert "added" in idl.report.summary
    published = json.loads((project.idl_published / "com.example.greetings.restspec.json").read_text(encoding="utf-8"))
    assert [field["name"] for field in published["fields"]] == ["id", "message", "tone"]


def test_field_removal_under_equivalent_blocks_publish(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache)
    idl_before = _published_state(project.idl_published)
    snapshot_before = _published_state(project.snapshot_published)
    project.fields = [{"name": "id", "type": "long"}]
    project.recompile("v2")

    with pytest.raises(CompatibilityError) as excinfo:
        _run(project, cache)

    assert "removed" in excinfo.value.summary
    assert _published_state(project.idl_published) == idl_before
    assert _published_state(project.snapshot_published) == snapshot_before
    assert cache.evaluate("idlgen.classfiles", collect_api_inputs(
        (project.classes_dir,), ("com.example",), build_resolver_path(project.descriptor_dir)
    )).is_stale is True


def test_off_level_publishes_breaking_changes(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache)
    project.fields = []
    project.recompile("v2")

    result = _run(project, cache, "off")

    assert all(kind.report is not None and kind.report.checked is False for kind in result.kinds)
    published = json.loads((project.idl_published / "com.example.tones.restspec.json").read_text(encoding="utf-8"))
    assert published["fields"] == []


def test_removed_resource_is_pruned_from_generated_dir(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache, "ignore")
    project.resources = ["greetings"]
    project.recompile("v2")

    result = _run(project, cache, "ignore")

    assert [path.name for path in result.files_for("idl")] == ["com.example.greetings.restspec.json"]
    assert not (project.root / "build" / "restspec_json" / "com.example.tones.restspec.json").exists()


def test_descriptor_change_triggers_regeneration(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache)
    write_text(project.descriptor_dir / "com" / "example" / "Greeting.pdsc", '{"name": "Greeting", "doc": "hi"}')

    result = _run(project, cache)

    assert result.regenerated is True
    assert len(project.idl_generator.calls) == 2


def test_generator_failure_leaves_published_tree_and_cache(project: ApiProject, cache: ChangeDetectionCache) -> None:
    _run(project, cache)
    before = _published_state(project.idl_published)
    project.recompile("v2")
    targets = (
        KindTarget(
            kind=idl_kind(FailingGenerator(RuntimeError("exporter crashed"))),
            generated_dir=project.root / "build" / "restspec_json",
            published_dir=project.idl_published,
        ),
    )

    with pytest.raises(GenerationError) as excinfo:
        run_api_pipeline(project.inputs("equivalent"), targets, cache)

    assert excinfo.value.api_name == "greetings-api"
    assert excinfo.value.packages == ("com.example",)
    assert _published_state(project.idl_published) == before
    assert _run(project, cache).regenerated is True


def test_collect_api_inputs_scopes_to_resource_packages(tmp_path: Path) -> None:
    products = tmp_path / "classes"
    wanted = write_text(products / "com" / "example" / "rest" / "A.class", "")
    write_text(products / "com" / "other" / "B.class", "")
    descriptor = write_text(tmp_path / "pegasus" / "Greeting.pdsc", "{}")
    resolver_path = build_resolver_path(tmp_path / "pegasus", (str(tmp_path / "missing.jar"),))

    inputs = collect_api_inputs((products,), ("com.example",), resolver_path)

    assert inputs == sorted([wanted.resolve(), descriptor.resolve()])


def test_reverting_a_rejected_change_regenerates_accepted_artifacts(
    project: ApiProject, cache: ChangeDetectionCache
) -> None:
    _run(project, cache)
    accepted_fields = project.fields
    project.fields = [{"name": "id", "type": "long"}]
    project.recompile("v2")
    with pytest.raises(CompatibilityError):
        _run(project, cache)

    project.fields = accepted_fields
    project.recompile("v1")
    result = _run(project, cache)

    assert result.regenerated is True
    generated = json.loads(
        (project.root / "build" / "restspec_json" / "com.example.greetings.restspec.json").read_text(encoding="utf-8")
    )
    assert [field["name"] for field in generated["fields"]] == ["id", "message"]
    assert _run(project, cache).regenerated is False


def test_only_files_matching_the_kind_glob_are_published(project: ApiProject, cache: ChangeDetectionCache) -> None:
    generator = RecordingGenerator(lambda request: {"a.restspec.json": "{}", "exporter.log": "done"})
    targets = (
        KindTarget(
            kind=idl_kind(generator),
            generated_dir=project.root / "build" / "restspec_json",
            published_dir=project.idl_published,
        ),
    )

    result = run_api_pipeline(project.inputs("off"), targets, cache)

    assert [path.name for path in result.files_for("idl")] == ["a.restspec.json"]
    assert sorted(path.name for path in project.idl_published.iterdir()) == ["a.restspec.json"]
