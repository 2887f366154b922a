"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import sys

from restgate.cache import ChangeDetectionCache
from restgate.compatibility import parse_compat_level
from restgate.config import RestgateConfig, load_config, validate_config_file
from restgate.constants.artifacts import KIND_DATA_TEMPLATE, KIND_IDL, KIND_SNAPSHOT
from restgate.exceptions import ConfigError
from restgate.exceptions.validation import format_errors
from restgate.generation import CommandGenerator, data_template_kind, idl_kind, snapshot_kind
from restgate.model import ApiPublishResult, ModelGenerationResult
from restgate.pipeline import (
    ApiPipelineInputs,
    KindTarget,
    build_resolver_path,
    run_api_pipeline,
    run_data_model_pipeline,
)


def build_generator(config: RestgateConfig, kind: str) -> CommandGenerator:
    """Return the subprocess generator configured for ``kind``."""
    argv = config.generator_command(kind)
    if not argv:
        raise ConfigError(f"No generator command configured for '{kind}' (set generators.{kind} in restgate.yaml)")
    return CommandGenerator(argv)


def handle_generate_models(args: argparse.Namespace) -> int:
    """Run the data-model pipeline."""
    config = load_config(args.root, args.config)
    result = run_data_model_pipeline(
        descriptor_dir=config.descriptor_dir,
        model_dir=config.model_dir,
        kind=data_template_kind(build_generator(config, KIND_DATA_TEMPLATE)),
        cache=ChangeDetectionCache(config.cache_dir),
        resolver_path=build_resolver_path(config.descriptor_dir, config.classpath),
        api_name=config.api_name,
    )
    print(render_model_result(result))
    return 0


def handle_publish_api(args: argparse.Namespace) -> int:
    """Run the API pipeline: regenerate, check and publish idl and snapshots."""
    config = load_config(args.root, args.config)
    compat_level = parse_compat_level(args.compat_mode) if args.compat_mode else config.compat_mode
    inputs = ApiPipelineInputs(
        api_name=config.api_name,
        compat_level=compat_level,
        resource_products=config.resource_products,
        resource_packages=config.resource_packages,
        resource_source_paths=config.resource_source_paths,
        classpath=config.classpath,
        resolver_path=build_resolver_path(config.descriptor_dir, config.classpath),
    )
    targets = (
        KindTarget(
            kind=snapshot_kind(build_generator(config, KIND_SNAPSHOT)),
            generated_dir=config.snapshot_generated_dir,
            published_dir=config.snapshot_published_dir,
        ),
        KindTarget(
            kind=idl_kind(build_generator(config, KIND_IDL)),
            generated_dir=config.idl_generated_dir,
            published_dir=config.idl_published_dir,
        ),
    )
    result = run_api_pipeline(inputs, targets, ChangeDetectionCache(config.cache_dir))
    print(render_api_result(result))
    return 0


def handle_validate_config(args: argparse.Namespace) -> int:
    """Validate config and report every problem."""
    errors = validate_config_file(args.root, args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def render_model_result(result: ModelGenerationResult) -> str:
    state = "regenerated" if result.regenerated else "up to date"
    return f"Data models {state}: {len(result.generated_files)} file(s)"


def render_api_result(result: ApiPublishResult) -> str:
    state = "regenerated" if result.regenerated else "up to date"
    lines = [f"API {result.api_name or '<unnamed>'} {state}"]
    for kind in result.kinds:
        line = f"  {kind.kind}: {len(kind.generated_files)} generated"
        if kind.report is not None:
            line += f", verdict {kind.report.verdict}"
        if kind.publish is not None:
            line += f", {len(kind.publish.copied)} published"
        lines.append(line)
    return "\n".join(lines)
