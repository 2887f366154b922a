"""Pipelines composing cache, generation, compatibility and publishing."""

from .orchestrator import (
    ApiPipelineInputs,
    KindTarget,
    build_resolver_path,
    collect_api_inputs,
    run_api_pipeline,
    run_data_model_pipeline,
)

__all__ = [
    "ApiPipelineInputs",
    "KindTarget",
    "build_resolver_path",
    "collect_api_inputs",
    "run_api_pipeline",
    "run_data_model_pipeline",
]
