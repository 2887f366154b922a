"""Generator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from restgate.model import GenerationRequest, GeneratorResult


class Generator(ABC):
    """Produces artifacts for one kind into ``request.output_dir``."""

    @abstractmethod
    def generate(self, request: GenerationRequest) -> GeneratorResult:
        """Run the generator and report the files it wrote and considers current."""
