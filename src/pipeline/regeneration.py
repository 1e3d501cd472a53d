# src/pipeline/regeneration.py - v1
"""Generate-check-regenerate loop around an external text generator.

Each attempt raises the sampling temperature slightly. A failed originality
check rewrites the prompt with generate_improvement_prompt before the next
attempt. The last generated text is returned even if it never passed; the
caller decides whether to publish it.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from originality_guard.core.guard import OriginalityGuard
from originality_guard.core.models import OriginalityResult, ReferenceContent
from originality_guard.core.prompts import generate_improvement_prompt
from originality_guard.logging.context import clear_context, set_check_context

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str, float], Awaitable[str]]


class GenerationFailedError(Exception):
    """Every generation attempt raised before producing text."""

    def __init__(self, attempts: int, last_error: Exception | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Content generation failed after {attempts} attempts: {last_error}"
        )


@dataclass
class GenerationOutcome:
    """Final text of a regeneration run and its last originality result."""

    text: str
    result: OriginalityResult | None
    attempts: int
    passed: bool
    final_prompt: str


async def generate_original_content(
    generate: GenerateFn,
    prompt: str,
    references: Sequence[ReferenceContent],
    *,
    guard: OriginalityGuard,
    max_attempts: int = 3,
    base_temperature: float = 0.75,
    temperature_step: float = 0.05,
) -> GenerationOutcome:
    """Generate text until it passes the originality guard or attempts run out.

    Raises:
        GenerationFailedError: If no attempt produced any text.
    """
    set_check_context(uuid.uuid4().hex[:12], operation="regeneration")
    try:
        current_prompt = prompt
        last_text: str | None = None
        last_result: OriginalityResult | None = None
        last_error: Exception | None = None
        attempts = max(1, max_attempts)

        for attempt in range(1, attempts + 1):
            temperature = base_temperature + (attempt - 1) * temperature_step
            try:
                text = await generate(current_prompt, temperature)
            except Exception as e:
                last_error = e
                logger.error("Generation attempt %d/%d failed: %s", attempt, attempts, e)
                continue

            last_text = text
            if not references:
                return GenerationOutcome(text, None, attempt, True, current_prompt)

            last_result = await guard.check(text, references)
            if last_result.is_original:
                logger.info(
                    "Attempt %d passed originality check (score=%d)",
                    attempt, last_result.overall_score,
                )
                return GenerationOutcome(text, last_result, attempt, True, current_prompt)

            logger.info(
                "Attempt %d failed originality check (score=%d)",
                attempt, last_result.overall_score,
            )
            if attempt < attempts:
                current_prompt = generate_improvement_prompt(last_result, current_prompt)

        if last_text is None:
            raise GenerationFailedError(attempts, last_error) from last_error

        logger.warning("Returning text that did not pass after %d attempts", attempts)
        return GenerationOutcome(last_text, last_result, attempts, False, current_prompt)
    finally:
        clear_context()
