"""
Minimal in-process runner for a closed SpecTree suite.

For every example reachable from the suite's root groups the runner builds a
fresh ExampleScope owned by the example's group, activates it, materializes
eager helpers and invokes the example body. An AssertionError, or a body
returning False, marks the example as failed; any other exception marks it
as an error. Either way the remaining examples still run.

Reporting and formatting of the collected results are left to callers.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from spectree.config import SuiteConfig
from spectree.execution.scope import ExampleScope

if TYPE_CHECKING:
    from spectree.structure.builder import ExampleDef, Suite

logger = logging.getLogger(__name__)


class ExampleStatus(Enum):
    """Outcome of one example run."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


class ExampleResult(BaseModel):
    """Result of running one example."""

    model_config = ConfigDict(frozen=True)

    group_path: str
    description: str
    status: ExampleStatus
    error_type: str | None = None
    error_message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == ExampleStatus.PASSED


class RunReport(BaseModel):
    """Results of a suite run, in declaration order."""

    results: list[ExampleResult] = []

    def by_status(self, status: ExampleStatus) -> list[ExampleResult]:
        return [r for r in self.results if r.status == status]

    @property
    def passed(self) -> list[ExampleResult]:
        return self.by_status(ExampleStatus.PASSED)

    @property
    def failed(self) -> list[ExampleResult]:
        return self.by_status(ExampleStatus.FAILED)

    @property
    def errors(self) -> list[ExampleResult]:
        return self.by_status(ExampleStatus.ERROR)

    @property
    def success(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> dict[str, int]:
        return {
            "examples": len(self.results),
            "passed": len(self.passed),
            "failed": len(self.failed),
            "errors": len(self.errors),
        }


class Runner:
    """Runs every example of a suite, each inside its own ExampleScope.

    With `max_workers` greater than one, examples run on a thread pool. The
    group tree and template table are only read during a run, and scopes are
    never shared, so no locking is involved.
    """

    def __init__(self, config: SuiteConfig | None = None):
        self.config = config

    def run(self, suite: "Suite") -> RunReport:
        """
        Close the suite and run all of its examples.

        Params:
            suite: Suite to run; it is closed first if still open

        Returns:
            RunReport with one result per example, in declaration order
        """
        config = self.config or suite.config
        suite.close()
        examples = list(suite.examples())
        logger.debug("Running %d example(s) with %d worker(s)", len(examples), config.max_workers)

        if config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
                results = list(pool.map(self.run_example, examples))
        else:
            results = []
            for example in examples:
                result = self.run_example(example)
                results.append(result)
                if config.fail_fast and not result.passed:
                    logger.debug("Stopping after first failure: %s", example.full_description)
                    break

        return RunReport(results=results)

    def run_example(self, example: "ExampleDef") -> ExampleResult:
        """
        Run a single example in a fresh scope.

        Params:
            example: Example definition to run

        Returns:
            ExampleResult describing the outcome
        """
        scope = ExampleScope(example.group, example)
        try:
            with scope.activate():
                scope.materialize_eager()
                outcome = example.run(scope)
            if outcome is False:
                raise AssertionError(
                    f"Example '{example.full_description}' returned False"
                )
        except AssertionError as e:
            return self._result(example, ExampleStatus.FAILED, e)
        except Exception as e:
            logger.warning(
                "Example '%s' raised %s: %s",
                example.full_description,
                type(e).__name__,
                e,
            )
            return self._result(example, ExampleStatus.ERROR, e)
        return self._result(example, ExampleStatus.PASSED)

    @staticmethod
    def _result(
        example: "ExampleDef",
        status: ExampleStatus,
        error: BaseException | None = None,
    ) -> ExampleResult:
        return ExampleResult(
            group_path=example.group.path,
            description=example.description,
            status=status,
            error_type=type(error).__name__ if error is not None else None,
            error_message=str(error) if error is not None else None,
        )


def run(suite: "Suite", config: SuiteConfig | None = None) -> RunReport:
    """Run a suite with a default Runner."""
    return Runner(config).run(suite)
