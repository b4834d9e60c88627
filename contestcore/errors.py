"""Errors raised by test steps and the test runner."""

from __future__ import annotations

from typing import Any, Sequence


class TargetError(Exception):
    """A target failed while running a test and goes no further."""

    def __init__(self, target: Any, error: BaseException) -> None:
        self.target = target
        self.error = error
        super().__init__(str(error))


class ResumeNotSupportedError(Exception):
    """A test step cannot resume."""

    def __init__(self, step_name: str) -> None:
        self.step_name = step_name
        super().__init__(f"test step {step_name} does not support resume")


class TestStepsNeverReturnedError(Exception):
    """One or more test steps did not finish in time."""

    __test__ = False

    def __init__(self, step_names: Sequence[str]) -> None:
        self.step_names = list(step_names)
        super().__init__(f"test step [{', '.join(self.step_names)}] did not return")


class TestStepClosedChannelsError(Exception):
    """A test step closed its output channels, which it must not do."""

    __test__ = False

    def __init__(self, step_name: str) -> None:
        self.step_name = step_name
        super().__init__(
            f"test step {step_name} closed output channels (api violation)"
        )