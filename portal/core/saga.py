"""여러 저장소에 걸친 비트랜잭션 작업을 순서대로 실행한다.

각 단계는 실행 함수와 선택적인 보상 함수를 가진다. 어떤 단계가 실패하면
이미 완료된 단계의 보상 함수를 역순으로 실행한 뒤 원래 예외를 다시 던진다.
보상 함수가 없는 단계는 되돌리지 않는다.
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any]]


class SagaStep:
    def __init__(self, name: str, action: Action, compensation: Optional[Action] = None):
        self.name = name
        self.action = action
        self.compensation = compensation


class Saga:
    """순서 있는 단계 + 부분 실패 시 보상"""

    def __init__(self, name: str):
        self.name = name
        self.steps: List[SagaStep] = []
        self.completed: List[str] = []

    def step(self, name: str, action: Action, compensation: Optional[Action] = None) -> "Saga":
        self.steps.append(SagaStep(name, action, compensation))
        return self

    async def run(self) -> List[Any]:
        results = []
        done: List[SagaStep] = []
        self.completed = []

        for step in self.steps:
            try:
                results.append(await step.action())
            except Exception:
                logger.warning(
                    "saga %s failed at step %s (completed: %s)",
                    self.name, step.name, [s.name for s in done],
                )
                await self._compensate(done)
                raise
            done.append(step)
            self.completed.append(step.name)

        return results

    async def _compensate(self, done: List[SagaStep]) -> None:
        for step in reversed(done):
            if step.compensation is None:
                logger.warning("saga %s: step %s has no compensation, left as is", self.name, step.name)
                continue
            try:
                await step.compensation()
                logger.info("saga %s: compensated step %s", self.name, step.name)
            except Exception:
                logger.exception("saga %s: compensation for step %s failed", self.name, step.name)
