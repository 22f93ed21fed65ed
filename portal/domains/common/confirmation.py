"""삭제 확인 흐름.

IDLE(대화상자 닫힘) → request() → CONFIRMING(선택 대기)
CONFIRMING → cancel() → IDLE
CONFIRMING → confirm() → 삭제 호출 → 결과와 관계없이 IDLE
삭제 호출이 진행 중이면 in_flight가 켜져 중복 확인을 막는다.
HTTP 요청마다 흐름이 새로 만들어지므로 ConfirmationRegistry가 진행 중인 흐름을
(리소스, id)로 보관해 다른 요청의 중복 확인도 409로 거절한다.
"""

import enum
import logging
from typing import Any, Awaitable, Callable, Dict, Tuple

from portal.core.errors import ConfirmationRequiredError, ConflictError

logger = logging.getLogger(__name__)


class ConfirmationState(enum.Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"


class DeleteConfirmation:
    def __init__(self, resource: str, record_id, delete: Callable[[], Awaitable[Any]]):
        self.resource = resource
        self.record_id = record_id
        self._delete = delete
        self.state = ConfirmationState.IDLE
        self.in_flight = False

    def request(self) -> None:
        if self.state is ConfirmationState.IDLE:
            self.state = ConfirmationState.CONFIRMING

    def cancel(self) -> None:
        if self.in_flight:
            return
        self.state = ConfirmationState.IDLE

    async def confirm(self) -> Any:
        if self.state is not ConfirmationState.CONFIRMING:
            raise ConfirmationRequiredError()
        if self.in_flight:
            raise ConflictError("삭제가 이미 진행 중입니다.")

        self.in_flight = True
        try:
            result = await self._delete()
            logger.info("%s %s deleted", self.resource, self.record_id)
            return result
        except Exception:
            logger.warning("%s %s delete failed", self.resource, self.record_id)
            raise
        finally:
            self.in_flight = False
            self.state = ConfirmationState.IDLE


class ConfirmationRegistry:
    """진행 중인 삭제 확인을 (리소스, id) 단위로 추적한다 (프로세스 내)"""

    def __init__(self):
        self._flows: Dict[Tuple[str, str], DeleteConfirmation] = {}

    def is_in_flight(self, resource: str, record_id) -> bool:
        flow = self._flows.get((resource, str(record_id)))
        return flow is not None and flow.in_flight

    async def run(
        self,
        resource: str,
        record_id,
        delete: Callable[[], Awaitable[Any]],
        confirmed: bool,
    ) -> Any:
        key = (resource, str(record_id))
        flow = self._flows.get(key)
        if flow is not None and flow.in_flight:
            if not confirmed:
                raise ConfirmationRequiredError()
            raise ConflictError("삭제가 이미 진행 중입니다.")

        flow = DeleteConfirmation(resource, record_id, delete)
        flow.request()
        if not confirmed:
            flow.cancel()
            raise ConfirmationRequiredError()

        self._flows[key] = flow
        try:
            return await flow.confirm()
        finally:
            self._flows.pop(key, None)


confirmations = ConfirmationRegistry()


async def run_confirmed_delete(
    resource: str,
    record_id,
    delete: Callable[[], Awaitable[Any]],
    confirmed: bool,
) -> Any:
    """HTTP 요청 하나에 대응하는 확인 흐름 (confirm=true 없으면 취소, 같은 대상 중복 확인은 409)"""
    return await confirmations.run(resource, record_id, delete, confirmed)
