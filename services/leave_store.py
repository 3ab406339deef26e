# services/leave_store.py
from typing import Iterable, List, Optional

from models.leave import LeaveRecord, LeaveStatus, LeaveType
from services.activity import AuditTrail
from services.errors import InvalidWindowError, NotFoundError
from utils.dates import parse_date


def _validated(leave: LeaveRecord) -> LeaveRecord:
    try:
        start = parse_date(leave.start_date)
        end = parse_date(leave.end_date)
    except ValueError as e:
        raise InvalidWindowError(str(e)) from e
    if start is None or end is None:
        raise InvalidWindowError("Leave needs both a start and an end date")
    if end < start:
        raise InvalidWindowError("End date must be on or after start date")
    data = leave.model_dump()
    data.update(start_date=start, end_date=end,
                leave_type=LeaveType(leave.leave_type), status=LeaveStatus(leave.status))
    return LeaveRecord(**data)


class LeaveStore:
    def __init__(self, leaves: Optional[Iterable[LeaveRecord]] = None, audit: Optional[AuditTrail] = None):
        self._leaves: List[LeaveRecord] = list(leaves or [])
        self.audit = audit if audit is not None else AuditTrail()

    @property
    def leaves(self) -> List[LeaveRecord]:
        return list(self._leaves)

    def get(self, leave_id: str) -> Optional[LeaveRecord]:
        return next((l for l in self._leaves if l.id == leave_id), None)

    def for_user(self, user_id: str) -> List[LeaveRecord]:
        mine = [l for l in self._leaves if l.user_id == user_id]
        return sorted(mine, key=lambda l: l.start_date, reverse=True)

    def schedule(self, actor_id: str, leave: LeaveRecord) -> LeaveRecord:
        leave = _validated(leave)
        # no approval workflow: everything booked is approved
        leave.status = LeaveStatus.APPROVED
        self._leaves.insert(0, leave)
        self.audit.record(actor_id, "Leave Scheduled",
                          f"Scheduled {leave.leave_type.value} from {leave.start_date} to {leave.end_date}",
                          leave.id, "Leave")
        return leave

    def update(self, actor_id: str, leave: LeaveRecord) -> LeaveRecord:
        if self.get(leave.id) is None:
            raise NotFoundError("Leave", leave.id)
        leave = _validated(leave)
        self._leaves = [leave if l.id == leave.id else l for l in self._leaves]
        self.audit.record(actor_id, "Leave Updated", f"Updated leave {leave.id}", leave.id, "Leave")
        return leave

    def cancel(self, actor_id: str, leave_id: str) -> LeaveRecord:
        leave = self.get(leave_id)
        if leave is None:
            raise NotFoundError("Leave", leave_id)
        self._leaves = [l for l in self._leaves if l.id != leave_id]
        self.audit.record(actor_id, "Leave Cancelled", "Cancelled leave request", leave_id, "Leave")
        return leave
