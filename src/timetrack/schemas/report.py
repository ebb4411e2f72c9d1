from src.timetrack.schemas.base import CamelModel


class ReportTotalsResponse(CamelModel):
    non_billable_hours: float
    billable_hours: float
    billable_total: float


class ClientReportResponse(ReportTotalsResponse):
    client_id: int
    client_name: str


class ProjectReportResponse(ReportTotalsResponse):
    project_id: int
    project_name: str
    client_name: str


class TaskReportResponse(ReportTotalsResponse):
    task_id: int
    task_name: str
    client_id: int
    client_name: str


class PersonReportResponse(ReportTotalsResponse):
    profile_id: int
    first_name: str
    last_name: str
